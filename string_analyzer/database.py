from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from typing import Optional
import logging

from string_analyzer import config

logger = logging.getLogger(__name__)

Base = declarative_base()


# ------------------------------------------------------------------------------
# DATABASE URL HANDLING
# ------------------------------------------------------------------------------
def normalize_database_url(url: Optional[str]) -> str:
    """Resolve the database URL, falling back to the configured default."""
    if not url:
        logger.warning("⚠️ DATABASE_URL not provided, using configured default.")
        url = config.DATABASE_URL

    # Hosting providers hand out plain mysql:// URLs
    if url.startswith("mysql://"):
        # SQLAlchemy expects "mysql+pymysql://"
        url = url.replace("mysql://", "mysql+pymysql://", 1)
    return url


# ------------------------------------------------------------------------------
# DATABASE ENGINE & SESSION
# ------------------------------------------------------------------------------
def create_db_engine(url: Optional[str] = None) -> Engine:
    """Create the SQLAlchemy engine for the record store."""
    url = normalize_database_url(url)
    connect_args = {}
    if url.startswith("sqlite"):
        # sessions are opened from the server's worker threads
        connect_args["check_same_thread"] = False
    try:
        return create_engine(
            url,
            pool_pre_ping=True,
            pool_recycle=280,
            connect_args=connect_args,
        )
    except Exception as e:
        logger.error(f"❌ Failed to create SQLAlchemy engine: {e}")
        raise


def create_session_factory(engine: Engine) -> sessionmaker:
    # records are handed back to callers after the session closes
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


# ------------------------------------------------------------------------------
# INITIALIZATION
# ------------------------------------------------------------------------------
def init_db(engine: Engine) -> None:
    """Create database tables (runs once on startup)."""
    from string_analyzer import models  # noqa: F401  ensure models are registered
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("✅ Database tables created successfully.")
    except Exception as e:
        logger.error(f"❌ Database initialization failed: {e}")
        raise
