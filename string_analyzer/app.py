from fastapi import FastAPI, Request, status
from starlette.exceptions import HTTPException
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from typing import Callable, Optional
from datetime import datetime
import logging

from string_analyzer import __version__, config
from string_analyzer.api.routes import router
from string_analyzer.database import create_db_engine, create_session_factory, init_db
from string_analyzer.errors import StringAnalyzerError
from string_analyzer.service import StringService
from string_analyzer.store import RecordStore, utc_now

logger = logging.getLogger(__name__)


def create_app(
    database_url: Optional[str] = None,
    clock: Callable[[], datetime] = utc_now,
) -> FastAPI:
    """Build the API with its own engine, store and service."""
    app = FastAPI(
        title="String Analyzer Service",
        description="Analyze, store and query string properties",
        version=__version__,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    logger.info("Initializing database...")
    engine = create_db_engine(database_url)
    init_db(engine)
    store = RecordStore(create_session_factory(engine), clock=clock)
    app.state.engine = engine
    app.state.service = StringService(store)

    app.include_router(router, tags=["strings"])

    @app.get("/")
    def root():
        """Root endpoint"""
        return {
            "message": "String Analyzer Service",
            "version": __version__,
            "endpoints": {
                "POST /strings": "Analyze and store a string",
                "GET /strings/{string_value}": "Get specific string analysis",
                "GET /strings": "Get all strings with optional filters",
                "GET /strings/filter-by-natural-language": "Filter using natural language",
                "DELETE /strings/{string_value}": "Delete a string",
            },
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}

    register_exception_handlers(app)
    return app


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StringAnalyzerError)
    async def string_analyzer_exception_handler(request: Request, exc: StringAnalyzerError):
        if exc.status_code >= 500:
            logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    # Validation error handler
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = {}
        for error in exc.errors():
            field = str(error["loc"][-1])
            errors[field] = error["msg"]

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request body or parameters", "details": errors},
        )

    # HTTPException handler
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    # Generic error handler
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {str(exc)}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )
