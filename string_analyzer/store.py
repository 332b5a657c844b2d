from sqlalchemy import and_, asc, desc
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from datetime import datetime, timezone
from typing import Callable, List, Optional
import logging

from string_analyzer.analyzer import analyze, compute_sha256
from string_analyzer.errors import Conflict, InternalError, NotFound
from string_analyzer.filters import StringFilter
from string_analyzer.models import StringRecord

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RecordStore:
    """Content-addressed collection of analyzed strings.

    Records are keyed by the SHA-256 of their value. Admission relies on the
    primary key constraint, so of two concurrent creates of the same value
    exactly one commits and the other gets ``Conflict``.
    """

    def __init__(self, session_factory: sessionmaker, clock: Callable[[], datetime] = utc_now):
        self._session_factory = session_factory
        self._clock = clock

    def create(self, value: str) -> StringRecord:
        """Analyze and store a string"""
        properties = analyze(value)
        record = StringRecord(
            id=properties.content_hash,
            value=value,
            length=properties.length,
            is_palindrome=properties.is_palindrome,
            unique_characters=properties.unique_characters,
            word_count=properties.word_count,
            character_frequency_map=properties.character_frequency_map,
            created_at=self._clock(),
        )

        with self._session_factory() as db:
            db.add(record)
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                logger.info(f"Rejected duplicate string {record.id[:12]}")
                raise Conflict()
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Error creating string analysis: {e}")
                raise InternalError() from e

        logger.info(f"Stored string {record.id[:12]} (length={record.length})")
        return record

    def get(self, value: str) -> StringRecord:
        """Get string analysis by exact value"""
        with self._session_factory() as db:
            record = self._find(db, value)
        if record is None:
            raise NotFound()
        return record

    def delete(self, value: str) -> None:
        """Delete string analysis by exact value"""
        with self._session_factory() as db:
            record = self._find(db, value)
            if record is None:
                raise NotFound()
            try:
                db.delete(record)
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Error deleting string analysis: {e}")
                raise InternalError() from e
        logger.info(f"Deleted string {record.id[:12]}")

    def query(self, flt: StringFilter) -> List[StringRecord]:
        """Get all strings matching the filter, most recent first"""
        clauses = []
        if flt.is_palindrome is not None:
            clauses.append(StringRecord.is_palindrome == flt.is_palindrome)
        if flt.min_length is not None:
            clauses.append(StringRecord.length >= flt.min_length)
        if flt.max_length is not None:
            clauses.append(StringRecord.length <= flt.max_length)
        if flt.word_count is not None:
            clauses.append(StringRecord.word_count == flt.word_count)

        with self._session_factory() as db:
            query = db.query(StringRecord)
            if clauses:
                query = query.filter(and_(*clauses))
            query = query.order_by(desc(StringRecord.created_at), asc(StringRecord.id))
            try:
                rows = query.all()
            except SQLAlchemyError as e:
                logger.error(f"Error filtering strings: {e}")
                raise InternalError() from e

        # contains_character is checked against the frequency map, which keeps
        # it case-sensitive on every backend
        return [row for row in rows if flt.matches(row)]

    def _find(self, db: Session, value: str) -> Optional[StringRecord]:
        try:
            record = db.get(StringRecord, compute_sha256(value))
        except SQLAlchemyError as e:
            logger.error(f"Error fetching string analysis: {e}")
            raise InternalError() from e
        if record is not None and record.value != value:
            return None
        return record
