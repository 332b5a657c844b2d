import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from string_analyzer.errors import InvalidType, MissingField
from string_analyzer.filters import parse_filter
from string_analyzer.interpreter import interpret
from string_analyzer.models import StringRecord
from string_analyzer.store import RecordStore

logger = logging.getLogger(__name__)


class StringService:
    """Request-level operations, independent of the HTTP layer.

    All input validation happens here, before the store is touched.
    """

    def __init__(self, store: RecordStore):
        self.store = store

    def submit_value(self, value: Any) -> StringRecord:
        if value is None:
            raise MissingField('Missing "value" field in request body')
        if not isinstance(value, str):
            raise InvalidType('Invalid data type for "value" (must be string)')
        return self.store.create(value)

    def fetch(self, value: str) -> StringRecord:
        return self.store.get(value)

    def remove(self, value: str) -> None:
        self.store.delete(value)

    def list(self, params: Mapping[str, Any]) -> Tuple[List[StringRecord], Dict[str, Any]]:
        flt = parse_filter(params)
        return self.store.query(flt), flt.applied()

    def list_by_text(self, text: Optional[str]) -> Tuple[List[StringRecord], str, Dict[str, Any]]:
        if text is None or not text.strip():
            raise MissingField('Missing "query" parameter')
        flt = interpret(text)
        logger.info(f"Interpreted {text!r} as {flt.applied()}")
        return self.store.query(flt), text, flt.applied()
