"""Structured filters over analyzed string properties.

A filter is a set of optional predicates combined with AND. The same
validation path is used for filters supplied as query parameters and for
filters produced by the natural-language interpreter.
"""
import re

from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, Mapping, Optional

from string_analyzer.errors import InvalidFilterValue

FILTER_FIELDS = ("is_palindrome", "min_length", "max_length", "word_count", "contains_character")

_INT_FIELDS = ("min_length", "max_length", "word_count")
_TRUE_VALUES = ("true", "1")
_FALSE_VALUES = ("false", "0")
_INT_RE = re.compile(r"[+-]?[0-9]+")

# signed 64-bit, the widest integer column any backend stores
INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1
MAX_DIGITS = len(str(INT_MAX))


class StringFilter(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_palindrome: Optional[bool] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    word_count: Optional[int] = None
    contains_character: Optional[str] = None

    def applied(self) -> Dict[str, Any]:
        """Only the fields that are set, in declaration order."""
        return self.model_dump(exclude_none=True)

    def is_empty(self) -> bool:
        return not self.applied()

    def matches(self, record) -> bool:
        """Evaluate the filter against a stored record (or anything with its properties)."""
        if self.is_palindrome is not None and record.is_palindrome != self.is_palindrome:
            return False
        if self.min_length is not None and record.length < self.min_length:
            return False
        if self.max_length is not None and record.length > self.max_length:
            return False
        if self.word_count is not None and record.word_count != self.word_count:
            return False
        if self.contains_character is not None:
            if record.character_frequency_map.get(self.contains_character, 0) < 1:
                return False
        return True


def _parse_bool(field: str, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str) and raw.strip().lower() in _TRUE_VALUES:
        return True
    if isinstance(raw, str) and raw.strip().lower() in _FALSE_VALUES:
        return False
    raise InvalidFilterValue(f"Invalid value for {field}: expected true or false")


def _parse_int(field: str, raw: Any) -> int:
    # bool is an int subclass but never a meaningful length
    if isinstance(raw, int) and not isinstance(raw, bool):
        value = raw
    elif isinstance(raw, str) and _INT_RE.fullmatch(raw.strip()):
        digits = raw.strip().lstrip("+-").lstrip("0")
        if len(digits) > MAX_DIGITS:
            raise InvalidFilterValue(f"Invalid value for {field}: out of range")
        value = int(raw.strip())
    else:
        raise InvalidFilterValue(f"Invalid value for {field}: expected an integer")

    if not INT_MIN <= value <= INT_MAX:
        raise InvalidFilterValue(f"Invalid value for {field}: out of range")
    return value


def _parse_char(field: str, raw: Any) -> str:
    if not isinstance(raw, str) or len(raw) != 1:
        raise InvalidFilterValue(f"{field} must be a single character")
    return raw


def parse_filter(params: Mapping[str, Any]) -> StringFilter:
    """Validate raw filter parameters and build a StringFilter.

    Values may be strings (query parameters) or already-typed values.
    Absent or ``None`` fields are left unset; unknown keys are ignored.

    Raises:
        InvalidFilterValue: if any present field is malformed.
    """
    fields: Dict[str, Any] = {}
    for field in FILTER_FIELDS:
        raw = params.get(field)
        if raw is None:
            continue
        if field == "is_palindrome":
            fields[field] = _parse_bool(field, raw)
        elif field in _INT_FIELDS:
            fields[field] = _parse_int(field, raw)
        else:
            fields[field] = _parse_char(field, raw)
    return StringFilter(**fields)
