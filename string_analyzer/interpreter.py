"""Rule-based translation of free-text queries into structured filters.

Examples:
    - "all single word palindromic strings" -> {word_count: 1, is_palindrome: true}
    - "strings longer than 10 characters" -> {min_length: 11}
    - "strings containing the letter z" -> {contains_character: "z"}
"""
import logging
import re
from typing import Callable, List

from string_analyzer.errors import InvalidFilterValue, UnparsableQuery
from string_analyzer.filters import MAX_DIGITS, StringFilter, parse_filter

logger = logging.getLogger(__name__)

Rule = Callable[[str, StringFilter], StringFilter]

WORD_COUNT_RE = re.compile(r"([0-9]+)\s+word")
LONGER_THAN_RE = re.compile(r"longer than ([0-9]+)")
SHORTER_THAN_RE = re.compile(r"shorter than ([0-9]+)")
CONTAINS_LETTER_RE = re.compile(r"contain(?:ing|s)?\s+(?:the\s+)?(?:letter\s+)?([a-z])")


def _set(flt: StringFilter, **fields) -> StringFilter:
    return flt.model_copy(update=fields)


def _number(digits: str) -> int:
    if len(digits.lstrip("0")) > MAX_DIGITS:
        raise InvalidFilterValue(f"Number out of range in query: {digits[:MAX_DIGITS]}...")
    return int(digits)


def single_word_rule(text: str, flt: StringFilter) -> StringFilter:
    if "single word" in text:
        return _set(flt, word_count=1)
    return flt


def word_count_rule(text: str, flt: StringFilter) -> StringFilter:
    # "single word" takes precedence over "<n> words"
    if "single word" in text:
        return flt
    match = WORD_COUNT_RE.search(text)
    if match:
        return _set(flt, word_count=_number(match.group(1)))
    return flt


def palindrome_rule(text: str, flt: StringFilter) -> StringFilter:
    if "palindrom" in text:
        return _set(flt, is_palindrome=True)
    return flt


def longer_than_rule(text: str, flt: StringFilter) -> StringFilter:
    match = LONGER_THAN_RE.search(text)
    if match:
        return _set(flt, min_length=_number(match.group(1)) + 1)
    return flt


def shorter_than_rule(text: str, flt: StringFilter) -> StringFilter:
    match = SHORTER_THAN_RE.search(text)
    if match:
        return _set(flt, max_length=_number(match.group(1)) - 1)
    return flt


def contains_letter_rule(text: str, flt: StringFilter) -> StringFilter:
    match = CONTAINS_LETTER_RE.search(text)
    if match:
        return _set(flt, contains_character=match.group(1))
    return flt


def first_vowel_rule(text: str, flt: StringFilter) -> StringFilter:
    # Always 'a', whatever the query says. Runs after contains_letter_rule and
    # replaces its character when both fire.
    if "first vowel" in text:
        return _set(flt, contains_character="a")
    return flt


RULES: List[Rule] = [
    single_word_rule,
    word_count_rule,
    palindrome_rule,
    longer_than_rule,
    shorter_than_rule,
    contains_letter_rule,
    first_vowel_rule,
]


def interpret(text: str) -> StringFilter:
    """Parse a natural language query into a StringFilter.

    Raises:
        UnparsableQuery: if no rule matched the text.
    """
    lowered = text.lower()
    flt = StringFilter()
    for rule in RULES:
        flt = rule(lowered, flt)

    if flt.is_empty():
        logger.info(f"No rule matched natural language query: {text!r}")
        raise UnparsableQuery()

    return parse_filter(flt.applied())
