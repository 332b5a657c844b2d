import hashlib
import re
from collections import Counter
from typing import Dict

from string_analyzer.schemas import StringProperties

# Unicode White_Space property. str.isspace() also accepts U+001C..U+001F,
# which are separators but not whitespace.
WHITESPACE = frozenset(
    "\u0009\u000a\u000b\u000c\u000d\u0020\u0085\u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)
WHITESPACE_RUN_RE = re.compile("[" + "".join(sorted(WHITESPACE)) + "]+")


def compute_sha256(text: str) -> str:
    """Compute SHA-256 hash of a string's UTF-8 encoding"""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def normalize_for_palindrome(text: str) -> str:
    """Lowercase and drop every whitespace character; punctuation is kept"""
    return "".join(ch for ch in text.lower() if ch not in WHITESPACE)


def is_palindrome(text: str) -> bool:
    """Check if string is palindrome (case-insensitive, ignoring whitespace)"""
    cleaned = normalize_for_palindrome(text)
    return cleaned == cleaned[::-1]


def count_unique_characters(text: str) -> int:
    """Count distinct code points in string"""
    return len(set(text))


def count_words(text: str) -> int:
    """Count words separated by runs of whitespace"""
    return len([word for word in WHITESPACE_RUN_RE.split(text) if word])


def get_character_frequency(text: str) -> Dict[str, int]:
    """Get frequency map of each code point"""
    return dict(Counter(text))


def analyze(value: str) -> StringProperties:
    """Analyze a string and return all computed properties.

    Every count is over Unicode code points, so ``length``,
    ``unique_characters`` and ``character_frequency_map`` agree with each other.
    """
    return StringProperties(
        length=len(value),
        is_palindrome=is_palindrome(value),
        unique_characters=count_unique_characters(value),
        word_count=count_words(value),
        content_hash=compute_sha256(value),
        character_frequency_map=get_character_frequency(value),
    )
