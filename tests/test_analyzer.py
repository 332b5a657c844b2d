import hashlib

from string_analyzer.analyzer import (
    analyze,
    compute_sha256,
    count_words,
    get_character_frequency,
    is_palindrome,
    normalize_for_palindrome,
)


class TestAnalyze:
    def test_racecar(self):
        props = analyze("racecar")
        assert props.length == 7
        assert props.is_palindrome is True
        assert props.unique_characters == 4
        assert props.word_count == 1
        assert props.content_hash == hashlib.sha256(b"racecar").hexdigest()

    def test_hello_world(self):
        props = analyze("Hello World")
        assert props.length == 11
        assert props.is_palindrome is False
        assert props.unique_characters == 8
        assert props.word_count == 2
        assert props.character_frequency_map == {
            "H": 1, "e": 1, "l": 3, "o": 2, " ": 1, "W": 1, "r": 1, "d": 1,
        }

    def test_empty_string(self):
        props = analyze("")
        assert props.length == 0
        assert props.is_palindrome is True
        assert props.unique_characters == 0
        assert props.word_count == 0
        assert props.character_frequency_map == {}
        assert props.content_hash == hashlib.sha256(b"").hexdigest()

    def test_deterministic(self):
        text = "A man, a plan\ta canal:\nPanama ✓"
        assert analyze(text) == analyze(text)
        assert analyze(text).model_dump() == analyze(text).model_dump()

    def test_counts_code_points(self):
        # U+1F600 is one code point but two UTF-16 units
        props = analyze("a\U0001F600a")
        assert props.length == 3
        assert props.unique_characters == 2
        assert props.character_frequency_map == {"a": 2, "\U0001F600": 1}
        assert props.is_palindrome is True

    def test_frequency_map_is_case_sensitive(self):
        assert get_character_frequency("aAa") == {"a": 2, "A": 1}


class TestHash:
    def test_lowercase_hex_sha256(self):
        digest = compute_sha256("hello")
        assert digest == "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"

    def test_utf8_encoding(self):
        assert compute_sha256("café") == hashlib.sha256("café".encode("utf-8")).hexdigest()

    def test_different_values_differ(self):
        assert compute_sha256("abc") != compute_sha256("abd")


class TestPalindrome:
    def test_case_and_whitespace_ignored(self):
        assert is_palindrome("Never odd or even")
        assert is_palindrome("Race\tCar\n")

    def test_punctuation_kept(self):
        # the comma and colon are not stripped, so this is not a palindrome
        assert not is_palindrome("A man, a plan, a canal: Panama")
        assert normalize_for_palindrome("A b,") == "ab,"

    def test_whitespace_only(self):
        assert is_palindrome("   \t\n")

    def test_unicode_whitespace(self):
        assert is_palindrome("ab\u3000\u00a0ba")

    def test_not_palindrome(self):
        assert not is_palindrome("hello")


class TestWordCount:
    def test_runs_of_whitespace(self):
        assert count_words("  one   two\tthree\n") == 3

    def test_whitespace_only(self):
        assert count_words(" \t ") == 0

    def test_empty(self):
        assert count_words("") == 0

    def test_information_separators_are_not_whitespace(self):
        assert count_words("a\x1cb") == 1
        assert count_words("a\x1fb c") == 2
        assert normalize_for_palindrome("A\x1dA ") == "a\x1da"

    def test_unicode_whitespace_splits_words(self):
        assert count_words("one\u00a0two\u2003three\u3000four") == 4
