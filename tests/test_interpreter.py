"""
Tests for natural language query interpretation.
"""

import pytest

from string_analyzer.exceptions import (
    ConflictingFilters,
    ErrorKind,
    InvalidQuery,
    UnrecognizedQuery,
)
from string_analyzer.schemas.filters import WordCountAbove
from string_analyzer.services.interpreter import interpret


class TestRecognizedPatterns:

    def test_single_word_palindromic(self):
        filters = interpret("all single word palindromic strings")
        assert filters.as_dict() == {"is_palindrome": True, "word_count": 1}

    def test_palindrome_keyword(self):
        assert interpret("show me palindromes").is_palindrome is True
        assert interpret("Palindrome strings").is_palindrome is True

    def test_single_word_hyphenated(self):
        assert interpret("single-word strings").word_count == 1

    def test_multiple_words(self):
        assert interpret("strings with multiple words").word_count == WordCountAbove(gt=1)
        assert interpret("multi-word strings").as_dict() == {"word_count": {"gt": 1}}

    def test_more_than_n_words_is_word_count(self):
        filters = interpret("strings with more than 3 words")
        assert filters.as_dict() == {"word_count": {"gt": 3}}

    def test_longer_than_with_characters(self):
        assert interpret("strings longer than 5 characters").as_dict() == {"min_length": 5}

    def test_longer_than_without_unit(self):
        # the leading phrase alone is enough
        assert interpret("strings longer than 5").as_dict() == {"min_length": 5}

    @pytest.mark.parametrize("phrase", ["greater than 12", "more than 12 chars"])
    def test_min_length_synonyms(self, phrase):
        assert interpret(f"strings {phrase}").min_length == 12

    def test_shorter_than(self):
        assert interpret("strings shorter than 10 characters").as_dict() == {"max_length": 10}

    def test_exact_length(self):
        assert interpret("strings of exactly 4 characters").as_dict() == {"min_length": 4, "max_length": 4}
        assert interpret("exactly 7 chars").as_dict() == {"min_length": 7, "max_length": 7}

    def test_length_range(self):
        filters = interpret("longer than 3 and shorter than 8")
        assert filters.min_length == 3
        assert filters.max_length == 8

    def test_tightest_bound_wins(self):
        filters = interpret("longer than 2, longer than 5 and exactly 6 characters")
        assert filters.min_length == 6
        assert filters.max_length == 6

    @pytest.mark.parametrize("query", [
        "strings containing the letter z",
        "strings that contain z",
        "contains the character Z",
        "containing letter z",
    ])
    def test_contains_character(self, query):
        assert interpret(query).contains_character == "z"

    def test_contains_digit(self):
        assert interpret("strings containing 7").contains_character == "7"

    def test_contains_requires_single_character(self):
        with pytest.raises(UnrecognizedQuery):
            interpret("strings containing the word hello")

    def test_first_vowel(self):
        filters = interpret("palindromic strings that contain the first vowel")
        assert filters.as_dict() == {"is_palindrome": True, "contains_character": "a"}

    def test_combined_patterns(self):
        filters = interpret("Single word palindromes longer than 3 containing the letter a")
        assert filters.as_dict() == {
            "is_palindrome": True,
            "word_count": 1,
            "min_length": 3,
            "contains_character": "a",
        }

    def test_unmatched_text_is_ignored(self):
        filters = interpret("please find every palindrome you have, thanks!")
        assert filters.as_dict() == {"is_palindrome": True}


class TestFailures:

    def test_unrecognized(self):
        with pytest.raises(UnrecognizedQuery) as exc_info:
            interpret("gibberish query with no keywords")
        assert exc_info.value.kind is ErrorKind.UNRECOGNIZED_QUERY

    @pytest.mark.parametrize("query", ["fewer than 3 words", "less than 2 words"])
    def test_fewer_than_n_words_is_not_interpreted(self, query):
        # no upper word-count constraint exists, and the number is not a length
        with pytest.raises(UnrecognizedQuery):
            interpret(query)

    def test_fewer_than_n_words_leaves_other_filters(self):
        assert interpret("palindromes with fewer than 3 words").as_dict() == {"is_palindrome": True}

    def test_word_patterns_conflict(self):
        with pytest.raises(ConflictingFilters) as exc_info:
            interpret("single word multiple words")
        assert exc_info.value.kind is ErrorKind.CONFLICTING_FILTERS

    def test_single_word_and_more_than_words_conflict(self):
        with pytest.raises(ConflictingFilters):
            interpret("single word strings with more than 2 words")

    def test_length_range_conflict(self):
        with pytest.raises(ConflictingFilters):
            interpret("strings longer than 10 and shorter than 3")

    @pytest.mark.parametrize("query", [None, "", "   ", 42])
    def test_invalid_query(self, query):
        with pytest.raises(InvalidQuery) as exc_info:
            interpret(query)
        assert exc_info.value.kind is ErrorKind.INVALID_QUERY
