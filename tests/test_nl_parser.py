"""
Tests for the heuristic natural language query parser.
"""

import pytest

from string_analyzer.services.nl_parser import (
    extract_filters,
    parse_natural_language_query,
)


def parsed(query):
    result = parse_natural_language_query(query)
    assert result is not None, f"expected a match for {query!r}"
    return result.parsed_filters


class TestExamples:
    def test_single_word_palindromic(self):
        assert parsed("all single word palindromic strings") == {
            "is_palindrome": True,
            "word_count": 1,
        }

    def test_longer_than(self):
        assert parsed("strings longer than 10 characters") == {"min_length": 11}

    def test_shorter_than(self):
        assert parsed("strings shorter than 5 characters") == {"max_length": 4}

    def test_containing_the_letter(self):
        assert parsed("containing the letter z") == {"contains_character": "z"}


class TestRules:
    @pytest.mark.parametrize("query", ["palindromes", "a palindrome", "PALINDROMIC words"])
    def test_palindrome_substring(self, query):
        assert parsed(query) == {"is_palindrome": True}

    @pytest.mark.parametrize("query", ["single word strings", "one word strings", "one-word strings"])
    def test_single_word_phrases(self, query):
        assert parsed(query) == {"word_count": 1}

    def test_single_word_needs_whole_words(self):
        assert parse_natural_language_query("single words everywhere") is None

    @pytest.mark.parametrize(
        "query, expected",
        [
            ("strings containing z", "z"),
            ("strings that contain the letter a", "a"),
            ("strings that contain e", "e"),
            ("words which contains 7", "7"),
            ("strings with the letter q in them", "q"),
            ("containing the character x", "x"),
            ("strings containing letter z", "z"),
            ("words with letter b", "b"),
        ],
    )
    def test_contains_connectors(self, query, expected):
        assert parsed(query) == {"contains_character": expected}

    def test_contains_uses_first_match_only(self):
        assert parsed("containing a and containing b") == {"contains_character": "a"}

    def test_contains_requires_a_single_character(self):
        assert parse_natural_language_query("strings containing words") is None

    def test_combined_rules(self):
        assert parsed("palindromes longer than 3 characters containing the letter a") == {
            "is_palindrome": True,
            "min_length": 4,
            "contains_character": "a",
        }

    def test_conflicting_range_is_still_parsed(self):
        result = parse_natural_language_query("longer than 10 and shorter than 5")
        assert result.parsed_filters == {"min_length": 11, "max_length": 4}
        assert result.filters.has_conflict() is True

    def test_extract_filters_is_read_only(self):
        extracted = extract_filters("palindromes")
        with pytest.raises(TypeError):
            extracted["is_palindrome"] = False


class TestNoMatch:
    @pytest.mark.parametrize("query", ["", "   ", None])
    def test_blank_query(self, query):
        assert parse_natural_language_query(query) is None

    def test_unrecognised_query(self):
        assert parse_natural_language_query("show me something nice") is None


def test_original_query_is_echoed_unchanged():
    result = parse_natural_language_query("  All Single Word PALINDROMIC strings ")
    assert result.original == "  All Single Word PALINDROMIC strings "
