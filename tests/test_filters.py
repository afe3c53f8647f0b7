"""
Tests for structured filter evaluation.
"""

from datetime import datetime, timezone

import pytest

from string_analyzer.services.analyzer import build_record
from string_analyzer.services.filters import StringFilters, apply_filters

CREATED = datetime(2025, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def records():
    values = ["racecar", "Hello World", "level", "a quick brown fox", "Zebra", "noon"]
    return [build_record(value, created_at=CREATED) for value in values]


def values_of(records):
    return [record.value for record in records]


def test_empty_filters_return_everything_in_order(records):
    assert apply_filters(records, StringFilters()) == records


def test_palindrome_filter(records):
    assert values_of(apply_filters(records, StringFilters(is_palindrome=True))) == [
        "racecar",
        "level",
        "noon",
    ]
    assert values_of(apply_filters(records, StringFilters(is_palindrome=False))) == [
        "Hello World",
        "a quick brown fox",
        "Zebra",
    ]


def test_length_bounds_are_inclusive(records):
    result = apply_filters(records, StringFilters(min_length=5, max_length=7))
    assert values_of(result) == ["racecar", "level", "Zebra"]


def test_word_count_is_exact(records):
    assert values_of(apply_filters(records, StringFilters(word_count=2))) == ["Hello World"]


def test_contains_character_is_case_insensitive(records):
    assert values_of(apply_filters(records, StringFilters(contains_character="z"))) == ["Zebra"]
    assert values_of(apply_filters(records, StringFilters(contains_character="H"))) == ["Hello World"]


def test_contains_character_matches_substrings(records):
    # Substring across the original whitespace, not membership in the stripped value
    assert values_of(apply_filters(records, StringFilters(contains_character="o W"))) == ["Hello World"]


def test_clauses_are_anded(records):
    filters = StringFilters(is_palindrome=True, word_count=1, contains_character="e")
    assert values_of(apply_filters(records, filters)) == ["racecar", "level"]


def test_conflicting_range_matches_nothing(records):
    filters = StringFilters(min_length=11, max_length=4)
    assert filters.has_conflict() is True
    assert apply_filters(records, filters) == []


class TestStringFilters:
    def test_as_dict_skips_unset_clauses(self):
        filters = StringFilters(is_palindrome=False, word_count=0)
        assert filters.as_dict() == {"is_palindrome": False, "word_count": 0}

    def test_open_range_has_no_conflict(self):
        assert StringFilters(min_length=5).has_conflict() is False
        assert StringFilters(min_length=5, max_length=5).has_conflict() is False
