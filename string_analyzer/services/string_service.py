import logging
from typing import List, Tuple

from string_analyzer.crud.strings import StringStore
from string_analyzer.errors import (
    ConflictingFiltersError,
    InvalidStringError,
    QueryParseError,
    StringNotFound,
)
from string_analyzer.services.analyzer import StringRecord, build_record, compute_sha256
from string_analyzer.services.filters import StringFilters, apply_filters
from string_analyzer.services.nl_parser import ParsedQuery, parse_natural_language_query

logger = logging.getLogger(__name__)


def create_string(store: StringStore, value: str) -> StringRecord:
    """
    Analyze and store a string.

    Raises InvalidStringError for non-string or blank input and
    StringAlreadyExists if the same value is already stored.
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidStringError()

    record = store.insert(build_record(value))
    logger.info(f"Stored string {record.id}")
    return record


def get_string(store: StringStore, value: str) -> StringRecord:
    record = store.get(compute_sha256(value))
    if record is None:
        raise StringNotFound()
    return record


def delete_string(store: StringStore, value: str) -> bool:
    string_id = compute_sha256(value)
    if not store.delete(string_id):
        raise StringNotFound()
    logger.info(f"Deleted string {string_id}")
    return True


def list_strings(store: StringStore, filters: StringFilters = StringFilters()) -> List[StringRecord]:
    """Get all strings matching the given filters"""
    return apply_filters(store.list_all(), filters)


def filter_by_natural_language(store: StringStore, query: str) -> Tuple[ParsedQuery, List[StringRecord]]:
    """
    Parse a free-text query and apply the filters it describes.

    Raises QueryParseError when nothing in the query is recognised and
    ConflictingFiltersError when the derived length range is empty.
    """
    parsed = parse_natural_language_query(query)
    if parsed is None:
        raise QueryParseError()

    if parsed.filters.has_conflict():
        logger.warning(f"Conflicting filters for query {query!r}: {parsed.parsed_filters}")
        raise ConflictingFiltersError()

    return parsed, list_strings(store, parsed.filters)
