from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Optional

from string_analyzer.services.analyzer import StringRecord


@dataclass(frozen=True)
class StringFilters:
    """
    Conjunction of optional filter clauses.

    A clause left as None does not filter on that dimension.
    """

    is_palindrome: Optional[bool] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    word_count: Optional[int] = None
    contains_character: Optional[str] = None

    def as_dict(self) -> Dict:
        """Only the clauses that are set, keyed by their wire names"""
        return {key: value for key, value in asdict(self).items() if value is not None}

    def has_conflict(self) -> bool:
        """True when the length range can never match anything"""
        return (
            self.min_length is not None
            and self.max_length is not None
            and self.min_length > self.max_length
        )


def matches(record: StringRecord, filters: StringFilters) -> bool:
    """Check a single record against every present clause"""
    props = record.properties

    if filters.is_palindrome is not None and props.is_palindrome != filters.is_palindrome:
        return False

    if filters.min_length is not None and props.length < filters.min_length:
        return False

    if filters.max_length is not None and props.length > filters.max_length:
        return False

    if filters.word_count is not None and props.word_count != filters.word_count:
        return False

    if filters.contains_character:
        # Substring containment over the stored value, not character membership
        if filters.contains_character.lower() not in record.value.lower():
            return False

    return True


def apply_filters(records: Iterable[StringRecord], filters: StringFilters) -> List[StringRecord]:
    """Filter records, keeping their original order"""
    return [record for record in records if matches(record, filters)]
