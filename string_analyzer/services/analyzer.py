import hashlib
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Dict, Mapping, Optional


@dataclass(frozen=True)
class StringProperties:
    """Derived properties of a string, computed once at analysis time"""

    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    character_frequency: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self):
        # Freeze the frequency map so a built record can't be edited in place
        object.__setattr__(
            self, "character_frequency", MappingProxyType(dict(self.character_frequency))
        )


@dataclass(frozen=True)
class StringRecord:
    """A stored analysis result, keyed by the SHA-256 of its value"""

    id: str
    value: str
    properties: StringProperties
    created_at: datetime

    @property
    def sha256_hash(self) -> str:
        return self.id


def compute_sha256(text: str) -> str:
    """Compute SHA-256 hash of the raw UTF-8 bytes of a string"""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def strip_whitespace(text: str) -> str:
    """Remove every whitespace character, not only the leading/trailing ones"""
    return "".join(text.split())


def is_palindrome(stripped: str) -> bool:
    """Check if a whitespace-free string reads the same backwards (case-insensitive)"""
    normalized = stripped.lower()
    return normalized == normalized[::-1]


def count_words(trimmed: str) -> int:
    """Count words separated by runs of whitespace"""
    return len(trimmed.split())


def get_character_frequency(stripped: str) -> Dict[str, int]:
    """Get frequency map of each character, in order of first appearance"""
    frequency: Dict[str, int] = {}
    for char in stripped:
        frequency[char] = frequency.get(char, 0) + 1
    return frequency


def analyze_string(value: str) -> StringProperties:
    """Analyze a string and return all computed properties"""
    trimmed = value.strip()
    stripped = strip_whitespace(trimmed)
    frequency = get_character_frequency(stripped)

    return StringProperties(
        length=len(stripped),
        is_palindrome=is_palindrome(stripped),
        unique_characters=len(frequency),
        word_count=count_words(trimmed),
        character_frequency=frequency,
    )


def build_record(value: str, created_at: Optional[datetime] = None) -> StringRecord:
    """Hash, analyze and timestamp a raw value. Nothing is persisted here."""
    return StringRecord(
        id=compute_sha256(value),
        value=value,
        properties=analyze_string(value),
        created_at=created_at or datetime.now(timezone.utc),
    )
