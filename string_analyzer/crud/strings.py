import logging
import threading
from abc import ABC, abstractmethod
from datetime import timezone
from typing import Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import FlushError

from string_analyzer.errors import StringAlreadyExists
from string_analyzer.models.string_record import CharacterFrequency, StringAnalysis
from string_analyzer.services.analyzer import StringProperties, StringRecord

logger = logging.getLogger(__name__)


class StringStore(ABC):
    """
    Content-addressed storage for analysed strings.

    Records are only ever inserted or deleted. insert() must be atomic per id:
    of two concurrent inserts for the same id exactly one succeeds and the
    other raises StringAlreadyExists.
    """

    @abstractmethod
    def exists(self, string_id: str) -> bool:
        ...

    @abstractmethod
    def insert(self, record: StringRecord) -> StringRecord:
        ...

    @abstractmethod
    def get(self, string_id: str) -> Optional[StringRecord]:
        ...

    @abstractmethod
    def delete(self, string_id: str) -> bool:
        ...

    @abstractmethod
    def list_all(self) -> List[StringRecord]:
        ...


# ------------------------------------------------------------------------------
# SQLALCHEMY STORE
# ------------------------------------------------------------------------------

def to_model(record: StringRecord) -> StringAnalysis:
    """Map a record onto ORM rows"""
    props = record.properties
    return StringAnalysis(
        id=record.id,
        value=record.value,
        length=props.length,
        is_palindrome=props.is_palindrome,
        unique_characters=props.unique_characters,
        word_count=props.word_count,
        created_at=record.created_at,
        character_frequencies=[
            CharacterFrequency(position=position, character=char, occurrence=count)
            for position, (char, count) in enumerate(props.character_frequency.items())
        ],
    )


def to_record(db_string: StringAnalysis) -> StringRecord:
    """Map ORM rows back onto an immutable record"""
    created_at = db_string.created_at
    if created_at.tzinfo is None:
        # SQLite hands back naive datetimes; they were stored as UTC
        created_at = created_at.replace(tzinfo=timezone.utc)

    return StringRecord(
        id=db_string.id,
        value=db_string.value,
        properties=StringProperties(
            length=db_string.length,
            is_palindrome=db_string.is_palindrome,
            unique_characters=db_string.unique_characters,
            word_count=db_string.word_count,
            character_frequency={
                entry.character: entry.occurrence for entry in db_string.character_frequencies
            },
        ),
        created_at=created_at,
    )


class SqlStringStore(StringStore):
    """Store backed by a SQLAlchemy session; the primary key enforces uniqueness"""

    def __init__(self, db: Session):
        self.db = db

    def exists(self, string_id: str) -> bool:
        return self.db.query(StringAnalysis.id).filter(StringAnalysis.id == string_id).first() is not None

    def insert(self, record: StringRecord) -> StringRecord:
        """Persist a new record, or raise StringAlreadyExists"""
        self.db.add(to_model(record))
        try:
            self.db.commit()
        except (IntegrityError, FlushError):
            self.db.rollback()
            logger.warning(f"Rejected duplicate insert for {record.id}")
            raise StringAlreadyExists()
        return record

    def get(self, string_id: str) -> Optional[StringRecord]:
        db_string = self.db.get(StringAnalysis, string_id)
        return to_record(db_string) if db_string else None

    def delete(self, string_id: str) -> bool:
        db_string = self.db.get(StringAnalysis, string_id)
        if db_string:
            self.db.delete(db_string)
            self.db.commit()
            return True
        return False

    def list_all(self) -> List[StringRecord]:
        query = self.db.query(StringAnalysis).order_by(StringAnalysis.created_at, StringAnalysis.id)
        return [to_record(db_string) for db_string in query.all()]


# ------------------------------------------------------------------------------
# IN-MEMORY STORE
# ------------------------------------------------------------------------------

class InMemoryStringStore(StringStore):
    """Process-local store; a lock makes insert-if-absent atomic"""

    def __init__(self):
        self._records: Dict[str, StringRecord] = {}
        self._lock = threading.Lock()

    def exists(self, string_id: str) -> bool:
        with self._lock:
            return string_id in self._records

    def insert(self, record: StringRecord) -> StringRecord:
        with self._lock:
            if record.id in self._records:
                logger.warning(f"Rejected duplicate insert for {record.id}")
                raise StringAlreadyExists()
            self._records[record.id] = record
        return record

    def get(self, string_id: str) -> Optional[StringRecord]:
        with self._lock:
            return self._records.get(string_id)

    def delete(self, string_id: str) -> bool:
        with self._lock:
            return self._records.pop(string_id, None) is not None

    def list_all(self) -> List[StringRecord]:
        # Insertion order
        with self._lock:
            return list(self._records.values())
