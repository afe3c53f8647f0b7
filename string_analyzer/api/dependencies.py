import logging
import os

from fastapi import Depends
from sqlalchemy.orm import Session

from string_analyzer.crud.strings import InMemoryStringStore, SqlStringStore
from string_analyzer.database import get_db

logger = logging.getLogger(__name__)

# "sql" (default) persists through SQLAlchemy, "memory" keeps records in-process
STRING_STORE = os.getenv("STRING_STORE", "sql").lower()

_memory_store = InMemoryStringStore()


def get_store(db: Session = Depends(get_db)):
    """Dependency to provide the configured string store."""
    # Sessions connect lazily, so the memory backend never touches the database
    if STRING_STORE == "memory":
        return _memory_store
    return SqlStringStore(db)
