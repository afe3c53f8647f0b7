from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from string_analyzer.database import Base


class StringAnalysis(Base):
    __tablename__ = "strings"

    id = Column(String(64), primary_key=True, index=True)  # SHA-256 hash
    value = Column(Text, nullable=False)
    length = Column(Integer, nullable=False)
    is_palindrome = Column(Boolean, nullable=False)
    unique_characters = Column(Integer, nullable=False)
    word_count = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)

    character_frequencies = relationship(
        "CharacterFrequency",
        order_by="CharacterFrequency.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class CharacterFrequency(Base):
    """One row per distinct character of a stored string"""

    __tablename__ = "character_frequencies"

    # Keyed by first-seen position so case-insensitive collations can't merge 'a' and 'A'
    string_id = Column(String(64), ForeignKey("strings.id", ondelete="CASCADE"), primary_key=True)
    position = Column(Integer, primary_key=True)
    character = Column(String(4), nullable=False)
    occurrence = Column(Integer, nullable=False)
