from pydantic import BaseModel, Field, field_validator
from typing import Dict, Optional, List, Any
from datetime import datetime

from string_analyzer.services.analyzer import StringRecord


class StringCreate(BaseModel):
    value: str = Field(..., description="String to analyze")

    @field_validator("value")
    @classmethod
    def not_blank(cls, v):
        if not v.strip():
            raise ValueError("Value cannot be empty")
        return v


class StringProperties(BaseModel):
    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Dict[str, int]


class StringResponse(BaseModel):
    id: str
    value: str
    properties: StringProperties
    created_at: datetime

    @classmethod
    def from_record(cls, record: StringRecord) -> "StringResponse":
        props = record.properties
        return cls(
            id=record.id,
            value=record.value,
            properties=StringProperties(
                length=props.length,
                is_palindrome=props.is_palindrome,
                unique_characters=props.unique_characters,
                word_count=props.word_count,
                sha256_hash=record.sha256_hash,
                character_frequency_map=dict(props.character_frequency),
            ),
            created_at=record.created_at,
        )


class StringListResponse(BaseModel):
    data: List[StringResponse]
    count: int
    filters_applied: Dict[str, Any] = {}


class InterpretedQuery(BaseModel):
    original: str
    parsed_filters: Dict[str, Any]


class NaturalLanguageResponse(BaseModel):
    data: List[StringResponse]
    count: int
    interpreted_query: InterpretedQuery


class ErrorResponse(BaseModel):
    error: str
    details: Optional[Dict[str, str]] = None
