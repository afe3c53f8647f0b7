from fastapi import APIRouter, Depends, Query, status
from typing import Optional
import logging

from string_analyzer import schemas
from string_analyzer.api.dependencies import get_store
from string_analyzer.crud.strings import StringStore
from string_analyzer.services import string_service
from string_analyzer.services.filters import StringFilters

router = APIRouter()


def error_responses(*status_codes: int) -> dict:
    """OpenAPI metadata for the {"error": ...} bodies the exception handlers return"""
    return {code: {"model": schemas.ErrorResponse} for code in status_codes}

logger = logging.getLogger(__name__)


@router.post("/strings", response_model=schemas.StringResponse, status_code=status.HTTP_201_CREATED,
             responses=error_responses(400, 409, 422))
def create_string(string_data: schemas.StringCreate, store: StringStore = Depends(get_store)):
    """
    Analyze and store a string.
    Returns 409 if string already exists.
    """
    record = string_service.create_string(store, string_data.value)
    return schemas.StringResponse.from_record(record)


@router.get("/strings", response_model=schemas.StringListResponse, responses=error_responses(400))
def get_all_strings(
    is_palindrome: Optional[bool] = Query(None),
    min_length: Optional[int] = Query(None, ge=0),
    max_length: Optional[int] = Query(None, ge=0),
    word_count: Optional[int] = Query(None, ge=0),
    contains_character: Optional[str] = Query(None, min_length=1),
    store: StringStore = Depends(get_store)
):
    """
    Get all strings with optional filtering.
    """
    filters = StringFilters(
        is_palindrome=is_palindrome,
        min_length=min_length,
        max_length=max_length,
        word_count=word_count,
        contains_character=contains_character
    )
    records = string_service.list_strings(store, filters)

    data = [schemas.StringResponse.from_record(record) for record in records]
    return schemas.StringListResponse(
        data=data,
        count=len(data),
        filters_applied=filters.as_dict()
    )


# Registered ahead of /strings/{string_value} so the literal path wins
@router.get("/strings/filter-by-natural-language", response_model=schemas.NaturalLanguageResponse,
            responses=error_responses(400, 422))
def filter_by_natural_language(
    query: str = Query(..., description="Natural language query"),
    store: StringStore = Depends(get_store)
):
    """
    Filter strings using natural language queries.
    Example: "all single word palindromic strings"
    """
    parsed, records = string_service.filter_by_natural_language(store, query)

    data = [schemas.StringResponse.from_record(record) for record in records]
    return schemas.NaturalLanguageResponse(
        data=data,
        count=len(data),
        interpreted_query=schemas.InterpretedQuery(
            original=parsed.original,
            parsed_filters=parsed.parsed_filters
        )
    )


@router.get("/strings/{string_value}", response_model=schemas.StringResponse, responses=error_responses(404))
def get_string(string_value: str, store: StringStore = Depends(get_store)):
    """
    Get analysis for a specific string.
    Returns 404 if string doesn't exist.
    """
    record = string_service.get_string(store, string_value)
    return schemas.StringResponse.from_record(record)


@router.delete("/strings/{string_value}", status_code=status.HTTP_204_NO_CONTENT, responses=error_responses(404))
def delete_string(string_value: str, store: StringStore = Depends(get_store)):
    """
    Delete a string from the system.
    Returns 404 if string doesn't exist.
    """
    string_service.delete_string(store, string_value)
    return None
