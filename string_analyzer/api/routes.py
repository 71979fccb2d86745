from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
from typing import Optional
import logging

from string_analyzer.database import get_db
from string_analyzer.schemas.filters import FilterSet
from string_analyzer.schemas.string import (
    InterpretedQuery,
    NaturalLanguageResponse,
    StringCreate,
    StringListResponse,
    StringResponse,
)
from string_analyzer.services import string_service as service

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/strings", response_model=StringResponse, status_code=status.HTTP_201_CREATED)
def create_string(string_data: StringCreate, db: Session = Depends(get_db)):
    """
    Analyze and store a string.
    Returns 409 if the trimmed string already exists, 422 if value is not a string.
    """
    record = service.create_string(db, string_data.value)
    return StringResponse.model_validate(record)


@router.get("/strings", response_model=StringListResponse)
def get_all_strings(
    is_palindrome: Optional[bool] = Query(None, description="Filter by palindrome (true/false)"),
    min_length: Optional[int] = Query(None, ge=0, description="Minimum string length (inclusive)"),
    max_length: Optional[int] = Query(None, ge=0, description="Maximum string length (inclusive)"),
    word_count: Optional[int] = Query(None, ge=0, description="Exact word count"),
    contains_character: Optional[str] = Query(
        None, min_length=1, max_length=1, description="Only strings containing this character"
    ),
    db: Session = Depends(get_db),
):
    """
    Retrieve all strings, newest first, with optional filters.
    """
    filters = FilterSet(
        is_palindrome=is_palindrome,
        min_length=min_length,
        max_length=max_length,
        word_count=word_count,
        contains_character=contains_character,
    )
    records = service.list_strings(db, filters)
    data = [StringResponse.model_validate(r) for r in records]

    return StringListResponse(
        data=data,
        count=len(data),
        filters_applied=filters.as_dict() or None,
    )


# Must be registered before /strings/{string_value}
@router.get("/strings/filter-by-natural-language", response_model=NaturalLanguageResponse)
def filter_by_natural_language(
    query: Optional[str] = Query(None, description="e.g. 'all single word palindromic strings'"),
    db: Session = Depends(get_db),
):
    """
    Filter strings using natural language queries.
    """
    filters, records = service.filter_by_natural_language(db, query)
    data = [StringResponse.model_validate(r) for r in records]

    return NaturalLanguageResponse(
        data=data,
        count=len(data),
        interpreted_query=InterpretedQuery(original=query, parsed_filters=filters.as_dict()),
    )


@router.get("/strings/{string_value}", response_model=StringResponse)
def get_string(string_value: str, db: Session = Depends(get_db)):
    """
    Get analysis for a specific string, by value or by content hash.
    """
    record = service.get_string(db, string_value)
    return StringResponse.model_validate(record)


@router.delete("/strings/{string_value}", status_code=status.HTTP_204_NO_CONTENT)
def delete_string(string_value: str, db: Session = Depends(get_db)):
    """
    Delete a string from the system.
    """
    service.delete_string(db, string_value)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
