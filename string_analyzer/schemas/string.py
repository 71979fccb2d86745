from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional, List
from datetime import datetime


class StringProperties(BaseModel):
    """Derived properties of a trimmed string. Never recomputed once stored."""

    model_config = ConfigDict(frozen=True)

    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    character_frequency_map: Dict[str, int]
    content_hash: str


class StringCreate(BaseModel):
    # Type is checked by the analyzer so a non-string maps to InvalidInput
    value: Any = Field(..., description="String to analyze")


class StringResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    value: str
    properties: StringProperties
    created_at: datetime


class StringListResponse(BaseModel):
    data: List[StringResponse]
    count: int
    filters_applied: Optional[Dict[str, Any]] = None


class InterpretedQuery(BaseModel):
    original: str
    parsed_filters: Dict[str, Any]


class NaturalLanguageResponse(BaseModel):
    data: List[StringResponse]
    count: int
    interpreted_query: InterpretedQuery
