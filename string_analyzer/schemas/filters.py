from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional, Union


class WordCountAbove(BaseModel):
    """Word count strictly greater than ``gt``."""

    model_config = ConfigDict(frozen=True)

    gt: int = Field(..., ge=0)


class FilterSet(BaseModel):
    """
    Structured filter constraints over stored string properties.

    Built from query parameters or from a free-text interpretation and
    discarded after use. Unset keys impose no constraint.
    """

    model_config = ConfigDict(frozen=True)

    is_palindrome: Optional[bool] = None
    word_count: Optional[Union[WordCountAbove, int]] = None
    min_length: Optional[int] = Field(None, ge=0)
    max_length: Optional[int] = Field(None, ge=0)
    contains_character: Optional[str] = Field(None, min_length=1, max_length=1)

    def as_dict(self) -> Dict[str, Any]:
        """Only the keys that are set, e.g. ``{"word_count": {"gt": 1}}``."""
        return self.model_dump(exclude_none=True)

    def is_empty(self) -> bool:
        return not self.as_dict()
