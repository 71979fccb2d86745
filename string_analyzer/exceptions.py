"""
Error types raised by the analyzer, the filter interpreter and the service layer.

Every error carries an ``ErrorKind`` so callers can branch on the kind instead of
inspecting messages or numeric codes. Translating a kind into a status code or a
user-facing message is left to the HTTP layer.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    INVALID_QUERY = "invalid_query"
    UNRECOGNIZED_QUERY = "unrecognized_query"
    CONFLICTING_FILTERS = "conflicting_filters"
    NOT_FOUND = "not_found"
    DUPLICATE_CONTENT = "duplicate_content"


class StringAnalyzerError(Exception):
    """Base exception for all string analyzer errors."""

    kind: ErrorKind

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidInput(StringAnalyzerError):
    """Analysis requested on a value that is not text."""

    kind = ErrorKind.INVALID_INPUT


class InvalidQuery(StringAnalyzerError):
    """Free-text filter query is missing, blank or not text."""

    kind = ErrorKind.INVALID_QUERY


class UnrecognizedQuery(StringAnalyzerError):
    """Free-text query matched no known filter pattern."""

    kind = ErrorKind.UNRECOGNIZED_QUERY


class ConflictingFilters(StringAnalyzerError):
    """Extracted or supplied filters contradict each other."""

    kind = ErrorKind.CONFLICTING_FILTERS


class NotFound(StringAnalyzerError):
    """No stored record matches the requested value or hash."""

    kind = ErrorKind.NOT_FOUND


class DuplicateContent(StringAnalyzerError):
    """
    Content with the same hash is already stored.

    The existing record is kept on ``record`` so the caller can report it.
    """

    kind = ErrorKind.DUPLICATE_CONTENT

    def __init__(self, message: str, record: Any = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.record = record
