from collections import Counter
from typing import Any, Dict

from string_analyzer.exceptions import InvalidInput
from string_analyzer.schemas.string import StringProperties
from string_analyzer.services.hasher import digest


def trim(raw: Any) -> str:
    """Strip leading/trailing whitespace once; rejects anything that is not text."""
    if not isinstance(raw, str):
        raise InvalidInput(
            "Value must be a string",
            details={"received_type": type(raw).__name__},
        )
    return raw.strip()


def normalize(text: str) -> str:
    """Lower-case and drop all whitespace (used only for palindrome checks)."""
    return "".join(text.lower().split())


def is_palindrome(text: str) -> bool:
    """Check if string is palindrome (case-insensitive, ignoring whitespace)"""
    normalized = normalize(text)
    return normalized == normalized[::-1]


def count_unique_characters(text: str) -> int:
    """Count distinct characters in string"""
    return len(set(text))


def count_words(text: str) -> int:
    """Count words separated by whitespace"""
    return len(text.split())


def get_character_frequency(text: str) -> Dict[str, int]:
    """Get frequency map of each character"""
    return dict(Counter(text))


def analyze(raw: Any) -> StringProperties:
    """
    Compute all properties of a string.

    Everything is derived from the trimmed value, so two inputs that differ only
    in surrounding whitespace produce identical properties and the same hash.
    """
    trimmed = trim(raw)

    return StringProperties(
        length=len(trimmed),
        is_palindrome=is_palindrome(trimmed),
        unique_characters=count_unique_characters(trimmed),
        word_count=count_words(trimmed),
        character_frequency_map=get_character_frequency(trimmed),
        content_hash=digest(trimmed),
    )
