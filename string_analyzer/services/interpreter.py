"""
Keyword/pattern interpretation of free-text filter queries.

Examples:
- "all single word palindromic strings" -> {is_palindrome: True, word_count: 1}
- "strings longer than 10 characters" -> {min_length: 10}
- "strings containing the letter z" -> {contains_character: "z"}

Length phrases are keyed on the leading comparison ("longer than N") alone; a
trailing "characters"/"chars" is allowed but not required. N is used as an
inclusive bound exactly as written.
"""

import logging
import re
from typing import Any, Dict, List

from string_analyzer.exceptions import ConflictingFilters, InvalidQuery, UnrecognizedQuery
from string_analyzer.schemas.filters import FilterSet, WordCountAbove
from string_analyzer.services.filter_engine import check_conflicts

logger = logging.getLogger(__name__)

# A number followed by "word(s)" is a word count, never a length
_NOT_WORDS = r"(?!\d|\s*words?\b)"

PALINDROME_RE = re.compile(r"\bpalindrom(?:e|es|ic)\b")
SINGLE_WORD_RE = re.compile(r"\b(?:single|one)[\s-]words?\b")
MULTI_WORD_RE = re.compile(r"\b(?:multi[\s-]?words?|multiple words)\b")
MORE_WORDS_RE = re.compile(r"\b(?:longer|greater|more) than (\d+) words?\b")
MIN_LENGTH_RE = re.compile(r"\b(?:longer|greater|more) than (\d+)" + _NOT_WORDS)
MAX_LENGTH_RE = re.compile(r"\b(?:shorter|less|fewer) than (\d+)" + _NOT_WORDS)
EXACT_LENGTH_RE = re.compile(r"\bexactly (\d+) (?:characters?|chars?)\b")
CONTAINS_RE = re.compile(
    r"\bcontain(?:s|ing)?(?:\s+the)?(?:\s+(?:letter|character|char))?\s+['\"]?([a-z0-9])(?![a-z0-9])"
)
FIRST_VOWEL_RE = re.compile(r"\bfirst vowel\b")


def _word_count_filter(query: str) -> Dict[str, Any]:
    exact: List[int] = []
    above: List[int] = []

    if SINGLE_WORD_RE.search(query):
        exact.append(1)
    if MULTI_WORD_RE.search(query):
        above.append(1)
    above.extend(int(n) for n in MORE_WORDS_RE.findall(query))

    if exact and above:
        raise ConflictingFilters(
            "Query asks for both an exact and a minimum word count",
            details={"word_count": exact[0], "word_count_gt": max(above)},
        )
    if exact:
        return {"word_count": exact[0]}
    if above:
        return {"word_count": WordCountAbove(gt=max(above))}
    return {}


def _length_filter(query: str) -> Dict[str, Any]:
    lower = [int(n) for n in MIN_LENGTH_RE.findall(query)]
    upper = [int(n) for n in MAX_LENGTH_RE.findall(query)]
    for n in EXACT_LENGTH_RE.findall(query):
        lower.append(int(n))
        upper.append(int(n))

    # Tightest bound wins when several phrases constrain the same side
    filters: Dict[str, Any] = {}
    if lower:
        filters["min_length"] = max(lower)
    if upper:
        filters["max_length"] = min(upper)
    return filters


def interpret(query: Any) -> FilterSet:
    """
    Parse a natural language query into a FilterSet.

    Raises InvalidQuery for a missing or blank query, ConflictingFilters when the
    extracted constraints contradict each other, and UnrecognizedQuery when no
    known pattern matched. Nothing is returned on failure.
    """
    if not isinstance(query, str) or not query.strip():
        raise InvalidQuery("Query must be a non-empty string")

    q = query.lower()
    filters: Dict[str, Any] = {}

    if PALINDROME_RE.search(q):
        filters["is_palindrome"] = True

    filters.update(_word_count_filter(q))
    filters.update(_length_filter(q))

    letter_match = CONTAINS_RE.search(q)
    if letter_match:
        filters["contains_character"] = letter_match.group(1)
    elif FIRST_VOWEL_RE.search(q):
        filters["contains_character"] = "a"

    if not filters:
        raise UnrecognizedQuery("Unable to parse natural language query", details={"original": query})

    filter_set = check_conflicts(FilterSet(**filters))
    logger.debug(f"Interpreted {query!r} as {filter_set.as_dict()}")
    return filter_set
