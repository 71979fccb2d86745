"""
Turns a FilterSet into a predicate over StringProperties and applies it to records.

Each set key contributes one clause and clauses are AND-ed together, so an
empty FilterSet matches every record.
"""

from operator import attrgetter
from typing import Callable, Iterable, List, Sequence

from string_analyzer.exceptions import ConflictingFilters
from string_analyzer.schemas.filters import FilterSet, WordCountAbove
from string_analyzer.schemas.string import StringProperties

Predicate = Callable[[StringProperties], bool]


def check_conflicts(filters: FilterSet) -> FilterSet:
    """Reject a length range that cannot match anything."""
    if (
        filters.min_length is not None
        and filters.max_length is not None
        and filters.min_length > filters.max_length
    ):
        raise ConflictingFilters(
            "min_length cannot be greater than max_length",
            details={"parsed_filters": filters.as_dict()},
        )
    return filters


def compile_filters(filters: FilterSet) -> Predicate:
    """Build the conjunction of one clause per constraint present in ``filters``."""
    clauses: List[Predicate] = []

    if filters.is_palindrome is not None:
        palindrome = filters.is_palindrome
        clauses.append(lambda p: p.is_palindrome == palindrome)

    word_count = filters.word_count
    if isinstance(word_count, WordCountAbove):
        clauses.append(lambda p: p.word_count > word_count.gt)
    elif word_count is not None:
        clauses.append(lambda p: p.word_count == word_count)

    if filters.min_length is not None:
        min_length = filters.min_length
        clauses.append(lambda p: p.length >= min_length)

    if filters.max_length is not None:
        max_length = filters.max_length
        clauses.append(lambda p: p.length <= max_length)

    if filters.contains_character is not None:
        char = filters.contains_character
        clauses.append(lambda p: char in p.character_frequency_map)

    def predicate(properties: StringProperties) -> bool:
        return all(clause(properties) for clause in clauses)

    return predicate


def apply_filters(predicate: Predicate, records: Iterable) -> Sequence:
    """
    Select records whose ``properties`` satisfy ``predicate``.

    Results are ordered newest first by ``created_at``. The sort is stable, so
    records with equal timestamps keep their input order. Records are not modified.
    """
    matching = [record for record in records if predicate(record.properties)]
    return sorted(matching, key=attrgetter("created_at"), reverse=True)
