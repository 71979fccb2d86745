import logging
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from string_analyzer.crud import string_record as crud
from string_analyzer.exceptions import DuplicateContent, NotFound
from string_analyzer.models.string_record import StringRecord
from string_analyzer.schemas.filters import FilterSet
from string_analyzer.services.analyzer import analyze, trim
from string_analyzer.services.filter_engine import check_conflicts, compile_filters
from string_analyzer.services.hasher import digest, looks_like_digest
from string_analyzer.services.interpreter import interpret

logger = logging.getLogger(__name__)


def _find(db: Session, string_value: str) -> Optional[StringRecord]:
    """
    Look up by stored value (or its digest), then by a content hash passed directly.

    The value match always wins, so a stored string that happens to look like
    another record's hash resolves to itself.
    """
    value = trim(string_value)
    record = crud.get_by_value_or_hash(db, value, digest(value))
    if record is None and looks_like_digest(value):
        record = crud.get_by_hash(db, value.lower())
    return record


def create_string(db: Session, value) -> StringRecord:
    """
    Analyze and store a string.

    Raises DuplicateContent (carrying the stored record) when the trimmed value
    is already present, either before insert or on a concurrent insert.
    """
    properties = analyze(value)
    trimmed = trim(value)

    existing = crud.get_by_hash(db, properties.content_hash)
    if existing:
        logger.info(f"Duplicate string rejected: {properties.content_hash}")
        raise DuplicateContent("String already exists in the system", record=existing)

    try:
        record = crud.insert(db, trimmed, properties)
    except IntegrityError:
        db.rollback()
        logger.warning(f"Concurrent insert detected for {properties.content_hash}")
        raise DuplicateContent(
            "String already exists in the system",
            record=crud.get_by_hash(db, properties.content_hash),
        )

    logger.info(f"Stored string {record.id} (length={properties.length})")
    return record


def get_string(db: Session, string_value: str) -> StringRecord:
    record = _find(db, string_value)
    if not record:
        raise NotFound("String does not exist in the system", details={"value": trim(string_value)})
    return record


def list_strings(db: Session, filters: FilterSet) -> List[StringRecord]:
    """Get all strings matching structured filters, newest first"""
    check_conflicts(filters)
    return crud.find_matching(db, compile_filters(filters))


def filter_by_natural_language(db: Session, query) -> Tuple[FilterSet, List[StringRecord]]:
    """Interpret a free-text query and return the filters used with the matches"""
    filters = interpret(query)
    logger.info(f"Natural language query {query!r} -> {filters.as_dict()}")
    return filters, crud.find_matching(db, compile_filters(filters))


def delete_string(db: Session, string_value: str) -> StringRecord:
    """Delete the record resolved the same way as get_string"""
    record = get_string(db, string_value)
    content_hash = record.id
    crud.delete(db, record)
    logger.info(f"Deleted string {content_hash}")
    return record
