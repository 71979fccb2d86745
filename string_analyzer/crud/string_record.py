from sqlalchemy.orm import Session
from sqlalchemy import desc, or_
from typing import List, Optional

from string_analyzer.models.string_record import StringRecord
from string_analyzer.schemas.string import StringProperties
from string_analyzer.services.filter_engine import Predicate, apply_filters


def get_by_hash(db: Session, content_hash: str) -> Optional[StringRecord]:
    """Get string record by content hash"""
    return db.query(StringRecord).filter(StringRecord.id == content_hash).first()


def get_by_value_or_hash(db: Session, value: str, content_hash: str) -> Optional[StringRecord]:
    """Get string record matching either the stored value or the content hash"""
    return db.query(StringRecord).filter(
        or_(StringRecord.value == value, StringRecord.id == content_hash)
    ).first()


def insert(db: Session, value: str, properties: StringProperties) -> StringRecord:
    """Store a trimmed value with its precomputed properties"""
    record = StringRecord(
        id=properties.content_hash,
        value=value,
        length=properties.length,
        is_palindrome=properties.is_palindrome,
        unique_characters=properties.unique_characters,
        word_count=properties.word_count,
        character_frequency_map=properties.character_frequency_map,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def delete(db: Session, record: StringRecord) -> StringRecord:
    """Delete a string record, returning what was removed"""
    db.delete(record)
    db.commit()
    return record


def find_matching(db: Session, predicate: Predicate) -> List[StringRecord]:
    """Get all string records satisfying predicate, newest first"""
    records = db.query(StringRecord).order_by(desc(StringRecord.created_at)).all()
    return apply_filters(predicate, records)
