from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, Boolean, DateTime, JSON, Text
from sqlalchemy.dialects import mysql

from string_analyzer.database import Base
from string_analyzer.schemas.string import StringProperties


def utcnow():
    return datetime.now(timezone.utc)


class StringRecord(Base):
    __tablename__ = "string_records"

    id = Column(String(64), primary_key=True, index=True)  # SHA-256 content hash
    # Uniqueness of value follows from the hash primary key
    value = Column(Text, nullable=False)
    length = Column(Integer, nullable=False, index=True)
    is_palindrome = Column(Boolean, nullable=False, index=True)
    unique_characters = Column(Integer, nullable=False)
    word_count = Column(Integer, nullable=False, index=True)
    character_frequency_map = Column(JSON, nullable=False)
    # Set in Python with microseconds; MySQL needs fsp=6 to keep them for newest-first ordering
    created_at = Column(
        DateTime(timezone=True).with_variant(mysql.DATETIME(timezone=True, fsp=6), "mysql"),
        nullable=False,
        default=utcnow,
        index=True,
    )

    @property
    def content_hash(self) -> str:
        return self.id

    @property
    def properties(self) -> StringProperties:
        return StringProperties(
            length=self.length,
            is_palindrome=self.is_palindrome,
            unique_characters=self.unique_characters,
            word_count=self.word_count,
            character_frequency_map=self.character_frequency_map,
            content_hash=self.id,
        )

    def __repr__(self):
        return f"<StringRecord {self.id[:12]} {self.value[:30]!r}>"
