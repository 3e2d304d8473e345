"""
ORM entities of the dictionary and tag services.

Identifiers are stored as canonical UUID strings so the schema works with
PostgreSQL and SQLite alike.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    """Creation and modification timestamps."""

    tscreated = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    tsmodified = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)


class Dictionary(TimestampMixin, Base):
    __tablename__ = "dictionary"

    id = Column(Integer, primary_key=True, autoincrement=True)
    uuid = Column(String(36), unique=True, nullable=False)
    name = Column(String(64), unique=True, nullable=False)
    description = Column(Text, nullable=True)

    entries = relationship(
        "DictionaryEntry",
        order_by="DictionaryEntry.position",
        cascade="all, delete-orphan",
        back_populates="dictionary",
    )

    def __repr__(self) -> str:
        return f"<Dictionary {self.name} ({self.uuid})>"


class DictionaryEntry(Base):
    __tablename__ = "dictionary_entry"

    id = Column(Integer, primary_key=True, autoincrement=True)
    dictionary_id = Column(Integer, ForeignKey("dictionary.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    value = Column(String(255), nullable=False)
    label = Column(String(255), nullable=True)
    default = Column(Boolean, nullable=False, default=False)

    dictionary = relationship("Dictionary", back_populates="entries")


class Tag(TimestampMixin, Base):
    __tablename__ = "tag"

    name = Column(String(64), primary_key=True)
    color = Column(String(32), nullable=True)

    def __repr__(self) -> str:
        return f"<Tag {self.name}>"
