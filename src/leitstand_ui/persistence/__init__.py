"""Relational store of dictionaries and tags."""

from leitstand_ui.persistence.database import (
    SessionFactory,
    create_db_engine,
    create_session_factory,
    init_db,
    session_scope,
)
from leitstand_ui.persistence.models import Base, Dictionary, DictionaryEntry, Tag

__all__ = [
    "Base",
    "Dictionary",
    "DictionaryEntry",
    "SessionFactory",
    "Tag",
    "create_db_engine",
    "create_session_factory",
    "init_db",
    "session_scope",
]
