"""
Dictionary service.

Dictionaries are named value lists (for example the known device roles) that
the UI offers in selection boxes. They are addressed by UUID or by name.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from leitstand_ui.exceptions import EntityNotFoundError, ReasonCode, UnprocessableEntityError
from leitstand_ui.persistence import models as orm
from leitstand_ui.persistence.database import SessionFactory, session_scope

logger = logging.getLogger(__name__)


class DictionaryEntry(BaseModel):
    """A single value of a dictionary."""

    value: str
    label: Optional[str] = None
    default: bool = False

    @property
    def sort_key(self) -> tuple[str, str]:
        return (self.label or self.value, self.value)


class DictionaryInfo(BaseModel):
    dictionary_id: UUID = Field(default_factory=uuid4)
    dictionary_name: str = Field(min_length=1, max_length=64)
    description: Optional[str] = None


class DictionarySettings(DictionaryInfo):
    entries: list[DictionaryEntry] = Field(default_factory=list)

    @field_validator("entries")
    @classmethod
    def _sorted_entries(cls, v: list[DictionaryEntry]) -> list[DictionaryEntry]:
        return sorted(v, key=lambda e: e.sort_key)


def parse_dictionary_ref(id_or_name: str) -> Union[UUID, str]:
    """Interpret a path segment as dictionary UUID if possible, otherwise as name."""
    try:
        return UUID(id_or_name)
    except ValueError:
        return id_or_name


class DictionaryService:
    """CRUD operations on dictionaries."""

    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory

    def get_dictionaries(self, filter: Optional[str] = None) -> list[DictionaryInfo]:
        """
        List dictionaries ordered by name.

        Args:
            filter: Regular expression the dictionary name must contain a match of.
                All dictionaries are returned when empty.

        Raises:
            UnprocessableEntityError: If the filter is not a valid regular expression
        """
        pattern = None
        if filter:
            try:
                pattern = re.compile(filter)
            except re.error as e:
                raise UnprocessableEntityError(
                    f"Invalid dictionary filter {filter!r}: {e}",
                    code=ReasonCode.VAL0001E_INVALID_VALUE,
                ) from e

        with session_scope(self._session_factory) as session:
            rows = session.scalars(select(orm.Dictionary).order_by(orm.Dictionary.name)).all()
            return [
                _info_of(row) for row in rows if pattern is None or pattern.search(row.name)
            ]

    def get_dictionary(self, id_or_name: Union[UUID, str]) -> DictionarySettings:
        """
        Raises:
            EntityNotFoundError: If the dictionary does not exist
        """
        with session_scope(self._session_factory) as session:
            row = _find(session, id_or_name)
            if row is None:
                logger.debug(
                    "%s: Dictionary %s does not exist",
                    ReasonCode.LUI0001E_DICTIONARY_NOT_FOUND.value,
                    id_or_name,
                )
                raise EntityNotFoundError(
                    f"Dictionary {id_or_name} does not exist",
                    code=ReasonCode.LUI0001E_DICTIONARY_NOT_FOUND,
                )
            return _settings_of(row)

    def store_dictionary(self, settings: DictionarySettings) -> bool:
        """Create or update a dictionary.

        Returns:
            True if the dictionary was created, False if an existing one was updated.
        """
        created = False
        try:
            with session_scope(self._session_factory) as session:
                row = _find(session, settings.dictionary_id)
                if row is None:
                    row = orm.Dictionary(uuid=str(settings.dictionary_id))
                    session.add(row)
                    created = True
                row.name = settings.dictionary_name
                row.description = settings.description
                row.entries = [
                    orm.DictionaryEntry(
                        position=i, value=entry.value, label=entry.label, default=entry.default
                    )
                    for i, entry in enumerate(settings.entries)
                ]
        except IntegrityError as e:
            raise UnprocessableEntityError(
                f"Dictionary name {settings.dictionary_name} is already in use",
                code=ReasonCode.VAL0001E_INVALID_VALUE,
            ) from e
        logger.info(
            "%s: Dictionary %s (%s) stored",
            ReasonCode.LUI0002I_DICTIONARY_STORED.value,
            settings.dictionary_name,
            settings.dictionary_id,
        )
        return created

    def remove_dictionary(self, id_or_name: Union[UUID, str]) -> None:
        """Remove a dictionary. Removing an unknown dictionary is a no-op."""
        with session_scope(self._session_factory) as session:
            row = _find(session, id_or_name)
            if row is None:
                return
            logger.info(
                "%s: Dictionary %s (%s) removed",
                ReasonCode.LUI0003I_DICTIONARY_REMOVED.value,
                row.name,
                row.uuid,
            )
            session.delete(row)


def _find(session: Session, id_or_name: Union[UUID, str]) -> Optional[orm.Dictionary]:
    query = select(orm.Dictionary).options(selectinload(orm.Dictionary.entries))
    if isinstance(id_or_name, UUID):
        query = query.where(orm.Dictionary.uuid == str(id_or_name))
    else:
        query = query.where(orm.Dictionary.name == id_or_name)
    return session.scalars(query).one_or_none()


def _info_of(row: orm.Dictionary) -> DictionaryInfo:
    return DictionaryInfo(
        dictionary_id=UUID(row.uuid),
        dictionary_name=row.name,
        description=row.description,
    )


def _settings_of(row: orm.Dictionary) -> DictionarySettings:
    return DictionarySettings(
        dictionary_id=UUID(row.uuid),
        dictionary_name=row.name,
        description=row.description,
        entries=[
            DictionaryEntry(value=e.value, label=e.label, default=e.default) for e in row.entries
        ],
    )
