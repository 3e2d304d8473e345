"""Tag service: tag names with an optional display colour."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import select

from leitstand_ui.exceptions import EntityNotFoundError, ReasonCode
from leitstand_ui.persistence import models as orm
from leitstand_ui.persistence.database import SessionFactory, session_scope

logger = logging.getLogger(__name__)


class TagInfo(BaseModel):
    """A tag. The JSON key of the name is ``tag``."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="tag", min_length=1, max_length=64)
    color: Optional[str] = None


class TagService:
    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory

    def get_tags(self) -> list[TagInfo]:
        with session_scope(self._session_factory) as session:
            rows = session.scalars(select(orm.Tag).order_by(orm.Tag.name)).all()
            return [TagInfo(name=row.name, color=row.color) for row in rows]

    def get_tag(self, name: str) -> TagInfo:
        """
        Raises:
            EntityNotFoundError: If the tag does not exist
        """
        with session_scope(self._session_factory) as session:
            row = session.get(orm.Tag, name)
            if row is None:
                raise EntityNotFoundError(
                    f"Tag {name} does not exist", code=ReasonCode.LUI0010I_TAG_NOT_FOUND
                )
            return TagInfo(name=row.name, color=row.color)

    def store_tag(self, tag: TagInfo) -> None:
        """Create a tag or update the colour of an existing one."""
        self.store_tags([tag])

    def store_tags(self, tags: Iterable[TagInfo]) -> None:
        with session_scope(self._session_factory) as session:
            for tag in tags:
                row = session.get(orm.Tag, tag.name)
                if row is None:
                    session.add(orm.Tag(name=tag.name, color=tag.color))
                else:
                    row.color = tag.color
                logger.debug("Stored tag %s", tag.name)

    def remove_tag(self, name: str) -> None:
        with session_scope(self._session_factory) as session:
            row = session.get(orm.Tag, name)
            if row is not None:
                session.delete(row)
                logger.debug("Removed tag %s", name)
