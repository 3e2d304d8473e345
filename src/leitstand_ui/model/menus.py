"""
Menus and menu items of UI modules.

The descriptor classes are pydantic models. YAML and JSON use camelCase keys
(``scopesAllowed``, ``viewModel``); Python code uses the snake_case attribute
names. Both spellings are accepted on input.
"""

from __future__ import annotations

import logging
import re
from abc import abstractmethod
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from leitstand_ui.model.extension_point import ExtensionPoint
from leitstand_ui.model.sorter import sort_extensions

if TYPE_CHECKING:
    from leitstand_ui.model.extensions import Extension

logger = logging.getLogger(__name__)

_QUALIFIED_URL = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")


class DescriptorModel(BaseModel):
    """Base class of all descriptor models."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> dict[str, Any]:
        """Return the JSON representation sent to the browser."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ViewModelProperty(DescriptorModel):
    """Matcher on a view model property that enables a menu or menu item."""

    property: str
    exists: Optional[bool] = None
    matches: Optional[str] = None
    matches_not: Optional[str] = None


class BaseModuleItem(DescriptorModel):
    """
    Attributes shared by module menus and module menu items.

    Items are positioned by name. Hashing uses the name only, so items can be
    used as keys of the sorter's constraint mapping.
    """

    label: Optional[str] = None
    title: Optional[str] = None
    category: Optional[str] = None
    query: Optional[dict[str, str]] = None
    requires: Optional[list[str]] = None
    view_model: Optional[list[ViewModelProperty]] = None
    scopes_allowed: Optional[list[str]] = None
    config: Optional[dict[str, Any]] = None

    @field_validator("requires", "scopes_allowed")
    @classmethod
    def _sorted_unique(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        if v is None:
            return v
        return sorted(set(v))

    @property
    @abstractmethod
    def name(self) -> str:
        """Name the sorter positions this entry by."""

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.name))

    def add_query_parameters(self, parameters: Optional[dict[str, str]]) -> None:
        """Add inherited query parameters. Own parameters win."""
        if not parameters:
            return
        self.query = {**parameters, **(self.query or {})}

    def add_config(self, config: Optional[dict[str, Any]]) -> None:
        """Add inherited configuration. Own settings win."""
        if not config:
            return
        self.config = {**config, **(self.config or {})}

    def add_scopes_allowed(self, scopes: Optional[Iterable[str]]) -> None:
        """Extend the set of scopes allowed to access this entry."""
        if not scopes:
            return
        self.scopes_allowed = sorted(set(self.scopes_allowed or ()) | set(scopes))


class ModuleMenuItem(BaseModuleItem):
    """A leaf entry of a module menu, bound to a view."""

    item: str
    view: str
    target: Optional[str] = None

    @model_validator(mode="after")
    def _default_label(self) -> "ModuleMenuItem":
        if not self.label:
            self.label = self.item
        return self

    @property
    def name(self) -> str:
        return self.item

    def apply_base_uri(self, base_uri: Optional[str]) -> None:
        """Qualify a relative view path with the contribution base URI.

        Absolute paths and fully-qualified URLs are left untouched.
        """
        if base_uri is None:
            return
        if self.view.startswith("/") or _QUALIFIED_URL.match(self.view):
            return
        self.view = f"{base_uri.rstrip('/')}/{self.view}"


class ModuleMenu(BaseModuleItem):
    """A named menu of a module holding an ordered list of items."""

    menu: str
    entity: Optional[str] = None
    expand: Optional[str] = None
    items: list[ModuleMenuItem] = Field(default_factory=list)

    @property
    def name(self) -> str:
        return self.menu

    def find_item(self, name: str) -> Optional[ModuleMenuItem]:
        for item in self.items:
            if item.item == name:
                return item
        return None

    def add_extensions(self, extensions: Iterable["Extension"]) -> None:
        """Merge contributed items into this menu.

        The first item of each extension is placed by the extension point.
        Every further item of the same extension is placed after its
        predecessor, so the contributed items keep their relative order.
        """
        known = {item.item for item in self.items}
        constraints: dict[ModuleMenuItem, list[ExtensionPoint]] = {}
        added: list[ModuleMenuItem] = []

        for extension in extensions:
            point = extension.extend
            previous: Optional[ModuleMenuItem] = None
            for item in extension.items:
                if item.item in known:
                    logger.warning(
                        "Ignoring contributed item '%s' for menu '%s' of module '%s': "
                        "an item with this name already exists",
                        item.item,
                        self.menu,
                        point.module,
                    )
                    continue
                known.add(item.item)
                if previous is None:
                    constraints[item] = [point]
                else:
                    constraints[item] = [
                        ExtensionPoint(module=point.module, menu=point.menu, after=previous.item)
                    ]
                previous = item
                added.append(item)

        if not added:
            return
        self.items = sort_extensions(constraints, self.items + added)


class MainMenuItem(DescriptorModel):
    """Entry of the application main menu, one per module."""

    module: str
    title: str
    subtitle: Optional[str] = None
    label: str
    path: str
    position: Optional[str] = None
    scopes_allowed: Optional[list[str]] = None
    config: Optional[dict[str, Any]] = None
    welcome: bool = Field(default=False, exclude=True)

    @property
    def name(self) -> str:
        return self.module

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.module))

    def is_welcome_module(self) -> bool:
        return self.welcome


class ModuleApplication(DescriptorModel):
    """Bootstrap descriptor of a sub-application loaded with a module."""

    application: str
    controller: str = "controller.js"
    defer: bool = False
