"""Module descriptors and the application main menu."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Optional

from pydantic import Field, field_validator

from leitstand_ui.model.extension_point import ExtensionPoint
from leitstand_ui.model.extensions import Extension
from leitstand_ui.model.menus import (
    DescriptorModel,
    MainMenuItem,
    ModuleApplication,
    ModuleMenu,
)
from leitstand_ui.model.sorter import sort_extensions

logger = logging.getLogger(__name__)


class ModuleDescriptor(DescriptorModel):
    """
    Navigation and bootstrap information of a UI module.

    Example module.yaml:
        module: inventory
        scopesAllowed: [ivt, ivt.read]
        menus:
          - menu: element
            label: Element
            items:
              - item: element-settings
                view: element.html
    """

    module: str
    applications: list[ModuleApplication] = Field(default_factory=list)
    menus: list[ModuleMenu] = Field(default_factory=list)
    scopes_allowed: Optional[list[str]] = None

    @field_validator("scopes_allowed")
    @classmethod
    def _sorted_scopes(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        if v is None:
            return v
        return sorted(set(v))

    def find_menu(self, name: str) -> Optional[ModuleMenu]:
        for menu in self.menus:
            if menu.menu == name:
                return menu
        return None

    def add_application(self, application: ModuleApplication) -> None:
        """Register a sub-application. Applications are unique by name."""
        if any(app.application == application.application for app in self.applications):
            return
        self.applications.append(application)

    def add_extensions(self, extensions: Iterable[Extension]) -> None:
        """Merge contributed menus and menu items into this module."""
        extensions = list(extensions)

        known = {menu.menu for menu in self.menus}
        constraints: dict[ModuleMenu, list[ExtensionPoint]] = {}
        added: list[ModuleMenu] = []
        for extension in extensions:
            if not extension.is_module_extension():
                continue
            for menu in extension.menus:
                if menu.menu in known:
                    logger.warning(
                        "Ignoring contributed menu '%s' for module '%s': "
                        "a menu with this name already exists",
                        menu.menu,
                        self.module,
                    )
                    continue
                known.add(menu.menu)
                constraints[menu] = [extension.extend]
                added.append(menu)

        if added:
            self.menus = sort_extensions(constraints, self.menus + added)

        menu_extensions = [e for e in extensions if e.is_module_menu_extension()]
        for menu in self.menus:
            applicable = [e for e in menu_extensions if e.extend.menu == menu.menu]
            if applicable:
                menu.add_extensions(applicable)

        for extension in menu_extensions:
            if extension.extend.menu not in known:
                logger.warning(
                    "Ignoring items contributed to unknown menu '%s' of module '%s'",
                    extension.extend.menu,
                    self.module,
                )


class MainMenu(DescriptorModel):
    """
    The application-wide main menu listing all modules.

    Example main-menu.yaml:
        menu:
          - module: inventory
            label: Inventory
            title: Resource inventory
            path: /inventory/pods.html
            welcome: true
    """

    menu: list[MainMenuItem] = Field(default_factory=list)

    @property
    def items(self) -> list[MainMenuItem]:
        return list(self.menu)

    def find_welcome_page_module(self) -> Optional[MainMenuItem]:
        """Return the item flagged as welcome module, falling back to the first item."""
        for item in self.menu:
            if item.is_welcome_module():
                return item
        if self.menu:
            return self.menu[0]
        return None

    def add_extensions(self, extensions: Iterable[Extension]) -> None:
        """Merge contributed main menu items."""
        known = {item.module for item in self.menu}
        constraints: dict[MainMenuItem, list[ExtensionPoint]] = {}
        added: list[MainMenuItem] = []
        for extension in extensions:
            item = extension.main_menu
            if item is None:
                continue
            if item.module in known:
                logger.warning(
                    "Ignoring contributed main menu item '%s': the module is already listed",
                    item.module,
                )
                continue
            known.add(item.module)
            constraints[item] = [extension.extend]
            added.append(item)

        if added:
            self.menu = sort_extensions(constraints, self.menu + added)
