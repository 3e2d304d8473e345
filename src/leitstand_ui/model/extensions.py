"""Extensions: a single extension point together with its payload."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from pydantic import Field, model_validator

from leitstand_ui.model.extension_point import ExtensionPoint
from leitstand_ui.model.menus import DescriptorModel, MainMenuItem, ModuleMenu, ModuleMenuItem

if TYPE_CHECKING:
    from leitstand_ui.model.descriptor import ModuleDescriptor


class Extension(DescriptorModel):
    """
    What a contribution injects and where.

    Exactly one payload is set: ``menus`` (whole menus added to a module),
    ``items`` (items added to a menu of a module) or ``main_menu`` (a new
    entry of the application main menu).

    Example:
        extend:
          module: inventory
          menu: element
          after: element-settings
        items:
          - item: element-ports
            view: ports.html
    """

    extend: ExtensionPoint
    menus: list[ModuleMenu] = Field(default_factory=list)
    items: list[ModuleMenuItem] = Field(default_factory=list)
    main_menu: Optional[MainMenuItem] = None

    @model_validator(mode="after")
    def _single_payload(self) -> "Extension":
        payloads = [bool(self.menus), bool(self.items), self.main_menu is not None]
        if sum(payloads) != 1:
            raise ValueError(
                f"extension of module '{self.extend.module}' must declare exactly one of "
                "'menus', 'items' or 'mainMenu'"
            )
        return self

    @property
    def extension_point(self) -> ExtensionPoint:
        return self.extend

    def is_module_extension(self) -> bool:
        return self.extend.is_module_extension() and bool(self.menus)

    def is_module_menu_extension(self) -> bool:
        return self.extend.is_module_menu_extension() and bool(self.items)

    def is_main_menu_item(self) -> bool:
        return self.main_menu is not None

    def is_extension_for(self, descriptor: "ModuleDescriptor") -> bool:
        return self.extend.module == descriptor.module

    def __str__(self) -> str:
        return (
            f"Extension[point={self.extend!r}, module_extension={self.is_module_extension()}, "
            f"menu_extension={self.is_module_menu_extension()}]"
        )
