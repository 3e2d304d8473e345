"""Contributions: plugin bundles that extend existing modules or add new ones."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import yaml
from pydantic import Field, ValidationError, field_validator

from leitstand_ui.exceptions import ContributionError
from leitstand_ui.model.extensions import Extension
from leitstand_ui.model.menus import DescriptorModel, ModuleApplication, ModuleMenuItem

if TYPE_CHECKING:
    from leitstand_ui.model.descriptor import ModuleDescriptor


class Contribution(DescriptorModel):
    """
    A contribution descriptor.

    Example contribution file:
        baseUri: /ui/views/alarms
        controller: controller.js
        provider: leitstand.io
        name: alarms
        category: monitoring
        scopesAllowed: [alarm.read]
        extensions:
          - extend:
              module: inventory
              menu: element
              after: element-settings
            items:
              - item: element-alarms
                view: alarms.html
    """

    base_uri: Optional[str] = None
    controller: Optional[str] = None
    provider: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    scopes_allowed: Optional[list[str]] = None
    config: Optional[dict[str, Any]] = None
    extensions: list[Extension] = Field(default_factory=list)

    @field_validator("scopes_allowed")
    @classmethod
    def _sorted_scopes(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        if not v:
            return None
        return sorted(set(v))

    @field_validator("config")
    @classmethod
    def _empty_config(cls, v: Optional[dict[str, Any]]) -> Optional[dict[str, Any]]:
        return v or None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Contribution":
        """Build a contribution from parsed YAML and apply its defaults."""
        return cls.model_validate(data).apply_defaults()

    @classmethod
    def from_yaml(cls, path: Path) -> "Contribution":
        """Load a contribution from a YAML file and apply its defaults.

        Raises:
            ContributionError: If the file cannot be read or is invalid
        """
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
            if not isinstance(data, dict):
                raise ContributionError(f"Contribution file {path} does not contain a mapping")
            return cls.from_dict(data)
        except (OSError, yaml.YAMLError, ValidationError) as e:
            raise ContributionError(
                f"Cannot process contribution file {path}",
                suggestions=["Check the YAML syntax and the required fields of all items"],
                cause=e,
            ) from e

    @property
    def key(self) -> str:
        """Registry key: the name, falling back to the base URI."""
        return self.name or self.base_uri or ""

    def apply_defaults(self) -> "Contribution":
        """Push category, config, scopes and base URI down to all contributed entries."""
        for extension in self.extensions:
            for item in extension.items:
                self._apply_item_defaults(item)
            for menu in extension.menus:
                menu.add_config(self.config)
                menu.add_scopes_allowed(self.scopes_allowed)
                for item in menu.items:
                    self._apply_item_defaults(item)
        return self

    def _apply_item_defaults(self, item: ModuleMenuItem) -> None:
        if self.category and not item.category:
            item.category = self.category
        item.add_config(self.config)
        item.add_scopes_allowed(self.scopes_allowed)
        item.apply_base_uri(self.base_uri)

    def contributes_to(self, descriptor: "ModuleDescriptor") -> bool:
        return any(e.is_extension_for(descriptor) for e in self.extensions)

    def is_new_module(self) -> bool:
        return any(e.is_main_menu_item() for e in self.extensions)

    def new_modules(self) -> list[str]:
        """Names of the modules this contribution adds to the main menu."""
        return [e.main_menu.module for e in self.extensions if e.main_menu is not None]

    def application(self) -> ModuleApplication:
        """Bootstrap descriptor loading this contribution's controller."""
        controller = self.controller or "controller.js"
        if self.base_uri:
            controller = f"{self.base_uri.rstrip('/')}/{controller}"
        return ModuleApplication(application=self.key, controller=controller, defer=False)
