"""
Module Descriptor Loader

Reads module descriptors and the main menu from the modules directory:

    <modules_dir>/main-menu.yaml
    <modules_dir>/<module>/module.yaml
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Optional, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from leitstand_ui.exceptions import ModuleDescriptorError, ReasonCode
from leitstand_ui.model.descriptor import MainMenu, ModuleDescriptor

logger = logging.getLogger(__name__)

MODULE_DESCRIPTOR = "module.yaml"
MAIN_MENU = "main-menu.yaml"

_MODULE_NAME = re.compile(r"^[A-Za-z0-9_.-]+$")

M = TypeVar("M", bound=BaseModel)


def is_valid_module_name(module: str) -> bool:
    """Module names must not address anything outside the modules directory."""
    return bool(_MODULE_NAME.match(module)) and ".." not in module


class ModuleDescriptorLoader:
    """Loads UI module descriptors from the file system."""

    def __init__(self, modules_dir: Path):
        self.modules_dir = Path(modules_dir)

    def load_module_descriptor(self, module: str) -> Optional[ModuleDescriptor]:
        """
        Load the descriptor of a module.

        Args:
            module: Module name

        Returns:
            The descriptor, or None if the module has no descriptor

        Raises:
            ModuleDescriptorError: If the descriptor cannot be read or is invalid
        """
        if not is_valid_module_name(module):
            logger.debug("Rejected invalid module name %r", module)
            return None

        path = self.modules_dir / module / MODULE_DESCRIPTOR
        if not path.is_file():
            logger.debug("Unknown UI module %s requested", module)
            return None

        descriptor = self._load(path, ModuleDescriptor)
        logger.info(
            "%s: Loaded descriptor of module %s from %s",
            ReasonCode.UIM0003I_MODULE_DESCRIPTOR_LOADED.value,
            descriptor.module,
            path,
        )
        return descriptor

    def load_main_menu(self) -> MainMenu:
        """
        Load the main menu. Returns an empty menu if no main menu file exists.

        Raises:
            ModuleDescriptorError: If the main menu cannot be read or is invalid
        """
        path = self.modules_dir / MAIN_MENU
        if not path.is_file():
            logger.warning("Main menu %s not found, starting with an empty main menu", path)
            return MainMenu()
        return self._load(path, MainMenu)

    def list_modules(self) -> list[str]:
        """Names of all modules with a descriptor, sorted."""
        if not self.modules_dir.is_dir():
            return []
        return sorted(
            d.name
            for d in self.modules_dir.iterdir()
            if d.is_dir() and (d / MODULE_DESCRIPTOR).is_file()
        )

    def _load(self, path: Path, model: type[M]) -> M:
        try:
            with open(path) as f:
                data: Any = yaml.safe_load(f)
            return model.model_validate(data or {})
        except (OSError, yaml.YAMLError, ValidationError) as e:
            raise ModuleDescriptorError(
                f"Cannot process {path}",
                suggestions=["Check the YAML syntax and the required fields of all menus and items"],
                cause=e,
            ) from e
