"""Module descriptor service with a compute-once descriptor cache."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from leitstand_ui.model.contributions import Contributions
from leitstand_ui.model.descriptor import ModuleDescriptor
from leitstand_ui.model.loader import ModuleDescriptorLoader, is_valid_module_name

logger = logging.getLogger(__name__)


class ModuleDescriptorService:
    """Provides module descriptors with all contributions merged in."""

    def __init__(self, loader: ModuleDescriptorLoader, contributions: Contributions) -> None:
        self._loader = loader
        self._contributions = contributions
        self._cache: dict[str, ModuleDescriptor] = {}
        self._lock = threading.Lock()

    def get_module_descriptor(self, module: str) -> Optional[ModuleDescriptor]:
        """
        Return the merged descriptor of a module, or None for unknown modules.

        Descriptors are built on first access. If two callers race to build the
        same descriptor, the first stored instance is returned to both.
        """
        with self._lock:
            cached = self._cache.get(module)
        if cached is not None:
            return cached

        descriptor = self._build(module)
        if descriptor is None:
            return None

        with self._lock:
            return self._cache.setdefault(module, descriptor)

    def preload(self) -> list[str]:
        """Build the descriptors of all known modules.

        Returns:
            Names of the modules now cached.
        """
        modules = self.list_modules()
        for module in modules:
            self.get_module_descriptor(module)
        logger.info("Preloaded %d module descriptors", len(modules))
        return modules

    def list_modules(self) -> list[str]:
        """Modules with a descriptor file plus modules added by contributions."""
        modules = self._loader.list_modules()
        modules.extend(m for m in self._contributions.new_modules() if m not in modules)
        return modules

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def _build(self, module: str) -> Optional[ModuleDescriptor]:
        descriptor = self._loader.load_module_descriptor(module)
        if descriptor is None:
            if not is_valid_module_name(module) or module not in self._contributions.new_modules():
                return None
            logger.debug("Module %s is provided by a contribution only", module)
            descriptor = ModuleDescriptor(module=module)

        descriptor.add_extensions(self._contributions.find_extensions(descriptor))
        apply_defaults(descriptor)
        return descriptor


def apply_defaults(descriptor: ModuleDescriptor) -> ModuleDescriptor:
    """Push menu query parameters down to the menu items.

    Item parameters take precedence over inherited menu parameters.
    """
    for menu in descriptor.menus:
        for item in menu.items:
            item.add_query_parameters(menu.query)
    return descriptor
