"""
Contribution registry.

Collects the built-in contributions registered in-process and the contribution
files found in the contributions directory, and hands out the extensions that
apply to a module or to the main menu.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional

from leitstand_ui.exceptions import ContributionError, ReasonCode
from leitstand_ui.model.contribution import Contribution
from leitstand_ui.model.descriptor import ModuleDescriptor
from leitstand_ui.model.extensions import Extension

logger = logging.getLogger(__name__)

CONTRIBUTION_SUFFIXES = (".yaml", ".yml")


class Contributions:
    """Registry of all known contributions, in registration order."""

    def __init__(self, contributions_dir: Optional[Path] = None):
        """
        Args:
            contributions_dir: Directory scanned for contribution files. If None,
                only in-process registrations are used.
        """
        self.contributions_dir = contributions_dir
        self._contributions: dict[str, Contribution] = {}
        self._loaded = False
        self._lock = threading.Lock()
        self._load_lock = threading.Lock()

    def register(self, contribution: Contribution, replace: bool = False) -> None:
        """
        Register a contribution.

        Args:
            contribution: Contribution with defaults applied
            replace: Whether to replace an existing contribution with the same name

        Raises:
            ValueError: If a contribution with the same name exists and replace=False
        """
        key = contribution.key
        with self._lock:
            if key in self._contributions and not replace:
                raise ValueError(
                    f"Contribution '{key}' is already registered. Use replace=True to overwrite."
                )
            self._contributions[key] = contribution

    def load(self) -> list[Contribution]:
        """Load all contribution files from the contributions directory.

        Files that cannot be processed are logged and skipped.

        Returns:
            List of all registered contributions.
        """
        with self._load_lock:
            if not self._loaded:
                self._load_directory()
                self._loaded = True
        return self.list_contributions()

    def _load_directory(self) -> None:
        if self.contributions_dir is None:
            return
        if not self.contributions_dir.is_dir():
            logger.info("Contributions directory not found: %s", self.contributions_dir)
            return

        for path in sorted(self.contributions_dir.rglob("*")):
            if not path.is_file() or path.suffix not in CONTRIBUTION_SUFFIXES:
                continue
            try:
                contribution = Contribution.from_yaml(path)
                self.register(contribution)
            except (ContributionError, ValueError) as e:
                logger.warning(
                    "%s: Skipping contribution %s: %s",
                    ReasonCode.UIM0002E_CANNOT_PROCESS_MODULE_EXTENSION.value,
                    path,
                    e,
                )
                continue
            logger.info(
                "%s: Loaded contribution '%s' from %s",
                ReasonCode.UIM0004I_MODULE_EXTENSION_LOADED.value,
                contribution.key,
                path,
            )

    def list_contributions(self) -> list[Contribution]:
        with self._lock:
            return list(self._contributions.values())

    def find_extensions(self, module: Optional[ModuleDescriptor] = None) -> list[Extension]:
        """
        Find the extensions of a module, or the main menu extensions.

        With a module, every extension targeting that module is returned and the
        bootstrap application of each contributing contribution is registered on
        the module. Without a module, the main menu items of all contributions
        that add new modules are returned.

        Extensions are copies, so merging them never modifies the registry.
        """
        self.load()
        if module is None:
            return self._find_main_menu_extensions()
        return self._find_module_extensions(module)

    def _find_module_extensions(self, module: ModuleDescriptor) -> list[Extension]:
        extensions: list[Extension] = []
        for contribution in self.list_contributions():
            if not contribution.contributes_to(module):
                continue
            for extension in contribution.extensions:
                if extension.is_extension_for(module):
                    extensions.append(extension.model_copy(deep=True))
            module.add_application(contribution.application())
        return extensions

    def _find_main_menu_extensions(self) -> list[Extension]:
        extensions: list[Extension] = []
        for contribution in self.list_contributions():
            if not contribution.is_new_module():
                continue
            extensions.extend(
                e.model_copy(deep=True) for e in contribution.extensions if e.is_main_menu_item()
            )
        return extensions

    def new_modules(self) -> list[str]:
        """Names of all modules added by contributions."""
        self.load()
        modules: list[str] = []
        for contribution in self.list_contributions():
            modules.extend(m for m in contribution.new_modules() if m not in modules)
        return modules

    def clear(self) -> None:
        """Remove all contributions and allow the directory to be loaded again."""
        with self._lock:
            self._contributions.clear()
            self._loaded = False

    def __len__(self) -> int:
        return len(self._contributions)

    def __contains__(self, name: str) -> bool:
        return name in self._contributions
