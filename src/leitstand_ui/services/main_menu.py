"""Main menu service."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from leitstand_ui.model.contributions import Contributions
from leitstand_ui.model.descriptor import MainMenu
from leitstand_ui.model.loader import ModuleDescriptorLoader
from leitstand_ui.model.menus import MainMenuItem

logger = logging.getLogger(__name__)


class MainMenuService:
    """Provides the main menu with the modules added by contributions."""

    def __init__(self, loader: ModuleDescriptorLoader, contributions: Contributions) -> None:
        self._loader = loader
        self._contributions = contributions
        self._menu: Optional[MainMenu] = None
        self._lock = threading.Lock()

    def get_main_menu(self) -> MainMenu:
        with self._lock:
            if self._menu is None:
                menu = self._loader.load_main_menu()
                menu.add_extensions(self._contributions.find_extensions())
                logger.debug("Main menu lists %d modules", len(menu.menu))
                self._menu = menu
            return self._menu

    def find_welcome_page_module(self) -> Optional[MainMenuItem]:
        return self.get_main_menu().find_welcome_page_module()

    def clear(self) -> None:
        with self._lock:
            self._menu = None
