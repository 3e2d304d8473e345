"""Services behind the REST API and the CLI."""

from leitstand_ui.services.dictionaries import (
    DictionaryEntry,
    DictionaryInfo,
    DictionaryService,
    DictionarySettings,
)
from leitstand_ui.services.main_menu import MainMenuService
from leitstand_ui.services.modules import ModuleDescriptorService
from leitstand_ui.services.tags import TagInfo, TagService

__all__ = [
    "DictionaryEntry",
    "DictionaryInfo",
    "DictionaryService",
    "DictionarySettings",
    "MainMenuService",
    "ModuleDescriptorService",
    "TagInfo",
    "TagService",
]
