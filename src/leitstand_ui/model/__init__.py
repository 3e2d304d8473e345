"""
UI Module Model

Descriptor classes, the contribution registry, and the extension sorter that
merges contributions into module descriptors and the main menu.
"""

from leitstand_ui.model.contribution import Contribution
from leitstand_ui.model.contributions import Contributions
from leitstand_ui.model.descriptor import MainMenu, ModuleDescriptor
from leitstand_ui.model.extension_point import ExtensionPoint
from leitstand_ui.model.extensions import Extension
from leitstand_ui.model.loader import ModuleDescriptorLoader
from leitstand_ui.model.menus import (
    MainMenuItem,
    ModuleApplication,
    ModuleMenu,
    ModuleMenuItem,
    ViewModelProperty,
)
from leitstand_ui.model.sorter import ExtensionSorter, Named, sort_extensions

__all__ = [
    # Descriptors
    "MainMenu",
    "MainMenuItem",
    "ModuleApplication",
    "ModuleDescriptor",
    "ModuleMenu",
    "ModuleMenuItem",
    "ViewModelProperty",
    # Contributions
    "Contribution",
    "Contributions",
    "Extension",
    "ExtensionPoint",
    # Ordering
    "ExtensionSorter",
    "Named",
    "sort_extensions",
    # Loading
    "ModuleDescriptorLoader",
]
