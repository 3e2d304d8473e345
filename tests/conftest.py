"""
Shared fixtures for the Leitstand UI tests.

Module descriptors and contributions are written as YAML files into a
temporary directory tree:

    <tmp>/modules/main-menu.yaml
    <tmp>/modules/<module>/module.yaml
    <tmp>/contrib/<name>.yaml
"""

from copy import deepcopy
from pathlib import Path
from typing import Any, Callable

import pytest
import yaml

from leitstand_ui.config import Settings
from leitstand_ui.model import Contributions, ModuleDescriptorLoader

INVENTORY_MODULE = {
    "module": "inventory",
    "scopesAllowed": ["ivt", "ivt.read"],
    "menus": [
        {
            "menu": "pod",
            "label": "Pod",
            "query": {"group": "{{group_id}}"},
            "items": [
                {"item": "pod-settings", "view": "pod.html"},
                {"item": "pod-elements", "view": "pod-elements.html", "query": {"filter": "all"}},
            ],
        },
        {
            "menu": "element",
            "label": "Element",
            "items": [
                {"item": "element-settings", "view": "element.html"},
                {"item": "element-env", "view": "element-env.html"},
            ],
        },
    ],
}

MAIN_MENU = {
    "menu": [
        {
            "module": "inventory",
            "title": "Resource Inventory",
            "label": "Inventory",
            "path": "/inventory/pods.html",
        },
        {
            "module": "image",
            "title": "Image Management",
            "label": "Images",
            "path": "/image/images.html",
            "welcome": True,
        },
    ]
}

ALARMS_CONTRIBUTION = {
    "baseUri": "/ui/views/alarms",
    "controller": "alarms.js",
    "provider": "leitstand.io",
    "name": "alarms",
    "category": "monitoring",
    "scopesAllowed": ["alarm.read"],
    "extensions": [
        {
            "extend": {"module": "inventory", "menu": "element", "after": "element-settings"},
            "items": [
                {"item": "element-alarms", "view": "element-alarms.html"},
                {"item": "element-alarm-history", "view": "history.html"},
            ],
        },
        {
            "extend": {"module": "alarms"},
            "mainMenu": {
                "module": "alarms",
                "title": "Alarm Console",
                "label": "Alarms",
                "path": "/alarms/alarms.html",
            },
        },
    ],
}


def write_yaml(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, sort_keys=False))
    return path


@pytest.fixture
def modules_dir(tmp_path: Path) -> Path:
    """Modules directory with the inventory module and a main menu."""
    root = tmp_path / "modules"
    write_yaml(root / "inventory" / "module.yaml", INVENTORY_MODULE)
    write_yaml(root / "main-menu.yaml", MAIN_MENU)
    return root


@pytest.fixture
def contributions_dir(tmp_path: Path) -> Path:
    """Contributions directory with the alarms contribution."""
    root = tmp_path / "contrib"
    write_yaml(root / "alarms.yaml", ALARMS_CONTRIBUTION)
    return root


@pytest.fixture
def loader(modules_dir: Path) -> ModuleDescriptorLoader:
    return ModuleDescriptorLoader(modules_dir)


@pytest.fixture
def contributions(contributions_dir: Path) -> Contributions:
    return Contributions(contributions_dir)


@pytest.fixture
def settings(tmp_path: Path, modules_dir: Path, contributions_dir: Path) -> Settings:
    return Settings(
        modules_dir=modules_dir,
        contributions_dir=contributions_dir,
        database_url=f"sqlite:///{tmp_path / 'leitstand.db'}",
    )


@pytest.fixture
def yaml_writer() -> Callable[[Path, Any], Path]:
    return write_yaml


@pytest.fixture
def alarms_data() -> dict[str, Any]:
    """Fresh copy of the alarms contribution document."""
    return deepcopy(ALARMS_CONTRIBUTION)
