"""Tests for loading module descriptors and the main menu from YAML files."""

import pytest

from leitstand_ui.exceptions import ModuleDescriptorError, ReasonCode
from leitstand_ui.model import ModuleDescriptorLoader
from leitstand_ui.model.loader import is_valid_module_name


def test_load_module_descriptor(loader):
    descriptor = loader.load_module_descriptor("inventory")

    assert descriptor.module == "inventory"
    assert descriptor.scopes_allowed == ["ivt", "ivt.read"]
    assert [m.menu for m in descriptor.menus] == ["pod", "element"]
    assert descriptor.find_menu("pod").query == {"group": "{{group_id}}"}


def test_unknown_module_returns_none(loader):
    assert loader.load_module_descriptor("unknown") is None


@pytest.mark.parametrize("module", ["../inventory", "..", "a/b", "", "inventory/../x"])
def test_invalid_module_names_are_rejected(loader, module):
    assert not is_valid_module_name(module)
    assert loader.load_module_descriptor(module) is None


def test_invalid_descriptor_raises(modules_dir, yaml_writer):
    yaml_writer(modules_dir / "broken" / "module.yaml", {"menus": [{"label": "no name"}]})
    loader = ModuleDescriptorLoader(modules_dir)

    with pytest.raises(ModuleDescriptorError) as exc_info:
        loader.load_module_descriptor("broken")
    assert exc_info.value.code is ReasonCode.UIM0001E_CANNOT_PROCESS_MODULE_DESCRIPTOR
    assert "UIM0001E" in str(exc_info.value)


def test_load_main_menu(loader):
    menu = loader.load_main_menu()
    assert [i.module for i in menu.items] == ["inventory", "image"]
    assert menu.find_welcome_page_module().module == "image"


def test_missing_main_menu_is_empty(tmp_path):
    assert ModuleDescriptorLoader(tmp_path).load_main_menu().items == []


def test_list_modules(modules_dir, yaml_writer):
    yaml_writer(modules_dir / "image" / "module.yaml", {"module": "image"})
    (modules_dir / "empty").mkdir()
    assert ModuleDescriptorLoader(modules_dir).list_modules() == ["image", "inventory"]


def test_list_modules_of_missing_directory(tmp_path):
    assert ModuleDescriptorLoader(tmp_path / "missing").list_modules() == []
