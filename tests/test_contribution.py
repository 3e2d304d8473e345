"""Tests for contributions and the contribution registry."""

import logging

import pytest

from leitstand_ui.exceptions import ContributionError, ReasonCode
from leitstand_ui.model import Contribution, Contributions, ModuleDescriptor


@pytest.fixture
def alarms(alarms_data) -> Contribution:
    return Contribution.from_dict(alarms_data)


class TestContribution:
    def test_defaults_are_pushed_to_items(self, alarms):
        items = alarms.extensions[0].items
        assert [i.view for i in items] == [
            "/ui/views/alarms/element-alarms.html",
            "/ui/views/alarms/history.html",
        ]
        assert all(i.category == "monitoring" for i in items)
        assert all(i.scopes_allowed == ["alarm.read"] for i in items)

    def test_item_category_is_kept(self):
        contribution = Contribution.from_dict(
            {
                "category": "monitoring",
                "extensions": [
                    {
                        "extend": {"module": "inventory", "menu": "pod"},
                        "items": [{"item": "x", "view": "x.html", "category": "own"}],
                    }
                ],
            }
        )
        assert contribution.extensions[0].items[0].category == "own"

    def test_defaults_are_pushed_to_contributed_menus(self):
        contribution = Contribution.from_dict(
            {
                "baseUri": "/ui/views/racks",
                "scopesAllowed": ["rack"],
                "config": {"refresh": 30},
                "extensions": [
                    {
                        "extend": {"module": "inventory", "after": "pod"},
                        "menus": [
                            {
                                "menu": "rack",
                                "config": {"refresh": 10},
                                "items": [
                                    {"item": "rack-settings", "view": "rack.html"},
                                    {"item": "rack-ext", "view": "https://racks.example.com/"},
                                ],
                            }
                        ],
                    }
                ],
            }
        )
        menu = contribution.extensions[0].menus[0]
        assert menu.scopes_allowed == ["rack"]
        assert menu.config == {"refresh": 10}
        assert [i.view for i in menu.items] == [
            "/ui/views/racks/rack.html",
            "https://racks.example.com/",
        ]
        assert menu.items[0].config == {"refresh": 30}

    def test_application(self, alarms):
        app = alarms.application()
        assert app.application == "alarms"
        assert app.controller == "/ui/views/alarms/alarms.js"
        assert app.defer is False

    def test_application_name_falls_back_to_base_uri(self):
        contribution = Contribution.from_dict({"baseUri": "/ui/views/x"})
        assert contribution.key == "/ui/views/x"
        assert contribution.application().controller == "/ui/views/x/controller.js"

    def test_new_modules(self, alarms):
        assert alarms.is_new_module()
        assert alarms.new_modules() == ["alarms"]
        assert alarms.contributes_to(ModuleDescriptor(module="inventory"))
        assert not alarms.contributes_to(ModuleDescriptor(module="image"))

    def test_from_yaml_rejects_invalid_file(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("extensions:\n  - extend: {module: inventory}\n")
        with pytest.raises(ContributionError) as exc_info:
            Contribution.from_yaml(path)
        assert exc_info.value.code is ReasonCode.UIM0002E_CANNOT_PROCESS_MODULE_EXTENSION

    def test_from_yaml_rejects_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ContributionError):
            Contribution.from_yaml(path)


class TestContributions:
    def test_load_directory(self, contributions):
        loaded = contributions.load()
        assert [c.key for c in loaded] == ["alarms"]
        assert "alarms" in contributions
        assert len(contributions) == 1

    def test_load_skips_broken_files(self, contributions_dir, yaml_writer, caplog):
        (contributions_dir / "broken.yaml").write_text("name: [unclosed\n")
        yaml_writer(contributions_dir / "nested" / "racks.yml", {"name": "racks"})
        (contributions_dir / "README.md").write_text("not a contribution")

        registry = Contributions(contributions_dir)
        with caplog.at_level(logging.WARNING, logger="leitstand_ui.model.contributions"):
            loaded = registry.load()

        assert sorted(c.key for c in loaded) == ["alarms", "racks"]
        assert "UIM0002E" in caplog.text

    def test_load_missing_directory(self, tmp_path):
        assert Contributions(tmp_path / "missing").load() == []

    def test_register_rejects_duplicates(self):
        registry = Contributions()
        registry.register(Contribution(name="alarms"))
        with pytest.raises(ValueError):
            registry.register(Contribution(name="alarms"))
        registry.register(Contribution(name="alarms", provider="other"), replace=True)
        assert registry.list_contributions()[0].provider == "other"

    def test_find_module_extensions_registers_application(self, contributions):
        descriptor = ModuleDescriptor(module="inventory")
        extensions = contributions.find_extensions(descriptor)

        assert len(extensions) == 1
        assert extensions[0].extend.menu == "element"
        assert [a.application for a in descriptor.applications] == ["alarms"]

    def test_find_extensions_returns_copies(self, contributions):
        descriptor = ModuleDescriptor(module="inventory")
        first = contributions.find_extensions(descriptor)
        first[0].items[0].view = "changed.html"

        second = contributions.find_extensions(ModuleDescriptor(module="inventory"))
        assert second[0].items[0].view == "/ui/views/alarms/element-alarms.html"

    def test_find_main_menu_extensions(self, contributions):
        extensions = contributions.find_extensions()
        assert [e.main_menu.module for e in extensions] == ["alarms"]
        assert contributions.new_modules() == ["alarms"]

    def test_clear(self, contributions):
        contributions.load()
        contributions.clear()
        assert len(contributions) == 0
        assert len(contributions.load()) == 1
