"""Tests for the module descriptor and main menu services."""

import threading

from leitstand_ui.model import Contributions, ModuleDescriptor, ModuleMenu, ModuleMenuItem
from leitstand_ui.services import MainMenuService, ModuleDescriptorService
from leitstand_ui.services.modules import apply_defaults


class TestModuleDescriptorService:
    def test_descriptor_with_contributions(self, loader, contributions):
        service = ModuleDescriptorService(loader, contributions)
        descriptor = service.get_module_descriptor("inventory")

        element = descriptor.find_menu("element")
        assert [i.item for i in element.items] == [
            "element-settings",
            "element-alarms",
            "element-alarm-history",
            "element-env",
        ]
        assert [a.application for a in descriptor.applications] == ["alarms"]

    def test_menu_query_is_pushed_to_items(self, loader):
        service = ModuleDescriptorService(loader, Contributions())
        pod = service.get_module_descriptor("inventory").find_menu("pod")

        assert pod.find_item("pod-settings").query == {"group": "{{group_id}}"}
        assert pod.find_item("pod-elements").query == {"group": "{{group_id}}", "filter": "all"}

    def test_apply_defaults_item_values_win(self):
        descriptor = ModuleDescriptor(
            module="test",
            menus=[
                ModuleMenu(
                    menu="menu",
                    query={"a": "a", "b": "b"},
                    items=[
                        ModuleMenuItem(item="own", view="own.html", query={"a": "A", "c": "c"}),
                        ModuleMenuItem(item="plain", view="plain.html"),
                    ],
                )
            ],
        )
        apply_defaults(descriptor)
        menu = descriptor.find_menu("menu")
        assert menu.find_item("own").query == {"a": "A", "b": "b", "c": "c"}
        assert menu.find_item("plain").query == {"a": "a", "b": "b"}

    def test_descriptor_is_cached(self, loader, contributions):
        service = ModuleDescriptorService(loader, contributions)
        first = service.get_module_descriptor("inventory")
        assert service.get_module_descriptor("inventory") is first

        service.clear()
        assert service.get_module_descriptor("inventory") is not first

    def test_concurrent_callers_get_the_same_descriptor(self, loader, contributions):
        service = ModuleDescriptorService(loader, contributions)
        results = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            results.append(service.get_module_descriptor("inventory"))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 8
        assert all(r is results[0] for r in results)

    def test_contributed_module_without_descriptor(self, loader, contributions):
        service = ModuleDescriptorService(loader, contributions)
        descriptor = service.get_module_descriptor("alarms")

        assert descriptor.module == "alarms"
        assert descriptor.menus == []
        assert [a.application for a in descriptor.applications] == ["alarms"]

    def test_unknown_module(self, loader, contributions):
        service = ModuleDescriptorService(loader, contributions)
        assert service.get_module_descriptor("unknown") is None
        assert service.get_module_descriptor("../etc") is None

    def test_merge_does_not_modify_registry(self, loader, contributions):
        service = ModuleDescriptorService(loader, contributions)
        service.get_module_descriptor("inventory")
        service.clear()
        descriptor = service.get_module_descriptor("inventory")
        items = [i.item for i in descriptor.find_menu("element").items]
        assert items.count("element-alarms") == 1

    def test_preload(self, loader, contributions):
        service = ModuleDescriptorService(loader, contributions)
        assert service.preload() == ["inventory", "alarms"]


class TestMainMenuService:
    def test_main_menu_with_contributed_module(self, loader, contributions):
        service = MainMenuService(loader, contributions)
        menu = service.get_main_menu()

        assert [i.module for i in menu.items] == ["inventory", "image", "alarms"]
        assert service.get_main_menu() is menu

    def test_find_welcome_page_module(self, loader, contributions):
        service = MainMenuService(loader, contributions)
        assert service.find_welcome_page_module().module == "image"
