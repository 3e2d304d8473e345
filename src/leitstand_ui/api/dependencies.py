"""
FastAPI dependency providers.

Services are created once by ``create_app`` and kept on ``app.state``.
Routes only inject services, never the database or the loader directly.
"""

from __future__ import annotations

from fastapi import Request

from leitstand_ui.services import (
    DictionaryService,
    MainMenuService,
    ModuleDescriptorService,
    TagService,
)


def get_module_service(request: Request) -> ModuleDescriptorService:
    return request.app.state.module_service


def get_main_menu_service(request: Request) -> MainMenuService:
    return request.app.state.main_menu_service


def get_dictionary_service(request: Request) -> DictionaryService:
    return request.app.state.dictionary_service


def get_tag_service(request: Request) -> TagService:
    return request.app.state.tag_service
