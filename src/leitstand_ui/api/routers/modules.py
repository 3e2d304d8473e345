"""UI module navigation endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import RedirectResponse

from leitstand_ui.api.dependencies import get_main_menu_service, get_module_service
from leitstand_ui.services import MainMenuService, ModuleDescriptorService

router = APIRouter(prefix="/ui", tags=["modules"])


@router.get("/modules")
def get_main_menu(
    service: MainMenuService = Depends(get_main_menu_service),
) -> list[dict[str, Any]]:
    """Main menu items of all modules."""
    return [item.to_json() for item in service.get_main_menu().items]


@router.get("/modules/{module}")
def get_module_descriptor(
    module: str,
    service: ModuleDescriptorService = Depends(get_module_service),
) -> dict[str, Any]:
    """Module descriptor with all contributions merged in."""
    descriptor = service.get_module_descriptor(module)
    if descriptor is None:
        raise HTTPException(status_code=404, detail=f"Unknown UI module: {module}")
    return descriptor.to_json()


@router.get("/welcome")
def welcome(service: MainMenuService = Depends(get_main_menu_service)) -> RedirectResponse:
    """Redirect to the start page of the welcome module."""
    item = service.find_welcome_page_module()
    if item is None:
        raise HTTPException(status_code=404, detail="No UI module available")
    path = item.path if item.path.startswith("/") else f"/{item.path}"
    return RedirectResponse(url=f"/ui/views{path}", status_code=307)
