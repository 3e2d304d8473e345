"""Tag endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from leitstand_ui.api.dependencies import get_tag_service
from leitstand_ui.services import TagInfo, TagService

router = APIRouter(prefix="/system/tags", tags=["tags"])


@router.get("", response_model=list[TagInfo])
def get_tags(service: TagService = Depends(get_tag_service)) -> list[TagInfo]:
    return service.get_tags()


@router.get("/{tag}", response_model=TagInfo)
def get_tag(tag: str, service: TagService = Depends(get_tag_service)) -> TagInfo:
    return service.get_tag(tag)


@router.post("", status_code=204)
def store_tags(tags: list[TagInfo], service: TagService = Depends(get_tag_service)) -> Response:
    service.store_tags(tags)
    return Response(status_code=204)


@router.delete("/{tag}", status_code=204)
def remove_tag(tag: str, service: TagService = Depends(get_tag_service)) -> Response:
    service.remove_tag(tag)
    return Response(status_code=204)
