"""Dictionary endpoints. Dictionaries are addressed by UUID or name."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response

from leitstand_ui.api.dependencies import get_dictionary_service
from leitstand_ui.exceptions import UnprocessableEntityError
from leitstand_ui.services import DictionaryInfo, DictionaryService, DictionarySettings
from leitstand_ui.services.dictionaries import parse_dictionary_ref

router = APIRouter(prefix="/api/v1/dictionaries", tags=["dictionaries"])


@router.get("", response_model=list[DictionaryInfo])
def get_dictionaries(
    filter: Optional[str] = Query(default=None, description="Regular expression on the name"),
    service: DictionaryService = Depends(get_dictionary_service),
) -> list[DictionaryInfo]:
    return service.get_dictionaries(filter)


@router.get("/{dictionary}", response_model=DictionarySettings)
def get_dictionary(
    dictionary: str,
    service: DictionaryService = Depends(get_dictionary_service),
) -> DictionarySettings:
    return service.get_dictionary(parse_dictionary_ref(dictionary))


@router.post("", response_model=None)
def store_dictionary(
    settings: DictionarySettings,
    response: Response,
    service: DictionaryService = Depends(get_dictionary_service),
) -> None:
    _store(service, settings, response)


@router.put("/{dictionary}", response_model=None)
def update_dictionary(
    dictionary: UUID,
    settings: DictionarySettings,
    response: Response,
    service: DictionaryService = Depends(get_dictionary_service),
) -> None:
    if dictionary != settings.dictionary_id:
        raise UnprocessableEntityError(
            f"Dictionary ID {settings.dictionary_id} does not match {dictionary}",
            suggestions=["The dictionary ID cannot be changed"],
        )
    _store(service, settings, response)


@router.delete("/{dictionary}", status_code=204)
def remove_dictionary(
    dictionary: str,
    service: DictionaryService = Depends(get_dictionary_service),
) -> Response:
    service.remove_dictionary(parse_dictionary_ref(dictionary))
    return Response(status_code=204)


def _store(service: DictionaryService, settings: DictionarySettings, response: Response) -> None:
    if service.store_dictionary(settings):
        response.status_code = 201
        response.headers["Location"] = f"/api/v1/dictionaries/{settings.dictionary_id}"
    else:
        response.status_code = 200
