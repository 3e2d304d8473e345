"""
Leitstand UI API - FastAPI application factory.

Serves the merged UI navigation:
- /ui/modules          main menu
- /ui/modules/{module} module descriptors with contributions merged in
- /ui/welcome          redirect to the welcome module
and the small CRUD APIs for dictionaries (/api/v1/dictionaries) and
tags (/system/tags).
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from leitstand_ui import __version__
from leitstand_ui.api.routers import dictionaries, modules, tags
from leitstand_ui.config import Settings, get_settings
from leitstand_ui.exceptions import (
    EntityNotFoundError,
    LeitstandError,
    ModuleDescriptorError,
    UnprocessableEntityError,
)
from leitstand_ui.model import Contributions, ModuleDescriptorLoader
from leitstand_ui.persistence import create_db_engine, create_session_factory, init_db
from leitstand_ui.services import (
    DictionaryService,
    MainMenuService,
    ModuleDescriptorService,
    TagService,
)

logger = logging.getLogger(__name__)

_STATUS_CODES: list[tuple[type[LeitstandError], int]] = [
    (EntityNotFoundError, 404),
    (UnprocessableEntityError, 422),
    (ModuleDescriptorError, 500),
]


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the API application.

    Args:
        settings: Settings to use. Defaults to the cached environment settings.
    """
    settings = settings or get_settings()

    loader = ModuleDescriptorLoader(settings.modules_dir)
    contributions = Contributions(settings.contributions_dir)
    module_service = ModuleDescriptorService(loader, contributions)
    main_menu_service = MainMenuService(loader, contributions)

    engine = create_db_engine(settings.database_url, echo=settings.database_echo)
    session_factory = create_session_factory(engine)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        init_db(engine)
        if settings.preload_modules:
            module_service.preload()
        logger.info("Leitstand UI API started (modules: %s)", settings.modules_dir)
        try:
            yield
        finally:
            engine.dispose()
            logger.info("Leitstand UI API stopped")

    app = FastAPI(
        title="Leitstand UI",
        description="Navigation metadata and dictionaries of the Leitstand UI",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.contributions = contributions
    app.state.module_service = module_service
    app.state.main_menu_service = main_menu_service
    app.state.dictionary_service = DictionaryService(session_factory)
    app.state.tag_service = TagService(session_factory)

    @app.exception_handler(LeitstandError)
    async def leitstand_error_handler(request: Request, exc: LeitstandError) -> JSONResponse:
        status_code = 500
        for error_type, code in _STATUS_CODES:
            if isinstance(exc, error_type):
                status_code = code
                break
        if status_code >= 500:
            logger.error("Request %s %s failed", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status_code,
            content={"code": exc.code.value, "message": exc.message},
        )

    @app.get("/health")
    def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    app.include_router(modules.router)
    app.include_router(dictionaries.router)
    app.include_router(tags.router)

    if settings.static_dir is not None and settings.static_dir.is_dir():
        app.mount("/ui/views", StaticFiles(directory=str(settings.static_dir)), name="views")

    return app
