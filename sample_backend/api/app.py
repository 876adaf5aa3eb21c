"""FastAPI application factory.

Instantiate with:
    uvicorn sample_backend.api.app:create_app --factory --reload --port 8000
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sample_backend import __version__
from sample_backend.api.errors import install_error_handlers
from sample_backend.api.routes import health_router, items_router, users_router
from sample_backend.core.config import Settings, get_settings
from sample_backend.core.db import create_engine_for_url, init_db
from sample_backend.core.logging_setup import install_access_log_filter
from sample_backend.services import ItemService, UserService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup and release pooled connections on shutdown."""
    init_db(app.state.engine)
    settings: Settings = app.state.settings
    logger.info("%s ready (%s) – API under %s", settings.app_name, settings.app_env, settings.api_prefix or "/")
    yield
    app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    engine = create_engine_for_url(settings.database_url)

    application = FastAPI(
        title=settings.app_name,
        version=__version__,
        description="Backend half of the full-stack starter template",
        lifespan=lifespan,
    )
    application.state.settings = settings
    application.state.engine = engine
    application.state.user_service = UserService(engine)
    application.state.item_service = ItemService(engine)

    install_error_handlers(application)

    # ── CORS for the React dev server ──────────────────────────────────────
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── One router per resource, all under the API prefix ──────────────────
    for router in (health_router, users_router, items_router):
        application.include_router(router, prefix=settings.api_prefix)

    install_access_log_filter((f"{settings.api_prefix}/health",))

    return application
