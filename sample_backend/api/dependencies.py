"""Request-scoped dependencies shared by the routers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from fastapi import Query, Request

from sample_backend.core.config import Settings
from sample_backend.core.exceptions import ValidationError
from sample_backend.services import ItemService, UserService


@dataclass(frozen=True)
class PageParams:
    page: int
    per_page: int


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_item_service(request: Request) -> ItemService:
    return request.app.state.item_service


def get_page_params(
    request: Request,
    page: int = Query(1, ge=1),
    per_page: Optional[int] = Query(None, ge=1),
) -> PageParams:
    """Resolve ``page`` / ``per_page`` against the configured page sizes."""
    settings: Settings = request.app.state.settings
    size = per_page or settings.default_page_size
    if size > settings.max_page_size:
        raise ValidationError(
            f"per_page must be at most {settings.max_page_size}",
            {"field": "per_page", "max": settings.max_page_size},
        )
    return PageParams(page=page, per_page=size)
