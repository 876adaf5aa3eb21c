"""Liveness check."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from sample_backend import __version__
from sample_backend.api.dependencies import get_app_settings
from sample_backend.core.config import Settings
from sample_backend.schemas import ApiResponse, HealthOut, success_response

router = APIRouter(tags=["health"])


@router.get("/health", response_model=ApiResponse[HealthOut])
async def health_check(settings: Settings = Depends(get_app_settings)) -> ApiResponse:
    """Liveness check (suppressed from access log via log filter)."""
    return success_response(HealthOut(version=__version__, environment=settings.app_env))
