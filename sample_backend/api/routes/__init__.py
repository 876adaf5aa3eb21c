"""Resource routers, one per URL prefix."""

from __future__ import annotations

from sample_backend.api.routes.health import router as health_router
from sample_backend.api.routes.items import router as items_router
from sample_backend.api.routes.users import router as users_router

__all__ = ["health_router", "items_router", "users_router"]
