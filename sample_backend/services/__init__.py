"""Services package – re-exports all public service classes."""

from __future__ import annotations

from sample_backend.services.items import ItemService
from sample_backend.services.users import UserService

__all__ = ["ItemService", "UserService"]
