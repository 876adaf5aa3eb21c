"""Schema package – re-exports all public symbols for convenient imports."""

from __future__ import annotations

from sample_backend.schemas.envelope import (
    ApiResponse,
    CamelModel,
    ErrorDetail,
    HealthOut,
    PageMeta,
    error_response,
    success_response,
)
from sample_backend.schemas.items import ItemCreate, ItemOut, ItemUpdate
from sample_backend.schemas.users import UserCreate, UserOut, UserUpdate

__all__ = [
    "ApiResponse",
    "CamelModel",
    "ErrorDetail",
    "HealthOut",
    "ItemCreate",
    "ItemOut",
    "ItemUpdate",
    "PageMeta",
    "UserCreate",
    "UserOut",
    "UserUpdate",
    "error_response",
    "success_response",
]
