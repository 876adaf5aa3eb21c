"""Response envelope shared by every endpoint.

Success and error bodies have the same shape::

    {"success": true, "data": ..., "message": "", "errors": null, "meta": null}
"""

from __future__ import annotations

import math
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Serialises with camelCase keys; accepts snake_case or camelCase input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorDetail(CamelModel):
    field: Optional[str] = None
    message: str


class PageMeta(CamelModel):
    page: int
    per_page: int
    total: int
    pages: int

    @classmethod
    def build(cls, page: int, per_page: int, total: int) -> "PageMeta":
        return cls(page=page, per_page=per_page, total=total, pages=math.ceil(total / per_page))


class ApiResponse(CamelModel, Generic[T]):
    success: bool = True
    data: Optional[T] = None
    message: str = ""
    errors: Optional[list[ErrorDetail]] = None
    meta: Optional[PageMeta] = None


class HealthOut(CamelModel):
    status: str = "ok"
    version: str
    environment: str


def success_response(data: Any = None, message: str = "", meta: Optional[PageMeta] = None) -> ApiResponse:
    """Wrap ``data`` in a success envelope."""
    return ApiResponse(success=True, data=data, message=message, meta=meta)


def error_response(message: str, errors: Optional[list[ErrorDetail]] = None) -> ApiResponse:
    """Build an error envelope; ``data`` is always null."""
    return ApiResponse(success=False, data=None, message=message, errors=errors)
