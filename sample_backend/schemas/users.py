"""Pydantic schemas for the users resource."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from sample_backend.schemas.envelope import CamelModel

_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _clean_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("name must not be blank")
    return value


def _clean_email(value: str) -> str:
    value = value.strip().lower()
    if not _EMAIL.match(value):
        raise ValueError("email is not a valid address")
    return value


# ── Request models ──────────────────────────────────────────────────────────


class UserCreate(CamelModel):
    name: str = Field(max_length=120)
    email: str = Field(max_length=254)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return _clean_name(value)

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: str) -> str:
        return _clean_email(value)


class UserUpdate(CamelModel):
    """Partial update: only the fields sent are changed."""

    name: Optional[str] = Field(None, max_length=120)
    email: Optional[str] = Field(None, max_length=254)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _clean_name(value)

    @field_validator("email")
    @classmethod
    def _check_email(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _clean_email(value)


# ── Response models ─────────────────────────────────────────────────────────


class UserOut(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime
