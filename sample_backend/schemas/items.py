"""Pydantic schemas for the items resource."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from sample_backend.schemas.envelope import CamelModel


class ItemCreate(CamelModel):
    title: str = Field(max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    owner_id: int = Field(ge=1)

    @field_validator("title")
    @classmethod
    def _check_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be blank")
        return value


class ItemUpdate(CamelModel):
    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)

    @field_validator("title")
    @classmethod
    def _check_title(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        if not value:
            raise ValueError("title must not be blank")
        return value


class ItemOut(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str]
    owner_id: int
    created_at: datetime
    updated_at: datetime
