"""Shared helpers for database-backed services."""

from __future__ import annotations

from typing import Any, TypeVar

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, func, select

from sample_backend.core.db import get_session

ModelT = TypeVar("ModelT", bound=SQLModel)


class BaseService:
    """Owns the engine and hands out short-lived sessions."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def session(self) -> Session:
        return get_session(self._engine)


def paginate(
    session: Session,
    model: type[ModelT],
    page: int,
    per_page: int,
    *filters: Any,
) -> tuple[list[ModelT], int]:
    """Return one page of ``model`` rows ordered by id, plus the total count."""
    count_stmt = select(func.count()).select_from(model)
    page_stmt = select(model)
    for condition in filters:
        count_stmt = count_stmt.where(condition)
        page_stmt = page_stmt.where(condition)

    total = session.exec(count_stmt).one()
    rows = session.exec(
        page_stmt.order_by(model.id).offset((page - 1) * per_page).limit(per_page)
    ).all()
    return list(rows), total
