"""Database models and helpers."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Field, Session, SQLModel, create_engine

_IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    """Account that owns items."""

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str = Field(index=True, unique=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Item(SQLModel, table=True):
    """Example resource owned by a user."""

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    description: Optional[str] = None
    owner_id: int = Field(foreign_key="user.id", index=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


def create_engine_for_url(url: str, echo: bool = False) -> Engine:
    """Return an engine for ``url``.

    SQLite connections may be used from the server's worker threads; an
    in-memory database is pinned to a single connection so every session
    sees the same data.
    """
    if not url.startswith("sqlite"):
        return create_engine(url, echo=echo, pool_pre_ping=True)
    if url in _IN_MEMORY_URLS:
        return create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, echo=echo, connect_args={"check_same_thread": False})


def init_db(engine: Engine) -> None:
    """Ensure all tables exist."""
    SQLModel.metadata.create_all(engine)


def get_session(engine: Engine) -> Session:
    """Create a session bound to the shared engine."""
    return Session(engine)
