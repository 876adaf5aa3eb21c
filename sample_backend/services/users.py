"""User service – CRUD over the ``user`` table."""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from sample_backend.core.db import Item, User, utcnow
from sample_backend.core.exceptions import ConflictError, NotFoundError
from sample_backend.schemas import UserCreate, UserUpdate
from sample_backend.services.base import BaseService, paginate

logger = logging.getLogger(__name__)


def _find_by_email(session: Session, email: str) -> Optional[User]:
    return session.exec(select(User).where(User.email == email)).first()


def _commit_unique_email(session: Session, email: str) -> None:
    """Commit, reporting a unique-index violation on email as a conflict.

    The lookup before the write does not stop two concurrent requests from
    claiming the same address; the index does.
    """
    try:
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        raise ConflictError(
            f"A user with email {email} already exists", {"email": email}
        ) from exc


def _require_user(session: Session, user_id: int) -> User:
    user = session.get(User, user_id)
    if user is None:
        raise NotFoundError(f"User {user_id} not found", {"id": user_id})
    return user


class UserService(BaseService):
    """Create, read, update and delete users."""

    def list_users(self, page: int, per_page: int) -> tuple[list[User], int]:
        with self.session() as session:
            return paginate(session, User, page, per_page)

    def get_user(self, user_id: int) -> User:
        with self.session() as session:
            return _require_user(session, user_id)

    def create_user(self, data: UserCreate) -> User:
        with self.session() as session:
            if _find_by_email(session, data.email):
                raise ConflictError(
                    f"A user with email {data.email} already exists", {"email": data.email}
                )
            user = User(name=data.name, email=data.email)
            session.add(user)
            _commit_unique_email(session, data.email)
            session.refresh(user)
            logger.info("Created user %s (%s)", user.id, user.email)
            return user

    def update_user(self, user_id: int, data: UserUpdate) -> User:
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        with self.session() as session:
            user = _require_user(session, user_id)
            new_email = changes.get("email")
            if new_email and new_email != user.email:
                other = _find_by_email(session, new_email)
                if other is not None and other.id != user.id:
                    raise ConflictError(
                        f"A user with email {new_email} already exists", {"email": new_email}
                    )
            for key, value in changes.items():
                setattr(user, key, value)
            user.updated_at = utcnow()
            session.add(user)
            _commit_unique_email(session, user.email)
            session.refresh(user)
            logger.info("Updated user %s: %s", user.id, sorted(changes))
            return user

    def delete_user(self, user_id: int) -> None:
        """Delete a user together with the items they own."""
        with self.session() as session:
            user = _require_user(session, user_id)
            for item in session.exec(select(Item).where(Item.owner_id == user_id)).all():
                session.delete(item)
            session.delete(user)
            session.commit()
            logger.info("Deleted user %s", user_id)
