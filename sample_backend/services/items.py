"""Item service – CRUD over the ``item`` table."""

from __future__ import annotations

import logging
from typing import Optional

from sqlmodel import Session

from sample_backend.core.db import Item, User, utcnow
from sample_backend.core.exceptions import NotFoundError
from sample_backend.schemas import ItemCreate, ItemUpdate
from sample_backend.services.base import BaseService, paginate

logger = logging.getLogger(__name__)


def _require_item(session: Session, item_id: int) -> Item:
    item = session.get(Item, item_id)
    if item is None:
        raise NotFoundError(f"Item {item_id} not found", {"id": item_id})
    return item


class ItemService(BaseService):
    def list_items(
        self, page: int, per_page: int, owner_id: Optional[int] = None
    ) -> tuple[list[Item], int]:
        filters = [] if owner_id is None else [Item.owner_id == owner_id]
        with self.session() as session:
            return paginate(session, Item, page, per_page, *filters)

    def get_item(self, item_id: int) -> Item:
        with self.session() as session:
            return _require_item(session, item_id)

    def create_item(self, data: ItemCreate) -> Item:
        with self.session() as session:
            if session.get(User, data.owner_id) is None:
                raise NotFoundError(f"User {data.owner_id} not found", {"owner_id": data.owner_id})
            item = Item(title=data.title, description=data.description, owner_id=data.owner_id)
            session.add(item)
            session.commit()
            session.refresh(item)
            logger.info("Created item %s for user %s", item.id, item.owner_id)
            return item

    def update_item(self, item_id: int, data: ItemUpdate) -> Item:
        # description may be cleared with an explicit null; title may not
        changes = data.model_dump(exclude_unset=True)
        if changes.get("title", "") is None:
            del changes["title"]
        with self.session() as session:
            item = _require_item(session, item_id)
            for key, value in changes.items():
                setattr(item, key, value)
            item.updated_at = utcnow()
            session.add(item)
            session.commit()
            session.refresh(item)
            logger.info("Updated item %s: %s", item.id, sorted(changes))
            return item

    def delete_item(self, item_id: int) -> None:
        with self.session() as session:
            item = _require_item(session, item_id)
            session.delete(item)
            session.commit()
            logger.info("Deleted item %s", item_id)
