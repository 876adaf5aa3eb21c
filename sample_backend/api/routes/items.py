"""``/items`` route handlers."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from sample_backend.api.dependencies import PageParams, get_item_service, get_page_params
from sample_backend.schemas import (
    ApiResponse,
    ItemCreate,
    ItemOut,
    ItemUpdate,
    PageMeta,
    success_response,
)
from sample_backend.services import ItemService

router = APIRouter(prefix="/items", tags=["items"])


@router.get("", response_model=ApiResponse[list[ItemOut]])
def list_items(
    owner_id: Optional[int] = Query(None, ge=1),
    params: PageParams = Depends(get_page_params),
    service: ItemService = Depends(get_item_service),
) -> ApiResponse:
    """List items, optionally only those owned by ``owner_id``."""
    items, total = service.list_items(params.page, params.per_page, owner_id=owner_id)
    return success_response(
        [ItemOut.model_validate(item) for item in items],
        meta=PageMeta.build(params.page, params.per_page, total),
    )


@router.post("", response_model=ApiResponse[ItemOut], status_code=201)
def create_item(payload: ItemCreate, service: ItemService = Depends(get_item_service)) -> ApiResponse:
    item = service.create_item(payload)
    return success_response(ItemOut.model_validate(item), message="Item created")


@router.get("/{item_id}", response_model=ApiResponse[ItemOut])
def get_item(item_id: int, service: ItemService = Depends(get_item_service)) -> ApiResponse:
    return success_response(ItemOut.model_validate(service.get_item(item_id)))


@router.put("/{item_id}", response_model=ApiResponse[ItemOut])
def update_item(
    item_id: int,
    payload: ItemUpdate,
    service: ItemService = Depends(get_item_service),
) -> ApiResponse:
    item = service.update_item(item_id, payload)
    return success_response(ItemOut.model_validate(item), message="Item updated")


@router.delete("/{item_id}", response_model=ApiResponse)
def delete_item(item_id: int, service: ItemService = Depends(get_item_service)) -> ApiResponse:
    service.delete_item(item_id)
    return success_response(message="Item deleted")
