"""``/users`` route handlers."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from sample_backend.api.dependencies import PageParams, get_page_params, get_user_service
from sample_backend.schemas import (
    ApiResponse,
    PageMeta,
    UserCreate,
    UserOut,
    UserUpdate,
    success_response,
)
from sample_backend.services import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=ApiResponse[list[UserOut]])
def list_users(
    params: PageParams = Depends(get_page_params),
    service: UserService = Depends(get_user_service),
) -> ApiResponse:
    users, total = service.list_users(params.page, params.per_page)
    return success_response(
        [UserOut.model_validate(user) for user in users],
        meta=PageMeta.build(params.page, params.per_page, total),
    )


@router.post("", response_model=ApiResponse[UserOut], status_code=201)
def create_user(
    payload: UserCreate,
    service: UserService = Depends(get_user_service),
) -> ApiResponse:
    user = service.create_user(payload)
    return success_response(UserOut.model_validate(user), message="User created")


@router.get("/{user_id}", response_model=ApiResponse[UserOut])
def get_user(user_id: int, service: UserService = Depends(get_user_service)) -> ApiResponse:
    return success_response(UserOut.model_validate(service.get_user(user_id)))


@router.put("/{user_id}", response_model=ApiResponse[UserOut])
def update_user(
    user_id: int,
    payload: UserUpdate,
    service: UserService = Depends(get_user_service),
) -> ApiResponse:
    user = service.update_user(user_id, payload)
    return success_response(UserOut.model_validate(user), message="User updated")


@router.delete("/{user_id}", response_model=ApiResponse)
def delete_user(user_id: int, service: UserService = Depends(get_user_service)) -> ApiResponse:
    service.delete_user(user_id)
    return success_response(message="User deleted")
