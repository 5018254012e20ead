"""用户相关的路由定义。"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.packages.kangalos.api.v1.schemas.common import DeletionResponse
from app.packages.kangalos.api.v1.schemas.users import (
    UserCreateRequest,
    UserListResponse,
    UserResponse,
    UserUpdateRequest,
)
from app.packages.kangalos.core.dependencies import ListParams, get_db
from app.packages.kangalos.core.enums import UserTypeEnum
from app.packages.kangalos.services.user_service import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse)
def create_user(payload: UserCreateRequest, db: Session = Depends(get_db)) -> UserResponse:
    return user_service.create(db, payload=payload.model_dump())


@router.get("", response_model=UserListResponse)
def list_users(
    request: Request,
    user_type: Optional[UserTypeEnum] = Query(None),
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> UserListResponse:
    return user_service.list_users(
        db,
        params=params.to_query(user_type=user_type.value if user_type else None),
        page=params.page,
        limit=params.limit,
        base_url=request.url.path,
    )


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, db: Session = Depends(get_db)) -> UserResponse:
    return user_service.get_detail(db, user_id=user_id)


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(user_id: str, payload: UserUpdateRequest, db: Session = Depends(get_db)) -> UserResponse:
    return user_service.update(db, user_id=user_id, changes=payload.model_dump(exclude_unset=True))


@router.delete("/{user_id}", response_model=DeletionResponse)
def delete_user(user_id: str, db: Session = Depends(get_db)) -> DeletionResponse:
    return user_service.delete(db, user_id=user_id)
