"""用户角色分配相关的路由定义。"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.packages.kangalos.api.v1.schemas.roles import (
    UserRoleCreateRequest,
    UserRoleListResponse,
    UserRoleResponse,
)
from app.packages.kangalos.core.dependencies import ListParams, get_db
from app.packages.kangalos.services.user_role_service import user_role_service

router = APIRouter(prefix="/user-roles", tags=["user-roles"])


@router.post("", response_model=UserRoleResponse)
def assign_role(payload: UserRoleCreateRequest, db: Session = Depends(get_db)) -> UserRoleResponse:
    return user_role_service.assign(db, user_id=payload.user_id, role_id=payload.role_id)


@router.get("", response_model=UserRoleListResponse)
def list_user_roles(
    request: Request,
    user_id: Optional[str] = Query(None),
    role_id: Optional[str] = Query(None),
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> UserRoleListResponse:
    return user_role_service.list_assignments(
        db,
        params=params.to_query(),
        page=params.page,
        limit=params.limit,
        base_url=request.url.path,
        user_id=user_id,
        role_id=role_id,
    )


@router.get("/user/{user_id}", response_model=UserRoleListResponse)
def list_roles_of_user(
    user_id: str,
    request: Request,
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> UserRoleListResponse:
    return user_role_service.list_for_user(
        db, user_id=user_id, params=params.to_query(), page=params.page, limit=params.limit,
        base_url=request.url.path,
    )


@router.get("/role/{role_id}", response_model=UserRoleListResponse)
def list_users_of_role(
    role_id: str,
    request: Request,
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> UserRoleListResponse:
    return user_role_service.list_for_role(
        db, role_id=role_id, params=params.to_query(), page=params.page, limit=params.limit,
        base_url=request.url.path,
    )


@router.delete("/{user_id}/{role_id}", response_model=UserRoleResponse)
def remove_role(user_id: str, role_id: str, db: Session = Depends(get_db)) -> UserRoleResponse:
    return user_role_service.remove(db, user_id=user_id, role_id=role_id)
