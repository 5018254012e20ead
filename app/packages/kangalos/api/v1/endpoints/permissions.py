"""权限点相关的路由定义。"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.packages.kangalos.api.v1.schemas.common import DeletionResponse
from app.packages.kangalos.api.v1.schemas.roles import (
    PermissionCreateRequest,
    PermissionListResponse,
    PermissionResponse,
    PermissionUpdateRequest,
)
from app.packages.kangalos.core.dependencies import ListParams, get_db
from app.packages.kangalos.services.permission_service import permission_service

router = APIRouter(prefix="/permissions", tags=["permissions"])


@router.post("", response_model=PermissionResponse)
def create_permission(payload: PermissionCreateRequest, db: Session = Depends(get_db)) -> PermissionResponse:
    return permission_service.create(db, code=payload.code, description=payload.description)


@router.get("", response_model=PermissionListResponse)
def list_permissions(
    request: Request,
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> PermissionListResponse:
    return permission_service.list_permissions(
        db, params=params.to_query(), page=params.page, limit=params.limit, base_url=request.url.path
    )


@router.get("/{permission_id}", response_model=PermissionResponse)
def get_permission(permission_id: str, db: Session = Depends(get_db)) -> PermissionResponse:
    return permission_service.get_detail(db, permission_id=permission_id)


@router.patch("/{permission_id}", response_model=PermissionResponse)
def update_permission(
    permission_id: str,
    payload: PermissionUpdateRequest,
    db: Session = Depends(get_db),
) -> PermissionResponse:
    return permission_service.update(
        db, permission_id=permission_id, changes=payload.model_dump(exclude_unset=True)
    )


@router.delete("/{permission_id}", response_model=DeletionResponse)
def delete_permission(permission_id: str, db: Session = Depends(get_db)) -> DeletionResponse:
    return permission_service.delete(db, permission_id=permission_id)
