"""角色与角色权限相关的路由定义。"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.packages.kangalos.api.v1.schemas.common import DeletionResponse
from app.packages.kangalos.api.v1.schemas.roles import (
    PermissionListResponse,
    RoleCreateRequest,
    RoleDetailResponse,
    RoleListResponse,
    RolePermissionRequest,
    RolePermissionResponse,
    RoleResponse,
    RoleUpdateRequest,
)
from app.packages.kangalos.core.dependencies import ListParams, get_db
from app.packages.kangalos.services.role_service import role_service

router = APIRouter(prefix="/roles", tags=["roles"])


@router.get("", response_model=RoleListResponse)
def list_roles(
    request: Request,
    organisation_unit_id: Optional[str] = Query(None, description="按组织单元过滤"),
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> RoleListResponse:
    return role_service.list_roles(
        db,
        params=params.to_query(organisation_unit_id=organisation_unit_id),
        page=params.page,
        limit=params.limit,
        base_url=request.url.path,
    )


@router.get("/{role_id}", response_model=RoleDetailResponse)
def get_role_detail(role_id: str, db: Session = Depends(get_db)) -> RoleDetailResponse:
    return role_service.get_detail(db, role_id=role_id)


@router.post("", response_model=RoleResponse)
def create_role(payload: RoleCreateRequest, db: Session = Depends(get_db)) -> RoleResponse:
    return role_service.create(
        db,
        name=payload.name,
        description=payload.description,
        organisation_unit_id=payload.organisation_unit_id,
    )


@router.patch("/{role_id}", response_model=RoleResponse)
def update_role(role_id: str, payload: RoleUpdateRequest, db: Session = Depends(get_db)) -> RoleResponse:
    return role_service.update(db, role_id=role_id, changes=payload.model_dump(exclude_unset=True))


@router.delete("/{role_id}", response_model=DeletionResponse)
def delete_role(role_id: str, db: Session = Depends(get_db)) -> DeletionResponse:
    return role_service.delete(db, role_id=role_id)


@router.get("/{role_id}/permissions", response_model=PermissionListResponse)
def list_role_permissions(role_id: str, db: Session = Depends(get_db)) -> PermissionListResponse:
    return role_service.list_permissions(db, role_id=role_id)


@router.post("/{role_id}/permissions", response_model=RolePermissionResponse)
def assign_role_permission(
    role_id: str,
    payload: RolePermissionRequest,
    db: Session = Depends(get_db),
) -> RolePermissionResponse:
    return role_service.assign_permission(db, role_id=role_id, permission_id=payload.permission_id)


@router.delete("/{role_id}/permissions/{permission_id}", response_model=RolePermissionResponse)
def remove_role_permission(role_id: str, permission_id: str, db: Session = Depends(get_db)) -> RolePermissionResponse:
    return role_service.remove_permission(db, role_id=role_id, permission_id=permission_id)
