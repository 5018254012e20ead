"""组织单元相关的路由定义。"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.packages.kangalos.api.v1.schemas.common import DeletionResponse
from app.packages.kangalos.api.v1.schemas.organisation_units import (
    OrganisationUnitChildRequest,
    OrganisationUnitCreateRequest,
    OrganisationUnitDetailResponse,
    OrganisationUnitListResponse,
    OrganisationUnitResponse,
    OrganisationUnitTreeResponse,
    OrganisationUnitUpdateRequest,
)
from app.packages.kangalos.api.v1.schemas.partners import StakeholderListResponse
from app.packages.kangalos.api.v1.schemas.positions import PositionListResponse
from app.packages.kangalos.api.v1.schemas.projects import ProjectListResponse
from app.packages.kangalos.api.v1.schemas.users import UserListResponse
from app.packages.kangalos.core.dependencies import ListParams, get_db
from app.packages.kangalos.services.organisation_unit_service import organisation_unit_service

router = APIRouter(prefix="/organisation-units", tags=["organisation-units"])


@router.post("", response_model=OrganisationUnitResponse)
def create_organisation_unit(
    payload: OrganisationUnitCreateRequest,
    db: Session = Depends(get_db),
) -> OrganisationUnitResponse:
    return organisation_unit_service.create(
        db, name=payload.name, code=payload.code, parent_id=payload.parent_id
    )


@router.get("", response_model=OrganisationUnitListResponse)
def list_organisation_units(
    request: Request,
    parent_id: Optional[str] = Query(None, description="按上级组织过滤"),
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> OrganisationUnitListResponse:
    return organisation_unit_service.list_units(
        db,
        params=params.to_query(parent_id=parent_id),
        page=params.page,
        limit=params.limit,
        base_url=request.url.path,
    )


@router.get("/tree", response_model=OrganisationUnitTreeResponse)
def get_organisation_tree(
    include_positions: bool = Query(False, description="是否在每个节点上附带岗位列表"),
    db: Session = Depends(get_db),
) -> OrganisationUnitTreeResponse:
    return organisation_unit_service.tree(db, include_positions=include_positions)


@router.get("/{unit_id}", response_model=OrganisationUnitDetailResponse)
def get_organisation_unit(
    unit_id: str,
    include_positions: bool = Query(False, description="是否附带该单元的岗位列表"),
    db: Session = Depends(get_db),
) -> OrganisationUnitDetailResponse:
    return organisation_unit_service.get_detail(db, unit_id=unit_id, include_positions=include_positions)


@router.patch("/{unit_id}", response_model=OrganisationUnitResponse)
def update_organisation_unit(
    unit_id: str,
    payload: OrganisationUnitUpdateRequest,
    db: Session = Depends(get_db),
) -> OrganisationUnitResponse:
    return organisation_unit_service.update(db, unit_id=unit_id, changes=payload.model_dump(exclude_unset=True))


@router.delete("/{unit_id}", response_model=DeletionResponse)
def delete_organisation_unit(unit_id: str, db: Session = Depends(get_db)) -> DeletionResponse:
    return organisation_unit_service.delete(db, unit_id=unit_id)


@router.get("/{unit_id}/children", response_model=OrganisationUnitListResponse)
def list_children(unit_id: str, db: Session = Depends(get_db)) -> OrganisationUnitListResponse:
    return organisation_unit_service.children(db, node_id=unit_id)


@router.post("/{unit_id}/children", response_model=OrganisationUnitResponse)
def add_child(
    unit_id: str,
    payload: OrganisationUnitChildRequest,
    db: Session = Depends(get_db),
) -> OrganisationUnitResponse:
    return organisation_unit_service.add_child(db, parent_id=unit_id, name=payload.name, code=payload.code)


@router.get("/{unit_id}/parent", response_model=OrganisationUnitResponse)
def get_parent(unit_id: str, db: Session = Depends(get_db)) -> OrganisationUnitResponse:
    return organisation_unit_service.parent(db, node_id=unit_id)


@router.get("/{unit_id}/hierarchy", response_model=OrganisationUnitListResponse)
def get_hierarchy(unit_id: str, db: Session = Depends(get_db)) -> OrganisationUnitListResponse:
    return organisation_unit_service.hierarchy(db, node_id=unit_id)


@router.get("/{unit_id}/positions", response_model=PositionListResponse)
def list_unit_positions(
    unit_id: str,
    request: Request,
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> PositionListResponse:
    return organisation_unit_service.list_positions(
        db,
        unit_id=unit_id,
        params=params.to_query(),
        page=params.page,
        limit=params.limit,
        base_url=request.url.path,
    )


@router.get("/{unit_id}/users", response_model=UserListResponse)
def list_unit_users(
    unit_id: str,
    request: Request,
    current_only: bool = Query(True, description="仅返回当前在任的用户"),
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> UserListResponse:
    return organisation_unit_service.list_users(
        db,
        unit_id=unit_id,
        current_only=current_only,
        params=params.to_query(),
        page=params.page,
        limit=params.limit,
        base_url=request.url.path,
    )


@router.get("/{unit_id}/projects", response_model=ProjectListResponse)
def list_unit_projects(
    unit_id: str,
    request: Request,
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> ProjectListResponse:
    return organisation_unit_service.list_projects(
        db,
        unit_id=unit_id,
        params=params.to_query(),
        page=params.page,
        limit=params.limit,
        base_url=request.url.path,
    )


@router.get("/{unit_id}/stakeholders", response_model=StakeholderListResponse)
def list_unit_stakeholders(
    unit_id: str,
    request: Request,
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> StakeholderListResponse:
    return organisation_unit_service.list_stakeholders(
        db,
        unit_id=unit_id,
        params=params.to_query(),
        page=params.page,
        limit=params.limit,
        base_url=request.url.path,
    )
