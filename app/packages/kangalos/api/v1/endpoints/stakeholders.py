"""干系人相关的路由定义。"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.packages.kangalos.api.v1.schemas.common import DeletionResponse
from app.packages.kangalos.api.v1.schemas.partners import (
    StakeholderCreateRequest,
    StakeholderListResponse,
    StakeholderResponse,
    StakeholderUpdateRequest,
)
from app.packages.kangalos.api.v1.schemas.projects import ProjectListResponse
from app.packages.kangalos.core.dependencies import ListParams, get_db
from app.packages.kangalos.services.stakeholder_service import stakeholder_service

router = APIRouter(prefix="/stakeholders", tags=["stakeholders"])


@router.post("", response_model=StakeholderResponse)
def create_stakeholder(payload: StakeholderCreateRequest, db: Session = Depends(get_db)) -> StakeholderResponse:
    return stakeholder_service.create(db, payload=payload.model_dump())


@router.get("", response_model=StakeholderListResponse)
def list_stakeholders(
    request: Request,
    organisation_unit_id: Optional[str] = Query(None),
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> StakeholderListResponse:
    return stakeholder_service.list_stakeholders(
        db,
        params=params.to_query(organisation_unit_id=organisation_unit_id),
        page=params.page,
        limit=params.limit,
        base_url=request.url.path,
    )


@router.get("/type/{stakeholder_type}", response_model=StakeholderListResponse)
def list_stakeholders_by_type(
    stakeholder_type: str,
    request: Request,
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> StakeholderListResponse:
    return stakeholder_service.list_by_type(
        db,
        stakeholder_type=stakeholder_type,
        params=params.to_query(),
        page=params.page,
        limit=params.limit,
        base_url=request.url.path,
    )


@router.get("/{stakeholder_id}", response_model=StakeholderResponse)
def get_stakeholder(stakeholder_id: str, db: Session = Depends(get_db)) -> StakeholderResponse:
    return stakeholder_service.get_detail(db, stakeholder_id=stakeholder_id)


@router.get("/{stakeholder_id}/projects", response_model=ProjectListResponse)
def list_stakeholder_projects(
    stakeholder_id: str,
    request: Request,
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> ProjectListResponse:
    return stakeholder_service.list_projects(
        db,
        stakeholder_id=stakeholder_id,
        params=params.to_query(),
        page=params.page,
        limit=params.limit,
        base_url=request.url.path,
    )


@router.patch("/{stakeholder_id}", response_model=StakeholderResponse)
def update_stakeholder(
    stakeholder_id: str,
    payload: StakeholderUpdateRequest,
    db: Session = Depends(get_db),
) -> StakeholderResponse:
    return stakeholder_service.update(
        db, stakeholder_id=stakeholder_id, changes=payload.model_dump(exclude_unset=True)
    )


@router.delete("/{stakeholder_id}", response_model=DeletionResponse)
def delete_stakeholder(stakeholder_id: str, db: Session = Depends(get_db)) -> DeletionResponse:
    return stakeholder_service.delete(db, stakeholder_id=stakeholder_id)
