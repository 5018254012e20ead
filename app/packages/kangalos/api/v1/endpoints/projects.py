"""项目及项目资助方、干系人、SDG 关联相关的路由定义。"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.packages.kangalos.api.v1.schemas.common import DeletionResponse
from app.packages.kangalos.api.v1.schemas.projects import (
    ProjectCreateRequest,
    ProjectDetailResponse,
    ProjectFunderCreateRequest,
    ProjectFunderListResponse,
    ProjectFunderResponse,
    ProjectFunderUpdateRequest,
    ProjectListResponse,
    ProjectResponse,
    ProjectStakeholderCreateRequest,
    ProjectStakeholderListResponse,
    ProjectStakeholderResponse,
    ProjectUpdateRequest,
)
from app.packages.kangalos.api.v1.schemas.sdgs import ProjectSdgCreateRequest, ProjectSdgResponse, SdgListResponse
from app.packages.kangalos.core.dependencies import ListParams, get_db
from app.packages.kangalos.core.enums import ProjectStatusEnum
from app.packages.kangalos.crud.query import Range
from app.packages.kangalos.services.project_service import project_service
from app.packages.kangalos.services.sdg_service import sdg_service

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("", response_model=ProjectResponse)
def create_project(payload: ProjectCreateRequest, db: Session = Depends(get_db)) -> ProjectResponse:
    return project_service.create(db, payload=payload.model_dump())


@router.get("", response_model=ProjectListResponse)
def list_projects(
    request: Request,
    organisation_unit_id: Optional[str] = Query(None),
    status: Optional[List[ProjectStatusEnum]] = Query(None, description="项目状态，可多选"),
    project_type: Optional[str] = Query(None),
    year_from: Optional[int] = Query(None, ge=1900, le=2100),
    year_to: Optional[int] = Query(None, ge=1900, le=2100),
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> ProjectListResponse:
    query = params.to_query(
        organisation_unit_id=organisation_unit_id,
        status=[item.value for item in status] if status else None,
        project_type=project_type,
        year=Range(year_from, year_to) if year_from is not None or year_to is not None else None,
    )
    return project_service.list_projects(
        db, params=query, page=params.page, limit=params.limit, base_url=request.url.path
    )


@router.get("/{project_id}", response_model=ProjectDetailResponse)
def get_project(project_id: str, db: Session = Depends(get_db)) -> ProjectDetailResponse:
    return project_service.get_detail(db, project_id=project_id)


@router.patch("/{project_id}", response_model=ProjectResponse)
def update_project(project_id: str, payload: ProjectUpdateRequest, db: Session = Depends(get_db)) -> ProjectResponse:
    return project_service.update(db, project_id=project_id, changes=payload.model_dump(exclude_unset=True))


@router.delete("/{project_id}", response_model=DeletionResponse)
def delete_project(project_id: str, db: Session = Depends(get_db)) -> DeletionResponse:
    return project_service.delete(db, project_id=project_id)


@router.post("/{project_id}/funders", response_model=ProjectFunderResponse)
def add_project_funder(
    project_id: str,
    payload: ProjectFunderCreateRequest,
    db: Session = Depends(get_db),
) -> ProjectFunderResponse:
    return project_service.add_funder(db, project_id=project_id, funder_id=payload.funder_id, amount=payload.amount)


@router.get("/{project_id}/funders", response_model=ProjectFunderListResponse)
def list_project_funders(
    project_id: str,
    request: Request,
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> ProjectFunderListResponse:
    return project_service.list_funders(
        db,
        project_id=project_id,
        params=params.to_query(),
        page=params.page,
        limit=params.limit,
        base_url=request.url.path,
    )


@router.get("/{project_id}/funders/{funder_id}", response_model=ProjectFunderResponse)
def get_project_funder(project_id: str, funder_id: str, db: Session = Depends(get_db)) -> ProjectFunderResponse:
    return project_service.get_funder(db, project_id=project_id, funder_id=funder_id)


@router.patch("/{project_id}/funders/{funder_id}", response_model=ProjectFunderResponse)
def update_project_funder(
    project_id: str,
    funder_id: str,
    payload: ProjectFunderUpdateRequest,
    db: Session = Depends(get_db),
) -> ProjectFunderResponse:
    return project_service.update_funder(db, project_id=project_id, funder_id=funder_id, amount=payload.amount)


@router.delete("/{project_id}/funders/{funder_id}", response_model=ProjectFunderResponse)
def remove_project_funder(project_id: str, funder_id: str, db: Session = Depends(get_db)) -> ProjectFunderResponse:
    return project_service.remove_funder(db, project_id=project_id, funder_id=funder_id)


@router.post("/{project_id}/stakeholders", response_model=ProjectStakeholderResponse)
def add_project_stakeholder(
    project_id: str,
    payload: ProjectStakeholderCreateRequest,
    db: Session = Depends(get_db),
) -> ProjectStakeholderResponse:
    return project_service.add_stakeholder(
        db, project_id=project_id, stakeholder_id=payload.stakeholder_id, role=payload.role
    )


@router.get("/{project_id}/stakeholders", response_model=ProjectStakeholderListResponse)
def list_project_stakeholders(
    project_id: str,
    request: Request,
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> ProjectStakeholderListResponse:
    return project_service.list_stakeholders(
        db,
        project_id=project_id,
        params=params.to_query(),
        page=params.page,
        limit=params.limit,
        base_url=request.url.path,
    )


@router.delete("/{project_id}/stakeholders/{stakeholder_id}", response_model=ProjectStakeholderResponse)
def remove_project_stakeholder(
    project_id: str,
    stakeholder_id: str,
    db: Session = Depends(get_db),
) -> ProjectStakeholderResponse:
    return project_service.remove_stakeholder(db, project_id=project_id, stakeholder_id=stakeholder_id)


@router.get("/{project_id}/sdgs", response_model=SdgListResponse)
def list_project_sdgs(project_id: str, db: Session = Depends(get_db)) -> SdgListResponse:
    return sdg_service.sdgs_for_project(db, project_id=project_id)


@router.post("/{project_id}/sdgs", response_model=ProjectSdgResponse)
def link_project_sdg(
    project_id: str,
    payload: ProjectSdgCreateRequest,
    db: Session = Depends(get_db),
) -> ProjectSdgResponse:
    return sdg_service.link_project(db, project_id=project_id, sdg_id=payload.sdg_id)


@router.delete("/{project_id}/sdgs/{sdg_id}", response_model=ProjectSdgResponse)
def unlink_project_sdg(project_id: str, sdg_id: str, db: Session = Depends(get_db)) -> ProjectSdgResponse:
    return sdg_service.unlink_project(db, project_id=project_id, sdg_id=sdg_id)
