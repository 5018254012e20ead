"""SDG 目录、统计与项目关联总览的路由定义。"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.packages.kangalos.api.v1.schemas.common import DeletionResponse
from app.packages.kangalos.api.v1.schemas.sdgs import (
    ProjectSdgListResponse,
    SdgCoverageResponse,
    SdgCreateRequest,
    SdgListResponse,
    SdgProjectListResponse,
    SdgResponse,
    SdgStatisticsResponse,
    SdgUpdateRequest,
)
from app.packages.kangalos.core.dependencies import ListParams, get_db
from app.packages.kangalos.services.sdg_service import sdg_service

router = APIRouter(prefix="/sdgs", tags=["sdgs"])
project_sdg_router = APIRouter(prefix="/project-sdgs", tags=["sdgs"])


@router.post("", response_model=SdgResponse)
def create_sdg(payload: SdgCreateRequest, db: Session = Depends(get_db)) -> SdgResponse:
    return sdg_service.create(db, payload=payload.model_dump())


@router.get("", response_model=SdgListResponse)
def list_sdgs(
    request: Request,
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> SdgListResponse:
    return sdg_service.list_sdgs(
        db, params=params.to_query(), page=params.page, limit=params.limit, base_url=request.url.path
    )


@router.get("/statistics", response_model=SdgStatisticsResponse)
def get_sdg_statistics(db: Session = Depends(get_db)) -> SdgStatisticsResponse:
    return sdg_service.statistics(db)


@router.get("/coverage", response_model=SdgCoverageResponse)
def get_sdg_coverage(db: Session = Depends(get_db)) -> SdgCoverageResponse:
    return sdg_service.coverage(db)


@router.get("/{sdg_id}", response_model=SdgResponse)
def get_sdg(sdg_id: str, db: Session = Depends(get_db)) -> SdgResponse:
    return sdg_service.get_detail(db, sdg_id=sdg_id)


@router.patch("/{sdg_id}", response_model=SdgResponse)
def update_sdg(sdg_id: str, payload: SdgUpdateRequest, db: Session = Depends(get_db)) -> SdgResponse:
    return sdg_service.update(db, sdg_id=sdg_id, changes=payload.model_dump(exclude_unset=True))


@router.delete("/{sdg_id}", response_model=DeletionResponse)
def delete_sdg(sdg_id: str, db: Session = Depends(get_db)) -> DeletionResponse:
    return sdg_service.delete(db, sdg_id=sdg_id)


@router.get("/{sdg_id}/projects", response_model=SdgProjectListResponse)
def list_sdg_projects(sdg_id: str, db: Session = Depends(get_db)) -> SdgProjectListResponse:
    return sdg_service.projects_for_sdg(db, sdg_id=sdg_id)


@project_sdg_router.get("", response_model=ProjectSdgListResponse)
def list_project_sdg_links(db: Session = Depends(get_db)) -> ProjectSdgListResponse:
    return sdg_service.list_links(db)
