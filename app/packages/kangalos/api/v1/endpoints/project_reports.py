"""项目报告相关的路由定义。"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.packages.kangalos.api.v1.schemas.common import DeletionResponse
from app.packages.kangalos.api.v1.schemas.projects import (
    ReportCreateRequest,
    ReportListResponse,
    ReportResponse,
    ReportUpdateRequest,
)
from app.packages.kangalos.core.dependencies import ListParams, get_db
from app.packages.kangalos.services.project_report_service import project_report_service

router = APIRouter(prefix="/project-reports", tags=["project-reports"])


@router.post("", response_model=ReportResponse)
def create_report(payload: ReportCreateRequest, db: Session = Depends(get_db)) -> ReportResponse:
    return project_report_service.create(db, payload=payload.model_dump())


@router.get("", response_model=ReportListResponse)
def list_reports(
    request: Request,
    project_id: Optional[str] = Query(None),
    reporting_period: Optional[str] = Query(None),
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> ReportListResponse:
    return project_report_service.list_reports(
        db,
        params=params.to_query(project_id=project_id, reporting_period=reporting_period),
        page=params.page,
        limit=params.limit,
        base_url=request.url.path,
    )


@router.get("/{report_id}", response_model=ReportResponse)
def get_report(report_id: str, db: Session = Depends(get_db)) -> ReportResponse:
    return project_report_service.get_detail(db, report_id=report_id)


@router.patch("/{report_id}", response_model=ReportResponse)
def update_report(report_id: str, payload: ReportUpdateRequest, db: Session = Depends(get_db)) -> ReportResponse:
    return project_report_service.update(db, report_id=report_id, changes=payload.model_dump(exclude_unset=True))


@router.delete("/{report_id}", response_model=DeletionResponse)
def delete_report(report_id: str, db: Session = Depends(get_db)) -> DeletionResponse:
    return project_report_service.delete(db, report_id=report_id)
