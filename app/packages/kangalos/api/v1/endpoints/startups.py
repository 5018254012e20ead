"""初创企业相关的路由定义。"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Request
from sqlalchemy.orm import Session

from app.packages.kangalos.api.v1.schemas.common import DeletionResponse
from app.packages.kangalos.api.v1.schemas.startups import (
    StartupCreateRequest,
    StartupListResponse,
    StartupResponse,
    StartupUpdateRequest,
)
from app.packages.kangalos.core.dependencies import ListParams, get_db
from app.packages.kangalos.services.startup_service import startup_service

router = APIRouter(prefix="/startups", tags=["startups"])


@router.post("", response_model=StartupResponse)
def create_startup(payload: StartupCreateRequest, db: Session = Depends(get_db)) -> StartupResponse:
    return startup_service.create(db, payload=payload.model_dump())


@router.get("", response_model=StartupListResponse)
def list_startups(
    request: Request,
    project_id: Optional[str] = Query(None),
    registered: Optional[bool] = Query(None),
    year: Optional[int] = Query(None, ge=1900, le=2100),
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> StartupListResponse:
    return startup_service.list_startups(
        db,
        params=params.to_query(project_id=project_id, registered=registered, year=year),
        page=params.page,
        limit=params.limit,
        base_url=request.url.path,
    )


@router.get("/registered", response_model=StartupListResponse)
def list_registered_startups(
    request: Request,
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> StartupListResponse:
    return startup_service.list_startups(
        db, params=params.to_query(registered=True), page=params.page, limit=params.limit, base_url=request.url.path
    )


@router.get("/by-year/{year}", response_model=StartupListResponse)
def list_startups_by_year(
    request: Request,
    year: int = Path(..., ge=1900, le=2100),
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> StartupListResponse:
    return startup_service.list_startups(
        db, params=params.to_query(year=year), page=params.page, limit=params.limit, base_url=request.url.path
    )


@router.get("/by-project/{project_id}", response_model=StartupResponse)
def get_startup_by_project(project_id: str, db: Session = Depends(get_db)) -> StartupResponse:
    return startup_service.get_by_project(db, project_id=project_id)


@router.get("/{startup_id}", response_model=StartupResponse)
def get_startup(startup_id: str, db: Session = Depends(get_db)) -> StartupResponse:
    return startup_service.get_detail(db, startup_id=startup_id)


@router.patch("/{startup_id}", response_model=StartupResponse)
def update_startup(startup_id: str, payload: StartupUpdateRequest, db: Session = Depends(get_db)) -> StartupResponse:
    return startup_service.update(db, startup_id=startup_id, changes=payload.model_dump(exclude_unset=True))


@router.delete("/{startup_id}", response_model=DeletionResponse)
def delete_startup(startup_id: str, db: Session = Depends(get_db)) -> DeletionResponse:
    return startup_service.delete(db, startup_id=startup_id)
