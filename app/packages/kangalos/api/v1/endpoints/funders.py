"""资助方相关的路由定义。"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.packages.kangalos.api.v1.schemas.common import DeletionResponse
from app.packages.kangalos.api.v1.schemas.partners import (
    FunderCreateRequest,
    FunderListResponse,
    FunderResponse,
    FunderUpdateRequest,
)
from app.packages.kangalos.core.dependencies import ListParams, get_db
from app.packages.kangalos.services.funder_service import funder_service

router = APIRouter(prefix="/funders", tags=["funders"])


@router.post("", response_model=FunderResponse)
def create_funder(payload: FunderCreateRequest, db: Session = Depends(get_db)) -> FunderResponse:
    return funder_service.create(db, payload=payload.model_dump())


@router.get("", response_model=FunderListResponse)
def list_funders(
    request: Request,
    funder_type: Optional[str] = Query(None),
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> FunderListResponse:
    return funder_service.list_funders(
        db,
        params=params.to_query(funder_type=funder_type),
        page=params.page,
        limit=params.limit,
        base_url=request.url.path,
    )


@router.get("/{funder_id}", response_model=FunderResponse)
def get_funder(funder_id: str, db: Session = Depends(get_db)) -> FunderResponse:
    return funder_service.get_detail(db, funder_id=funder_id)


@router.patch("/{funder_id}", response_model=FunderResponse)
def update_funder(funder_id: str, payload: FunderUpdateRequest, db: Session = Depends(get_db)) -> FunderResponse:
    return funder_service.update(db, funder_id=funder_id, changes=payload.model_dump(exclude_unset=True))


@router.delete("/{funder_id}", response_model=DeletionResponse)
def delete_funder(funder_id: str, db: Session = Depends(get_db)) -> DeletionResponse:
    return funder_service.delete(db, funder_id=funder_id)
