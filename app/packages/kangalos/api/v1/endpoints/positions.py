"""岗位与任职人相关的路由定义。"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.packages.kangalos.api.v1.schemas.common import DeletionResponse
from app.packages.kangalos.api.v1.schemas.positions import (
    AssignUserRequest,
    OccupancyUpdateRequest,
    PositionCreateRequest,
    PositionDetailResponse,
    PositionListResponse,
    PositionResponse,
    PositionUpdateRequest,
    UserPositionListResponse,
    UserPositionResponse,
)
from app.packages.kangalos.core.dependencies import ListParams, get_db
from app.packages.kangalos.services.position_service import position_service

router = APIRouter(prefix="/positions", tags=["positions"])


@router.post("", response_model=PositionResponse)
def create_position(payload: PositionCreateRequest, db: Session = Depends(get_db)) -> PositionResponse:
    return position_service.create(
        db,
        title=payload.title,
        organisation_unit_id=payload.organisation_unit_id,
        description=payload.description,
    )


@router.get("", response_model=PositionListResponse)
def list_positions(
    request: Request,
    organisation_unit_id: Optional[str] = Query(None),
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> PositionListResponse:
    return position_service.list_positions(
        db,
        params=params.to_query(organisation_unit_id=organisation_unit_id),
        page=params.page,
        limit=params.limit,
        base_url=request.url.path,
    )


@router.get("/{position_id}", response_model=PositionDetailResponse)
def get_position(position_id: str, db: Session = Depends(get_db)) -> PositionDetailResponse:
    return position_service.get_detail(db, position_id=position_id)


@router.patch("/{position_id}", response_model=PositionResponse)
def update_position(
    position_id: str,
    payload: PositionUpdateRequest,
    db: Session = Depends(get_db),
) -> PositionResponse:
    return position_service.update(db, position_id=position_id, changes=payload.model_dump(exclude_unset=True))


@router.delete("/{position_id}", response_model=DeletionResponse)
def delete_position(position_id: str, db: Session = Depends(get_db)) -> DeletionResponse:
    return position_service.delete(db, position_id=position_id)


@router.get("/{position_id}/users", response_model=UserPositionListResponse)
def list_occupants(
    position_id: str,
    request: Request,
    current_only: bool = Query(True, description="仅返回当前在任的记录"),
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> UserPositionListResponse:
    return position_service.list_occupants(
        db,
        position_id=position_id,
        current_only=current_only,
        params=params.to_query(),
        page=params.page,
        limit=params.limit,
        base_url=request.url.path,
    )


@router.post("/{position_id}/users", response_model=UserPositionResponse)
def assign_user(
    position_id: str,
    payload: AssignUserRequest,
    db: Session = Depends(get_db),
) -> UserPositionResponse:
    return position_service.assign_user(
        db,
        position_id=position_id,
        user_id=payload.user_id,
        start_date=payload.start_date,
        end_date=payload.end_date,
    )


@router.patch("/{position_id}/users", response_model=UserPositionResponse)
def update_occupancy(
    position_id: str,
    payload: OccupancyUpdateRequest,
    db: Session = Depends(get_db),
) -> UserPositionResponse:
    changes = payload.model_dump(exclude_unset=True, include={"start_date", "end_date"})
    return position_service.update_occupancy(
        db,
        position_id=position_id,
        user_id=payload.user_id,
        changes=changes,
        original_start_date=payload.original_start_date,
    )


@router.delete("/{position_id}/users/{user_id}", response_model=UserPositionResponse)
def end_occupancy(position_id: str, user_id: str, db: Session = Depends(get_db)) -> UserPositionResponse:
    return position_service.end_occupancy(db, position_id=position_id, user_id=user_id)
