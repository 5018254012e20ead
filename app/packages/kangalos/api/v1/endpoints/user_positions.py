"""任职记录相关的路由定义。复合键 ``(user_id, position_id, start_date)``。"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.packages.kangalos.api.v1.schemas.positions import (
    UserPositionCreateRequest,
    UserPositionListResponse,
    UserPositionResponse,
    UserPositionUpdateRequest,
)
from app.packages.kangalos.core.dependencies import ListParams, get_db
from app.packages.kangalos.services.user_position_service import user_position_service

router = APIRouter(prefix="/user-positions", tags=["user-positions"])


@router.post("", response_model=UserPositionResponse)
def create_user_position(
    payload: UserPositionCreateRequest,
    db: Session = Depends(get_db),
) -> UserPositionResponse:
    return user_position_service.create(
        db,
        user_id=payload.user_id,
        position_id=payload.position_id,
        start_date=payload.start_date,
        end_date=payload.end_date,
    )


@router.get("", response_model=UserPositionListResponse)
def list_user_positions(
    request: Request,
    user_id: Optional[str] = Query(None),
    position_id: Optional[str] = Query(None),
    current_only: bool = Query(False),
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> UserPositionListResponse:
    return user_position_service.list_assignments(
        db,
        user_id=user_id,
        position_id=position_id,
        current_only=current_only,
        params=params.to_query(),
        page=params.page,
        limit=params.limit,
        base_url=request.url.path,
    )


@router.get("/user/{user_id}", response_model=UserPositionListResponse)
def list_positions_of_user(
    user_id: str,
    request: Request,
    current_only: bool = Query(False),
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> UserPositionListResponse:
    return user_position_service.list_for_user(
        db,
        user_id=user_id,
        current_only=current_only,
        params=params.to_query(),
        page=params.page,
        limit=params.limit,
        base_url=request.url.path,
    )


@router.get("/position/{position_id}", response_model=UserPositionListResponse)
def list_users_of_position(
    position_id: str,
    request: Request,
    current_only: bool = Query(False),
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> UserPositionListResponse:
    return user_position_service.list_for_position(
        db,
        position_id=position_id,
        current_only=current_only,
        params=params.to_query(),
        page=params.page,
        limit=params.limit,
        base_url=request.url.path,
    )


@router.get("/{user_id}/{position_id}", response_model=UserPositionResponse)
def get_user_position(
    user_id: str,
    position_id: str,
    start_date: datetime = Query(..., description="任职开始时间"),
    db: Session = Depends(get_db),
) -> UserPositionResponse:
    return user_position_service.get_detail(db, user_id=user_id, position_id=position_id, start_date=start_date)


@router.patch("/{user_id}/{position_id}", response_model=UserPositionResponse)
def update_user_position(
    user_id: str,
    position_id: str,
    payload: UserPositionUpdateRequest,
    start_date: datetime = Query(..., description="要修改的任职记录的开始时间"),
    db: Session = Depends(get_db),
) -> UserPositionResponse:
    return user_position_service.update(
        db,
        user_id=user_id,
        position_id=position_id,
        start_date=start_date,
        changes=payload.model_dump(exclude_unset=True),
    )


@router.delete("/{user_id}/{position_id}", response_model=UserPositionResponse)
def delete_user_position(
    user_id: str,
    position_id: str,
    start_date: datetime = Query(..., description="要删除的任职记录的开始时间"),
    db: Session = Depends(get_db),
) -> UserPositionResponse:
    return user_position_service.delete(db, user_id=user_id, position_id=position_id, start_date=start_date)
