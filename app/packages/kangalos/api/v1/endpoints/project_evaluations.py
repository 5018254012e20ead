"""项目评审相关的路由定义。"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.packages.kangalos.api.v1.schemas.common import DeletionResponse
from app.packages.kangalos.api.v1.schemas.projects import (
    EvaluationCreateRequest,
    EvaluationListResponse,
    EvaluationResponse,
    EvaluationUpdateRequest,
)
from app.packages.kangalos.core.dependencies import ListParams, get_db
from app.packages.kangalos.core.enums import EvaluationStatusEnum
from app.packages.kangalos.services.project_evaluation_service import project_evaluation_service

router = APIRouter(prefix="/project-evaluations", tags=["project-evaluations"])


@router.post("", response_model=EvaluationResponse)
def create_evaluation(payload: EvaluationCreateRequest, db: Session = Depends(get_db)) -> EvaluationResponse:
    return project_evaluation_service.create(db, payload=payload.model_dump())


@router.get("", response_model=EvaluationListResponse)
def list_evaluations(
    request: Request,
    project_id: Optional[str] = Query(None),
    evaluator_id: Optional[str] = Query(None),
    status: Optional[EvaluationStatusEnum] = Query(None),
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> EvaluationListResponse:
    query = params.to_query(
        project_id=project_id,
        evaluator_id=evaluator_id,
        status=status.value if status else None,
    )
    return project_evaluation_service.list_evaluations(
        db, params=query, page=params.page, limit=params.limit, base_url=request.url.path
    )


@router.get("/{evaluation_id}", response_model=EvaluationResponse)
def get_evaluation(evaluation_id: str, db: Session = Depends(get_db)) -> EvaluationResponse:
    return project_evaluation_service.get_detail(db, evaluation_id=evaluation_id)


@router.patch("/{evaluation_id}", response_model=EvaluationResponse)
def update_evaluation(
    evaluation_id: str,
    payload: EvaluationUpdateRequest,
    db: Session = Depends(get_db),
) -> EvaluationResponse:
    return project_evaluation_service.update(
        db, evaluation_id=evaluation_id, changes=payload.model_dump(exclude_unset=True)
    )


@router.delete("/{evaluation_id}", response_model=DeletionResponse)
def delete_evaluation(evaluation_id: str, db: Session = Depends(get_db)) -> DeletionResponse:
    return project_evaluation_service.delete(db, evaluation_id=evaluation_id)
