"""项目作者相关的路由定义。"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.packages.kangalos.api.v1.schemas.common import DeletionResponse
from app.packages.kangalos.api.v1.schemas.project_authors import (
    ProjectAuthorCreateRequest,
    ProjectAuthorListResponse,
    ProjectAuthorResponse,
    ProjectAuthorUpdateRequest,
)
from app.packages.kangalos.core.dependencies import ListParams, get_db
from app.packages.kangalos.core.enums import AuthorRoleEnum
from app.packages.kangalos.services.project_author_service import project_author_service

router = APIRouter(prefix="/project-authors", tags=["project-authors"])


@router.post("", response_model=ProjectAuthorResponse)
def create_project_author(
    payload: ProjectAuthorCreateRequest,
    db: Session = Depends(get_db),
) -> ProjectAuthorResponse:
    return project_author_service.create(
        db, project_id=payload.project_id, user_id=payload.user_id, role=payload.role
    )


@router.get("", response_model=ProjectAuthorListResponse)
def list_project_authors(
    request: Request,
    project_id: Optional[str] = Query(None),
    user_id: Optional[str] = Query(None),
    role: Optional[AuthorRoleEnum] = Query(None),
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> ProjectAuthorListResponse:
    return project_author_service.list_authors(
        db,
        params=params.to_query(project_id=project_id, user_id=user_id, role=role.value if role else None),
        page=params.page,
        limit=params.limit,
        base_url=request.url.path,
    )


@router.get("/{author_id}", response_model=ProjectAuthorResponse)
def get_project_author(author_id: str, db: Session = Depends(get_db)) -> ProjectAuthorResponse:
    return project_author_service.get_detail(db, author_id=author_id)


@router.patch("/{author_id}", response_model=ProjectAuthorResponse)
def update_project_author(
    author_id: str,
    payload: ProjectAuthorUpdateRequest,
    db: Session = Depends(get_db),
) -> ProjectAuthorResponse:
    return project_author_service.update(db, author_id=author_id, changes=payload.model_dump(exclude_unset=True))


@router.delete("/{author_id}", response_model=DeletionResponse)
def delete_project_author(author_id: str, db: Session = Depends(get_db)) -> DeletionResponse:
    return project_author_service.delete(db, author_id=author_id)
