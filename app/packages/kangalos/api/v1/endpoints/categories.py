"""分类相关的路由定义。"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.packages.kangalos.api.v1.schemas.categories import (
    CategoryChildRequest,
    CategoryCreateRequest,
    CategoryDetailResponse,
    CategoryListResponse,
    CategoryResponse,
    CategoryTreeResponse,
    CategoryUpdateRequest,
)
from app.packages.kangalos.api.v1.schemas.common import DeletionResponse
from app.packages.kangalos.core.dependencies import ListParams, get_db
from app.packages.kangalos.services.category_service import category_service

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post("", response_model=CategoryResponse)
def create_category(payload: CategoryCreateRequest, db: Session = Depends(get_db)) -> CategoryResponse:
    return category_service.create(
        db, name=payload.name, description=payload.description, parent_id=payload.parent_id
    )


@router.get("", response_model=CategoryListResponse)
def list_categories(
    request: Request,
    parent_id: Optional[str] = Query(None),
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> CategoryListResponse:
    return category_service.list_categories(
        db,
        params=params.to_query(parent_id=parent_id),
        page=params.page,
        limit=params.limit,
        base_url=request.url.path,
    )


@router.get("/tree", response_model=CategoryTreeResponse)
def get_category_tree(db: Session = Depends(get_db)) -> CategoryTreeResponse:
    return category_service.tree(db)


@router.get("/{category_id}", response_model=CategoryDetailResponse)
def get_category(category_id: str, db: Session = Depends(get_db)) -> CategoryDetailResponse:
    return category_service.get_detail(db, category_id=category_id)


@router.patch("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: str,
    payload: CategoryUpdateRequest,
    db: Session = Depends(get_db),
) -> CategoryResponse:
    return category_service.update(db, category_id=category_id, changes=payload.model_dump(exclude_unset=True))


@router.delete("/{category_id}", response_model=DeletionResponse)
def delete_category(category_id: str, db: Session = Depends(get_db)) -> DeletionResponse:
    return category_service.delete(db, category_id=category_id)


@router.get("/{category_id}/children", response_model=CategoryListResponse)
def list_category_children(category_id: str, db: Session = Depends(get_db)) -> CategoryListResponse:
    return category_service.children(db, node_id=category_id)


@router.post("/{category_id}/children", response_model=CategoryResponse)
def add_category_child(
    category_id: str,
    payload: CategoryChildRequest,
    db: Session = Depends(get_db),
) -> CategoryResponse:
    return category_service.add_child(
        db, parent_id=category_id, name=payload.name, description=payload.description
    )


@router.get("/{category_id}/parent", response_model=CategoryResponse)
def get_category_parent(category_id: str, db: Session = Depends(get_db)) -> CategoryResponse:
    return category_service.parent(db, node_id=category_id)


@router.get("/{category_id}/hierarchy", response_model=CategoryListResponse)
def get_category_hierarchy(category_id: str, db: Session = Depends(get_db)) -> CategoryListResponse:
    return category_service.hierarchy(db, node_id=category_id)
