"""分类相关的请求与响应模型。"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from app.packages.kangalos.api.v1.schemas.common import PartialUpdateRequest, ResponseEnvelope


class CategoryCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    parent_id: Optional[str] = None


class CategoryChildRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


class CategoryUpdateRequest(PartialUpdateRequest):
    required_fields = ("name",)

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    parent_id: Optional[str] = None


class CategoryItem(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    parent_id: Optional[str] = None
    create_time: Optional[str] = None
    update_time: Optional[str] = None


class CategoryDetail(CategoryItem):
    children: List[CategoryItem] = Field(default_factory=list)


class CategoryTreeNode(CategoryItem):
    children: List["CategoryTreeNode"] = Field(default_factory=list)


CategoryTreeNode.model_rebuild()

CategoryResponse = ResponseEnvelope[CategoryItem]
CategoryDetailResponse = ResponseEnvelope[CategoryDetail]
CategoryListResponse = ResponseEnvelope[List[CategoryItem]]
CategoryTreeResponse = ResponseEnvelope[List[CategoryTreeNode]]
