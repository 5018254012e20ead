"""组织单元相关的请求与响应模型。"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from app.packages.kangalos.api.v1.schemas.common import PartialUpdateRequest, ResponseEnvelope
from app.packages.kangalos.api.v1.schemas.positions import PositionItem


def _clean_name(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError("name must not be blank")
    return value


def _clean_code(value: Optional[str]) -> Optional[str]:
    """空白代码按未设置处理，避免多个单元共用空字符串代码。"""
    if value is None:
        return None
    return value.strip() or None


class OrganisationUnitChildRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="组织名称")
    code: Optional[str] = Field(default=None, max_length=50, description="组织代码，全局唯一")

    @model_validator(mode="after")
    def _trim_fields(self):
        self.name = _clean_name(self.name)
        self.code = _clean_code(self.code)
        return self


class OrganisationUnitCreateRequest(OrganisationUnitChildRequest):
    parent_id: Optional[str] = Field(default=None, description="上级组织 ID")


class OrganisationUnitUpdateRequest(PartialUpdateRequest):
    required_fields = ("name",)

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    code: Optional[str] = Field(default=None, max_length=50)
    parent_id: Optional[str] = None

    @model_validator(mode="after")
    def _trim_fields(self):
        if "name" in self.model_fields_set:
            self.name = _clean_name(self.name)
        if "code" in self.model_fields_set:
            self.code = _clean_code(self.code)
        return self


class OrganisationUnitItem(BaseModel):
    id: str
    name: str
    code: Optional[str] = None
    parent_id: Optional[str] = None
    create_time: Optional[str] = None
    update_time: Optional[str] = None


class OrganisationUnitDetail(OrganisationUnitItem):
    parent: Optional[OrganisationUnitItem] = None
    children: List[OrganisationUnitItem] = Field(default_factory=list)
    positions: Optional[List[PositionItem]] = Field(default=None, description="仅在 include_positions=true 时返回")


class OrganisationUnitTreeNode(OrganisationUnitItem):
    children: List["OrganisationUnitTreeNode"] = Field(default_factory=list)
    positions: Optional[List[PositionItem]] = None


OrganisationUnitTreeNode.model_rebuild()

OrganisationUnitResponse = ResponseEnvelope[OrganisationUnitItem]
OrganisationUnitDetailResponse = ResponseEnvelope[OrganisationUnitDetail]
OrganisationUnitListResponse = ResponseEnvelope[List[OrganisationUnitItem]]
OrganisationUnitTreeResponse = ResponseEnvelope[List[OrganisationUnitTreeNode]]
