"""资助方与干系人相关的请求与响应模型。"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from app.packages.kangalos.api.v1.schemas.common import PartialUpdateRequest, ResponseEnvelope


class FunderCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    funder_type: str = Field(..., min_length=1, max_length=50)
    contact_email: Optional[str] = Field(default=None, max_length=255)
    contact_phone: Optional[str] = Field(default=None, max_length=20)


class FunderUpdateRequest(PartialUpdateRequest):
    required_fields = ("name", "funder_type")

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    funder_type: Optional[str] = Field(default=None, min_length=1, max_length=50)
    contact_email: Optional[str] = Field(default=None, max_length=255)
    contact_phone: Optional[str] = Field(default=None, max_length=20)


class FunderItem(BaseModel):
    id: str
    name: str
    funder_type: str
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    create_time: Optional[str] = None
    update_time: Optional[str] = None


class StakeholderCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    stakeholder_type: str = Field(..., min_length=1, max_length=50)
    contact_email: Optional[str] = Field(default=None, max_length=255)
    contact_phone: Optional[str] = Field(default=None, max_length=20)
    organisation_unit_id: Optional[str] = None


class StakeholderUpdateRequest(PartialUpdateRequest):
    required_fields = ("name", "stakeholder_type")

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    stakeholder_type: Optional[str] = Field(default=None, min_length=1, max_length=50)
    contact_email: Optional[str] = Field(default=None, max_length=255)
    contact_phone: Optional[str] = Field(default=None, max_length=20)
    organisation_unit_id: Optional[str] = None


class StakeholderItem(BaseModel):
    id: str
    name: str
    stakeholder_type: str
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    organisation_unit_id: Optional[str] = None
    create_time: Optional[str] = None
    update_time: Optional[str] = None


FunderResponse = ResponseEnvelope[FunderItem]
FunderListResponse = ResponseEnvelope[List[FunderItem]]
StakeholderResponse = ResponseEnvelope[StakeholderItem]
StakeholderListResponse = ResponseEnvelope[List[StakeholderItem]]
