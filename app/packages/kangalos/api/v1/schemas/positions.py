"""岗位与任职记录相关的请求与响应模型。"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from app.packages.kangalos.api.v1.schemas.common import PartialUpdateRequest, ResponseEnvelope


class PositionCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    organisation_unit_id: str


class PositionUpdateRequest(PartialUpdateRequest):
    required_fields = ("title", "organisation_unit_id")

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    organisation_unit_id: Optional[str] = None


class PositionItem(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    organisation_unit_id: str
    create_time: Optional[str] = None
    update_time: Optional[str] = None


class OrganisationUnitBrief(BaseModel):
    id: str
    name: str
    code: Optional[str] = None


class PositionDetail(PositionItem):
    organisation_unit: Optional[OrganisationUnitBrief] = None


class _IntervalFields(BaseModel):
    start_date: Optional[datetime] = Field(default=None, description="任职开始时间，默认当前时间")
    end_date: Optional[datetime] = Field(default=None, description="任职结束时间，为空表示仍在任")

    @model_validator(mode="after")
    def _check_order(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be earlier than start_date")
        return self


class AssignUserRequest(_IntervalFields):
    user_id: str


class UserPositionCreateRequest(_IntervalFields):
    user_id: str
    position_id: str


class OccupancyUpdateRequest(_IntervalFields):
    user_id: str
    original_start_date: Optional[datetime] = Field(
        default=None, description="要修改的任职记录的开始时间，缺省时定位当前在任记录"
    )


class UserPositionUpdateRequest(_IntervalFields):
    """按精确键修改任职区间。"""


class UserBrief(BaseModel):
    id: str
    first_name: str
    last_name: str
    email: str


class PositionBrief(BaseModel):
    id: str
    title: str
    organisation_unit_id: str


class UserPositionItem(BaseModel):
    user_id: str
    position_id: str
    start_date: str
    end_date: Optional[str] = None
    is_active: bool
    user: Optional[UserBrief] = None
    position: Optional[PositionBrief] = None


PositionResponse = ResponseEnvelope[PositionItem]
PositionDetailResponse = ResponseEnvelope[PositionDetail]
PositionListResponse = ResponseEnvelope[List[PositionItem]]
UserPositionResponse = ResponseEnvelope[UserPositionItem]
UserPositionListResponse = ResponseEnvelope[List[UserPositionItem]]
