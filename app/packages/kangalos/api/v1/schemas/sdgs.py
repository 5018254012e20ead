"""SDG 目录、项目关联与统计相关的请求与响应模型。"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from app.packages.kangalos.api.v1.schemas.common import PartialUpdateRequest, ResponseEnvelope
from app.packages.kangalos.api.v1.schemas.projects import ProjectItem


class SdgCreateRequest(BaseModel):
    number: int = Field(..., ge=1, description="目标编号")
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


class SdgUpdateRequest(PartialUpdateRequest):
    required_fields = ("number", "name")

    number: Optional[int] = Field(default=None, ge=1)
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None


class ProjectSdgCreateRequest(BaseModel):
    sdg_id: str


class SdgItem(BaseModel):
    id: str
    number: int
    name: str
    description: Optional[str] = None


class ProjectSdgItem(BaseModel):
    project_id: str
    sdg_id: str
    sdg: Optional[SdgItem] = None


class SdgStatisticItem(BaseModel):
    sdg: SdgItem
    count: int


class SdgCoverage(BaseModel):
    total_projects: int
    projects_with_sdgs: int
    coverage: float


SdgResponse = ResponseEnvelope[SdgItem]
SdgListResponse = ResponseEnvelope[List[SdgItem]]
ProjectSdgResponse = ResponseEnvelope[ProjectSdgItem]
ProjectSdgListResponse = ResponseEnvelope[List[ProjectSdgItem]]
SdgProjectListResponse = ResponseEnvelope[List[ProjectItem]]
SdgStatisticsResponse = ResponseEnvelope[List[SdgStatisticItem]]
SdgCoverageResponse = ResponseEnvelope[SdgCoverage]
