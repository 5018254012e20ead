"""项目及其资助、干系人、评审、报告相关的请求与响应模型。"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.packages.kangalos.api.v1.schemas.common import PartialUpdateRequest, ResponseEnvelope
from app.packages.kangalos.core.enums import (
    EvaluationStatusEnum,
    IpTypeEnum,
    ProjectStatusEnum,
    StakeholderRoleEnum,
)


class ProjectCreateRequest(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    title: str = Field(..., min_length=1, max_length=255)
    title_norm: Optional[str] = Field(default=None, max_length=255, description="归一化标题，缺省时由标题生成")
    abstract: Optional[str] = None
    project_type: str = Field(..., min_length=1, max_length=100)
    year: int = Field(..., ge=1900, le=2100)
    status: ProjectStatusEnum = ProjectStatusEnum.PENDING
    innovation_field: Optional[str] = Field(default=None, max_length=255)
    expected_ip: Optional[IpTypeEnum] = None
    progress_percent: Optional[Decimal] = Field(default=None, ge=0, le=100)
    submitted_at: Optional[datetime] = None
    organisation_unit_id: str


class ProjectUpdateRequest(PartialUpdateRequest):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)
    required_fields = ("title", "title_norm", "project_type", "year", "status", "organisation_unit_id")

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    title_norm: Optional[str] = Field(default=None, max_length=255)
    abstract: Optional[str] = None
    project_type: Optional[str] = Field(default=None, min_length=1, max_length=100)
    year: Optional[int] = Field(default=None, ge=1900, le=2100)
    status: Optional[ProjectStatusEnum] = None
    innovation_field: Optional[str] = Field(default=None, max_length=255)
    expected_ip: Optional[IpTypeEnum] = None
    progress_percent: Optional[Decimal] = Field(default=None, ge=0, le=100)
    submitted_at: Optional[datetime] = None
    organisation_unit_id: Optional[str] = None


class ProjectItem(BaseModel):
    id: str
    title: str
    title_norm: str
    abstract: Optional[str] = None
    project_type: str
    year: int
    status: str
    innovation_field: Optional[str] = None
    expected_ip: Optional[str] = None
    progress_percent: Optional[float] = None
    submitted_at: Optional[str] = None
    organisation_unit_id: str
    create_time: Optional[str] = None
    update_time: Optional[str] = None


class ProjectFunderCreateRequest(BaseModel):
    funder_id: str
    amount: Optional[Decimal] = Field(default=None, ge=0)


class ProjectFunderUpdateRequest(BaseModel):
    amount: Optional[Decimal] = Field(default=None, ge=0)


class ProjectFunderItem(BaseModel):
    project_id: str
    funder_id: str
    amount: Optional[float] = None
    funder_name: Optional[str] = None


class ProjectStakeholderCreateRequest(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    stakeholder_id: str
    role: StakeholderRoleEnum = StakeholderRoleEnum.PARTNER


class ProjectStakeholderItem(BaseModel):
    project_id: str
    stakeholder_id: str
    role: str
    stakeholder_name: Optional[str] = None


class ProjectDetail(ProjectItem):
    funders: List[ProjectFunderItem] = Field(default_factory=list)
    stakeholders: List[ProjectStakeholderItem] = Field(default_factory=list)


class EvaluationCreateRequest(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    project_id: str
    evaluator_id: str
    score: int = Field(..., ge=0, le=100)
    comments: Optional[str] = None
    status: EvaluationStatusEnum = EvaluationStatusEnum.PENDING


class EvaluationUpdateRequest(PartialUpdateRequest):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)
    required_fields = ("evaluator_id", "score", "status")

    evaluator_id: Optional[str] = None
    score: Optional[int] = Field(default=None, ge=0, le=100)
    comments: Optional[str] = None
    status: Optional[EvaluationStatusEnum] = None


class EvaluationItem(BaseModel):
    id: str
    project_id: str
    evaluator_id: str
    score: int
    comments: Optional[str] = None
    status: str
    create_time: Optional[str] = None
    update_time: Optional[str] = None


class ReportCreateRequest(BaseModel):
    project_id: str
    title: str = Field(..., min_length=1, max_length=100)
    reporting_period: Optional[str] = Field(default=None, max_length=50, description="报告期，例如 2024-Q1")
    content: Optional[str] = None
    fund_usage: Optional[Decimal] = Field(default=None, ge=0)
    submitted_by_id: str
    submitted_at: Optional[datetime] = None


class ReportUpdateRequest(PartialUpdateRequest):
    required_fields = ("title", "submitted_at")

    title: Optional[str] = Field(default=None, min_length=1, max_length=100)
    reporting_period: Optional[str] = Field(default=None, max_length=50)
    content: Optional[str] = None
    fund_usage: Optional[Decimal] = Field(default=None, ge=0)
    submitted_at: Optional[datetime] = None


class ReportItem(BaseModel):
    id: str
    project_id: str
    title: str
    reporting_period: Optional[str] = None
    content: Optional[str] = None
    fund_usage: Optional[float] = None
    submitted_by_id: str
    submitted_at: Optional[str] = None


ProjectResponse = ResponseEnvelope[ProjectItem]
ProjectDetailResponse = ResponseEnvelope[ProjectDetail]
ProjectListResponse = ResponseEnvelope[List[ProjectItem]]
ProjectFunderResponse = ResponseEnvelope[ProjectFunderItem]
ProjectFunderListResponse = ResponseEnvelope[List[ProjectFunderItem]]
ProjectStakeholderResponse = ResponseEnvelope[ProjectStakeholderItem]
ProjectStakeholderListResponse = ResponseEnvelope[List[ProjectStakeholderItem]]
EvaluationResponse = ResponseEnvelope[EvaluationItem]
EvaluationListResponse = ResponseEnvelope[List[EvaluationItem]]
ReportResponse = ResponseEnvelope[ReportItem]
ReportListResponse = ResponseEnvelope[List[ReportItem]]
