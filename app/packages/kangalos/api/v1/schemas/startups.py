"""初创企业相关的请求与响应模型。"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from app.packages.kangalos.api.v1.schemas.common import PartialUpdateRequest, ResponseEnvelope


class StartupCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    project_id: str
    year: int = Field(..., ge=1900, le=2100)
    registered: bool = False


class StartupUpdateRequest(PartialUpdateRequest):
    required_fields = ("name", "project_id", "year", "registered")

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    project_id: Optional[str] = None
    year: Optional[int] = Field(default=None, ge=1900, le=2100)
    registered: Optional[bool] = None


class StartupItem(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    project_id: str
    year: int
    registered: bool
    create_time: Optional[str] = None
    update_time: Optional[str] = None


StartupResponse = ResponseEnvelope[StartupItem]
StartupListResponse = ResponseEnvelope[List[StartupItem]]
