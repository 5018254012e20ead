"""项目作者相关的请求与响应模型。"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from app.packages.kangalos.api.v1.schemas.common import PartialUpdateRequest, ResponseEnvelope
from app.packages.kangalos.core.enums import AuthorRoleEnum


class ProjectAuthorCreateRequest(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    project_id: str
    user_id: str
    role: AuthorRoleEnum = AuthorRoleEnum.CO_AUTHOR


class ProjectAuthorUpdateRequest(PartialUpdateRequest):
    model_config = ConfigDict(use_enum_values=True)
    required_fields = ("project_id", "user_id", "role")

    project_id: Optional[str] = None
    user_id: Optional[str] = None
    role: Optional[AuthorRoleEnum] = None


class _AuthorUser(BaseModel):
    id: str
    first_name: str
    last_name: str
    email: str


class ProjectAuthorItem(BaseModel):
    id: str
    project_id: str
    user_id: str
    role: str
    user: Optional[_AuthorUser] = None
    create_time: Optional[str] = None


ProjectAuthorResponse = ResponseEnvelope[ProjectAuthorItem]
ProjectAuthorListResponse = ResponseEnvelope[List[ProjectAuthorItem]]
