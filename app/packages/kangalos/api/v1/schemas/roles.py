"""角色、权限与用户角色相关的请求与响应模型。"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from app.packages.kangalos.api.v1.schemas.common import PartialUpdateRequest, ResponseEnvelope


class RoleCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="角色名称")
    description: Optional[str] = None
    organisation_unit_id: Optional[str] = Field(default=None, description="所属组织单元")

    @model_validator(mode="after")
    def _trim_fields(self) -> "RoleCreateRequest":
        self.name = self.name.strip()
        if not self.name:
            raise ValueError("name must not be blank")
        return self


class RoleUpdateRequest(PartialUpdateRequest):
    required_fields = ("name",)

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None
    organisation_unit_id: Optional[str] = None


class PermissionCreateRequest(BaseModel):
    code: str = Field(..., min_length=1, max_length=100, description="权限标识，例如 project:approve")
    description: Optional[str] = None


class PermissionUpdateRequest(PartialUpdateRequest):
    required_fields = ("code",)

    code: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None


class RolePermissionRequest(BaseModel):
    permission_id: str


class UserRoleCreateRequest(BaseModel):
    user_id: str
    role_id: str


class PermissionItem(BaseModel):
    id: str
    code: str
    description: Optional[str] = None
    create_time: Optional[str] = None
    update_time: Optional[str] = None


class RoleItem(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    organisation_unit_id: Optional[str] = None
    create_time: Optional[str] = None
    update_time: Optional[str] = None


class RoleDetail(RoleItem):
    permissions: List[PermissionItem] = Field(default_factory=list)


class RolePermissionPayload(BaseModel):
    role_id: str
    permission: Optional[PermissionItem] = None
    permission_id: Optional[str] = None


class _UserBrief(BaseModel):
    id: str
    first_name: str
    last_name: str
    email: str


class _RoleBrief(BaseModel):
    id: str
    name: str


class UserRoleItem(BaseModel):
    user_id: str
    role_id: str
    user: Optional[_UserBrief] = None
    role: Optional[_RoleBrief] = None
    create_time: Optional[str] = None


RoleResponse = ResponseEnvelope[RoleItem]
RoleDetailResponse = ResponseEnvelope[RoleDetail]
RoleListResponse = ResponseEnvelope[List[RoleItem]]
RolePermissionResponse = ResponseEnvelope[RolePermissionPayload]
PermissionResponse = ResponseEnvelope[PermissionItem]
PermissionListResponse = ResponseEnvelope[List[PermissionItem]]
UserRoleResponse = ResponseEnvelope[UserRoleItem]
UserRoleListResponse = ResponseEnvelope[List[UserRoleItem]]
