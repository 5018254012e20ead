"""用户相关的请求与响应模型。"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.packages.kangalos.api.v1.schemas.common import PartialUpdateRequest, ResponseEnvelope
from app.packages.kangalos.core.enums import UserTypeEnum


class UserCreateRequest(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    username: str = Field(..., min_length=3, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(default=None, max_length=20)
    user_type: UserTypeEnum = UserTypeEnum.INDIVIDUAL


class UserUpdateRequest(PartialUpdateRequest):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)
    required_fields = ("first_name", "last_name", "username", "email", "user_type")

    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    username: Optional[str] = Field(default=None, min_length=3, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=20)
    user_type: Optional[UserTypeEnum] = None


class UserItem(BaseModel):
    id: str
    first_name: str
    last_name: str
    username: str
    email: str
    phone: Optional[str] = None
    user_type: str
    create_time: Optional[str] = None
    update_time: Optional[str] = None


UserResponse = ResponseEnvelope[UserItem]
UserListResponse = ResponseEnvelope[List[UserItem]]
