"""通用响应封装模型。"""

from typing import Any, ClassVar, Dict, Generic, Optional, Tuple, TypeVar

from pydantic import BaseModel, Field, model_validator

T = TypeVar("T")


class ResponseEnvelope(BaseModel, Generic[T]):
    """系统统一的响应外层结构。"""

    status: bool
    message: str
    data: Optional[T] = None
    meta: Dict[str, Any] = Field(default_factory=dict)


class PartialUpdateRequest(BaseModel):
    """局部更新请求基类。

    ``required_fields`` 列出数据库中不可为空的列：这些字段可以省略，但不能显式传入 ``null``。
    """

    required_fields: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def _reject_explicit_nulls(self):
        for field in self.required_fields:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} must not be null")
        return self


class DeletionPayload(BaseModel):
    id: str


DeletionResponse = ResponseEnvelope[DeletionPayload]
