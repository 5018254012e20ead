"""附件相关的请求与响应模型。"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, HttpUrl, field_serializer

from app.packages.kangalos.api.v1.schemas.common import PartialUpdateRequest, ResponseEnvelope


class AttachmentCreateRequest(BaseModel):
    project_id: Optional[str] = Field(default=None, description="所属项目，可为空")
    uploader_id: str
    filename: str = Field(..., min_length=1, max_length=255)
    url: HttpUrl = Field(..., description="文件在外部存储中的地址")
    file_type: Optional[str] = Field(default=None, max_length=100, description="MIME 类型")
    file_size: Optional[int] = Field(default=None, ge=0, description="文件大小（字节）")

    @field_serializer("url")
    def _url_as_text(self, url: HttpUrl) -> str:
        return str(url)


class AttachmentUpdateRequest(PartialUpdateRequest):
    required_fields = ("uploader_id", "filename", "url")

    project_id: Optional[str] = None
    uploader_id: Optional[str] = None
    filename: Optional[str] = Field(default=None, min_length=1, max_length=255)
    url: Optional[HttpUrl] = None
    file_type: Optional[str] = Field(default=None, max_length=100)
    file_size: Optional[int] = Field(default=None, ge=0)

    @field_serializer("url")
    def _url_as_text(self, url: Optional[HttpUrl]) -> Optional[str]:
        return str(url) if url is not None else None


class AttachmentItem(BaseModel):
    id: str
    project_id: Optional[str] = None
    uploader_id: str
    filename: str
    url: str
    file_type: Optional[str] = None
    file_size: Optional[int] = None
    create_time: Optional[str] = None


class DownloadPayload(BaseModel):
    url: str


AttachmentResponse = ResponseEnvelope[AttachmentItem]
AttachmentListResponse = ResponseEnvelope[List[AttachmentItem]]
DownloadResponse = ResponseEnvelope[DownloadPayload]
