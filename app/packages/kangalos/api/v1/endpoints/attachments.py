"""附件相关的路由定义。"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from app.packages.kangalos.api.v1.schemas.attachments import (
    AttachmentCreateRequest,
    AttachmentListResponse,
    AttachmentResponse,
    AttachmentUpdateRequest,
    DownloadResponse,
)
from app.packages.kangalos.api.v1.schemas.common import DeletionResponse
from app.packages.kangalos.core.dependencies import ListParams, get_db
from app.packages.kangalos.services.attachment_service import attachment_service

router = APIRouter(prefix="/attachments", tags=["attachments"])


@router.post("", response_model=AttachmentResponse)
def create_attachment(payload: AttachmentCreateRequest, db: Session = Depends(get_db)) -> AttachmentResponse:
    return attachment_service.create(db, payload=payload.model_dump())


@router.get("", response_model=AttachmentListResponse)
def list_attachments(
    request: Request,
    project_id: Optional[str] = Query(None),
    uploader_id: Optional[str] = Query(None),
    params: ListParams = Depends(),
    db: Session = Depends(get_db),
) -> AttachmentListResponse:
    return attachment_service.list_attachments(
        db,
        params=params.to_query(project_id=project_id, uploader_id=uploader_id),
        page=params.page,
        limit=params.limit,
        base_url=request.url.path,
    )


@router.get("/{attachment_id}", response_model=AttachmentResponse)
def get_attachment(attachment_id: str, db: Session = Depends(get_db)) -> AttachmentResponse:
    return attachment_service.get_detail(db, attachment_id=attachment_id)


@router.get("/{attachment_id}/download", response_model=DownloadResponse)
def download_attachment(attachment_id: str, db: Session = Depends(get_db)) -> DownloadResponse:
    return attachment_service.download(db, attachment_id=attachment_id)


@router.patch("/{attachment_id}", response_model=AttachmentResponse)
def update_attachment(
    attachment_id: str,
    payload: AttachmentUpdateRequest,
    db: Session = Depends(get_db),
) -> AttachmentResponse:
    return attachment_service.update(
        db, attachment_id=attachment_id, changes=payload.model_dump(exclude_unset=True)
    )


@router.delete("/{attachment_id}", response_model=DeletionResponse)
def delete_attachment(attachment_id: str, db: Session = Depends(get_db)) -> DeletionResponse:
    return attachment_service.delete(db, attachment_id=attachment_id)
