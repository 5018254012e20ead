"""附件服务：只维护文件元数据与外部存储地址。"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from app.packages.kangalos.core.responses import create_response, paginated_response
from app.packages.kangalos.core.timezone import format_datetime
from app.packages.kangalos.crud.attachments import attachment_crud
from app.packages.kangalos.crud.query import QueryParams
from app.packages.kangalos.models.attachment import Attachment
from app.packages.kangalos.models.project import Project
from app.packages.kangalos.models.user import User
from app.packages.kangalos.services.infrastructure import check_record_exists, ensure_uuid

logger = logging.getLogger(__name__)


class AttachmentService:
    def create(self, db: Session, *, payload: dict[str, Any]) -> dict:
        if payload.get("project_id"):
            payload["project_id"] = check_record_exists(db, Project, payload["project_id"], "Project").id
        payload["uploader_id"] = check_record_exists(db, User, payload["uploader_id"], "Uploader").id
        attachment = attachment_crud.create(db, payload)
        logger.info("Registered attachment %s (%s)", attachment.id, attachment.filename)
        return create_response("Attachment created successfully", self._serialize(attachment))

    def list_attachments(
        self,
        db: Session,
        *,
        params: QueryParams,
        page: int,
        limit: int,
        base_url: str,
    ) -> dict:
        for key, label in (("project_id", "Project"), ("uploader_id", "Uploader")):
            if key in params.filters:
                params.filters[key] = ensure_uuid(params.filters[key], label)
        result = attachment_crud.list_with_filters(db, params, page=page, limit=limit)
        return paginated_response("Attachments retrieved successfully", result, base_url, self._serialize)

    def get_detail(self, db: Session, *, attachment_id: str) -> dict:
        attachment = check_record_exists(db, Attachment, attachment_id, "Attachment")
        return create_response("Attachment retrieved successfully", self._serialize(attachment))

    def download(self, db: Session, *, attachment_id: str) -> dict:
        attachment = check_record_exists(db, Attachment, attachment_id, "Attachment")
        return create_response("Download URL retrieved successfully", {"url": attachment.url})

    def update(self, db: Session, *, attachment_id: str, changes: dict[str, Any]) -> dict:
        attachment = check_record_exists(db, Attachment, attachment_id, "Attachment")
        if changes.get("project_id"):
            changes["project_id"] = check_record_exists(db, Project, changes["project_id"], "Project").id
        if changes.get("uploader_id"):
            changes["uploader_id"] = check_record_exists(db, User, changes["uploader_id"], "Uploader").id
        attachment = attachment_crud.update(db, attachment, changes)
        logger.info("Updated attachment %s", attachment.id)
        return create_response("Attachment updated successfully", self._serialize(attachment))

    def delete(self, db: Session, *, attachment_id: str) -> dict:
        attachment = check_record_exists(db, Attachment, attachment_id, "Attachment")
        attachment_crud.delete(db, attachment)
        logger.info("Deleted attachment %s", attachment_id)
        return create_response("Attachment deleted successfully", {"id": attachment.id})

    @staticmethod
    def _serialize(attachment: Attachment) -> dict[str, Any]:
        return {
            "id": attachment.id,
            "project_id": attachment.project_id,
            "uploader_id": attachment.uploader_id,
            "filename": attachment.filename,
            "url": attachment.url,
            "file_type": attachment.file_type,
            "file_size": attachment.file_size,
            "create_time": format_datetime(attachment.create_time),
        }


attachment_service = AttachmentService()
