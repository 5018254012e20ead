"""项目报告服务：报告期进展与经费使用。"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy.orm import Session

from app.packages.kangalos.core.responses import create_response, paginated_response
from app.packages.kangalos.core.timezone import format_datetime, to_utc, utc_now
from app.packages.kangalos.crud.projects import project_report_crud
from app.packages.kangalos.crud.query import QueryParams
from app.packages.kangalos.models.project import Project, ProjectReport
from app.packages.kangalos.models.user import User
from app.packages.kangalos.services.infrastructure import check_record_exists

logger = logging.getLogger(__name__)


class ProjectReportService:
    def create(self, db: Session, *, payload: dict[str, Any]) -> dict:
        payload["project_id"] = check_record_exists(db, Project, payload["project_id"], "Project").id
        payload["submitted_by_id"] = check_record_exists(db, User, payload["submitted_by_id"], "Submitter").id
        payload["submitted_at"] = to_utc(payload.get("submitted_at")) or utc_now()
        report = project_report_crud.create(db, payload)
        logger.info("Submitted report %s for project %s", report.id, report.project_id)
        return create_response("Project report created successfully", self._serialize(report))

    def list_reports(
        self,
        db: Session,
        *,
        params: QueryParams,
        page: int,
        limit: int,
        base_url: str,
    ) -> dict:
        result = project_report_crud.list_with_filters(db, params, page=page, limit=limit)
        return paginated_response("Project reports retrieved successfully", result, base_url, self._serialize)

    def get_detail(self, db: Session, *, report_id: str) -> dict:
        report = check_record_exists(db, ProjectReport, report_id, "Project report")
        return create_response("Project report retrieved successfully", self._serialize(report))

    def update(self, db: Session, *, report_id: str, changes: dict[str, Any]) -> dict:
        report = check_record_exists(db, ProjectReport, report_id, "Project report")
        if changes.get("submitted_at") is not None:
            changes["submitted_at"] = to_utc(changes["submitted_at"])
        report = project_report_crud.update(db, report, changes)
        logger.info("Updated report %s", report.id)
        return create_response("Project report updated successfully", self._serialize(report))

    def delete(self, db: Session, *, report_id: str) -> dict:
        report = check_record_exists(db, ProjectReport, report_id, "Project report")
        project_report_crud.delete(db, report)
        logger.info("Deleted report %s", report_id)
        return create_response("Project report deleted successfully", {"id": report.id})

    @staticmethod
    def _serialize(report: ProjectReport) -> dict[str, Any]:
        fund_usage: Optional[Decimal] = report.fund_usage
        return {
            "id": report.id,
            "project_id": report.project_id,
            "title": report.title,
            "reporting_period": report.reporting_period,
            "content": report.content,
            "fund_usage": float(fund_usage) if fund_usage is not None else None,
            "submitted_by_id": report.submitted_by_id,
            "submitted_at": format_datetime(report.submitted_at),
        }


project_report_service = ProjectReportService()
