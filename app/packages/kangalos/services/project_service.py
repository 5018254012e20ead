"""项目服务：项目维护以及项目与资助方、干系人的关联。"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy.orm import Session

from app.packages.kangalos.core.exceptions import ConflictError, NotFoundError
from app.packages.kangalos.core.responses import create_response, paginated_response
from app.packages.kangalos.core.timezone import format_datetime, to_utc
from app.packages.kangalos.crud.projects import (
    project_crud,
    project_funder_crud,
    project_stakeholder_crud,
)
from app.packages.kangalos.crud.query import QueryParams
from app.packages.kangalos.models.organisation import OrganisationUnit
from app.packages.kangalos.models.partner import Funder, Stakeholder
from app.packages.kangalos.models.project import Project, ProjectFunder, ProjectStakeholder
from app.packages.kangalos.services.infrastructure import check_record_exists

logger = logging.getLogger(__name__)


def normalize_title(title: str) -> str:
    """标题归一化：小写并压缩空白，用于检索与查重。"""
    return " ".join(title.lower().split())


def _as_number(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


class ProjectService:
    """聚合项目相关的业务能力。"""

    def create(self, db: Session, *, payload: dict[str, Any]) -> dict:
        unit = check_record_exists(db, OrganisationUnit, payload["organisation_unit_id"], "Organisation unit")
        payload["organisation_unit_id"] = unit.id
        payload["title_norm"] = payload.get("title_norm") or normalize_title(payload["title"])
        if payload.get("submitted_at") is not None:
            payload["submitted_at"] = to_utc(payload["submitted_at"])
        project = project_crud.create(db, payload)
        logger.info("Created project %s (%s)", project.id, project.title)
        return create_response("Project created successfully", self._serialize(project))

    def list_projects(
        self,
        db: Session,
        *,
        params: QueryParams,
        page: int,
        limit: int,
        base_url: str,
    ) -> dict:
        result = project_crud.list_with_filters(
            db, params, page=page, limit=limit, extra_search=project_crud.search_extras(params.search)
        )
        return paginated_response("Projects retrieved successfully", result, base_url, self._serialize)

    def get_detail(self, db: Session, *, project_id: str) -> dict:
        project = check_record_exists(db, Project, project_id, "Project")
        data = self._serialize(project)
        data["funders"] = [self._serialize_funder_link(link) for link in project.funders]
        data["stakeholders"] = [self._serialize_stakeholder_link(link) for link in project.stakeholders]
        return create_response("Project retrieved successfully", data)

    def update(self, db: Session, *, project_id: str, changes: dict[str, Any]) -> dict:
        project = check_record_exists(db, Project, project_id, "Project")
        if changes.get("organisation_unit_id"):
            unit = check_record_exists(db, OrganisationUnit, changes["organisation_unit_id"], "Organisation unit")
            changes["organisation_unit_id"] = unit.id
        if changes.get("title") and "title_norm" not in changes:
            changes["title_norm"] = normalize_title(changes["title"])
        if changes.get("submitted_at") is not None:
            changes["submitted_at"] = to_utc(changes["submitted_at"])
        project = project_crud.update(db, project, changes)
        logger.info("Updated project %s", project.id)
        return create_response("Project updated successfully", self._serialize(project))

    def delete(self, db: Session, *, project_id: str) -> dict:
        project = check_record_exists(db, Project, project_id, "Project")
        project_crud.delete(db, project)
        logger.info("Deleted project %s with its dependent records", project_id)
        return create_response("Project deleted successfully", {"id": project.id})

    # ------------------------------------------------------------------
    # 项目资助方
    # ------------------------------------------------------------------

    def add_funder(
        self,
        db: Session,
        *,
        project_id: str,
        funder_id: str,
        amount: Optional[Decimal] = None,
    ) -> dict:
        project = check_record_exists(db, Project, project_id, "Project")
        funder = check_record_exists(db, Funder, funder_id, "Funder")
        if project_funder_crud.get_pair(db, project.id, funder.id) is not None:
            raise ConflictError("Funder is already linked to this project")
        link = project_funder_crud.create(db, {"project_id": project.id, "funder_id": funder.id, "amount": amount})
        logger.info("Linked funder %s to project %s", funder.id, project.id)
        return create_response("Project funder created successfully", self._serialize_funder_link(link))

    def list_funders(
        self,
        db: Session,
        *,
        project_id: str,
        params: QueryParams,
        page: int,
        limit: int,
        base_url: str,
    ) -> dict:
        project = check_record_exists(db, Project, project_id, "Project")
        params.filters["project_id"] = project.id
        result = project_funder_crud.list_with_filters(
            db, params, page=page, limit=limit, query=project_funder_crud.joined_query(db)
        )
        return paginated_response(
            "Project funders retrieved successfully", result, base_url, self._serialize_funder_link
        )

    def get_funder(self, db: Session, *, project_id: str, funder_id: str) -> dict:
        link = self._get_funder_link(db, project_id, funder_id)
        return create_response("Project funder retrieved successfully", self._serialize_funder_link(link))

    def update_funder(self, db: Session, *, project_id: str, funder_id: str, amount: Optional[Decimal]) -> dict:
        link = self._get_funder_link(db, project_id, funder_id)
        link = project_funder_crud.update(db, link, {"amount": amount})
        logger.info("Updated funding of project %s by funder %s", link.project_id, link.funder_id)
        return create_response("Project funder updated successfully", self._serialize_funder_link(link))

    def remove_funder(self, db: Session, *, project_id: str, funder_id: str) -> dict:
        link = self._get_funder_link(db, project_id, funder_id)
        data = self._serialize_funder_link(link)
        project_funder_crud.delete(db, link)
        logger.info("Unlinked funder %s from project %s", data["funder_id"], data["project_id"])
        return create_response("Project funder deleted successfully", data)

    # ------------------------------------------------------------------
    # 项目干系人
    # ------------------------------------------------------------------

    def add_stakeholder(self, db: Session, *, project_id: str, stakeholder_id: str, role: str) -> dict:
        project = check_record_exists(db, Project, project_id, "Project")
        stakeholder = check_record_exists(db, Stakeholder, stakeholder_id, "Stakeholder")
        if project_stakeholder_crud.get_pair(db, project.id, stakeholder.id) is not None:
            raise ConflictError("Stakeholder is already linked to this project")
        link = project_stakeholder_crud.create(
            db, {"project_id": project.id, "stakeholder_id": stakeholder.id, "role": role}
        )
        logger.info("Linked stakeholder %s to project %s as %s", stakeholder.id, project.id, role)
        return create_response("Stakeholder added to project successfully", self._serialize_stakeholder_link(link))

    def list_stakeholders(
        self,
        db: Session,
        *,
        project_id: str,
        params: QueryParams,
        page: int,
        limit: int,
        base_url: str,
    ) -> dict:
        project = check_record_exists(db, Project, project_id, "Project")
        params.filters["project_id"] = project.id
        result = project_stakeholder_crud.list_with_filters(
            db, params, page=page, limit=limit, query=project_stakeholder_crud.joined_query(db)
        )
        return paginated_response(
            "Project stakeholders retrieved successfully", result, base_url, self._serialize_stakeholder_link
        )

    def remove_stakeholder(self, db: Session, *, project_id: str, stakeholder_id: str) -> dict:
        project = check_record_exists(db, Project, project_id, "Project")
        stakeholder = check_record_exists(db, Stakeholder, stakeholder_id, "Stakeholder")
        link = project_stakeholder_crud.get_pair(db, project.id, stakeholder.id)
        if link is None:
            raise NotFoundError("Stakeholder is not linked to this project")
        data = self._serialize_stakeholder_link(link)
        project_stakeholder_crud.delete(db, link)
        logger.info("Unlinked stakeholder %s from project %s", stakeholder.id, project.id)
        return create_response("Stakeholder removed from project successfully", data)

    # ------------------------------------------------------------------
    # 内部辅助方法
    # ------------------------------------------------------------------

    def _get_funder_link(self, db: Session, project_id: str, funder_id: str) -> ProjectFunder:
        project = check_record_exists(db, Project, project_id, "Project")
        funder = check_record_exists(db, Funder, funder_id, "Funder")
        link = project_funder_crud.get_pair(db, project.id, funder.id)
        if link is None:
            raise NotFoundError("Funder is not linked to this project")
        return link

    @staticmethod
    def _serialize(project: Project) -> dict[str, Any]:
        return {
            "id": project.id,
            "title": project.title,
            "title_norm": project.title_norm,
            "abstract": project.abstract,
            "project_type": project.project_type,
            "year": project.year,
            "status": project.status,
            "innovation_field": project.innovation_field,
            "expected_ip": project.expected_ip,
            "progress_percent": _as_number(project.progress_percent),
            "submitted_at": format_datetime(project.submitted_at),
            "organisation_unit_id": project.organisation_unit_id,
            "create_time": format_datetime(project.create_time),
            "update_time": format_datetime(project.update_time),
        }

    @staticmethod
    def _serialize_funder_link(link: ProjectFunder) -> dict[str, Any]:
        funder = link.funder
        return {
            "project_id": link.project_id,
            "funder_id": link.funder_id,
            "amount": _as_number(link.amount),
            "funder_name": funder.name if funder else None,
        }

    @staticmethod
    def _serialize_stakeholder_link(link: ProjectStakeholder) -> dict[str, Any]:
        stakeholder = link.stakeholder
        return {
            "project_id": link.project_id,
            "stakeholder_id": link.stakeholder_id,
            "role": link.role,
            "stakeholder_name": stakeholder.name if stakeholder else None,
        }


project_service = ProjectService()
