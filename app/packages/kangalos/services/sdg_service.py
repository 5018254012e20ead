"""SDG 服务：目录维护、项目关联以及覆盖率统计。"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from app.packages.kangalos.core.exceptions import BadRequestError, ConflictError, NotFoundError
from app.packages.kangalos.core.responses import create_response, paginated_response
from app.packages.kangalos.crud.projects import project_crud
from app.packages.kangalos.crud.query import QueryParams
from app.packages.kangalos.crud.sdgs import project_sdg_crud, sdg_crud
from app.packages.kangalos.models.project import Project, ProjectSdg
from app.packages.kangalos.models.sdg import Sdg
from app.packages.kangalos.services.infrastructure import check_duplicate, check_record_exists
from app.packages.kangalos.services.project_service import project_service

logger = logging.getLogger(__name__)


class SdgService:
    def create(self, db: Session, *, payload: dict[str, Any]) -> dict:
        check_duplicate(db, Sdg, {"number": payload["number"]}, label="SDG")
        check_duplicate(db, Sdg, {"name": payload["name"]}, label="SDG")
        sdg = sdg_crud.create(db, payload)
        logger.info("Created SDG %s (%s)", sdg.number, sdg.name)
        return create_response("SDG created successfully", self._serialize(sdg))

    def list_sdgs(
        self,
        db: Session,
        *,
        params: QueryParams,
        page: int,
        limit: int,
        base_url: str,
    ) -> dict:
        result = sdg_crud.list_with_filters(db, params, page=page, limit=limit)
        return paginated_response("SDGs retrieved successfully", result, base_url, self._serialize)

    def get_detail(self, db: Session, *, sdg_id: str) -> dict:
        sdg = check_record_exists(db, Sdg, sdg_id, "SDG")
        return create_response("SDG retrieved successfully", self._serialize(sdg))

    def update(self, db: Session, *, sdg_id: str, changes: dict[str, Any]) -> dict:
        sdg = check_record_exists(db, Sdg, sdg_id, "SDG")
        for field in ("number", "name"):
            if changes.get(field) is not None:
                check_duplicate(db, Sdg, {field: changes[field]}, exclude_id=sdg.id, label="SDG")
        sdg = sdg_crud.update(db, sdg, changes)
        logger.info("Updated SDG %s", sdg.id)
        return create_response("SDG updated successfully", self._serialize(sdg))

    def delete(self, db: Session, *, sdg_id: str) -> dict:
        sdg = check_record_exists(db, Sdg, sdg_id, "SDG")
        if project_sdg_crud.count_where(db, ProjectSdg.sdg_id == sdg.id):
            logger.warning("Refusing to delete SDG %s linked to projects", sdg.id)
            raise BadRequestError("Cannot delete SDG linked to projects")
        sdg_crud.delete(db, sdg)
        logger.info("Deleted SDG %s", sdg_id)
        return create_response("SDG deleted successfully", {"id": sdg.id})

    # ------------------------------------------------------------------
    # 项目关联
    # ------------------------------------------------------------------

    def link_project(self, db: Session, *, project_id: str, sdg_id: str) -> dict:
        project = check_record_exists(db, Project, project_id, "Project")
        sdg = check_record_exists(db, Sdg, sdg_id, "SDG")
        if project_sdg_crud.get_pair(db, project.id, sdg.id) is not None:
            raise ConflictError("SDG is already linked to this project")
        link = project_sdg_crud.create(db, {"project_id": project.id, "sdg_id": sdg.id})
        logger.info("Linked SDG %s to project %s", sdg.id, project.id)
        return create_response("SDG linked to project successfully", self._serialize_link(link))

    def unlink_project(self, db: Session, *, project_id: str, sdg_id: str) -> dict:
        project = check_record_exists(db, Project, project_id, "Project")
        sdg = check_record_exists(db, Sdg, sdg_id, "SDG")
        link = project_sdg_crud.get_pair(db, project.id, sdg.id)
        if link is None:
            raise NotFoundError("SDG is not linked to this project")
        data = self._serialize_link(link)
        project_sdg_crud.delete(db, link)
        logger.info("Unlinked SDG %s from project %s", sdg.id, project.id)
        return create_response("SDG removed from project successfully", data)

    def list_links(self, db: Session) -> dict:
        links = project_sdg_crud.list_all(db, order_by=[ProjectSdg.create_time.asc(), ProjectSdg.project_id.asc()])
        return create_response("Project SDGs retrieved successfully", [self._serialize_link(link) for link in links])

    def sdgs_for_project(self, db: Session, *, project_id: str) -> dict:
        project = check_record_exists(db, Project, project_id, "Project")
        sdgs = project_sdg_crud.sdgs_for_project(db, project.id)
        return create_response("Project SDGs retrieved successfully", [self._serialize(sdg) for sdg in sdgs])

    def projects_for_sdg(self, db: Session, *, sdg_id: str) -> dict:
        sdg = check_record_exists(db, Sdg, sdg_id, "SDG")
        projects = project_sdg_crud.projects_for_sdg(db, sdg.id)
        return create_response(
            "Projects retrieved successfully", [project_service._serialize(project) for project in projects]
        )

    # ------------------------------------------------------------------
    # 统计
    # ------------------------------------------------------------------

    def statistics(self, db: Session) -> dict:
        data = [{"sdg": self._serialize(sdg), "count": count} for sdg, count in sdg_crud.link_counts(db)]
        return create_response("SDG statistics retrieved successfully", data)

    def coverage(self, db: Session) -> dict:
        """关联了至少一个 SDG 的项目占全部项目的比例，无项目时为 0。"""
        total = project_crud.count_where(db)
        linked = project_sdg_crud.linked_project_count(db)
        data = {
            "total_projects": total,
            "projects_with_sdgs": linked,
            "coverage": linked / total if total else 0.0,
        }
        return create_response("SDG coverage retrieved successfully", data)

    @staticmethod
    def _serialize(sdg: Sdg) -> dict[str, Any]:
        return {"id": sdg.id, "number": sdg.number, "name": sdg.name, "description": sdg.description}

    @classmethod
    def _serialize_link(cls, link: ProjectSdg) -> dict[str, Any]:
        return {
            "project_id": link.project_id,
            "sdg_id": link.sdg_id,
            "sdg": cls._serialize(link.sdg) if link.sdg else None,
        }


sdg_service = SdgService()
