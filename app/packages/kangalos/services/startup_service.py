"""初创企业服务：每个项目至多关联一家初创企业。"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from app.packages.kangalos.core.exceptions import ConflictError, NotFoundError
from app.packages.kangalos.core.responses import create_response, paginated_response
from app.packages.kangalos.core.timezone import format_datetime
from app.packages.kangalos.crud.query import QueryParams
from app.packages.kangalos.crud.startups import startup_crud
from app.packages.kangalos.models.project import Project
from app.packages.kangalos.models.startup import Startup
from app.packages.kangalos.services.infrastructure import check_record_exists, ensure_uuid

logger = logging.getLogger(__name__)


class StartupService:
    def create(self, db: Session, *, payload: dict[str, Any]) -> dict:
        project = check_record_exists(db, Project, payload["project_id"], "Project")
        self._assert_project_free(db, project.id)
        payload["project_id"] = project.id
        startup = startup_crud.create(db, payload)
        logger.info("Created startup %s for project %s", startup.id, project.id)
        return create_response("Startup created successfully", self._serialize(startup))

    def list_startups(
        self,
        db: Session,
        *,
        params: QueryParams,
        page: int,
        limit: int,
        base_url: str,
    ) -> dict:
        if "project_id" in params.filters:
            params.filters["project_id"] = ensure_uuid(params.filters["project_id"], "Project")
        result = startup_crud.list_with_filters(db, params, page=page, limit=limit)
        return paginated_response("Startups retrieved successfully", result, base_url, self._serialize)

    def get_detail(self, db: Session, *, startup_id: str) -> dict:
        startup = check_record_exists(db, Startup, startup_id, "Startup")
        return create_response("Startup retrieved successfully", self._serialize(startup))

    def get_by_project(self, db: Session, *, project_id: str) -> dict:
        project = check_record_exists(db, Project, project_id, "Project")
        startup = startup_crud.get_by_project(db, project.id)
        if startup is None:
            raise NotFoundError(f"No startup found for project {project.id}")
        return create_response("Startup retrieved successfully", self._serialize(startup))

    def update(self, db: Session, *, startup_id: str, changes: dict[str, Any]) -> dict:
        startup = check_record_exists(db, Startup, startup_id, "Startup")
        if changes.get("project_id"):
            project = check_record_exists(db, Project, changes["project_id"], "Project")
            if project.id != startup.project_id:
                self._assert_project_free(db, project.id)
            changes["project_id"] = project.id
        startup = startup_crud.update(db, startup, changes)
        logger.info("Updated startup %s", startup.id)
        return create_response("Startup updated successfully", self._serialize(startup))

    def delete(self, db: Session, *, startup_id: str) -> dict:
        startup = check_record_exists(db, Startup, startup_id, "Startup")
        startup_crud.delete(db, startup)
        logger.info("Deleted startup %s", startup_id)
        return create_response("Startup deleted successfully", {"id": startup.id})

    @staticmethod
    def _assert_project_free(db: Session, project_id: str) -> None:
        if startup_crud.get_by_project(db, project_id) is not None:
            raise ConflictError("Project already has a startup")

    @staticmethod
    def _serialize(startup: Startup) -> dict[str, Any]:
        return {
            "id": startup.id,
            "name": startup.name,
            "description": startup.description,
            "project_id": startup.project_id,
            "year": startup.year,
            "registered": startup.registered,
            "create_time": format_datetime(startup.create_time),
            "update_time": format_datetime(startup.update_time),
        }


startup_service = StartupService()
