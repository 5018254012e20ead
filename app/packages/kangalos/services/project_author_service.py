"""项目作者服务：维护用户在项目中的署名角色。"""

from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from app.packages.kangalos.core.exceptions import ConflictError
from app.packages.kangalos.core.responses import create_response, paginated_response
from app.packages.kangalos.core.timezone import format_datetime
from app.packages.kangalos.crud.projects import project_author_crud
from app.packages.kangalos.crud.query import QueryParams
from app.packages.kangalos.models.project import Project, ProjectAuthor
from app.packages.kangalos.models.user import User
from app.packages.kangalos.services.infrastructure import check_record_exists, ensure_uuid

logger = logging.getLogger(__name__)


class ProjectAuthorService:
    def create(self, db: Session, *, project_id: str, user_id: str, role: str) -> dict:
        project = check_record_exists(db, Project, project_id, "Project")
        user = check_record_exists(db, User, user_id, "User")
        self._assert_unique(db, project.id, user.id)
        author = project_author_crud.create(db, {"project_id": project.id, "user_id": user.id, "role": role})
        logger.info("Added user %s as %s author of project %s", user.id, role, project.id)
        return create_response("Project author created successfully", self._serialize(author))

    def list_authors(
        self,
        db: Session,
        *,
        params: QueryParams,
        page: int,
        limit: int,
        base_url: str,
    ) -> dict:
        for key, label in (("project_id", "Project"), ("user_id", "User")):
            if key in params.filters:
                params.filters[key] = ensure_uuid(params.filters[key], label)
        result = project_author_crud.list_with_filters(
            db, params, page=page, limit=limit, query=project_author_crud.joined_query(db)
        )
        return paginated_response("Project authors retrieved successfully", result, base_url, self._serialize)

    def get_detail(self, db: Session, *, author_id: str) -> dict:
        author = check_record_exists(db, ProjectAuthor, author_id, "Project author")
        return create_response("Project author retrieved successfully", self._serialize(author))

    def update(self, db: Session, *, author_id: str, changes: dict[str, Any]) -> dict:
        author = check_record_exists(db, ProjectAuthor, author_id, "Project author")
        if changes.get("project_id"):
            changes["project_id"] = check_record_exists(db, Project, changes["project_id"], "Project").id
        if changes.get("user_id"):
            changes["user_id"] = check_record_exists(db, User, changes["user_id"], "User").id
        project_id = changes.get("project_id", author.project_id)
        user_id = changes.get("user_id", author.user_id)
        if (project_id, user_id) != (author.project_id, author.user_id):
            self._assert_unique(db, project_id, user_id)
        author = project_author_crud.update(db, author, changes)
        logger.info("Updated project author %s", author.id)
        return create_response("Project author updated successfully", self._serialize(author))

    def delete(self, db: Session, *, author_id: str) -> dict:
        author = check_record_exists(db, ProjectAuthor, author_id, "Project author")
        project_author_crud.delete(db, author)
        logger.info("Deleted project author %s", author_id)
        return create_response("Project author deleted successfully", {"id": author.id})

    @staticmethod
    def _assert_unique(db: Session, project_id: str, user_id: str) -> None:
        if project_author_crud.get_by_pair(db, project_id, user_id) is not None:
            raise ConflictError("User is already an author of this project")

    @staticmethod
    def _serialize(author: ProjectAuthor) -> dict[str, Any]:
        user: Optional[User] = author.user
        return {
            "id": author.id,
            "project_id": author.project_id,
            "user_id": author.user_id,
            "role": author.role,
            "user": (
                {"id": user.id, "first_name": user.first_name, "last_name": user.last_name, "email": user.email}
                if user
                else None
            ),
            "create_time": format_datetime(author.create_time),
        }


project_author_service = ProjectAuthorService()
