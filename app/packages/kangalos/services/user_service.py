"""用户服务：基础资料维护。认证与密码不在本服务范围内。"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from app.packages.kangalos.core.exceptions import BadRequestError
from app.packages.kangalos.core.responses import create_response, paginated_response
from app.packages.kangalos.core.timezone import format_datetime
from app.packages.kangalos.crud.positions import user_position_crud
from app.packages.kangalos.crud.projects import project_author_crud
from app.packages.kangalos.crud.query import QueryParams
from app.packages.kangalos.crud.roles import user_role_crud
from app.packages.kangalos.crud.users import user_crud
from app.packages.kangalos.models.position import UserPosition
from app.packages.kangalos.models.project import ProjectAuthor
from app.packages.kangalos.models.role import UserRole
from app.packages.kangalos.models.user import User
from app.packages.kangalos.services.infrastructure import check_duplicate, check_record_exists

logger = logging.getLogger(__name__)


class UserService:
    def create(self, db: Session, *, payload: dict[str, Any]) -> dict:
        self._assert_unique_constraints(db, payload)
        user = user_crud.create(db, payload)
        logger.info("Created user %s (%s)", user.id, user.username)
        return create_response("User created successfully", self._serialize(user))

    def list_users(
        self,
        db: Session,
        *,
        params: QueryParams,
        page: int,
        limit: int,
        base_url: str,
    ) -> dict:
        result = user_crud.list_with_filters(db, params, page=page, limit=limit)
        return paginated_response("Users retrieved successfully", result, base_url, self._serialize)

    def get_detail(self, db: Session, *, user_id: str) -> dict:
        user = check_record_exists(db, User, user_id, "User")
        return create_response("User retrieved successfully", self._serialize(user))

    def update(self, db: Session, *, user_id: str, changes: dict[str, Any]) -> dict:
        user = check_record_exists(db, User, user_id, "User")
        self._assert_unique_constraints(db, changes, exclude_id=user.id)
        user = user_crud.update(db, user, changes)
        logger.info("Updated user %s", user.id)
        return create_response("User updated successfully", self._serialize(user))

    def delete(self, db: Session, *, user_id: str) -> dict:
        user = check_record_exists(db, User, user_id, "User")
        if user_position_crud.count_where(db, UserPosition.user_id == user.id):
            raise BadRequestError("Cannot delete User with position assignments")
        if user_role_crud.count_where(db, UserRole.user_id == user.id):
            raise BadRequestError("Cannot delete User with assigned roles")
        if project_author_crud.count_where(db, ProjectAuthor.user_id == user.id):
            raise BadRequestError("Cannot delete User who is a project author")
        user_crud.delete(db, user)
        logger.info("Deleted user %s", user_id)
        return create_response("User deleted successfully", {"id": user.id})

    def _assert_unique_constraints(self, db: Session, values: dict[str, Any], exclude_id=None) -> None:
        for field in ("username", "email"):
            if values.get(field):
                check_duplicate(db, User, {field: values[field]}, exclude_id=exclude_id, label="User")

    @staticmethod
    def _serialize(user: User) -> dict[str, Any]:
        return {
            "id": user.id,
            "first_name": user.first_name,
            "last_name": user.last_name,
            "username": user.username,
            "email": user.email,
            "phone": user.phone,
            "user_type": user.user_type,
            "create_time": format_datetime(user.create_time),
            "update_time": format_datetime(user.update_time),
        }


user_service = UserService()
