"""用户角色分配服务。"""

from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from app.packages.kangalos.core.exceptions import ConflictError, NotFoundError
from app.packages.kangalos.core.responses import create_response, paginated_response
from app.packages.kangalos.core.timezone import format_datetime
from app.packages.kangalos.crud.query import QueryParams
from app.packages.kangalos.crud.roles import user_role_crud
from app.packages.kangalos.models.role import Role, UserRole
from app.packages.kangalos.models.user import User
from app.packages.kangalos.services.infrastructure import check_record_exists, ensure_uuid

logger = logging.getLogger(__name__)


class UserRoleService:
    def assign(self, db: Session, *, user_id: str, role_id: str) -> dict:
        user = check_record_exists(db, User, user_id, "User")
        role = check_record_exists(db, Role, role_id, "Role")
        if user_role_crud.get_pair(db, user.id, role.id) is not None:
            raise ConflictError("Role is already assigned to this user")
        link = user_role_crud.create(db, {"user_id": user.id, "role_id": role.id})
        logger.info("Assigned role %s to user %s", role.id, user.id)
        return create_response("Role assigned to user successfully", self._serialize(link))

    def list_assignments(
        self,
        db: Session,
        *,
        params: QueryParams,
        page: int,
        limit: int,
        base_url: str,
        user_id: Optional[str] = None,
        role_id: Optional[str] = None,
        message: str = "User roles retrieved successfully",
    ) -> dict:
        if user_id is not None:
            params.filters["user_id"] = ensure_uuid(user_id, "User")
        if role_id is not None:
            params.filters["role_id"] = ensure_uuid(role_id, "Role")
        result = user_role_crud.list_with_filters(
            db, params, page=page, limit=limit, query=user_role_crud.joined_query(db)
        )
        return paginated_response(message, result, base_url, self._serialize)

    def list_for_user(self, db: Session, *, user_id: str, params: QueryParams, page: int, limit: int,
                      base_url: str) -> dict:
        user = check_record_exists(db, User, user_id, "User")
        return self.list_assignments(
            db, params=params, page=page, limit=limit, base_url=base_url, user_id=user.id,
            message="Roles for user retrieved successfully",
        )

    def list_for_role(self, db: Session, *, role_id: str, params: QueryParams, page: int, limit: int,
                      base_url: str) -> dict:
        role = check_record_exists(db, Role, role_id, "Role")
        return self.list_assignments(
            db, params=params, page=page, limit=limit, base_url=base_url, role_id=role.id,
            message="Users for role retrieved successfully",
        )

    def remove(self, db: Session, *, user_id: str, role_id: str) -> dict:
        link = user_role_crud.get_pair(db, ensure_uuid(user_id, "User"), ensure_uuid(role_id, "Role"))
        if link is None:
            raise NotFoundError("Role is not assigned to this user")
        data = self._serialize(link)
        user_role_crud.delete(db, link)
        logger.info("Removed role %s from user %s", data["role_id"], data["user_id"])
        return create_response("Role removed from user successfully", data)

    @staticmethod
    def _serialize(link: UserRole) -> dict[str, Any]:
        user = link.user
        role = link.role
        return {
            "user_id": link.user_id,
            "role_id": link.role_id,
            "user": {
                "id": user.id,
                "first_name": user.first_name,
                "last_name": user.last_name,
                "email": user.email,
            } if user else None,
            "role": {"id": role.id, "name": role.name} if role else None,
            "create_time": format_datetime(link.create_time),
        }


user_role_service = UserRoleService()
