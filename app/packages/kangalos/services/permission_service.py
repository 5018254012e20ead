"""权限点服务。"""

from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from app.packages.kangalos.core.exceptions import ConflictError
from app.packages.kangalos.core.responses import create_response, paginated_response
from app.packages.kangalos.core.timezone import format_datetime
from app.packages.kangalos.crud.query import QueryParams
from app.packages.kangalos.crud.roles import permission_crud, role_permission_crud
from app.packages.kangalos.models.role import Permission, RolePermission
from app.packages.kangalos.services.infrastructure import check_duplicate, check_record_exists

logger = logging.getLogger(__name__)


class PermissionService:
    def create(self, db: Session, *, code: str, description: Optional[str] = None) -> dict:
        check_duplicate(db, Permission, {"code": code}, label="Permission")
        permission = permission_crud.create(db, {"code": code, "description": description})
        logger.info("Created permission %s", permission.code)
        return create_response("Permission created successfully", self._serialize(permission))

    def list_permissions(
        self,
        db: Session,
        *,
        params: QueryParams,
        page: int,
        limit: int,
        base_url: str,
    ) -> dict:
        result = permission_crud.list_with_filters(db, params, page=page, limit=limit)
        return paginated_response("Permissions retrieved successfully", result, base_url, self._serialize)

    def get_detail(self, db: Session, *, permission_id: str) -> dict:
        permission = check_record_exists(db, Permission, permission_id, "Permission")
        return create_response("Permission retrieved successfully", self._serialize(permission))

    def update(self, db: Session, *, permission_id: str, changes: dict[str, Any]) -> dict:
        permission = check_record_exists(db, Permission, permission_id, "Permission")
        if changes.get("code"):
            check_duplicate(db, Permission, {"code": changes["code"]}, exclude_id=permission.id, label="Permission")
        permission = permission_crud.update(db, permission, changes)
        logger.info("Updated permission %s", permission.id)
        return create_response("Permission updated successfully", self._serialize(permission))

    def delete(self, db: Session, *, permission_id: str) -> dict:
        permission = check_record_exists(db, Permission, permission_id, "Permission")
        if role_permission_crud.count_where(db, RolePermission.permission_id == permission.id):
            logger.warning("Refusing to delete permission %s still granted to roles", permission.code)
            raise ConflictError("Permission is assigned to roles and cannot be deleted")
        permission_crud.delete(db, permission)
        logger.info("Deleted permission %s", permission_id)
        return create_response("Permission deleted successfully", {"id": permission.id})

    @staticmethod
    def _serialize(permission: Permission) -> dict[str, Any]:
        return {
            "id": permission.id,
            "code": permission.code,
            "description": permission.description,
            "create_time": format_datetime(permission.create_time),
            "update_time": format_datetime(permission.update_time),
        }


permission_service = PermissionService()
