"""角色管理服务：角色维护以及角色与权限的关联。"""

from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from app.packages.kangalos.core.exceptions import ConflictError, NotFoundError
from app.packages.kangalos.core.responses import create_response, paginated_response
from app.packages.kangalos.core.timezone import format_datetime
from app.packages.kangalos.crud.query import QueryParams
from app.packages.kangalos.crud.roles import role_crud, role_permission_crud, user_role_crud
from app.packages.kangalos.models.organisation import OrganisationUnit
from app.packages.kangalos.models.role import Permission, Role, UserRole
from app.packages.kangalos.services.infrastructure import check_duplicate, check_record_exists
from app.packages.kangalos.services.permission_service import permission_service

logger = logging.getLogger(__name__)


class RoleService:
    """聚合角色管理相关的业务能力。"""

    def list_roles(
        self,
        db: Session,
        *,
        params: QueryParams,
        page: int,
        limit: int,
        base_url: str,
    ) -> dict:
        result = role_crud.list_with_filters(db, params, page=page, limit=limit)
        return paginated_response("Roles retrieved successfully", result, base_url, self._serialize_role)

    def get_detail(self, db: Session, *, role_id: str) -> dict:
        role = check_record_exists(db, Role, role_id, "Role")
        data = self._serialize_role(role)
        data["permissions"] = [
            permission_service._serialize(item) for item in role_permission_crud.list_permissions(db, role.id)
        ]
        return create_response("Role retrieved successfully", data)

    def create(
        self,
        db: Session,
        *,
        name: str,
        description: Optional[str] = None,
        organisation_unit_id: Optional[str] = None,
    ) -> dict:
        organisation_unit_id = self._resolve_unit(db, organisation_unit_id)
        self._assert_unique_constraints(db, name=name, organisation_unit_id=organisation_unit_id)
        role = role_crud.create(
            db, {"name": name, "description": description, "organisation_unit_id": organisation_unit_id}
        )
        logger.info("Created role %s (%s)", role.id, role.name)
        return create_response("Role created successfully", self._serialize_role(role))

    def update(self, db: Session, *, role_id: str, changes: dict[str, Any]) -> dict:
        role = check_record_exists(db, Role, role_id, "Role")
        if "organisation_unit_id" in changes:
            changes["organisation_unit_id"] = self._resolve_unit(db, changes["organisation_unit_id"])
        if "name" in changes or "organisation_unit_id" in changes:
            self._assert_unique_constraints(
                db,
                name=changes.get("name", role.name),
                organisation_unit_id=changes.get("organisation_unit_id", role.organisation_unit_id),
                exclude_id=role.id,
            )
        role = role_crud.update(db, role, changes)
        logger.info("Updated role %s", role.id)
        return create_response("Role updated successfully", self._serialize_role(role))

    def delete(self, db: Session, *, role_id: str) -> dict:
        role = check_record_exists(db, Role, role_id, "Role")
        if user_role_crud.count_where(db, UserRole.role_id == role.id):
            logger.warning("Refusing to delete role %s still assigned to users", role.id)
            raise ConflictError("Role is assigned to users and cannot be deleted")
        for link in list(role.permissions):
            db.delete(link)
        role_crud.delete(db, role)
        logger.info("Deleted role %s", role_id)
        return create_response("Role deleted successfully", {"id": role.id})

    # ------------------------------------------------------------------
    # 角色权限
    # ------------------------------------------------------------------

    def list_permissions(self, db: Session, *, role_id: str) -> dict:
        role = check_record_exists(db, Role, role_id, "Role")
        items = [permission_service._serialize(item) for item in role_permission_crud.list_permissions(db, role.id)]
        return create_response("Role permissions retrieved successfully", items)

    def assign_permission(self, db: Session, *, role_id: str, permission_id: str) -> dict:
        role = check_record_exists(db, Role, role_id, "Role")
        permission = check_record_exists(db, Permission, permission_id, "Permission")
        if role_permission_crud.get_pair(db, role.id, permission.id) is not None:
            raise ConflictError("Permission is already assigned to this role")
        role_permission_crud.create(db, {"role_id": role.id, "permission_id": permission.id})
        logger.info("Granted permission %s to role %s", permission.code, role.id)
        return create_response(
            "Permission assigned to role successfully",
            {"role_id": role.id, "permission": permission_service._serialize(permission)},
        )

    def remove_permission(self, db: Session, *, role_id: str, permission_id: str) -> dict:
        role = check_record_exists(db, Role, role_id, "Role")
        permission = check_record_exists(db, Permission, permission_id, "Permission")
        link = role_permission_crud.get_pair(db, role.id, permission.id)
        if link is None:
            raise NotFoundError("Permission is not assigned to this role")
        role_permission_crud.delete(db, link)
        logger.info("Revoked permission %s from role %s", permission.code, role.id)
        return create_response(
            "Permission removed from role successfully",
            {"role_id": role.id, "permission_id": permission.id},
        )

    # ------------------------------------------------------------------
    # 内部辅助方法
    # ------------------------------------------------------------------

    @staticmethod
    def _resolve_unit(db: Session, organisation_unit_id: Optional[str]) -> Optional[str]:
        if not organisation_unit_id:
            return None
        return check_record_exists(db, OrganisationUnit, organisation_unit_id, "Organisation unit").id

    def _assert_unique_constraints(
        self,
        db: Session,
        *,
        name: str,
        organisation_unit_id: Optional[str],
        exclude_id: Optional[str] = None,
    ) -> None:
        check_duplicate(
            db,
            Role,
            {"name": name, "organisation_unit_id": organisation_unit_id},
            exclude_id=exclude_id,
            label="Role",
        )

    @staticmethod
    def _serialize_role(role: Role) -> dict[str, Any]:
        return {
            "id": role.id,
            "name": role.name,
            "description": role.description,
            "organisation_unit_id": role.organisation_unit_id,
            "create_time": format_datetime(role.create_time),
            "update_time": format_datetime(role.update_time),
        }


role_service = RoleService()
