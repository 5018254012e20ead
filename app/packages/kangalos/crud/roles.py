"""角色、权限及关联表 CRUD。"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import Session

from app.packages.kangalos.crud.base import CRUDBase
from app.packages.kangalos.crud.query import QueryConfig
from app.packages.kangalos.models.role import Permission, Role, RolePermission, UserRole
from app.packages.kangalos.models.user import User


class CRUDRole(CRUDBase[Role]):
    query_config = QueryConfig(
        searchable_fields=("name", "description"),
        sortable_fields=("name", "id", "organisation_unit_id"),
        default_sort="name",
    )


class CRUDPermission(CRUDBase[Permission]):
    query_config = QueryConfig(
        searchable_fields=("code", "description"),
        sortable_fields=("code", "id"),
        default_sort="code",
    )

    def get_by_code(self, db: Session, code: str) -> Optional[Permission]:
        return self.query(db).filter(Permission.code == code).first()


class CRUDRolePermission(CRUDBase[RolePermission]):
    def get_pair(self, db: Session, role_id: str, permission_id: str) -> Optional[RolePermission]:
        return db.get(RolePermission, (role_id, permission_id))

    def list_permissions(self, db: Session, role_id: str) -> List[Permission]:
        return (
            db.query(Permission)
            .join(RolePermission, RolePermission.permission_id == Permission.id)
            .filter(RolePermission.role_id == role_id)
            .order_by(Permission.code.asc())
            .all()
        )


class CRUDUserRole(CRUDBase[UserRole]):
    query_config = QueryConfig(
        searchable_fields=(User.first_name, User.last_name, User.email, Role.name),
        sortable_fields=("user_id", "role_id"),
        default_sort="user_id",
    )

    def get_pair(self, db: Session, user_id: str, role_id: str) -> Optional[UserRole]:
        return db.get(UserRole, (user_id, role_id))

    def joined_query(self, db: Session):
        return (
            self.query(db)
            .join(User, User.id == UserRole.user_id)
            .join(Role, Role.id == UserRole.role_id)
        )


role_crud = CRUDRole(Role)
permission_crud = CRUDPermission(Permission)
role_permission_crud = CRUDRolePermission(RolePermission)
user_role_crud = CRUDUserRole(UserRole)
