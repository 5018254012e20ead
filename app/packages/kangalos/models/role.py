"""角色、权限及其关联模型。"""

from typing import List, Optional

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.packages.kangalos.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Role(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """角色实体，可归属于某个组织单元；同一组织单元内名称唯一。"""

    __tablename__ = "roles"
    __table_args__ = (
        UniqueConstraint("organisation_unit_id", "name", name="uq_roles_unit_name"),
    )

    name: Mapped[str] = mapped_column(String(100), index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    organisation_unit_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("organisation_units.id"), nullable=True, index=True
    )

    organisation_unit: Mapped[Optional["OrganisationUnit"]] = relationship("OrganisationUnit")
    permissions: Mapped[List["RolePermission"]] = relationship("RolePermission", back_populates="role")
    users: Mapped[List["UserRole"]] = relationship("UserRole", back_populates="role")


class Permission(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """权限点，以唯一 `code` 标识，例如 `project:approve`。"""

    __tablename__ = "permissions"

    code: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    roles: Mapped[List["RolePermission"]] = relationship("RolePermission", back_populates="permission")


class RolePermission(TimestampMixin, Base):
    __tablename__ = "role_permissions"

    role_id: Mapped[str] = mapped_column(String(36), ForeignKey("roles.id"), primary_key=True)
    permission_id: Mapped[str] = mapped_column(String(36), ForeignKey("permissions.id"), primary_key=True)

    role: Mapped["Role"] = relationship("Role", back_populates="permissions")
    permission: Mapped["Permission"] = relationship("Permission", back_populates="roles")


class UserRole(TimestampMixin, Base):
    __tablename__ = "user_roles"

    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), primary_key=True)
    role_id: Mapped[str] = mapped_column(String(36), ForeignKey("roles.id"), primary_key=True)

    user: Mapped["User"] = relationship("User", back_populates="roles")
    role: Mapped["Role"] = relationship("Role", back_populates="users")
