"""组织单元模型：大学、学院、学院下属学校等层级机构。"""

from typing import List, Optional

from sqlalchemy import CheckConstraint, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.packages.kangalos.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class OrganisationUnit(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """组织单元实体，通过 `parent_id` 形成邻接表树。

    - `code` 全局唯一但可为空（下属学校通常没有代码）；
    - 防止自引用（`parent_id != id`），更深的环由业务层拦截；
    - 删除前需确认不存在子节点，不做级联删除。
    """

    __tablename__ = "organisation_units"
    __table_args__ = (
        CheckConstraint("parent_id IS NULL OR parent_id <> id", name="no_self_parent"),
    )

    name: Mapped[str] = mapped_column(String(255), index=True)
    code: Mapped[Optional[str]] = mapped_column(String(50), unique=True, nullable=True)
    parent_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("organisation_units.id"), nullable=True, index=True
    )

    parent: Mapped[Optional["OrganisationUnit"]] = relationship(
        "OrganisationUnit",
        remote_side="OrganisationUnit.id",
        back_populates="children",
    )
    children: Mapped[List["OrganisationUnit"]] = relationship(
        "OrganisationUnit",
        back_populates="parent",
    )
    positions: Mapped[List["Position"]] = relationship(
        "Position",
        back_populates="organisation_unit",
    )
