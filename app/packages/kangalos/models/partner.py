"""资助方与干系人模型：二者字段结构相同，分别维护。"""

from typing import List, Optional

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.packages.kangalos.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Funder(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """项目资助方，名称全局唯一。"""

    __tablename__ = "funders"

    name: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    funder_type: Mapped[str] = mapped_column(String(50), index=True)
    contact_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    contact_phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    projects: Mapped[List["ProjectFunder"]] = relationship("ProjectFunder", back_populates="funder")


class Stakeholder(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """项目干系人，可选归属组织单元。"""

    __tablename__ = "stakeholders"

    name: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    stakeholder_type: Mapped[str] = mapped_column(String(50), index=True)
    contact_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    contact_phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    organisation_unit_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("organisation_units.id"), nullable=True, index=True
    )

    projects: Mapped[List["ProjectStakeholder"]] = relationship(
        "ProjectStakeholder", back_populates="stakeholder"
    )
