"""岗位与任职记录模型。"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.packages.kangalos.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Position(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """组织单元下的岗位，例如“某学院院长”。"""

    __tablename__ = "positions"

    title: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    organisation_unit_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("organisation_units.id"), index=True
    )

    organisation_unit: Mapped["OrganisationUnit"] = relationship(
        "OrganisationUnit", back_populates="positions"
    )
    assignments: Mapped[List["UserPosition"]] = relationship(
        "UserPosition", back_populates="position"
    )


class UserPosition(TimestampMixin, Base):
    """任职区间 `[start_date, end_date)`，`end_date` 为空表示仍在任。

    复合主键 `(user_id, position_id, start_date)`；同一用户与岗位之间的
    区间不得重叠，由服务层在写入前校验。
    """

    __tablename__ = "user_positions"

    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), primary_key=True)
    position_id: Mapped[str] = mapped_column(String(36), ForeignKey("positions.id"), primary_key=True)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), primary_key=True)
    end_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True, index=True)

    user: Mapped["User"] = relationship("User", back_populates="positions")
    position: Mapped["Position"] = relationship("Position", back_populates="assignments")
