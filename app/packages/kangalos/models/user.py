"""用户模型。"""

from typing import List, Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.packages.kangalos.core.enums import UserTypeEnum
from app.packages.kangalos.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class User(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """系统用户：任职、角色分配、项目评审与报告提交的主体。"""

    __tablename__ = "users"

    first_name: Mapped[str] = mapped_column(String(100), index=True)
    last_name: Mapped[str] = mapped_column(String(100), index=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    user_type: Mapped[str] = mapped_column(String(20), default=UserTypeEnum.INDIVIDUAL.value, index=True)

    positions: Mapped[List["UserPosition"]] = relationship("UserPosition", back_populates="user")
    roles: Mapped[List["UserRole"]] = relationship("UserRole", back_populates="user")
