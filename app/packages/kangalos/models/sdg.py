"""可持续发展目标（SDG）目录模型。"""

from typing import List, Optional

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.packages.kangalos.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Sdg(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "sdgs"

    number: Mapped[int] = mapped_column(Integer, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    projects: Mapped[List["ProjectSdg"]] = relationship("ProjectSdg", back_populates="sdg")
