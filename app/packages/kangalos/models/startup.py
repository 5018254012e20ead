"""由项目孵化出的初创企业模型。"""

from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.packages.kangalos.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Startup(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """每个项目至多孵化一家初创企业。"""

    __tablename__ = "startups"

    name: Mapped[str] = mapped_column(String(255), index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    project_id: Mapped[str] = mapped_column(String(36), ForeignKey("projects.id"), unique=True, index=True)
    year: Mapped[int] = mapped_column(Integer, index=True)
    registered: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)

    project: Mapped["Project"] = relationship("Project", back_populates="startup")
