"""项目及其资助、干系人、评审、报告、作者与 SDG 关联模型。"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.packages.kangalos.core.enums import (
    AuthorRoleEnum,
    EvaluationStatusEnum,
    ProjectStatusEnum,
    StakeholderRoleEnum,
)
from app.packages.kangalos.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Project(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """科研/创新项目，归属某个组织单元。"""

    __tablename__ = "projects"

    title: Mapped[str] = mapped_column(String(255), index=True)
    title_norm: Mapped[str] = mapped_column(String(255), index=True)
    abstract: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    project_type: Mapped[str] = mapped_column(String(100), index=True)
    year: Mapped[int] = mapped_column(Integer, index=True)
    status: Mapped[str] = mapped_column(String(20), default=ProjectStatusEnum.PENDING.value, index=True)
    innovation_field: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    expected_ip: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    progress_percent: Mapped[Optional[Decimal]] = mapped_column(Numeric(5, 2), nullable=True)
    submitted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    organisation_unit_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("organisation_units.id"), index=True
    )

    organisation_unit: Mapped["OrganisationUnit"] = relationship("OrganisationUnit")
    funders: Mapped[List["ProjectFunder"]] = relationship(
        "ProjectFunder", back_populates="project", cascade="all, delete-orphan"
    )
    stakeholders: Mapped[List["ProjectStakeholder"]] = relationship(
        "ProjectStakeholder", back_populates="project", cascade="all, delete-orphan"
    )
    evaluations: Mapped[List["ProjectEvaluation"]] = relationship(
        "ProjectEvaluation", back_populates="project", cascade="all, delete-orphan"
    )
    reports: Mapped[List["ProjectReport"]] = relationship(
        "ProjectReport", back_populates="project", cascade="all, delete-orphan"
    )
    authors: Mapped[List["ProjectAuthor"]] = relationship(
        "ProjectAuthor", back_populates="project", cascade="all, delete-orphan"
    )
    sdgs: Mapped[List["ProjectSdg"]] = relationship(
        "ProjectSdg", back_populates="project", cascade="all, delete-orphan"
    )
    startup: Mapped[Optional["Startup"]] = relationship(
        "Startup", back_populates="project", cascade="all, delete-orphan", uselist=False
    )
    attachments: Mapped[List["Attachment"]] = relationship("Attachment", back_populates="project")


class ProjectFunder(TimestampMixin, Base):
    __tablename__ = "project_funders"

    project_id: Mapped[str] = mapped_column(String(36), ForeignKey("projects.id"), primary_key=True)
    funder_id: Mapped[str] = mapped_column(String(36), ForeignKey("funders.id"), primary_key=True)
    amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(14, 2), nullable=True)

    project: Mapped["Project"] = relationship("Project", back_populates="funders")
    funder: Mapped["Funder"] = relationship("Funder", back_populates="projects")


class ProjectStakeholder(TimestampMixin, Base):
    __tablename__ = "project_stakeholders"

    project_id: Mapped[str] = mapped_column(String(36), ForeignKey("projects.id"), primary_key=True)
    stakeholder_id: Mapped[str] = mapped_column(String(36), ForeignKey("stakeholders.id"), primary_key=True)
    role: Mapped[str] = mapped_column(String(20), default=StakeholderRoleEnum.PARTNER.value)

    project: Mapped["Project"] = relationship("Project", back_populates="stakeholders")
    stakeholder: Mapped["Stakeholder"] = relationship("Stakeholder", back_populates="projects")


class ProjectEvaluation(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """评审记录：评审人对项目打分（0-100）。"""

    __tablename__ = "project_evaluations"

    project_id: Mapped[str] = mapped_column(String(36), ForeignKey("projects.id"), index=True)
    evaluator_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), index=True)
    score: Mapped[int] = mapped_column(Integer)
    comments: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), default=EvaluationStatusEnum.PENDING.value, index=True)

    project: Mapped["Project"] = relationship("Project", back_populates="evaluations")
    evaluator: Mapped["User"] = relationship("User")


class ProjectReport(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """项目进展报告，记录报告期与经费使用情况。"""

    __tablename__ = "project_reports"

    project_id: Mapped[str] = mapped_column(String(36), ForeignKey("projects.id"), index=True)
    title: Mapped[str] = mapped_column(String(100), index=True)
    reporting_period: Mapped[Optional[str]] = mapped_column(String(50), nullable=True, index=True)
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    fund_usage: Mapped[Optional[Decimal]] = mapped_column(Numeric(14, 2), nullable=True)
    submitted_by_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), index=True)
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )

    project: Mapped["Project"] = relationship("Project", back_populates="reports")
    submitted_by: Mapped["User"] = relationship("User")


class ProjectAuthor(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """项目作者：同一用户在一个项目中只署名一次。"""

    __tablename__ = "project_authors"
    __table_args__ = (UniqueConstraint("project_id", "user_id", name="uq_project_authors_project_user"),)

    project_id: Mapped[str] = mapped_column(String(36), ForeignKey("projects.id"), index=True)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), index=True)
    role: Mapped[str] = mapped_column(String(20), default=AuthorRoleEnum.CO_AUTHOR.value, index=True)

    project: Mapped["Project"] = relationship("Project", back_populates="authors")
    user: Mapped["User"] = relationship("User")


class ProjectSdg(TimestampMixin, Base):
    __tablename__ = "project_sdgs"

    project_id: Mapped[str] = mapped_column(String(36), ForeignKey("projects.id"), primary_key=True)
    sdg_id: Mapped[str] = mapped_column(String(36), ForeignKey("sdgs.id"), primary_key=True)

    project: Mapped["Project"] = relationship("Project", back_populates="sdgs")
    sdg: Mapped["Sdg"] = relationship("Sdg", back_populates="projects")
