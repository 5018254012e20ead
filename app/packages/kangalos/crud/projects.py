"""项目及其资助、干系人、评审、报告、作者 CRUD。"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from app.packages.kangalos.core.enums import ProjectStatusEnum
from app.packages.kangalos.crud.base import CRUDBase
from app.packages.kangalos.crud.query import QueryConfig
from app.packages.kangalos.models.user import User
from app.packages.kangalos.models.partner import Funder, Stakeholder
from app.packages.kangalos.models.project import (
    Project,
    ProjectAuthor,
    ProjectEvaluation,
    ProjectFunder,
    ProjectReport,
    ProjectStakeholder,
)


class CRUDProject(CRUDBase[Project]):
    query_config = QueryConfig(
        searchable_fields=("title", "title_norm", "abstract", "innovation_field"),
        sortable_fields=(
            "title",
            "title_norm",
            "abstract",
            "year",
            "innovation_field",
            "submitted_at",
            "progress_percent",
        ),
        default_sort="title",
    )

    def search_extras(self, term: Optional[str]) -> List[ColumnElement]:
        """搜索词恰好是状态名或年份时，额外按状态/年份精确匹配。"""
        term = (term or "").strip()
        if not term:
            return []
        extras: List[ColumnElement] = []
        status = term.upper()
        if status in ProjectStatusEnum.__members__:
            extras.append(Project.status == status)
        if term.isdigit():
            extras.append(Project.year == int(term))
        return extras

    def list_for_stakeholder(self, db: Session, stakeholder_id: str):
        return (
            self.query(db)
            .join(ProjectStakeholder, ProjectStakeholder.project_id == Project.id)
            .filter(ProjectStakeholder.stakeholder_id == stakeholder_id)
        )


class CRUDProjectFunder(CRUDBase[ProjectFunder]):
    query_config = QueryConfig(
        searchable_fields=(Funder.name, Funder.funder_type),
        sortable_fields=("amount", "funder_id", "project_id"),
        default_sort="funder_id",
    )

    def get_pair(self, db: Session, project_id: str, funder_id: str) -> Optional[ProjectFunder]:
        return db.get(ProjectFunder, (project_id, funder_id))

    def joined_query(self, db: Session):
        return self.query(db).join(Funder, Funder.id == ProjectFunder.funder_id)


class CRUDProjectStakeholder(CRUDBase[ProjectStakeholder]):
    query_config = QueryConfig(
        searchable_fields=(Stakeholder.name, Stakeholder.stakeholder_type),
        sortable_fields=("role", "stakeholder_id"),
        default_sort="stakeholder_id",
    )

    def get_pair(self, db: Session, project_id: str, stakeholder_id: str) -> Optional[ProjectStakeholder]:
        return db.get(ProjectStakeholder, (project_id, stakeholder_id))

    def joined_query(self, db: Session):
        return self.query(db).join(Stakeholder, Stakeholder.id == ProjectStakeholder.stakeholder_id)


class CRUDProjectEvaluation(CRUDBase[ProjectEvaluation]):
    query_config = QueryConfig(
        searchable_fields=("comments",),
        sortable_fields=("score", "status", "create_time", "id"),
        default_sort="create_time",
        default_order="desc",
    )


class CRUDProjectReport(CRUDBase[ProjectReport]):
    query_config = QueryConfig(
        searchable_fields=("title", "content"),
        sortable_fields=("title", "submitted_at", "reporting_period"),
        default_sort="submitted_at",
        default_order="desc",
    )


class CRUDProjectAuthor(CRUDBase[ProjectAuthor]):
    query_config = QueryConfig(
        searchable_fields=(User.first_name, User.last_name, User.email, User.username),
        sortable_fields=("role", "create_time"),
        default_sort="create_time",
    )

    def get_by_pair(self, db: Session, project_id: str, user_id: str) -> Optional[ProjectAuthor]:
        return (
            self.query(db)
            .filter(ProjectAuthor.project_id == project_id, ProjectAuthor.user_id == user_id)
            .first()
        )

    def joined_query(self, db: Session):
        return self.query(db).join(User, User.id == ProjectAuthor.user_id)


project_crud = CRUDProject(Project)
project_funder_crud = CRUDProjectFunder(ProjectFunder)
project_stakeholder_crud = CRUDProjectStakeholder(ProjectStakeholder)
project_evaluation_crud = CRUDProjectEvaluation(ProjectEvaluation)
project_report_crud = CRUDProjectReport(ProjectReport)
project_author_crud = CRUDProjectAuthor(ProjectAuthor)
