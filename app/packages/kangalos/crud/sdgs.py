"""SDG 目录与项目 SDG 关联 CRUD。"""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.packages.kangalos.crud.base import CRUDBase
from app.packages.kangalos.crud.query import QueryConfig
from app.packages.kangalos.models.project import Project, ProjectSdg
from app.packages.kangalos.models.sdg import Sdg


class CRUDSdg(CRUDBase[Sdg]):
    query_config = QueryConfig(
        searchable_fields=("name", "description"),
        sortable_fields=("number", "name"),
        default_sort="number",
    )

    def link_counts(self, db: Session) -> List[Tuple[Sdg, int]]:
        """每个 SDG 及其关联的项目数，未被关联的 SDG 计为 0。"""
        count = func.count(ProjectSdg.project_id)
        rows = (
            db.query(Sdg, count)
            .outerjoin(ProjectSdg, ProjectSdg.sdg_id == Sdg.id)
            .group_by(Sdg.id)
            .order_by(Sdg.number.asc())
            .all()
        )
        return [(sdg, int(total)) for sdg, total in rows]


class CRUDProjectSdg(CRUDBase[ProjectSdg]):
    def get_pair(self, db: Session, project_id: str, sdg_id: str) -> Optional[ProjectSdg]:
        return db.get(ProjectSdg, (project_id, sdg_id))

    def sdgs_for_project(self, db: Session, project_id: str) -> List[Sdg]:
        return (
            db.query(Sdg)
            .join(ProjectSdg, ProjectSdg.sdg_id == Sdg.id)
            .filter(ProjectSdg.project_id == project_id)
            .order_by(Sdg.number.asc())
            .all()
        )

    def projects_for_sdg(self, db: Session, sdg_id: str) -> List[Project]:
        return (
            db.query(Project)
            .join(ProjectSdg, ProjectSdg.project_id == Project.id)
            .filter(ProjectSdg.sdg_id == sdg_id)
            .order_by(Project.title.asc(), Project.id.asc())
            .all()
        )

    def linked_project_count(self, db: Session) -> int:
        stmt = select(func.count(func.distinct(ProjectSdg.project_id)))
        return db.execute(stmt).scalar_one()


sdg_crud = CRUDSdg(Sdg)
project_sdg_crud = CRUDProjectSdg(ProjectSdg)
