"""组织单元 CRUD：层级查询与按单元汇总的关联查询。"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.packages.kangalos.crud.base import CRUDBase
from app.packages.kangalos.crud.query import QueryConfig
from app.packages.kangalos.models.organisation import OrganisationUnit
from app.packages.kangalos.models.position import Position, UserPosition
from app.packages.kangalos.models.user import User


def active_at(moment: datetime):
    """任职在 ``moment`` 仍有效：未结束或结束时间晚于该时刻。"""
    return or_(UserPosition.end_date.is_(None), UserPosition.end_date > moment)


class CRUDOrganisationUnit(CRUDBase[OrganisationUnit]):
    query_config = QueryConfig(
        searchable_fields=("name", "code"),
        sortable_fields=("name", "code", "id", "parent_id"),
        default_sort="name",
    )

    def get_by_code(self, db: Session, code: str) -> Optional[OrganisationUnit]:
        return self.query(db).filter(OrganisationUnit.code == code).first()

    def list_children(self, db: Session, parent_id: str) -> List[OrganisationUnit]:
        return (
            self.query(db)
            .filter(OrganisationUnit.parent_id == parent_id)
            .order_by(OrganisationUnit.name.asc(), OrganisationUnit.id.asc())
            .all()
        )

    def list_tree_rows(self, db: Session) -> List[OrganisationUnit]:
        return self.list_all(db, order_by=[OrganisationUnit.name.asc(), OrganisationUnit.id.asc()])

    def users_query(self, db: Session, unit_id: str, *, current_at: Optional[datetime] = None):
        """在该单元岗位上任职过（或 ``current_at`` 时仍在任）的用户。"""
        query = (
            db.query(User)
            .join(UserPosition, UserPosition.user_id == User.id)
            .join(Position, Position.id == UserPosition.position_id)
            .filter(Position.organisation_unit_id == unit_id)
        )
        if current_at is not None:
            query = query.filter(active_at(current_at))
        return query.distinct()


organisation_unit_crud = CRUDOrganisationUnit(OrganisationUnit)
