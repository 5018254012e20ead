"""岗位与任职记录 CRUD。"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from app.packages.kangalos.crud.base import CRUDBase
from app.packages.kangalos.crud.organisation_units import active_at
from app.packages.kangalos.crud.query import QueryConfig
from app.packages.kangalos.models.organisation import OrganisationUnit
from app.packages.kangalos.models.position import Position, UserPosition
from app.packages.kangalos.models.user import User


class CRUDPosition(CRUDBase[Position]):
    query_config = QueryConfig(
        searchable_fields=("title", "description"),
        sortable_fields=("title", "description", "id", "organisation_unit_id"),
        default_sort="title",
    )

    def get_for_update(self, db: Session, position_id: str) -> Optional[Position]:
        """锁定岗位行，串行化同一岗位上的“检查后写入”。SQLite 下为空操作。"""
        return self.query(db).filter(Position.id == position_id).with_for_update().first()

    def list_for_units(self, db: Session, unit_ids: Optional[Sequence[str]] = None) -> List[Position]:
        """按标题排序返回岗位；``unit_ids`` 为空时返回全部单元的岗位。"""
        query = self.query(db)
        if unit_ids is not None:
            query = query.filter(Position.organisation_unit_id.in_(list(unit_ids)))
        return query.order_by(Position.title.asc(), Position.id.asc()).all()


class CRUDUserPosition(CRUDBase[UserPosition]):
    query_config = QueryConfig(
        searchable_fields=(Position.title, OrganisationUnit.name),
        sortable_fields=("start_date", "end_date"),
        default_sort="start_date",
        default_order="desc",
    )

    def get_by_key(
        self, db: Session, user_id: str, position_id: str, start_date: datetime
    ) -> Optional[UserPosition]:
        return db.get(UserPosition, (user_id, position_id, start_date))

    def list_for_pair(
        self, db: Session, user_id: str, position_id: str
    ) -> List[UserPosition]:
        return (
            self.query(db)
            .filter(UserPosition.user_id == user_id, UserPosition.position_id == position_id)
            .order_by(UserPosition.start_date.asc())
            .all()
        )

    def get_open(self, db: Session, user_id: str, position_id: str) -> Optional[UserPosition]:
        return (
            self.query(db)
            .filter(
                UserPosition.user_id == user_id,
                UserPosition.position_id == position_id,
                UserPosition.end_date.is_(None),
            )
            .order_by(UserPosition.start_date.desc())
            .first()
        )

    def joined_query(self, db: Session, *, current_at: Optional[datetime] = None):
        query = (
            self.query(db)
            .join(Position, Position.id == UserPosition.position_id)
            .join(OrganisationUnit, OrganisationUnit.id == Position.organisation_unit_id)
        )
        if current_at is not None:
            query = query.filter(active_at(current_at))
        return query


class CRUDOccupant(CRUDBase[UserPosition]):
    """岗位任职人视图：按用户字段搜索。"""

    query_config = QueryConfig(
        searchable_fields=(User.first_name, User.last_name, User.email, User.username),
        sortable_fields=("start_date", "end_date"),
        default_sort="start_date",
        default_order="desc",
    )

    def occupants_query(self, db: Session, position_id: str, *, current_at: Optional[datetime] = None):
        query = (
            self.query(db)
            .join(User, User.id == UserPosition.user_id)
            .filter(UserPosition.position_id == position_id)
        )
        if current_at is not None:
            query = query.filter(active_at(current_at))
        return query


position_crud = CRUDPosition(Position)
user_position_crud = CRUDUserPosition(UserPosition)
occupant_crud = CRUDOccupant(UserPosition)
