"""分类 CRUD。"""

from __future__ import annotations

from typing import List

from sqlalchemy.orm import Session

from app.packages.kangalos.crud.base import CRUDBase
from app.packages.kangalos.crud.query import QueryConfig
from app.packages.kangalos.models.category import Category


class CRUDCategory(CRUDBase[Category]):
    query_config = QueryConfig(
        searchable_fields=("name", "description"),
        sortable_fields=("name", "id", "parent_id"),
        default_sort="name",
    )

    def list_children(self, db: Session, parent_id: str) -> List[Category]:
        return (
            self.query(db)
            .filter(Category.parent_id == parent_id)
            .order_by(Category.name.asc(), Category.id.asc())
            .all()
        )

    def list_tree_rows(self, db: Session) -> List[Category]:
        return self.list_all(db, order_by=[Category.name.asc(), Category.id.asc()])


category_crud = CRUDCategory(Category)
