"""初创企业 CRUD。"""

from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import Session

from app.packages.kangalos.crud.base import CRUDBase
from app.packages.kangalos.crud.query import QueryConfig
from app.packages.kangalos.models.startup import Startup


class CRUDStartup(CRUDBase[Startup]):
    query_config = QueryConfig(
        searchable_fields=("name", "description"),
        sortable_fields=("name", "year", "registered", "create_time"),
        default_sort="name",
    )

    def get_by_project(self, db: Session, project_id: str) -> Optional[Startup]:
        return self.query(db).filter(Startup.project_id == project_id).first()


startup_crud = CRUDStartup(Startup)
