"""用户 CRUD。"""

from __future__ import annotations

from app.packages.kangalos.crud.base import CRUDBase
from app.packages.kangalos.crud.query import QueryConfig
from app.packages.kangalos.models.user import User


class CRUDUser(CRUDBase[User]):
    query_config = QueryConfig(
        searchable_fields=("first_name", "last_name", "email", "username"),
        sortable_fields=("first_name", "last_name", "email", "username", "user_type", "id"),
        default_sort="last_name",
    )


user_crud = CRUDUser(User)
