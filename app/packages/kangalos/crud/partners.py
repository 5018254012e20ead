"""资助方与干系人 CRUD。"""

from __future__ import annotations

from app.packages.kangalos.crud.base import CRUDBase
from app.packages.kangalos.crud.query import QueryConfig
from app.packages.kangalos.models.partner import Funder, Stakeholder


class CRUDFunder(CRUDBase[Funder]):
    query_config = QueryConfig(
        searchable_fields=("name", "funder_type", "contact_email", "contact_phone"),
        sortable_fields=("name", "funder_type", "id"),
        default_sort="name",
    )


class CRUDStakeholder(CRUDBase[Stakeholder]):
    query_config = QueryConfig(
        searchable_fields=("name", "stakeholder_type", "contact_email", "contact_phone"),
        sortable_fields=("name", "stakeholder_type", "id"),
        default_sort="name",
    )


funder_crud = CRUDFunder(Funder)
stakeholder_crud = CRUDStakeholder(Stakeholder)
