"""附件元数据 CRUD。"""

from app.packages.kangalos.crud.base import CRUDBase
from app.packages.kangalos.crud.query import QueryConfig
from app.packages.kangalos.models.attachment import Attachment


class CRUDAttachment(CRUDBase[Attachment]):
    query_config = QueryConfig(
        searchable_fields=("filename",),
        sortable_fields=("filename", "file_size", "create_time"),
        default_sort="create_time",
        default_order="desc",
    )


attachment_crud = CRUDAttachment(Attachment)
