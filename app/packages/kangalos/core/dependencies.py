"""依赖注入模块：封装 FastAPI 中复用度高的依赖函数。"""

from collections.abc import Generator
from typing import Optional

from fastapi import Query
from sqlalchemy.orm import Session

from app.packages.kangalos.core.config import get_settings
from app.packages.kangalos.core.constants import DEFAULT_PAGE
from app.packages.kangalos.crud.query import QueryParams, filters_from
from app.packages.kangalos.db.session import SessionLocal

settings = get_settings()


def get_db() -> Generator[Session, None, None]:
    """生成一个数据库会话，并在请求结束后自动关闭。"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


class ListParams:
    """列表接口共享的分页、搜索与排序参数。"""

    def __init__(
        self,
        page: int = Query(DEFAULT_PAGE, ge=1, description="页码，从 1 开始"),
        limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="每页数量"),
        search: Optional[str] = Query(None, description="模糊搜索关键字"),
        sort_by: Optional[str] = Query(None, description="排序字段"),
        sort_order: Optional[str] = Query(None, description="排序方向 asc/desc"),
    ) -> None:
        self.page = page
        self.limit = limit
        self.search = search
        self.sort_by = sort_by
        self.sort_order = sort_order

    def to_query(self, **filters) -> QueryParams:
        return QueryParams(
            search=self.search,
            sort_by=self.sort_by,
            sort_order=self.sort_order,
            filters=filters_from(**filters),
        )
