"""CRUD 基类：为各实体提供通用的数据访问方法。"""

from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from app.packages.kangalos.crud.query import Predicate, QueryConfig, QueryParams, build_predicate
from app.packages.kangalos.models.base import Base
from app.packages.kangalos.utils.pagination import PaginatedResult

ModelType = TypeVar("ModelType", bound=Base)


class CRUDBase(Generic[ModelType]):
    """封装常见的查询、创建、保存与分页逻辑，减少重复代码。"""

    query_config = QueryConfig()

    def __init__(self, model: Type[ModelType], query_config: Optional[QueryConfig] = None):
        self.model = model
        if query_config is not None:
            self.query_config = query_config

    def query(self, db: Session):
        return db.query(self.model)

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        return db.get(self.model, id)

    def list_all(self, db: Session, *, order_by: Optional[Sequence[Any]] = None) -> List[ModelType]:
        query = self.query(db)
        if order_by:
            query = query.order_by(*order_by)
        return query.all()

    def paginate(
        self,
        db: Session,
        predicate: Predicate,
        page: int,
        limit: int,
        query=None,
    ) -> PaginatedResult[ModelType]:
        """在同一会话内执行计数与分页查询。"""
        base = predicate.filter(query if query is not None else self.query(db))
        total = base.order_by(None).count()
        items = (
            base.order_by(*predicate.order_by)
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return PaginatedResult(items=items, total=total, page=page, limit=limit)

    def list_with_filters(
        self,
        db: Session,
        params: QueryParams,
        *,
        page: int,
        limit: int,
        query=None,
        extra_search: Sequence[ColumnElement] = (),
    ) -> PaginatedResult[ModelType]:
        predicate = build_predicate(self.model, params, self.query_config, extra_search=extra_search)
        return self.paginate(db, predicate, page, limit, query=query)

    def create(self, db: Session, obj_in: Dict[str, Any], *, auto_commit: bool = True) -> ModelType:
        db_obj = self.model(**obj_in)
        return self.save(db, db_obj, auto_commit=auto_commit)

    def update(
        self,
        db: Session,
        db_obj: ModelType,
        obj_in: Dict[str, Any],
        *,
        auto_commit: bool = True,
    ) -> ModelType:
        for key, value in obj_in.items():
            setattr(db_obj, key, value)
        return self.save(db, db_obj, auto_commit=auto_commit)

    def save(self, db: Session, db_obj: ModelType, *, auto_commit: bool = True) -> ModelType:
        db.add(db_obj)
        if auto_commit:
            db.commit()
            db.refresh(db_obj)
        return db_obj

    def delete(self, db: Session, db_obj: ModelType, *, auto_commit: bool = True) -> None:
        db.delete(db_obj)
        if auto_commit:
            try:
                db.commit()
            except Exception:
                db.rollback()
                raise

    def count_where(self, db: Session, *criteria: ColumnElement) -> int:
        stmt = select(func.count()).select_from(self.model)
        if criteria:
            stmt = stmt.where(*criteria)
        return db.execute(stmt).scalar_one()
