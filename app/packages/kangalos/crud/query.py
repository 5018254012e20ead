"""列表查询组合器：把搜索、排序与结构化过滤条件编译成 SQLAlchemy 表达式。

每个资源只需声明一份 ``QueryConfig``（可搜索字段、可排序字段、默认排序），
请求参数包装为 ``QueryParams``，由 ``build_predicate`` 生成 ``Predicate``，
再交给 ``CRUDBase.paginate`` 在同一会话中完成计数与分页。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, Union

from sqlalchemy import false, inspect, or_
from sqlalchemy.sql.elements import ColumnElement

from app.packages.kangalos.core.constants import SORT_ASC, SORT_DESC

logger = logging.getLogger(__name__)

FieldRef = Union[str, Any]


@dataclass(frozen=True)
class Range:
    """闭区间过滤条件，任一端可为空。"""

    low: Any = None
    high: Any = None

    @property
    def is_empty(self) -> bool:
        return self.low is None and self.high is None


@dataclass(frozen=True)
class QueryConfig:
    searchable_fields: Sequence[FieldRef] = ()
    sortable_fields: Sequence[str] = ()
    default_sort: str = "id"
    default_order: str = SORT_ASC


@dataclass
class QueryParams:
    search: Optional[str] = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None
    filters: dict[str, Any] = field(default_factory=dict)


@dataclass
class Predicate:
    conditions: list[ColumnElement] = field(default_factory=list)
    order_by: list[Any] = field(default_factory=list)

    def filter(self, query):
        if self.conditions:
            query = query.filter(*self.conditions)
        return query


def _resolve(model, ref: FieldRef):
    if isinstance(ref, str):
        column = getattr(model, ref, None)
        if column is None:
            raise AttributeError(f"{model.__name__} has no attribute {ref!r}")
        return column
    return ref


def _filter_condition(column, value: Any) -> Optional[ColumnElement]:
    if value is None:
        return None
    if isinstance(value, Range):
        if value.is_empty:
            return None
        if value.low is not None and value.high is not None:
            return column.between(value.low, value.high)
        if value.low is not None:
            return column >= value.low
        return column <= value.high
    if isinstance(value, (list, tuple, set, frozenset)):
        members = list(value)
        # 空集合表示“匹配不到任何行”
        return column.in_(members) if members else false()
    return column == value


def build_predicate(
    model,
    params: QueryParams,
    config: QueryConfig,
    *,
    extra_search: Sequence[ColumnElement] = (),
) -> Predicate:
    """根据请求参数构建过滤与排序条件。

    - ``search``：在所有可搜索字段上做不区分大小写的模糊匹配，条件之间为 OR；
      ``extra_search`` 中的条件（如按状态或年份匹配）一并 OR 进去；
    - ``sort_by`` 不在可排序字段内时回退为默认排序，非法值仅记 debug 日志；
    - ``filters`` 中只有非空的条目才参与 AND 组合。
    """
    conditions: list[ColumnElement] = []

    term = (params.search or "").strip()
    if term:
        pattern = f"%{term}%"
        clauses = [_resolve(model, ref).ilike(pattern) for ref in config.searchable_fields]
        clauses.extend(extra_search)
        if clauses:
            conditions.append(or_(*clauses))

    for name, value in (params.filters or {}).items():
        condition = _filter_condition(_resolve(model, name), value)
        if condition is not None:
            conditions.append(condition)

    sort_by = params.sort_by
    if sort_by not in config.sortable_fields:
        if sort_by:
            logger.debug("Ignoring unsupported sort field %r on %s", sort_by, model.__name__)
        sort_by = config.default_sort

    if params.sort_order:
        order = SORT_DESC if params.sort_order.strip().lower() == SORT_DESC else SORT_ASC
    else:
        order = config.default_order

    column = _resolve(model, sort_by)
    order_by = [column.desc() if order == SORT_DESC else column.asc()]
    # 主键作为次级排序，保证分页结果稳定
    for pk in inspect(model).primary_key:
        if pk.key != getattr(column, "key", None):
            order_by.append(pk.asc())

    return Predicate(conditions=conditions, order_by=order_by)


def filters_from(**values: Any) -> dict[str, Any]:
    """丢弃值为 ``None`` 的过滤项，便于服务层直接透传查询参数。"""
    return {key: value for key, value in values.items() if value is not None}
