"""通用存在性与唯一性校验，供各业务服务复用。"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Mapping, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.packages.kangalos.core.exceptions import BadRequestError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)


def ensure_uuid(value: Any, label: str = "Record") -> str:
    """校验并规范化 UUID 字符串，格式错误时抛出 ``BadRequestError``。"""
    try:
        return str(uuid.UUID(str(value)))
    except (TypeError, ValueError, AttributeError):
        raise BadRequestError(f"Invalid {label} id format: {value}") from None


def check_record_exists(db: Session, model, record_id: Any, label: Optional[str] = None):
    """按主键查询记录，格式错误返回 400，记录缺失返回 404。"""
    label = label or model.__name__
    normalized = ensure_uuid(record_id, label)
    record = db.get(model, normalized)
    if record is None:
        raise NotFoundError(f"{label} with id {normalized} not found")
    return record


def check_duplicate(
    db: Session,
    model,
    fields: Mapping[str, Any],
    *,
    exclude_id: Optional[str] = None,
    label: Optional[str] = None,
) -> None:
    """若存在其他记录与 ``fields`` 全部相等则抛出 ``ConflictError``；``None`` 按 IS NULL 匹配。"""
    label = label or model.__name__
    stmt = select(model.id)
    for name, value in fields.items():
        column = getattr(model, name)
        stmt = stmt.where(column.is_(None) if value is None else column == value)
    if exclude_id is not None:
        stmt = stmt.where(model.id != exclude_id)
    if db.execute(stmt.limit(1)).first() is not None:
        described = ", ".join(f"{name} '{value}'" for name, value in fields.items())
        raise ConflictError(f"{label} with {described} already exists")


def ensure_no_children(
    db: Session,
    model,
    record_id: str,
    label: Optional[str] = None,
    *,
    parent_attr: str = "parent_id",
) -> None:
    label = label or model.__name__
    column = getattr(model, parent_attr)
    count = db.execute(select(func.count()).select_from(model).where(column == record_id)).scalar_one()
    if count:
        logger.warning("Refusing to delete %s %s with %d children", label, record_id, count)
        raise BadRequestError(f"Cannot delete {label} with existing children")
