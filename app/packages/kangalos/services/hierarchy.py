"""父指针层级的通用服务能力：子节点、父节点、祖先链与整棵树。"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from sqlalchemy.orm import Session

from app.packages.kangalos.core.exceptions import BadRequestError
from app.packages.kangalos.core.responses import create_response
from app.packages.kangalos.services.infrastructure import check_record_exists, ensure_uuid
from app.packages.kangalos.utils.tree import build_tree, resolve_ancestry, would_create_cycle

logger = logging.getLogger(__name__)


class HierarchyServiceMixin:
    """子类需提供 ``model``、``crud``、``label`` 与 ``_serialize``。"""

    model: Any
    crud: Any
    label: str
    _serialize: Callable[[Any], dict]

    def children(self, db: Session, *, node_id: str) -> dict:
        node = check_record_exists(db, self.model, node_id, self.label)
        items = [self._serialize(item) for item in self.crud.list_children(db, node.id)]
        return create_response(f"{self.label} children retrieved successfully", items)

    def parent(self, db: Session, *, node_id: str) -> dict:
        node = check_record_exists(db, self.model, node_id, self.label)
        if node.parent_id is None:
            return create_response(f"{self.label} is a root node", None)
        parent = self.crud.get(db, node.parent_id)
        if parent is None:
            logger.warning("%s %s references missing parent %s", self.label, node.id, node.parent_id)
            return create_response(f"{self.label} parent not found", None)
        return create_response(f"{self.label} parent retrieved successfully", self._serialize(parent))

    def hierarchy(self, db: Session, *, node_id: str) -> dict:
        normalized = ensure_uuid(node_id, self.label)
        chain = resolve_ancestry(normalized, lambda key: self.crud.get(db, key))
        return create_response(
            f"{self.label} hierarchy retrieved successfully",
            [self._serialize(item) for item in chain],
        )

    def tree(self, db: Session) -> dict:
        return create_response(f"{self.label} tree retrieved successfully", build_tree(self._tree_rows(db)))

    def _tree_rows(self, db: Session) -> list[dict]:
        return [self._serialize(item) for item in self.crud.list_tree_rows(db)]

    def _assert_valid_parent(self, db: Session, *, node_id: Optional[str], parent_id: Optional[str]) -> Optional[str]:
        """父节点必须存在；更新时还不能把节点挂到自身或其后代下。返回规范化后的父节点 id。"""
        if not parent_id:
            return None
        parent = check_record_exists(db, self.model, parent_id, f"Parent {self.label.lower()}")
        if node_id is not None and would_create_cycle(node_id, parent.id, lambda key: self.crud.get(db, key)):
            raise BadRequestError(f"{self.label} cannot be moved under itself or one of its descendants")
        return parent.id
