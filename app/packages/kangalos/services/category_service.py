"""分类服务：同一父节点下名称唯一的分类树。"""

from __future__ import annotations

import logging
from typing import Any, Optional

from sqlalchemy.orm import Session

from app.packages.kangalos.core.responses import create_response, paginated_response
from app.packages.kangalos.core.timezone import format_datetime
from app.packages.kangalos.crud.categories import category_crud
from app.packages.kangalos.crud.query import QueryParams
from app.packages.kangalos.models.category import Category
from app.packages.kangalos.services.hierarchy import HierarchyServiceMixin
from app.packages.kangalos.services.infrastructure import (
    check_duplicate,
    check_record_exists,
    ensure_no_children,
)

logger = logging.getLogger(__name__)


class CategoryService(HierarchyServiceMixin):
    model = Category
    crud = category_crud
    label = "Category"

    def create(
        self,
        db: Session,
        *,
        name: str,
        description: Optional[str] = None,
        parent_id: Optional[str] = None,
    ) -> dict:
        parent_id = self._assert_valid_parent(db, node_id=None, parent_id=parent_id)
        check_duplicate(db, Category, {"name": name, "parent_id": parent_id}, label=self.label)
        category = category_crud.create(
            db, {"name": name, "description": description, "parent_id": parent_id}
        )
        logger.info("Created category %s (%s)", category.id, category.name)
        return create_response("Category created successfully", self._serialize(category))

    def add_child(
        self,
        db: Session,
        *,
        parent_id: str,
        name: str,
        description: Optional[str] = None,
    ) -> dict:
        parent = check_record_exists(db, Category, parent_id, "Parent category")
        return self.create(db, name=name, description=description, parent_id=parent.id)

    def list_categories(
        self,
        db: Session,
        *,
        params: QueryParams,
        page: int,
        limit: int,
        base_url: str,
    ) -> dict:
        result = category_crud.list_with_filters(db, params, page=page, limit=limit)
        return paginated_response("Categories retrieved successfully", result, base_url, self._serialize)

    def get_detail(self, db: Session, *, category_id: str) -> dict:
        category = check_record_exists(db, Category, category_id, self.label)
        data = self._serialize(category)
        data["children"] = [self._serialize(child) for child in category_crud.list_children(db, category.id)]
        return create_response("Category retrieved successfully", data)

    def update(self, db: Session, *, category_id: str, changes: dict[str, Any]) -> dict:
        category = check_record_exists(db, Category, category_id, self.label)
        if "parent_id" in changes:
            changes["parent_id"] = self._assert_valid_parent(
                db, node_id=category.id, parent_id=changes["parent_id"]
            )
        if "name" in changes or "parent_id" in changes:
            check_duplicate(
                db,
                Category,
                {
                    "name": changes.get("name", category.name),
                    "parent_id": changes.get("parent_id", category.parent_id),
                },
                exclude_id=category.id,
                label=self.label,
            )
        category = category_crud.update(db, category, changes)
        logger.info("Updated category %s", category.id)
        return create_response("Category updated successfully", self._serialize(category))

    def delete(self, db: Session, *, category_id: str) -> dict:
        category = check_record_exists(db, Category, category_id, self.label)
        ensure_no_children(db, Category, category.id, self.label)
        category_crud.delete(db, category)
        logger.info("Deleted category %s", category_id)
        return create_response("Category deleted successfully", {"id": category.id})

    @staticmethod
    def _serialize(category: Category) -> dict[str, Any]:
        return {
            "id": category.id,
            "name": category.name,
            "description": category.description,
            "parent_id": category.parent_id,
            "create_time": format_datetime(category.create_time),
            "update_time": format_datetime(category.update_time),
        }


category_service = CategoryService()
