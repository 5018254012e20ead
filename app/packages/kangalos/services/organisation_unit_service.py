"""组织单元服务：层级维护以及单元下岗位、用户、项目、干系人的查询。"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Optional

from sqlalchemy.orm import Session

from app.packages.kangalos.core.exceptions import BadRequestError
from app.packages.kangalos.core.responses import create_response, paginated_response
from app.packages.kangalos.core.timezone import format_datetime, utc_now
from app.packages.kangalos.crud.organisation_units import organisation_unit_crud
from app.packages.kangalos.crud.partners import stakeholder_crud
from app.packages.kangalos.crud.positions import position_crud
from app.packages.kangalos.crud.projects import project_crud
from app.packages.kangalos.crud.query import QueryParams
from app.packages.kangalos.crud.users import user_crud
from app.packages.kangalos.models.organisation import OrganisationUnit
from app.packages.kangalos.models.position import Position
from app.packages.kangalos.services.hierarchy import HierarchyServiceMixin
from app.packages.kangalos.services.infrastructure import (
    check_duplicate,
    check_record_exists,
    ensure_no_children,
)
from app.packages.kangalos.services.position_service import position_service
from app.packages.kangalos.services.project_service import project_service
from app.packages.kangalos.services.stakeholder_service import stakeholder_service
from app.packages.kangalos.services.user_service import user_service
from app.packages.kangalos.utils.tree import build_tree

logger = logging.getLogger(__name__)


class OrganisationUnitService(HierarchyServiceMixin):
    """聚合组织单元相关的业务能力。"""

    model = OrganisationUnit
    crud = organisation_unit_crud
    label = "Organisation unit"

    def create(
        self,
        db: Session,
        *,
        name: str,
        code: Optional[str] = None,
        parent_id: Optional[str] = None,
    ) -> dict:
        parent_id = self._assert_valid_parent(db, node_id=None, parent_id=parent_id)
        if code:
            check_duplicate(db, OrganisationUnit, {"code": code}, label=self.label)
        unit = organisation_unit_crud.create(
            db,
            {"name": name, "code": code or None, "parent_id": parent_id},
        )
        logger.info("Created organisation unit %s (%s)", unit.id, unit.name)
        return create_response("Organisation unit created successfully", self._serialize(unit))

    def add_child(self, db: Session, *, parent_id: str, name: str, code: Optional[str] = None) -> dict:
        parent = check_record_exists(db, OrganisationUnit, parent_id, "Parent organisation unit")
        return self.create(db, name=name, code=code, parent_id=parent.id)

    def list_units(
        self,
        db: Session,
        *,
        params: QueryParams,
        page: int,
        limit: int,
        base_url: str,
    ) -> dict:
        result = organisation_unit_crud.list_with_filters(db, params, page=page, limit=limit)
        return paginated_response(
            "Organisation units retrieved successfully", result, base_url, self._serialize
        )

    def get_detail(self, db: Session, *, unit_id: str, include_positions: bool = False) -> dict:
        unit = check_record_exists(db, OrganisationUnit, unit_id, self.label)
        data = self._serialize(unit)
        data["parent"] = self._serialize(unit.parent) if unit.parent else None
        data["children"] = [self._serialize(child) for child in organisation_unit_crud.list_children(db, unit.id)]
        if include_positions:
            self._attach_positions(db, [data], unit_ids=[unit.id])
        return create_response("Organisation unit retrieved successfully", data)

    def tree(self, db: Session, *, include_positions: bool = False) -> dict:
        rows = self._tree_rows(db)
        if include_positions:
            self._attach_positions(db, rows)
        return create_response("Organisation unit tree retrieved successfully", build_tree(rows))

    def update(self, db: Session, *, unit_id: str, changes: dict[str, Any]) -> dict:
        unit = check_record_exists(db, OrganisationUnit, unit_id, self.label)
        if "parent_id" in changes:
            changes["parent_id"] = self._assert_valid_parent(db, node_id=unit.id, parent_id=changes["parent_id"])
        if changes.get("code"):
            check_duplicate(db, OrganisationUnit, {"code": changes["code"]}, exclude_id=unit.id, label=self.label)
        unit = organisation_unit_crud.update(db, unit, changes)
        logger.info("Updated organisation unit %s", unit.id)
        return create_response("Organisation unit updated successfully", self._serialize(unit))

    def delete(self, db: Session, *, unit_id: str) -> dict:
        unit = check_record_exists(db, OrganisationUnit, unit_id, self.label)
        ensure_no_children(db, OrganisationUnit, unit.id, self.label)
        if position_crud.count_where(db, Position.organisation_unit_id == unit.id):
            raise BadRequestError("Cannot delete Organisation unit with existing positions")
        organisation_unit_crud.delete(db, unit)
        logger.info("Deleted organisation unit %s", unit_id)
        return create_response("Organisation unit deleted successfully", {"id": unit.id})

    def list_positions(
        self,
        db: Session,
        *,
        unit_id: str,
        params: QueryParams,
        page: int,
        limit: int,
        base_url: str,
    ) -> dict:
        unit = check_record_exists(db, OrganisationUnit, unit_id, self.label)
        params.filters["organisation_unit_id"] = unit.id
        result = position_crud.list_with_filters(db, params, page=page, limit=limit)
        return paginated_response(
            "Organisation unit positions retrieved successfully", result, base_url, position_service._serialize
        )

    def list_users(
        self,
        db: Session,
        *,
        unit_id: str,
        current_only: bool,
        params: QueryParams,
        page: int,
        limit: int,
        base_url: str,
    ) -> dict:
        unit = check_record_exists(db, OrganisationUnit, unit_id, self.label)
        query = organisation_unit_crud.users_query(db, unit.id, current_at=utc_now() if current_only else None)
        result = user_crud.list_with_filters(db, params, page=page, limit=limit, query=query)
        return paginated_response(
            "Organisation unit users retrieved successfully", result, base_url, user_service._serialize
        )

    def list_projects(
        self,
        db: Session,
        *,
        unit_id: str,
        params: QueryParams,
        page: int,
        limit: int,
        base_url: str,
    ) -> dict:
        unit = check_record_exists(db, OrganisationUnit, unit_id, self.label)
        params.filters["organisation_unit_id"] = unit.id
        result = project_crud.list_with_filters(
            db, params, page=page, limit=limit, extra_search=project_crud.search_extras(params.search)
        )
        return paginated_response(
            "Organisation unit projects retrieved successfully", result, base_url, project_service._serialize
        )

    def list_stakeholders(
        self,
        db: Session,
        *,
        unit_id: str,
        params: QueryParams,
        page: int,
        limit: int,
        base_url: str,
    ) -> dict:
        unit = check_record_exists(db, OrganisationUnit, unit_id, self.label)
        params.filters["organisation_unit_id"] = unit.id
        result = stakeholder_crud.list_with_filters(db, params, page=page, limit=limit)
        return paginated_response(
            "Organisation unit stakeholders retrieved successfully", result, base_url, stakeholder_service._serialize
        )

    # ------------------------------------------------------------------
    # 内部辅助方法
    # ------------------------------------------------------------------

    def _attach_positions(
        self, db: Session, rows: list[dict[str, Any]], *, unit_ids: Optional[list[str]] = None
    ) -> None:
        """为每个单元挂上其岗位列表，一次查询完成分组。"""
        grouped: defaultdict[str, list[dict[str, Any]]] = defaultdict(list)
        for position in position_crud.list_for_units(db, unit_ids):
            grouped[position.organisation_unit_id].append(position_service._serialize(position))
        for row in rows:
            row["positions"] = grouped.get(row["id"], [])

    @staticmethod
    def _serialize(unit: OrganisationUnit) -> dict[str, Any]:
        return {
            "id": unit.id,
            "name": unit.name,
            "code": unit.code,
            "parent_id": unit.parent_id,
            "create_time": format_datetime(unit.create_time),
            "update_time": format_datetime(unit.update_time),
        }


organisation_unit_service = OrganisationUnitService()
