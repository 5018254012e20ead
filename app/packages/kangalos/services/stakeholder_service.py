"""干系人服务。"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from app.packages.kangalos.core.exceptions import BadRequestError
from app.packages.kangalos.core.responses import create_response, paginated_response
from app.packages.kangalos.core.timezone import format_datetime
from app.packages.kangalos.crud.partners import stakeholder_crud
from app.packages.kangalos.crud.projects import project_crud, project_stakeholder_crud
from app.packages.kangalos.crud.query import QueryParams
from app.packages.kangalos.models.organisation import OrganisationUnit
from app.packages.kangalos.models.partner import Stakeholder
from app.packages.kangalos.models.project import ProjectStakeholder
from app.packages.kangalos.services.infrastructure import check_duplicate, check_record_exists
from app.packages.kangalos.services.project_service import project_service

logger = logging.getLogger(__name__)


class StakeholderService:
    def create(self, db: Session, *, payload: dict[str, Any]) -> dict:
        payload["organisation_unit_id"] = self._resolve_unit(db, payload.get("organisation_unit_id"))
        check_duplicate(db, Stakeholder, {"name": payload["name"]}, label="Stakeholder")
        stakeholder = stakeholder_crud.create(db, payload)
        logger.info("Created stakeholder %s (%s)", stakeholder.id, stakeholder.name)
        return create_response("Stakeholder created successfully", self._serialize(stakeholder))

    def list_stakeholders(
        self,
        db: Session,
        *,
        params: QueryParams,
        page: int,
        limit: int,
        base_url: str,
    ) -> dict:
        result = stakeholder_crud.list_with_filters(db, params, page=page, limit=limit)
        return paginated_response("Stakeholders retrieved successfully", result, base_url, self._serialize)

    def list_by_type(
        self,
        db: Session,
        *,
        stakeholder_type: str,
        params: QueryParams,
        page: int,
        limit: int,
        base_url: str,
    ) -> dict:
        params.filters["stakeholder_type"] = stakeholder_type
        result = stakeholder_crud.list_with_filters(db, params, page=page, limit=limit)
        return paginated_response(
            f"Stakeholders of type {stakeholder_type} retrieved successfully", result, base_url, self._serialize
        )

    def get_detail(self, db: Session, *, stakeholder_id: str) -> dict:
        stakeholder = check_record_exists(db, Stakeholder, stakeholder_id, "Stakeholder")
        return create_response("Stakeholder retrieved successfully", self._serialize(stakeholder))

    def list_projects(
        self,
        db: Session,
        *,
        stakeholder_id: str,
        params: QueryParams,
        page: int,
        limit: int,
        base_url: str,
    ) -> dict:
        stakeholder = check_record_exists(db, Stakeholder, stakeholder_id, "Stakeholder")
        result = project_crud.list_with_filters(
            db,
            params,
            page=page,
            limit=limit,
            query=project_crud.list_for_stakeholder(db, stakeholder.id),
            extra_search=project_crud.search_extras(params.search),
        )
        return paginated_response(
            "Stakeholder projects retrieved successfully", result, base_url, project_service._serialize
        )

    def update(self, db: Session, *, stakeholder_id: str, changes: dict[str, Any]) -> dict:
        stakeholder = check_record_exists(db, Stakeholder, stakeholder_id, "Stakeholder")
        if "organisation_unit_id" in changes:
            changes["organisation_unit_id"] = self._resolve_unit(db, changes["organisation_unit_id"])
        if changes.get("name"):
            check_duplicate(db, Stakeholder, {"name": changes["name"]}, exclude_id=stakeholder.id, label="Stakeholder")
        stakeholder = stakeholder_crud.update(db, stakeholder, changes)
        logger.info("Updated stakeholder %s", stakeholder.id)
        return create_response("Stakeholder updated successfully", self._serialize(stakeholder))

    def delete(self, db: Session, *, stakeholder_id: str) -> dict:
        stakeholder = check_record_exists(db, Stakeholder, stakeholder_id, "Stakeholder")
        if project_stakeholder_crud.count_where(db, ProjectStakeholder.stakeholder_id == stakeholder.id):
            raise BadRequestError("Cannot delete Stakeholder linked to projects")
        stakeholder_crud.delete(db, stakeholder)
        logger.info("Deleted stakeholder %s", stakeholder_id)
        return create_response("Stakeholder deleted successfully", {"id": stakeholder.id})

    @staticmethod
    def _resolve_unit(db: Session, organisation_unit_id):
        if not organisation_unit_id:
            return None
        return check_record_exists(db, OrganisationUnit, organisation_unit_id, "Organisation unit").id

    @staticmethod
    def _serialize(stakeholder: Stakeholder) -> dict[str, Any]:
        return {
            "id": stakeholder.id,
            "name": stakeholder.name,
            "stakeholder_type": stakeholder.stakeholder_type,
            "contact_email": stakeholder.contact_email,
            "contact_phone": stakeholder.contact_phone,
            "organisation_unit_id": stakeholder.organisation_unit_id,
            "create_time": format_datetime(stakeholder.create_time),
            "update_time": format_datetime(stakeholder.update_time),
        }


stakeholder_service = StakeholderService()
