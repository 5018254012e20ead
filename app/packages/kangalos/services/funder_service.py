"""资助方服务。"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from app.packages.kangalos.core.exceptions import BadRequestError
from app.packages.kangalos.core.responses import create_response, paginated_response
from app.packages.kangalos.core.timezone import format_datetime
from app.packages.kangalos.crud.partners import funder_crud
from app.packages.kangalos.crud.projects import project_funder_crud
from app.packages.kangalos.crud.query import QueryParams
from app.packages.kangalos.models.partner import Funder
from app.packages.kangalos.models.project import ProjectFunder
from app.packages.kangalos.services.infrastructure import check_duplicate, check_record_exists

logger = logging.getLogger(__name__)


class FunderService:
    def create(self, db: Session, *, payload: dict[str, Any]) -> dict:
        check_duplicate(db, Funder, {"name": payload["name"]}, label="Funder")
        funder = funder_crud.create(db, payload)
        logger.info("Created funder %s (%s)", funder.id, funder.name)
        return create_response("Funder created successfully", self._serialize(funder))

    def list_funders(
        self,
        db: Session,
        *,
        params: QueryParams,
        page: int,
        limit: int,
        base_url: str,
    ) -> dict:
        result = funder_crud.list_with_filters(db, params, page=page, limit=limit)
        return paginated_response("Funders retrieved successfully", result, base_url, self._serialize)

    def get_detail(self, db: Session, *, funder_id: str) -> dict:
        funder = check_record_exists(db, Funder, funder_id, "Funder")
        return create_response("Funder retrieved successfully", self._serialize(funder))

    def update(self, db: Session, *, funder_id: str, changes: dict[str, Any]) -> dict:
        funder = check_record_exists(db, Funder, funder_id, "Funder")
        if changes.get("name"):
            check_duplicate(db, Funder, {"name": changes["name"]}, exclude_id=funder.id, label="Funder")
        funder = funder_crud.update(db, funder, changes)
        logger.info("Updated funder %s", funder.id)
        return create_response("Funder updated successfully", self._serialize(funder))

    def delete(self, db: Session, *, funder_id: str) -> dict:
        funder = check_record_exists(db, Funder, funder_id, "Funder")
        if project_funder_crud.count_where(db, ProjectFunder.funder_id == funder.id):
            raise BadRequestError("Cannot delete Funder linked to projects")
        funder_crud.delete(db, funder)
        logger.info("Deleted funder %s", funder_id)
        return create_response("Funder deleted successfully", {"id": funder.id})

    @staticmethod
    def _serialize(funder: Funder) -> dict[str, Any]:
        return {
            "id": funder.id,
            "name": funder.name,
            "funder_type": funder.funder_type,
            "contact_email": funder.contact_email,
            "contact_phone": funder.contact_phone,
            "create_time": format_datetime(funder.create_time),
            "update_time": format_datetime(funder.update_time),
        }


funder_service = FunderService()
