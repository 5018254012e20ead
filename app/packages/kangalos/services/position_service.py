"""岗位服务：岗位维护与任职人（occupancy）管理。"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from sqlalchemy.orm import Session

from app.packages.kangalos.core.exceptions import BadRequestError, NotFoundError
from app.packages.kangalos.core.responses import create_response, paginated_response
from app.packages.kangalos.core.timezone import format_datetime, to_utc, utc_now
from app.packages.kangalos.crud.positions import occupant_crud, position_crud, user_position_crud
from app.packages.kangalos.crud.query import QueryParams
from app.packages.kangalos.models.organisation import OrganisationUnit
from app.packages.kangalos.models.position import Position, UserPosition
from app.packages.kangalos.models.user import User
from app.packages.kangalos.services.infrastructure import check_duplicate, check_record_exists
from app.packages.kangalos.services.user_position_service import user_position_service

logger = logging.getLogger(__name__)


class PositionService:
    def create(
        self,
        db: Session,
        *,
        title: str,
        organisation_unit_id: str,
        description: Optional[str] = None,
    ) -> dict:
        unit = check_record_exists(db, OrganisationUnit, organisation_unit_id, "Organisation unit")
        check_duplicate(db, Position, {"title": title}, label="Position")
        position = position_crud.create(
            db, {"title": title, "description": description, "organisation_unit_id": unit.id}
        )
        logger.info("Created position %s (%s)", position.id, position.title)
        return create_response("Position created successfully", self._serialize(position))

    def list_positions(
        self,
        db: Session,
        *,
        params: QueryParams,
        page: int,
        limit: int,
        base_url: str,
    ) -> dict:
        result = position_crud.list_with_filters(db, params, page=page, limit=limit)
        return paginated_response("Positions retrieved successfully", result, base_url, self._serialize)

    def get_detail(self, db: Session, *, position_id: str) -> dict:
        position = check_record_exists(db, Position, position_id, "Position")
        data = self._serialize(position)
        unit = position.organisation_unit
        data["organisation_unit"] = {"id": unit.id, "name": unit.name, "code": unit.code} if unit else None
        return create_response("Position retrieved successfully", data)

    def update(self, db: Session, *, position_id: str, changes: dict[str, Any]) -> dict:
        position = check_record_exists(db, Position, position_id, "Position")
        if changes.get("organisation_unit_id"):
            unit = check_record_exists(db, OrganisationUnit, changes["organisation_unit_id"], "Organisation unit")
            changes["organisation_unit_id"] = unit.id
        if changes.get("title"):
            check_duplicate(db, Position, {"title": changes["title"]}, exclude_id=position.id, label="Position")
        position = position_crud.update(db, position, changes)
        logger.info("Updated position %s", position.id)
        return create_response("Position updated successfully", self._serialize(position))

    def delete(self, db: Session, *, position_id: str) -> dict:
        position = check_record_exists(db, Position, position_id, "Position")
        if user_position_crud.count_where(db, UserPosition.position_id == position.id):
            logger.warning("Refusing to delete position %s with assignment history", position.id)
            raise BadRequestError("Cannot delete Position with existing assignments")
        position_crud.delete(db, position)
        logger.info("Deleted position %s", position_id)
        return create_response("Position deleted successfully", {"id": position.id})

    # ------------------------------------------------------------------
    # 任职人管理
    # ------------------------------------------------------------------

    def list_occupants(
        self,
        db: Session,
        *,
        position_id: str,
        current_only: bool,
        params: QueryParams,
        page: int,
        limit: int,
        base_url: str,
    ) -> dict:
        position = check_record_exists(db, Position, position_id, "Position")
        query = occupant_crud.occupants_query(db, position.id, current_at=utc_now() if current_only else None)
        result = occupant_crud.list_with_filters(db, params, page=page, limit=limit, query=query)
        return paginated_response(
            "Position occupants retrieved successfully", result, base_url, user_position_service._serialize
        )

    def assign_user(
        self,
        db: Session,
        *,
        position_id: str,
        user_id: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> dict:
        assignment = user_position_service.assign(
            db, user_id=user_id, position_id=position_id, start_date=start_date, end_date=end_date
        )
        return create_response(
            "User assigned to position successfully", user_position_service._serialize(assignment)
        )

    def update_occupancy(
        self,
        db: Session,
        *,
        position_id: str,
        user_id: str,
        changes: dict[str, Any],
        original_start_date: Optional[datetime] = None,
    ) -> dict:
        """修改任职区间：默认定位仍在任的记录，给出 ``original_start_date`` 时按精确键定位。"""
        assignment = self._locate_assignment(db, position_id, user_id, original_start_date)
        assignment = user_position_service.reschedule(db, assignment, changes)
        return create_response(
            "Position occupancy updated successfully", user_position_service._serialize(assignment)
        )

    def end_occupancy(self, db: Session, *, position_id: str, user_id: str) -> dict:
        """软删除：把当前有效任职的结束时间设为当前时刻。"""
        position = check_record_exists(db, Position, position_id, "Position")
        user = check_record_exists(db, User, user_id, "User")
        current = utc_now()
        assignment = (
            user_position_crud.joined_query(db, current_at=current)
            .filter(UserPosition.user_id == user.id, UserPosition.position_id == position.id)
            .order_by(UserPosition.start_date.desc())
            .first()
        )
        if assignment is None:
            raise NotFoundError("No active assignment found for this user and position")
        if to_utc(assignment.start_date) > current:
            raise BadRequestError("Assignment has not started yet; delete it instead")
        assignment = user_position_crud.update(db, assignment, {"end_date": current})
        logger.info("Ended assignment of user %s on position %s", user.id, position.id)
        return create_response(
            "User removed from position successfully", user_position_service._serialize(assignment)
        )

    def _locate_assignment(
        self,
        db: Session,
        position_id: str,
        user_id: str,
        original_start_date: Optional[datetime],
    ) -> UserPosition:
        position = check_record_exists(db, Position, position_id, "Position")
        user = check_record_exists(db, User, user_id, "User")
        if original_start_date is not None:
            assignment = user_position_crud.get_by_key(db, user.id, position.id, to_utc(original_start_date))
            if assignment is None:
                raise NotFoundError(
                    f"No assignment starting {format_datetime(original_start_date)} found for this user and position"
                )
            return assignment
        assignment = user_position_crud.get_open(db, user.id, position.id)
        if assignment is None:
            raise NotFoundError("No active assignment found for this user and position")
        return assignment

    @staticmethod
    def _serialize(position: Position) -> dict[str, Any]:
        return {
            "id": position.id,
            "title": position.title,
            "description": position.description,
            "organisation_unit_id": position.organisation_unit_id,
            "create_time": format_datetime(position.create_time),
            "update_time": format_datetime(position.update_time),
        }


position_service = PositionService()
