"""任职记录服务：维护 ``(user, position, start_date)`` 区间并拦截重叠任职。

同一用户在同一岗位上的任职区间不得重叠（边界相接也视为重叠）。写入前先锁定
岗位行，使检查与插入处于同一事务；SQLite 不支持行锁，仍存在并发竞争窗口。
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from sqlalchemy.orm import Session

from app.packages.kangalos.core.exceptions import BadRequestError, ConflictError, NotFoundError
from app.packages.kangalos.core.responses import create_response, paginated_response
from app.packages.kangalos.core.timezone import format_datetime, to_utc, utc_now
from app.packages.kangalos.crud.positions import position_crud, user_position_crud
from app.packages.kangalos.crud.query import QueryParams
from app.packages.kangalos.models.position import Position, UserPosition
from app.packages.kangalos.models.user import User
from app.packages.kangalos.services.infrastructure import check_record_exists, ensure_uuid
from app.packages.kangalos.utils.intervals import Interval, has_overlap

logger = logging.getLogger(__name__)


class UserPositionService:
    def create(
        self,
        db: Session,
        *,
        user_id: str,
        position_id: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> dict:
        assignment = self.assign(
            db, user_id=user_id, position_id=position_id, start_date=start_date, end_date=end_date
        )
        return create_response("User position assigned successfully", self._serialize(assignment))

    def assign(
        self,
        db: Session,
        *,
        user_id: str,
        position_id: str,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> UserPosition:
        user = check_record_exists(db, User, user_id, "User")
        position = check_record_exists(db, Position, position_id, "Position")
        position_crud.get_for_update(db, position.id)

        candidate = self._interval(start_date or utc_now(), end_date)
        self._assert_no_overlap(db, user.id, position.id, candidate)

        assignment = user_position_crud.create(
            db,
            {
                "user_id": user.id,
                "position_id": position.id,
                "start_date": candidate.start,
                "end_date": candidate.end,
            },
        )
        logger.info(
            "Assigned user %s to position %s from %s", user.id, position.id, format_datetime(candidate.start)
        )
        return assignment

    def list_assignments(
        self,
        db: Session,
        *,
        user_id: Optional[str] = None,
        position_id: Optional[str] = None,
        current_only: bool = False,
        params: QueryParams,
        page: int,
        limit: int,
        base_url: str,
        message: str = "User positions retrieved successfully",
    ) -> dict:
        if user_id is not None:
            params.filters["user_id"] = ensure_uuid(user_id, "User")
        if position_id is not None:
            params.filters["position_id"] = ensure_uuid(position_id, "Position")
        query = user_position_crud.joined_query(db, current_at=utc_now() if current_only else None)
        result = user_position_crud.list_with_filters(db, params, page=page, limit=limit, query=query)
        return paginated_response(message, result, base_url, self._serialize)

    def list_for_user(self, db: Session, *, user_id: str, current_only: bool, params: QueryParams,
                      page: int, limit: int, base_url: str) -> dict:
        user = check_record_exists(db, User, user_id, "User")
        return self.list_assignments(
            db,
            user_id=user.id,
            current_only=current_only,
            params=params,
            page=page,
            limit=limit,
            base_url=base_url,
            message="User positions for user retrieved successfully",
        )

    def list_for_position(self, db: Session, *, position_id: str, current_only: bool, params: QueryParams,
                          page: int, limit: int, base_url: str) -> dict:
        position = check_record_exists(db, Position, position_id, "Position")
        return self.list_assignments(
            db,
            position_id=position.id,
            current_only=current_only,
            params=params,
            page=page,
            limit=limit,
            base_url=base_url,
            message="User positions for position retrieved successfully",
        )

    def get_detail(self, db: Session, *, user_id: str, position_id: str, start_date: datetime) -> dict:
        assignment = self._get_by_key(db, user_id, position_id, start_date)
        return create_response("User position retrieved successfully", self._serialize(assignment))

    def update(
        self,
        db: Session,
        *,
        user_id: str,
        position_id: str,
        start_date: datetime,
        changes: dict[str, Any],
    ) -> dict:
        assignment = self._get_by_key(db, user_id, position_id, start_date)
        assignment = self.reschedule(db, assignment, changes)
        return create_response("User position updated successfully", self._serialize(assignment))

    def reschedule(self, db: Session, assignment: UserPosition, changes: dict[str, Any]) -> UserPosition:
        """修改任职区间，重叠校验时排除记录自身。"""
        position_crud.get_for_update(db, assignment.position_id)
        original_start = to_utc(assignment.start_date)
        candidate = self._interval(
            changes.get("start_date") or original_start,
            changes["end_date"] if "end_date" in changes else assignment.end_date,
        )
        self._assert_no_overlap(
            db, assignment.user_id, assignment.position_id, candidate, exclude_start=original_start
        )
        assignment = user_position_crud.update(
            db, assignment, {"start_date": candidate.start, "end_date": candidate.end}
        )
        logger.info(
            "Rescheduled assignment of user %s on position %s", assignment.user_id, assignment.position_id
        )
        return assignment

    def delete(self, db: Session, *, user_id: str, position_id: str, start_date: datetime) -> dict:
        assignment = self._get_by_key(db, user_id, position_id, start_date)
        data = self._serialize(assignment)
        user_position_crud.delete(db, assignment)
        logger.info("Deleted assignment of user %s on position %s", data["user_id"], data["position_id"])
        return create_response("User position deleted successfully", data)

    # ------------------------------------------------------------------
    # 内部辅助方法
    # ------------------------------------------------------------------

    def _get_by_key(self, db: Session, user_id: str, position_id: str, start_date: datetime) -> UserPosition:
        user_id = ensure_uuid(user_id, "User")
        position_id = ensure_uuid(position_id, "Position")
        assignment = user_position_crud.get_by_key(db, user_id, position_id, to_utc(start_date))
        if assignment is None:
            raise NotFoundError(
                f"User position for user {user_id} and position {position_id} "
                f"starting {format_datetime(start_date)} not found"
            )
        return assignment

    @staticmethod
    def _interval(start: datetime, end: Optional[datetime]) -> Interval:
        try:
            return Interval(start, end)
        except ValueError:
            raise BadRequestError("end_date must not be earlier than start_date") from None

    def _assert_no_overlap(
        self,
        db: Session,
        user_id: str,
        position_id: str,
        candidate: Interval,
        *,
        exclude_start: Optional[datetime] = None,
    ) -> None:
        existing = [
            Interval(row.start_date, row.end_date)
            for row in user_position_crud.list_for_pair(db, user_id, position_id)
            if exclude_start is None or to_utc(row.start_date) != exclude_start
        ]
        if has_overlap(existing, candidate):
            logger.info("Rejected overlapping assignment of user %s on position %s", user_id, position_id)
            raise ConflictError("User already holds this position during an overlapping period")

    @staticmethod
    def _serialize(assignment: UserPosition) -> dict[str, Any]:
        end_date = to_utc(assignment.end_date)
        user = assignment.user
        position = assignment.position
        return {
            "user_id": assignment.user_id,
            "position_id": assignment.position_id,
            "start_date": format_datetime(assignment.start_date),
            "end_date": format_datetime(end_date),
            "is_active": end_date is None or end_date > utc_now(),
            "user": {
                "id": user.id,
                "first_name": user.first_name,
                "last_name": user.last_name,
                "email": user.email,
            } if user else None,
            "position": {
                "id": position.id,
                "title": position.title,
                "organisation_unit_id": position.organisation_unit_id,
            } if position else None,
        }


user_position_service = UserPositionService()
