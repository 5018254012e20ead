"""项目评审服务。"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from app.packages.kangalos.core.responses import create_response, paginated_response
from app.packages.kangalos.core.timezone import format_datetime
from app.packages.kangalos.crud.projects import project_evaluation_crud
from app.packages.kangalos.crud.query import QueryParams
from app.packages.kangalos.models.project import Project, ProjectEvaluation
from app.packages.kangalos.models.user import User
from app.packages.kangalos.services.infrastructure import check_record_exists

logger = logging.getLogger(__name__)


class ProjectEvaluationService:
    def create(self, db: Session, *, payload: dict[str, Any]) -> dict:
        payload["project_id"] = check_record_exists(db, Project, payload["project_id"], "Project").id
        payload["evaluator_id"] = check_record_exists(db, User, payload["evaluator_id"], "Evaluator").id
        evaluation = project_evaluation_crud.create(db, payload)
        logger.info("Recorded evaluation %s for project %s", evaluation.id, evaluation.project_id)
        return create_response("Project evaluation created successfully", self._serialize(evaluation))

    def list_evaluations(
        self,
        db: Session,
        *,
        params: QueryParams,
        page: int,
        limit: int,
        base_url: str,
    ) -> dict:
        result = project_evaluation_crud.list_with_filters(db, params, page=page, limit=limit)
        return paginated_response("Project evaluations retrieved successfully", result, base_url, self._serialize)

    def get_detail(self, db: Session, *, evaluation_id: str) -> dict:
        evaluation = check_record_exists(db, ProjectEvaluation, evaluation_id, "Project evaluation")
        return create_response("Project evaluation retrieved successfully", self._serialize(evaluation))

    def update(self, db: Session, *, evaluation_id: str, changes: dict[str, Any]) -> dict:
        evaluation = check_record_exists(db, ProjectEvaluation, evaluation_id, "Project evaluation")
        if changes.get("evaluator_id"):
            changes["evaluator_id"] = check_record_exists(db, User, changes["evaluator_id"], "Evaluator").id
        evaluation = project_evaluation_crud.update(db, evaluation, changes)
        logger.info("Updated evaluation %s", evaluation.id)
        return create_response("Project evaluation updated successfully", self._serialize(evaluation))

    def delete(self, db: Session, *, evaluation_id: str) -> dict:
        evaluation = check_record_exists(db, ProjectEvaluation, evaluation_id, "Project evaluation")
        project_evaluation_crud.delete(db, evaluation)
        logger.info("Deleted evaluation %s", evaluation_id)
        return create_response("Project evaluation deleted successfully", {"id": evaluation.id})

    @staticmethod
    def _serialize(evaluation: ProjectEvaluation) -> dict[str, Any]:
        return {
            "id": evaluation.id,
            "project_id": evaluation.project_id,
            "evaluator_id": evaluation.evaluator_id,
            "score": evaluation.score,
            "comments": evaluation.comments,
            "status": evaluation.status,
            "create_time": format_datetime(evaluation.create_time),
            "update_time": format_datetime(evaluation.update_time),
        }


project_evaluation_service = ProjectEvaluationService()
