"""API v1 汇总路由：统一挂载所有版本化的子路由。"""

from fastapi import APIRouter

from app.packages.kangalos.api.v1.endpoints import (
    attachments,
    categories,
    funders,
    organisation_units,
    permissions,
    positions,
    project_authors,
    project_evaluations,
    project_reports,
    projects,
    roles,
    sdgs,
    stakeholders,
    startups,
    user_positions,
    user_roles,
    users,
)

api_router = APIRouter()
api_router.include_router(organisation_units.router)
api_router.include_router(categories.router)
api_router.include_router(positions.router)
api_router.include_router(user_positions.router)
api_router.include_router(users.router)
api_router.include_router(roles.router)
api_router.include_router(permissions.router)
api_router.include_router(user_roles.router)
api_router.include_router(funders.router)
api_router.include_router(stakeholders.router)
api_router.include_router(projects.router)
api_router.include_router(project_evaluations.router)
api_router.include_router(project_reports.router)
api_router.include_router(project_authors.router)
api_router.include_router(sdgs.router)
api_router.include_router(sdgs.project_sdg_router)
api_router.include_router(startups.router)
api_router.include_router(attachments.router)
