"""模型包初始化，便于统一导入 ORM 实体并触发模型注册。"""

from app.packages.kangalos.models.attachment import Attachment
from app.packages.kangalos.models.category import Category
from app.packages.kangalos.models.organisation import OrganisationUnit
from app.packages.kangalos.models.partner import Funder, Stakeholder
from app.packages.kangalos.models.position import Position, UserPosition
from app.packages.kangalos.models.project import (
    Project,
    ProjectAuthor,
    ProjectEvaluation,
    ProjectFunder,
    ProjectReport,
    ProjectSdg,
    ProjectStakeholder,
)
from app.packages.kangalos.models.role import Permission, Role, RolePermission, UserRole
from app.packages.kangalos.models.sdg import Sdg
from app.packages.kangalos.models.startup import Startup
from app.packages.kangalos.models.user import User

__all__ = [
    "Attachment",
    "Category",
    "Funder",
    "OrganisationUnit",
    "Permission",
    "Position",
    "Project",
    "ProjectAuthor",
    "ProjectEvaluation",
    "ProjectFunder",
    "ProjectReport",
    "ProjectSdg",
    "ProjectStakeholder",
    "Role",
    "RolePermission",
    "Sdg",
    "Stakeholder",
    "Startup",
    "User",
    "UserPosition",
    "UserRole",
]
