"""枚举定义：约束项目、用户、评审等字段的可选值。"""

from enum import Enum


class UserTypeEnum(str, Enum):
    ORGANISATION = "ORGANISATION"
    STUDENT = "STUDENT"
    STAFF = "STAFF"
    INDIVIDUAL = "INDIVIDUAL"


class ProjectStatusEnum(str, Enum):
    """项目生命周期状态。"""

    PENDING = "PENDING"
    UNDER_REVIEW = "UNDER_REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    FUNDED = "FUNDED"
    COMPLETED = "COMPLETED"
    ARCHIVED = "ARCHIVED"


class IpTypeEnum(str, Enum):
    """预期产出的知识产权类型。"""

    PATENT = "PATENT"
    UTILITY_MODEL = "UTILITY_MODEL"
    COPYRIGHT = "COPYRIGHT"
    TRADEMARK = "TRADEMARK"
    NONE = "NONE"


class EvaluationStatusEnum(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"


class StakeholderRoleEnum(str, Enum):
    """干系人在项目中的角色。"""

    OWNER = "OWNER"
    PARTNER = "PARTNER"
    SPONSOR = "SPONSOR"
    REGULATOR = "REGULATOR"
    BENEFICIARY = "BENEFICIARY"


class AuthorRoleEnum(str, Enum):
    """作者在项目中的署名角色。"""

    LEAD = "LEAD"
    CO_AUTHOR = "CO_AUTHOR"
    SUPERVISOR = "SUPERVISOR"
