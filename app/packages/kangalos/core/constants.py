"""常量定义：集中维护跨模块共享的固定值。"""

DEFAULT_PAGE = 1

ROOT_ORGANISATION_CODE = "UR"
ROOT_ORGANISATION_NAME = "University of Rwanda"

SORT_ASC = "asc"
SORT_DESC = "desc"
