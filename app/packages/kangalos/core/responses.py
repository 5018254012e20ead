"""响应封装：构建系统统一的返回结构。"""

from typing import Any, Optional


def create_response(
    message: str,
    data: Any = None,
    meta: Optional[dict[str, Any]] = None,
    status: bool = True,
) -> dict[str, Any]:
    """按照 ``status``、``message``、``data``、``meta`` 组合出统一响应体。"""
    return {"status": status, "message": message, "data": data, "meta": meta or {}}


def paginated_response(message: str, result, base_url: str, serializer) -> dict[str, Any]:
    """把 ``PaginatedResult`` 序列化为列表响应，分页信息挂在 ``meta.pagination``。"""
    return create_response(
        message,
        [serializer(item) for item in result.items],
        {"pagination": result.meta(base_url)},
    )
