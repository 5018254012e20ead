"""异常处理模块：定义统一的业务异常与响应格式。

业务层只抛出三类错误（对应 HTTP 404/409/400），由全局处理器统一包装为
``{status, message, data, meta}`` 结构。
"""

from typing import Any

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .logger import logger


class AppException(HTTPException):
    """携带统一响应结构的业务异常，方便在全局处理中转换响应体。"""

    def __init__(self, msg: str, code: int = status.HTTP_400_BAD_REQUEST, data=None) -> None:
        super().__init__(status_code=code, detail=msg)
        self.data = data

    @property
    def message(self) -> str:
        return str(self.detail)


class NotFoundError(AppException):
    """引用的记录不存在。"""

    def __init__(self, msg: str, data=None) -> None:
        super().__init__(msg, status.HTTP_404_NOT_FOUND, data)


class ConflictError(AppException):
    """唯一字段重复或时间区间重叠。"""

    def __init__(self, msg: str, data=None) -> None:
        super().__init__(msg, status.HTTP_409_CONFLICT, data)


class BadRequestError(AppException):
    """标识符格式错误或业务校验失败。"""

    def __init__(self, msg: str, data=None) -> None:
        super().__init__(msg, status.HTTP_400_BAD_REQUEST, data)


class CycleDetectedError(ConflictError):
    """父子指针形成环，无法构建层级结构。"""

    def __init__(self, node_ids) -> None:
        ids = sorted(str(item) for item in node_ids)
        super().__init__(f"Cycle detected in parent hierarchy: {', '.join(ids)}", {"node_ids": ids})
        self.node_ids = ids


def _error_payload(message: str, data: Any = None) -> dict:
    return {"status": False, "message": message, "data": data, "meta": {}}


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:  # pragma: no cover - framework glue
    """将 FastAPI 的 ``HTTPException`` 转换为统一响应格式。"""
    payload = _error_payload(str(exc.detail), getattr(exc, "data", None))
    return JSONResponse(status_code=exc.status_code, content=payload, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:  # pragma: no cover - framework glue
    """统一处理请求参数验证失败的场景，保留 422 状态码。"""

    def _serialize(obj: Any) -> Any:
        if isinstance(obj, Exception):
            return str(obj)
        if isinstance(obj, dict):
            return {key: _serialize(value) for key, value in obj.items()}
        if isinstance(obj, (list, tuple)):
            return [_serialize(item) for item in obj]
        return obj

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_payload("Request validation failed", _serialize(exc.errors())),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # pragma: no cover - framework glue
    """兜底处理：将未捕获异常转换为标准的 500 响应结构。"""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_payload("Internal server error"),
    )
