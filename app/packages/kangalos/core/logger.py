"""日志配置：控制台按级别着色、可选 JSON 行日志、按天滚动的文件日志。

每条记录都带有 ``request_id``（由 ``RequestIdMiddleware`` 写入上下文，请求之外为 ``-``），
时间戳统一按 UTC 输出，与数据库中的时间口径一致。
"""

import json
import logging
import logging.config
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Optional

from .config import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s [%(request_id)s] %(message)s"
NO_REQUEST_ID = "-"
# 这些 logger 直接挂处理器且不向 root 传播，避免重复输出
OWNED_LOGGERS = ("app", "uvicorn", "uvicorn.access")

_request_id: ContextVar[Optional[str]] = ContextVar("kangalos_request_id", default=None)


def set_request_id(request_id: Optional[str]) -> None:
    _request_id.set(request_id)


def get_request_id() -> Optional[str]:
    return _request_id.get()


class RequestContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or NO_REQUEST_ID
        return True


class UTCFormatter(logging.Formatter):
    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        moment = datetime.fromtimestamp(record.created, timezone.utc)
        if datefmt:
            return moment.strftime(datefmt)
        return moment.isoformat(timespec="milliseconds")


class ConsoleFormatter(UTCFormatter):
    """只给级别名着色，消息正文保持原样。"""

    LEVEL_COLORS = {
        logging.DEBUG: "36",
        logging.INFO: "32",
        logging.WARNING: "33",
        logging.ERROR: "31",
        logging.CRITICAL: "1;31",
    }

    def __init__(self, fmt: str = LOG_FORMAT, datefmt: Optional[str] = None, use_colors: Optional[bool] = None):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_colors = sys.stderr.isatty() if use_colors is None else use_colors

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno)
        if not self.use_colors or color is None:
            return super().format(record)
        levelname = record.levelname
        record.levelname = f"\033[{color}m{levelname:<8}\033[0m"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


class JsonLineFormatter(UTCFormatter):
    """每条记录输出一行 JSON，便于日志采集。"""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "request_id": getattr(record, "request_id", NO_REQUEST_ID),
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def build_logging_config(settings: Settings) -> dict[str, Any]:
    """根据配置生成 ``dictConfig`` 字典；``LOG_JSON`` 打开时控制台与文件都输出 JSON。"""
    handler_names = ["console", "file"]
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"request_context": {"()": RequestContextFilter}},
        "formatters": {
            "console": {"()": ConsoleFormatter},
            "plain": {"()": UTCFormatter, "fmt": LOG_FORMAT},
            "json": {"()": JsonLineFormatter},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": settings.log_level,
                "formatter": "json" if settings.log_json else "console",
                "filters": ["request_context"],
            },
            "file": {
                "class": "logging.handlers.TimedRotatingFileHandler",
                "level": settings.log_level,
                "formatter": "json" if settings.log_json else "plain",
                "filters": ["request_context"],
                "filename": str(settings.log_file_path),
                "when": "midnight",
                "backupCount": 14,
                "encoding": "utf-8",
                "delay": True,
            },
        },
        "loggers": {
            name: {"handlers": handler_names, "level": settings.log_level, "propagate": False}
            for name in OWNED_LOGGERS
        },
        "root": {"handlers": handler_names, "level": settings.log_level},
    }


def setup_logging() -> None:
    settings = get_settings()
    settings.log_directory.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_logging_config(settings))


logger = logging.getLogger("app")
