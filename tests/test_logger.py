"""日志配置的单元测试：请求 ID 注入、格式化器与 dictConfig 结构。"""

import json
import logging

from app.packages.kangalos.core.config import Settings
from app.packages.kangalos.core.logger import (
    OWNED_LOGGERS,
    ConsoleFormatter,
    JsonLineFormatter,
    RequestContextFilter,
    build_logging_config,
    set_request_id,
)


def _record(message: str = "hello %s", args=("world",), level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord("app.test", level, __file__, 1, message, args, None)


def test_filter_stamps_current_request_id():
    record = _record()
    set_request_id("req-123")
    try:
        assert RequestContextFilter().filter(record) is True
    finally:
        set_request_id(None)
    assert record.request_id == "req-123"

    outside = _record()
    RequestContextFilter().filter(outside)
    assert outside.request_id == "-"


def test_json_line_formatter_fields():
    record = _record()
    record.request_id = "abc"
    entry = json.loads(JsonLineFormatter().format(record))
    assert entry["message"] == "hello world"
    assert entry["level"] == "INFO"
    assert entry["logger"] == "app.test"
    assert entry["request_id"] == "abc"
    assert entry["time"].endswith("+00:00")


def test_console_formatter_colours_only_the_level():
    record = _record(level=logging.WARNING)
    record.request_id = "-"
    coloured = ConsoleFormatter(use_colors=True).format(record)
    assert "\033[33mWARNING \033[0m" in coloured
    assert coloured.endswith("[-] hello world")
    assert record.levelname == "WARNING"

    plain = ConsoleFormatter(use_colors=False).format(record)
    assert "\033[" not in plain


def test_build_logging_config_switches_to_json(tmp_path):
    settings = Settings(LOG_DIR=str(tmp_path), LOG_JSON=True, LOG_LEVEL="DEBUG")
    config = build_logging_config(settings)

    assert config["handlers"]["console"]["formatter"] == "json"
    assert config["handlers"]["file"]["formatter"] == "json"
    assert config["handlers"]["file"]["filename"] == str(tmp_path / settings.log_file_name)
    assert set(config["loggers"]) == set(OWNED_LOGGERS)
    assert all(not item["propagate"] for item in config["loggers"].values())
    assert config["root"]["level"] == "DEBUG"

    text = build_logging_config(Settings(LOG_DIR=str(tmp_path)))
    assert text["handlers"]["console"]["formatter"] == "console"
    assert text["handlers"]["file"]["formatter"] == "plain"
