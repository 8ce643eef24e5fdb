"""saaj 日志配置

CLI 与 Web 服务共用，支持人类可读文本和结构化 JSON 两种输出格式。
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone

TEXT_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """结构化 JSON 日志格式器，便于日志平台采集

    输出格式:
        {"timestamp": ..., "level": "INFO", "logger": "saaj.core.installer",
         "message": ..., "module": ..., "function": ..., "line": 42}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, ensure_ascii=False)


def setup_logging(level: str = "INFO", json_output: bool = False) -> None:
    """配置根日志器，输出到 stderr

    参数:
        level: 日志级别字符串（DEBUG, INFO, WARNING, ERROR）
        json_output: 为 True 时输出 JSON，否则输出文本

    重复调用时先清理已有 handlers，避免日志重复输出。
    """
    reset_logging()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stderr)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    root.addHandler(handler)


def setup_logging_from_env(default_level: str = "WARNING") -> None:
    """按环境变量 SAAJ_LOG_LEVEL / SAAJ_LOG_JSON 配置日志"""
    setup_logging(
        level=os.getenv("SAAJ_LOG_LEVEL", default_level),
        json_output=os.getenv("SAAJ_LOG_JSON", "") == "1",
    )


def reset_logging() -> None:
    """清理根日志器上的所有 handlers（测试中常用）"""
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
