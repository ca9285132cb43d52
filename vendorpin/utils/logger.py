"""vendorpin 日志配置

支持普通文本和结构化 JSON 两种输出格式，统一输出到 stderr，
避免与透传的 VCS / 工具链输出混在 stdout 上。
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone

_PLAIN_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"
_VERBOSE_FORMAT = "%(levelname)s %(message)s"


class JSONFormatter(logging.Formatter):
    """结构化 JSON 日志格式器，便于 CI 流水线消费

    输出格式:
        {"timestamp": "...", "level": "INFO", "logger": "vendorpin.core.fetcher",
         "message": "...", "exception": "..." (仅在有异常时)}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, ensure_ascii=False)


def setup_logging(
    level: str = "INFO", json_output: bool = False, verbose: bool = False,
) -> None:
    """配置根日志器

    参数:
        level: 日志级别字符串（DEBUG, INFO, WARNING, ERROR）
        json_output: 为 True 时使用 JSON 格式（适用于 CI）
        verbose: 为 True 时强制 DEBUG，并使用紧凑格式回显命令

    说明:
        自动清理已有 handlers，重复调用不会导致日志重复输出。
    """
    reset_logging()
    root = logging.getLogger()
    if verbose:
        root.setLevel(logging.DEBUG)
    else:
        root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stderr)
    if json_output:
        handler.setFormatter(JSONFormatter())
    elif verbose:
        handler.setFormatter(logging.Formatter(_VERBOSE_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT))
    root.addHandler(handler)


def reset_logging() -> None:
    """清理根日志器上已注册的 handlers"""
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
