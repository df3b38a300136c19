"""構造化ログ (1行1JSON)

APIプロセスとスケジューラプロセスは同じ形式で出力し、`service` で区別する。
"""
import json
import logging
import sys
from datetime import datetime, timezone

# ライブラリ側ロガーの既定レベル
QUIET_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "apscheduler": logging.INFO,
    "httpx": logging.WARNING,
    "openai": logging.WARNING,
    "uvicorn.access": logging.INFO,
}


class JSONFormatter(logging.Formatter):
    """構造化JSONログフォーマッター"""

    def __init__(self, service: str):
        super().__init__()
        self.service = service

    def format(self, record):
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self.service,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if hasattr(record, "extra_data"):
            log_entry["data"] = record.extra_data
        if record.exc_info and record.exc_info[0]:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, ensure_ascii=False, default=str)


def setup_logging(debug: bool = False, service: str = "journey-api"):
    """ルートロガーにstdoutのJSONハンドラを1つだけ設定"""
    level = logging.DEBUG if debug else logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter(service))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
