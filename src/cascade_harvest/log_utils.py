"""
log_utils.py
Central logging setup:
 - Console handler (always)
 - Rotating file handler (when HARVEST_LOG_FILE is set)
 - Optional JSON lines (HARVEST_LOG_JSON=1)
 - Idempotent; repeated calls are no-ops unless force=True
"""

from __future__ import annotations

import json
import logging
import os
import threading
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler

from .settings import SETTINGS, LoggingConfig

_LOCK = threading.Lock()
_CONFIGURED = False

_RESERVED_ATTRS = frozenset((
    "args", "msg", "levelname", "levelno", "pathname", "filename",
    "module", "exc_info", "exc_text", "stack_info", "lineno",
    "funcName", "created", "msecs", "relativeCreated", "thread",
    "threadName", "processName", "process", "name", "taskName",
))


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        data = {
            "ts": datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            data["exc"] = self.formatException(record.exc_info)
        # Extra
        for k, v in record.__dict__.items():
            if k in _RESERVED_ATTRS or k.startswith("_"):
                continue
            try:
                json.dumps({k: v})
                data[k] = v
            except (TypeError, ValueError):
                data[k] = str(v)
        return json.dumps(data, ensure_ascii=False)


def _ensure_log_dir(path: str) -> None:
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)


def configure_logging(level: str | None = None, config: LoggingConfig | None = None, force: bool = False) -> None:
    global _CONFIGURED
    with _LOCK:
        if _CONFIGURED and not force:
            return
        log_conf = config or SETTINGS.logging
        raw_level = level or log_conf.level
        chosen_level = getattr(logging, raw_level.upper(), logging.INFO)

        root = logging.getLogger()
        root.setLevel(chosen_level)

        for h in list(root.handlers):
            root.removeHandler(h)

        if log_conf.json:
            formatter: logging.Formatter = JsonFormatter()
        else:
            formatter = logging.Formatter(
                "[%(asctime)s] %(levelname)s %(name)s: %(message)s",
                "%Y-%m-%d %H:%M:%S",
            )

        # Console
        ch = logging.StreamHandler()
        ch.setLevel(chosen_level)
        ch.setFormatter(formatter)
        root.addHandler(ch)

        # Rotating file, only when configured
        if log_conf.log_file:
            try:
                _ensure_log_dir(log_conf.log_file)
                fh = RotatingFileHandler(
                    log_conf.log_file,
                    maxBytes=log_conf.max_bytes,
                    backupCount=log_conf.backup_count,
                    encoding="utf-8",
                )
            except OSError as e:
                root.warning("Could not create file handler", extra={"err": str(e)})
            else:
                fh.setLevel(chosen_level)
                fh.setFormatter(formatter)
                root.addHandler(fh)

        _CONFIGURED = True
