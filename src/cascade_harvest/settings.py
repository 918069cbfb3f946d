"""
settings.py
Central immutable configuration (dataclasses) read from HARVEST_* environment
variables. Import SETTINGS for the process-wide defaults or build a Settings()
after changing the environment (tests do this).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from .constants import (
    BASE_URL,
    TIMEOUT_PAGE_DEFAULT,
    TIMEOUT_SETTLE_MAX,
    WAIT_QUIET_WINDOW,
    WAIT_SETTLE_DEFAULT,
)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


def _env_optional_int(name: str) -> int | None:
    raw = os.getenv(name, "").strip()
    return int(raw) if raw else None


# ---------------- Enumeration ----------------
@dataclass(frozen=True)
class EnumerationConfig:
    settle_ms: int = field(default_factory=lambda: int(os.getenv("HARVEST_SETTLE_MS", str(WAIT_SETTLE_DEFAULT))))
    settle_mode: str = field(default_factory=lambda: os.getenv("HARVEST_SETTLE_MODE", "fixed"))
    quiet_ms: int = field(default_factory=lambda: int(os.getenv("HARVEST_QUIET_MS", str(WAIT_QUIET_WINDOW))))
    settle_timeout_ms: int = field(
        default_factory=lambda: int(os.getenv("HARVEST_SETTLE_TIMEOUT_MS", str(TIMEOUT_SETTLE_MAX)))
    )
    # None = wait forever for the parent container
    ready_timeout_ms: int | None = field(default_factory=lambda: _env_optional_int("HARVEST_READY_TIMEOUT_MS"))
    clear_before_select: bool = field(default_factory=lambda: _env_flag("HARVEST_CLEAR_BEFORE_SELECT", "1"))
    dedupe_children: bool = field(default_factory=lambda: _env_flag("HARVEST_DEDUPE_CHILDREN", "1"))


# ---------------- Browser ----------------
@dataclass(frozen=True)
class BrowserSettings:
    chrome_ws_url: str | None = field(default_factory=lambda: os.getenv("HARVEST_CHROME_WS_URL") or None)
    headless: bool = field(default_factory=lambda: _env_flag("HARVEST_HEADLESS", "1"))
    target_url: str = field(default_factory=lambda: os.getenv("HARVEST_TARGET_URL", BASE_URL))
    timeout_ms: int = field(
        default_factory=lambda: int(os.getenv("HARVEST_PAGE_TIMEOUT_MS", str(TIMEOUT_PAGE_DEFAULT)))
    )


# ---------------- Files ----------------
@dataclass(frozen=True)
class FileConfig:
    out_dir: str = field(default_factory=lambda: os.getenv("HARVEST_OUT_DIR", "data"))


# ---------------- Logging ----------------
@dataclass(frozen=True)
class LoggingConfig:
    level: str = field(default_factory=lambda: os.getenv("HARVEST_LOG_LEVEL", "INFO"))
    json: bool = field(default_factory=lambda: _env_flag("HARVEST_LOG_JSON", "0"))
    log_file: str | None = field(default_factory=lambda: os.getenv("HARVEST_LOG_FILE") or None)
    max_bytes: int = field(default_factory=lambda: int(os.getenv("HARVEST_LOG_MAX_BYTES", "1048576")))  # 1MB
    backup_count: int = field(default_factory=lambda: int(os.getenv("HARVEST_LOG_BACKUP_COUNT", "3")))


# ---------------- Global settings ----------------
@dataclass(frozen=True)
class Settings:
    enumeration: EnumerationConfig = field(default_factory=EnumerationConfig)
    browser: BrowserSettings = field(default_factory=BrowserSettings)
    files: FileConfig = field(default_factory=FileConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


SETTINGS = Settings()
