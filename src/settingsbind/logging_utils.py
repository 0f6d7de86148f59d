from __future__ import annotations

import logging
import os
import sys
from datetime import datetime

LOG_LEVEL_OPTIONS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LOG_LEVEL = "INFO"
LOG_LEVEL_ENV_VAR = "SETTINGSBIND_LOG_LEVEL"


class _SettingsBindLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created)
        time_text = timestamp.strftime("%H:%M:%S.%f")[:-3]
        date_text = f"{timestamp.month}/{timestamp.day}/{timestamp.year}"
        level_text = str(record.levelname or "INFO").capitalize()
        message = record.getMessage()
        name = str(record.name or "").strip()
        if name:
            message = f"[{name}] {message}"
        if record.exc_info:
            exc_text = self.formatException(record.exc_info)
            if exc_text:
                message = f"{message}\n{exc_text}"
        return f"[{level_text}] [{time_text} {date_text}] {message}"


def normalize_log_level_name(value: object, default: str = DEFAULT_LOG_LEVEL) -> str:
    text = str(value or "").strip().upper()
    return text if text in LOG_LEVEL_OPTIONS else str(default).strip().upper()


def get_level_number(value: object, default: str = DEFAULT_LOG_LEVEL) -> int:
    return int(getattr(logging, normalize_log_level_name(value, default), logging.INFO))


def configure_app_logging(level: object = None) -> str:
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL)
    level_name = normalize_log_level_name(level)
    root_logger = logging.getLogger()
    handler = None
    for existing in root_logger.handlers:
        if getattr(existing, "_settingsbind_console_handler", False):
            handler = existing
            break
    if handler is None:
        handler = logging.StreamHandler(sys.__stdout__)
        handler._settingsbind_console_handler = True  # type: ignore[attr-defined]
        handler.setFormatter(_SettingsBindLogFormatter())
        root_logger.addHandler(handler)
    root_logger.setLevel(get_level_number(level_name))
    logging.captureWarnings(True)
    return level_name


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
