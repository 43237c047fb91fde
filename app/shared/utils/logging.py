# 📄 File: app/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# This file sets up the logging system that records what happens in the API in a structured way,
# so every line written while handling a request can be traced back to that request.

# 🧪 Purpose (Technical Summary):
# Structured logging with JSON formatting (python-json-logger), a request-scoped context
# variable carrying the request ID, and a single setup entry point called at startup.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging: Python standard logging
# - contextvars: Request context tracking

# 🔄 Connected Modules / Calls From:
# Used by: app.main (startup), request logging middleware (request ID), every module logger

import logging
import os
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

from app.shared.config.settings import get_settings

# Context variables for request tracking
request_id_var: ContextVar[str] = ContextVar("request_id", default="")
user_id_var: ContextVar[str] = ContextVar("user_id", default="")

SERVICE_NAME = "videotube-api"

_logging_configured = False


class RequestContextFilter(logging.Filter):
    """
    Adds request ID, user ID, service and hostname to every record.
    """

    def __init__(self, name: str = ""):
        super().__init__(name)
        self.hostname = os.uname().nodename if hasattr(os, "uname") else "unknown"

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        record.user_id = getattr(record, "user_id", None) or user_id_var.get()
        record.service = SERVICE_NAME
        record.hostname = self.hostname
        return True


def _build_formatter(log_format: str) -> logging.Formatter:
    if log_format.lower() == "json":
        return JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s "
            "%(request_id)s %(user_id)s %(service)s %(hostname)s",
            rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"},
        )
    return logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"
    )


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    log_file: Optional[str] = None,
    enable_console: bool = True
) -> logging.Logger:
    """
    Setup application logging configuration.

    Safe to call more than once; only the first call installs handlers.

    Args:
        log_level: Overrides settings.LOG_LEVEL
        log_format: "json" or "text", overrides settings.LOG_FORMAT
        log_file: Optional file to mirror console output into
        enable_console: Attach a stdout handler

    Returns:
        logging.Logger: The "startup" logger
    """
    global _logging_configured

    if _logging_configured:
        return logging.getLogger("startup")

    if log_level is None or log_format is None:
        settings = get_settings()
        log_level = log_level or settings.LOG_LEVEL
        log_format = log_format or settings.LOG_FORMAT

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    formatter = _build_formatter(log_format)
    context_filter = RequestContextFilter()

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(context_filter)
        root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(context_filter)
        root_logger.addHandler(file_handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)

    _logging_configured = True
    return logging.getLogger("startup")
