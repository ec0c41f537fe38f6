"""Logging configuration for storage-audit: plain text or structured JSON."""

from __future__ import annotations

import logging

from pythonjsonlogger import json as jsonlogger

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
TEXT_DATEFMT = "%H:%M:%S"


def configure_logging(log_level: str, log_format: str = "text") -> None:
    """Configure the root logger.

    JSON output format: {"ts": "...", "level": "...", "name": "...", "msg": "..."}

    Args:
        log_level: Logging level string (e.g., "info", "debug", "warning").
        log_format: "text" for human-readable lines, "json" for structured output.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format == "json":
        formatter: logging.Formatter = jsonlogger.JsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={
                "asctime": "ts",
                "levelname": "level",
                "message": "msg",
            },
        )
    else:
        formatter = logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATEFMT)

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    # Clear any existing handlers to avoid duplicate output
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    # httpx logs every request at INFO; keep it to warnings unless debugging
    logging.getLogger("httpx").setLevel(logging.DEBUG if level <= logging.DEBUG else logging.WARNING)
