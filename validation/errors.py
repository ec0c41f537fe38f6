"""
Error taxonomy and exit-code classification for storage-audit.

Every command is a one-shot batch operation, so every error is terminal for
the invocation. This module maps each error class to a distinct process exit
status so callers (cron jobs, wrapper scripts) can tell them apart.
"""

import logging
from typing import Optional

import pydantic


# Process exit statuses
EXIT_OK = 0
EXIT_UNEXPECTED = 1
EXIT_INVALID_ARGUMENT = 2
EXIT_TRANSPORT = 3
EXIT_CATALOG = 4
EXIT_CONFIG = 5

# Module logger
logger = logging.getLogger(__name__)


class AuditError(Exception):
    """Base class for all storage-audit errors."""


class ArgumentValidationError(AuditError):
    """A command argument is missing or malformed. Raised before any I/O."""


class LocalPathError(ArgumentValidationError):
    """The local storage directory does not exist or is not a directory."""


class TransportError(AuditError):
    """
    The query node could not be queried successfully.

    ``status_code`` is the HTTP status of the failed response, or None when
    no usable response was received (connection failure, timeout).
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CatalogParseError(AuditError):
    """A persisted catalog is not valid JSON or does not match its schema."""


class CatalogNotFoundError(CatalogParseError):
    """A persisted catalog required by the command was never written."""


def exit_code_for(exc: BaseException) -> int:
    """
    Classify an exception into a process exit status.

    Args:
        exc: The exception that terminated the command

    Returns:
        One of the EXIT_* constants
    """
    if isinstance(exc, ArgumentValidationError):
        return EXIT_INVALID_ARGUMENT

    if isinstance(exc, TransportError):
        logger.debug(f"Transport error (status={exc.status_code}): {exc}")
        return EXIT_TRANSPORT

    if isinstance(exc, CatalogParseError):
        return EXIT_CATALOG

    # Settings are the only pydantic models validated from untrusted input
    # outside catalog.store, which wraps its own failures in CatalogParseError
    if isinstance(exc, pydantic.ValidationError):
        return EXIT_CONFIG

    logger.debug(f"Unclassified exception: {type(exc).__name__}")
    return EXIT_UNEXPECTED
