"""Runtime configuration and logging setup for storage-audit."""

from config.logging_config import configure_logging
from config.settings import AuditSettings, load_settings

__all__ = ["AuditSettings", "configure_logging", "load_settings"]
