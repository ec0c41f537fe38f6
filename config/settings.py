"""storage-audit configuration using pydantic-settings with env var and YAML file support.

Precedence (highest to lowest):
1. Explicit overrides (command-line flags)
2. STORAGE_AUDIT_-prefixed environment variables
3. YAML config file (./storage-audit.yml, or $STORAGE_AUDIT_CONFIG_FILE)
4. Defaults defined below
"""

from __future__ import annotations

import logging
import os
from typing import Any, Literal, Optional

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from querynode.client import DEFAULT_QUERY_NODE_URL

logger = logging.getLogger(__name__)

CONFIG_FILE_ENV = "STORAGE_AUDIT_CONFIG_FILE"
DEFAULT_CONFIG_FILE = "storage-audit.yml"

LOCAL_CATALOG_FILE = "local.json"
REMOTE_CATALOG_FILE = "remote"
DIFF_REPORT_FILE = "diff"


class AuditSettings(BaseSettings):
    """storage-audit configuration."""

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_AUDIT_",
        extra="ignore",
    )

    query_node_url: str = DEFAULT_QUERY_NODE_URL
    data_dir: str = "."
    request_timeout: float = Field(default=60.0, gt=0)

    # Query node limits
    bags_page_size: int = Field(default=3000, ge=1)
    objects_page_size: int = Field(default=1000, ge=1)
    bag_chunk_size: int = Field(default=1000, ge=1, le=1000)
    max_concurrency: int = Field(default=1, ge=1, le=16)

    log_level: str = "info"
    log_format: Literal["text", "json"] = "text"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Return sources in priority order: init (CLI) > env > YAML."""
        yaml_file = os.environ.get(CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE)
        yaml_source = YamlConfigSettingsSource(settings_cls, yaml_file=yaml_file)
        return (init_settings, env_settings, yaml_source)

    def local_catalog_path(self) -> str:
        return os.path.join(self.data_dir, LOCAL_CATALOG_FILE)

    def remote_catalog_path(self, bag_filter: Optional[str] = None) -> str:
        """Remote catalog path, scoped to the bag filter when one is given."""
        return os.path.join(self.data_dir, _scoped(REMOTE_CATALOG_FILE, bag_filter))

    def diff_report_path(self, bag_filter: Optional[str] = None) -> str:
        """Diff report path, scoped to the bag filter when one is given."""
        return os.path.join(self.data_dir, _scoped(DIFF_REPORT_FILE, bag_filter))


def _scoped(stem: str, bag_filter: Optional[str]) -> str:
    if bag_filter:
        return f"{stem}-{bag_filter}.json"
    return f"{stem}.json"


def load_settings(**overrides: Any) -> AuditSettings:
    """Build settings, applying non-None overrides on top of env and YAML.

    Raises:
        pydantic.ValidationError: a setting is out of range or malformed
    """
    explicit = {key: value for key, value in overrides.items() if value is not None}
    settings = AuditSettings(**explicit)
    logger.debug(
        "Settings loaded: query_node_url=%s data_dir=%s max_concurrency=%d",
        settings.query_node_url, settings.data_dir, settings.max_concurrency,
    )
    return settings
