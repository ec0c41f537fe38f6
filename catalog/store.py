"""Whole-file JSON persistence for catalogs and diff reports.

Writes are atomic (temp file + os.replace): either the complete file is
written or the previous file is left untouched.
"""

import json
import logging
import os
from typing import TypeVar

import pydantic

from catalog.models import LocalCatalog, RemoteCatalog, CatalogRecord
from validation.errors import CatalogNotFoundError, CatalogParseError

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=CatalogRecord)


def write_catalog(path: str, record: CatalogRecord) -> None:
    """Serialise ``record`` to ``path`` atomically, creating parent directories."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    tmp_path = path + '.tmp'
    with open(tmp_path, 'w', encoding='utf-8') as f:
        f.write(record.to_json())
    os.replace(tmp_path, path)
    logger.debug(f"Wrote {type(record).__name__} to {path}")


def _read(path: str, model: type[RecordT]) -> RecordT:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError as exc:
        raise CatalogNotFoundError(f"{model.__name__} not found at {path}") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise CatalogParseError(f"Invalid JSON in {path}: {exc}") from exc

    try:
        return model.model_validate(data)
    except pydantic.ValidationError as exc:
        raise CatalogParseError(f"Invalid {model.__name__} in {path}: {exc}") from exc


def read_local_catalog(path: str) -> LocalCatalog:
    """Load a LocalCatalog. Raises CatalogNotFoundError / CatalogParseError."""
    return _read(path, LocalCatalog)


def read_remote_catalog(path: str) -> RemoteCatalog:
    """Load a RemoteCatalog. Raises CatalogNotFoundError / CatalogParseError."""
    return _read(path, RemoteCatalog)
