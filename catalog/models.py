"""Pydantic records for the catalogs persisted between invocations.

Each record carries a ``schemaVersion`` so the on-disk format can evolve.
Field names are snake_case in Python and camelCase on disk.

Unversioned files written by earlier releases of the tool (a bare JSON list
for the local catalog, a bare bag -> objects mapping for the remote catalog)
are upgraded on load.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

SCHEMA_VERSION = 1


class CatalogRecord(BaseModel):
    """Common config: camelCase aliases, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    schema_version: int = SCHEMA_VERSION

    @field_validator("schema_version")
    @classmethod
    def _supported_version(cls, value: int) -> int:
        if value != SCHEMA_VERSION:
            raise ValueError(f"unsupported schema version {value} (expected {SCHEMA_VERSION})")
        return value

    def to_json(self) -> str:
        """Deterministic JSON serialisation used for every catalog file."""
        return self.model_dump_json(by_alias=True, indent=2) + "\n"


class LocalCatalog(CatalogRecord):
    """Object ids found in the local storage directory, naturally sorted."""

    objects: list[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _upgrade_bare_list(cls, data: Any) -> Any:
        if isinstance(data, list):
            return {"objects": data}
        return data


class RemoteCatalog(CatalogRecord):
    """Accepted object ids per bag, as assigned to a bucket by the query node.

    Invariant: a bag is present only if it has at least one accepted object.
    """

    bucket_id: Optional[str] = None
    bag_filter: Optional[str] = None
    bags: dict[str, list[str]] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _upgrade_bare_mapping(cls, data: Any) -> Any:
        if isinstance(data, dict) and "bags" not in data and "schemaVersion" not in data \
                and "schema_version" not in data:
            return {"bags": data}
        return data

    @field_validator("bags")
    @classmethod
    def _no_empty_bags(cls, bags: dict[str, list[str]]) -> dict[str, list[str]]:
        empty = [bag_id for bag_id, objects in bags.items() if not objects]
        if empty:
            raise ValueError(f"bags without accepted objects must be omitted: {empty}")
        return bags

    @property
    def object_count(self) -> int:
        return sum(len(objects) for objects in self.bags.values())


class DiffReport(CatalogRecord):
    """Result of reconciling a LocalCatalog against a RemoteCatalog.

    ``missing_objects_count`` counts distinct ids: an object missing from two
    bags is listed under both but counted once, so it can be lower than the
    sum of the per-bag list lengths.
    """

    bag_filter: Optional[str] = None
    unexpected_local: list[str] = Field(default_factory=list)
    missing_objects_per_bag: dict[str, list[str]] = Field(default_factory=dict)
    missing_objects_count: int = 0
    unexpected_local_count: int = 0
