"""
Shared pytest fixtures for storage-audit tests.

Provides:
- A fake paginated query node (respx side effect) that serves records by
  limit/offset and records every request it receives
- Sample catalogs for reconciliation tests
- Isolation from any storage-audit env vars or YAML file on the host
"""

import json
import os

import httpx
import pytest

from catalog.models import LocalCatalog, RemoteCatalog


class FakeQueryNode:
    """
    respx side effect serving ``storageBags`` pages from in-memory data.

    Bags-by-bucket requests (``storageBucket`` variable) are served from
    ``bucket_bags``; bags-objects requests (``storageBags`` id list) are served
    from ``bag_objects`` filtered to the requested ids, in ``bag_objects``
    insertion order. Every request's variables are kept in ``requests``.

    Usage:
        def test_x(fake_query_node):
            fake_query_node.bucket_bags = [{"id": "dynamic:channel:1"}]
            with respx.mock:
                respx.post(GRAPHQL_URL).mock(side_effect=fake_query_node)
                ...
    """

    def __init__(self):
        self.bucket_bags: list[dict] = []
        self.bag_objects: dict[str, list[dict]] = {}
        self.requests: list[dict] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        variables = body["variables"]
        self.requests.append(variables)

        if "storageBucket" in variables:
            records = self.bucket_bags
        else:
            wanted = set(variables["storageBags"])
            records = [
                {"id": bag_id, "objects": objects}
                for bag_id, objects in self.bag_objects.items()
                if bag_id in wanted
            ]

        offset, limit = variables["offset"], variables["limit"]
        page = records[offset:offset + limit]
        return httpx.Response(200, json={"data": {"storageBags": page}})

    @property
    def object_requests(self) -> list[dict]:
        return [v for v in self.requests if "storageBags" in v]


@pytest.fixture
def fake_query_node():
    """Fresh FakeQueryNode with no data."""
    return FakeQueryNode()


@pytest.fixture
def local_catalog():
    """LocalCatalog holding a, b and an orphan x."""
    return LocalCatalog(objects=["a", "b", "x"])


@pytest.fixture
def remote_catalog():
    """RemoteCatalog where c is assigned through two bags."""
    return RemoteCatalog(
        bucket_id="1",
        bags={
            "bag1": ["a", "b", "c"],
            "bag2": ["c", "d"],
        },
    )


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep host STORAGE_AUDIT_* env vars and YAML files out of every test."""
    for key in list(os.environ):
        if key.startswith("STORAGE_AUDIT_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("STORAGE_AUDIT_CONFIG_FILE", str(tmp_path / "no-such-config.yml"))
