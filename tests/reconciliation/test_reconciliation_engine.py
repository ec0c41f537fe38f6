"""Tests for ReconciliationEngine: persisted catalogs in, DiffReport file out."""

import json
import logging

import pytest

from catalog.models import LocalCatalog, RemoteCatalog
from catalog.store import write_catalog
from reconciliation.engine import ReconciliationEngine
from validation.errors import CatalogNotFoundError, CatalogParseError


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def catalog_paths(tmp_path, local_catalog, remote_catalog):
    """Write the sample catalogs and return (local, remote, report) paths."""
    local_path = str(tmp_path / "local.json")
    remote_path = str(tmp_path / "remote.json")
    report_path = str(tmp_path / "diff.json")
    write_catalog(local_path, local_catalog)
    write_catalog(remote_path, remote_catalog)
    return local_path, remote_path, report_path


# =============================================================================
# Test Cases
# =============================================================================

def test_run_writes_report(catalog_paths):
    local_path, remote_path, report_path = catalog_paths

    report = ReconciliationEngine(local_path, remote_path, report_path).run()

    with open(report_path) as f:
        data = json.load(f)
    assert data["unexpectedLocal"] == ["x"]
    assert data["missingObjectsPerBag"] == {"bag1": ["c"], "bag2": ["c", "d"]}
    assert data["missingObjectsCount"] == 2
    assert report.missing_objects_count == 2


def test_run_twice_is_byte_identical(catalog_paths, tmp_path):
    """Unchanged catalogs produce byte-identical reports."""
    local_path, remote_path, report_path = catalog_paths
    second_path = str(tmp_path / "diff-again.json")

    ReconciliationEngine(local_path, remote_path, report_path).run()
    ReconciliationEngine(local_path, remote_path, second_path).run()

    with open(report_path, "rb") as first, open(second_path, "rb") as second:
        assert first.read() == second.read()


def test_run_logs_each_discrepancy_and_totals(catalog_paths, caplog):
    local_path, remote_path, report_path = catalog_paths

    with caplog.at_level(logging.INFO, logger="reconciliation.engine"):
        ReconciliationEngine(local_path, remote_path, report_path).run()

    messages = [r.getMessage() for r in caplog.records]
    assert "Remote object c in bag bag1 is not present locally" in messages
    assert "Remote object d in bag bag2 is not present locally" in messages
    assert "Unexpected local object x" in messages
    assert "Found 2 missing objects across 2 bags" in messages
    assert "Found 1 unexpected local objects" in messages


def test_missing_bag_scoped_remote_catalog_raises_not_found(tmp_path):
    """diff with a bag filter whose remote catalog was never generated fails, no fallback."""
    local_path = str(tmp_path / "local.json")
    write_catalog(local_path, LocalCatalog(objects=["1"]))
    write_catalog(str(tmp_path / "remote.json"), RemoteCatalog(bags={"bag1": ["1"]}))
    report_path = tmp_path / "diff-42.json"

    engine = ReconciliationEngine(local_path, str(tmp_path / "remote-42.json"), str(report_path))
    with pytest.raises(CatalogNotFoundError):
        engine.run()

    assert not report_path.exists()


def test_malformed_local_catalog_writes_nothing(tmp_path, remote_catalog):
    local_path = tmp_path / "local.json"
    local_path.write_text("[1, 2")
    remote_path = str(tmp_path / "remote.json")
    write_catalog(remote_path, remote_catalog)
    report_path = tmp_path / "diff.json"

    with pytest.raises(CatalogParseError):
        ReconciliationEngine(str(local_path), remote_path, str(report_path)).run()

    assert not report_path.exists()
