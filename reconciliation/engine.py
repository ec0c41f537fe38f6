"""
Reconciliation engine for the ``diff`` command.

Loads the persisted local and remote catalogs, runs the differ, reports the
discrepancies through logging, and writes the DiffReport. Nothing is written
if either catalog cannot be loaded.
"""

import logging
from dataclasses import dataclass

from catalog.models import DiffReport
from catalog.store import read_local_catalog, read_remote_catalog, write_catalog
from reconciliation.differ import diff

logger = logging.getLogger(__name__)


@dataclass
class ReconciliationEngine:
    """Runs one reconciliation between two persisted catalogs.

    Attributes:
        local_path: LocalCatalog file written by ``localFiles``
        remote_path: RemoteCatalog file written by ``bucketObjects``
        report_path: Where the DiffReport is written
    """
    local_path: str
    remote_path: str
    report_path: str

    def run(self) -> DiffReport:
        """Load both catalogs, diff them, log the result, write the report.

        Raises:
            CatalogNotFoundError: a catalog file does not exist
            CatalogParseError: a catalog file is malformed
        """
        local = read_local_catalog(self.local_path)
        remote = read_remote_catalog(self.remote_path)
        logger.info(
            f"Comparing {len(local.objects)} local objects against "
            f"{remote.object_count} remote objects in {len(remote.bags)} bags"
        )

        report = diff(local, remote)
        self._log_report(report)

        write_catalog(self.report_path, report)
        logger.info(f"Diff report written to {self.report_path}")
        return report

    @staticmethod
    def _log_report(report: DiffReport) -> None:
        for bag_id, objects in report.missing_objects_per_bag.items():
            for object_id in objects:
                logger.info(f"Remote object {object_id} in bag {bag_id} is not present locally")
        for object_id in report.unexpected_local:
            logger.info(f"Unexpected local object {object_id}")

        logger.info(
            f"Found {report.missing_objects_count} missing objects "
            f"across {len(report.missing_objects_per_bag)} bags"
        )
        logger.info(f"Found {report.unexpected_local_count} unexpected local objects")
