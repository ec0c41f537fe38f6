#!/usr/bin/env python3
"""
storage-audit — reconcile a storage node's local objects with its bucket assignment.

Each command is a separate one-shot invocation:

    storage-audit localFiles <path>                    # write local.json
    storage-audit bucketObjects <bucketId> [bagFilter] # write remote[-<bagFilter>].json
    storage-audit diff [bagFilter]                     # write diff[-<bagFilter>].json

Arguments are validated before any network or filesystem work. Exit statuses
are listed in validation.errors.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

import pydantic

from catalog.local import list_local_objects
from catalog.models import DiffReport, LocalCatalog, RemoteCatalog
from catalog.remote import fetch_remote_catalog
from catalog.store import write_catalog
from config.logging_config import configure_logging
from config.settings import AuditSettings, load_settings
from querynode.client import QueryNodeClient
from reconciliation.engine import ReconciliationEngine
from validation.arguments import optional_bag_filter, require_bucket_id, require_path
from validation.errors import (
    EXIT_OK,
    ArgumentValidationError,
    AuditError,
    exit_code_for,
)

logger = logging.getLogger('storage_audit')


# =============================================================================
# Commands
# =============================================================================

def run_local_files(path: str, output_path: str) -> LocalCatalog:
    """List the numeric object files in ``path`` and write the LocalCatalog."""
    logger.info("Getting files...")
    catalog = LocalCatalog(objects=list_local_objects(path))
    logger.info(f"Found {len(catalog.objects)} objects")
    write_catalog(output_path, catalog)
    logger.info(f"Local catalog written to {output_path}")
    return catalog


async def run_bucket_objects(
    settings: AuditSettings,
    bucket_id: str,
    bag_filter: Optional[str],
    output_path: str,
) -> RemoteCatalog:
    """Fetch the bucket's accepted objects per bag and write the RemoteCatalog."""
    async with QueryNodeClient(settings.query_node_url, timeout=settings.request_timeout) as client:
        catalog = await fetch_remote_catalog(
            client,
            bucket_id,
            bag_filter,
            bags_page_size=settings.bags_page_size,
            objects_page_size=settings.objects_page_size,
            chunk_size=settings.bag_chunk_size,
            max_concurrency=settings.max_concurrency,
        )
    write_catalog(output_path, catalog)
    logger.info(f"Remote catalog written to {output_path}")
    return catalog


def run_diff(local_path: str, remote_path: str, output_path: str) -> DiffReport:
    """Reconcile the two persisted catalogs and write the DiffReport."""
    return ReconciliationEngine(local_path, remote_path, output_path).run()


# =============================================================================
# Argument parsing
# =============================================================================

def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--data-dir', help='Directory for catalog and report files (default: .)')
    common.add_argument('--query-node-url', help='GraphQL endpoint of the query node')
    common.add_argument('--log-level', help='Logging level (debug, info, warning, error)')
    common.add_argument('--log-format', choices=['text', 'json'], help='Log output format')

    parser = argparse.ArgumentParser(
        prog='storage-audit',
        description='Reconcile local storage node objects with the bucket assignment',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    local = subparsers.add_parser('localFiles', parents=[common], help='List local object files')
    local.add_argument('path', nargs='?', help='Local storage directory')
    local.add_argument('--output', '-o', help='LocalCatalog output file')

    bucket = subparsers.add_parser('bucketObjects', parents=[common], help='Fetch bucket objects')
    bucket.add_argument('bucket_id', nargs='?', help='Numeric storage bucket id')
    bucket.add_argument('bag_filter', nargs='?', help='Only bags whose id contains this number')
    bucket.add_argument('--output', '-o', help='RemoteCatalog output file')

    diff = subparsers.add_parser('diff', parents=[common], help='Diff local and remote catalogs')
    diff.add_argument('bag_filter', nargs='?', help='Use the bag-scoped remote catalog')
    diff.add_argument('--local', help='LocalCatalog input file')
    diff.add_argument('--remote', help='RemoteCatalog input file')
    diff.add_argument('--output', '-o', help='DiffReport output file')

    return parser.parse_args(argv)


def _validate_args(args: argparse.Namespace) -> None:
    """Raise ArgumentValidationError for missing or non-numeric arguments."""
    if args.command == 'localFiles':
        require_path(args.path)
    elif args.command == 'bucketObjects':
        require_bucket_id(args.bucket_id)
        optional_bag_filter(args.bag_filter)
    elif args.command == 'diff':
        optional_bag_filter(args.bag_filter)


def _dispatch(args: argparse.Namespace, settings: AuditSettings) -> None:
    if args.command == 'localFiles':
        run_local_files(args.path, args.output or settings.local_catalog_path())
    elif args.command == 'bucketObjects':
        output = args.output or settings.remote_catalog_path(args.bag_filter)
        asyncio.run(run_bucket_objects(settings, args.bucket_id, args.bag_filter, output))
    elif args.command == 'diff':
        run_diff(
            args.local or settings.local_catalog_path(),
            args.remote or settings.remote_catalog_path(args.bag_filter),
            args.output or settings.diff_report_path(args.bag_filter),
        )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)

    try:
        _validate_args(args)
        settings = load_settings(
            data_dir=args.data_dir,
            query_node_url=args.query_node_url,
            log_level=args.log_level,
            log_format=args.log_format,
        )
    except (ArgumentValidationError, pydantic.ValidationError) as exc:
        print(f"{exc}", file=sys.stderr)
        return exit_code_for(exc)

    configure_logging(settings.log_level, settings.log_format)

    try:
        _dispatch(args, settings)
    except (AuditError, OSError) as exc:
        logger.error(f"{args.command} failed: {exc}")
        return exit_code_for(exc)

    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
