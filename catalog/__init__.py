"""Catalog package: local and remote object listings, ordering, and persistence."""
from catalog.local import list_local_objects
from catalog.models import DiffReport, LocalCatalog, RemoteCatalog
from catalog.ordering import natural_key, sort_ids
from catalog.remote import collect_objects, fetch_remote_catalog, list_bags
from catalog.store import read_local_catalog, read_remote_catalog, write_catalog

__all__ = [
    'list_local_objects',
    'DiffReport',
    'LocalCatalog',
    'RemoteCatalog',
    'natural_key',
    'sort_ids',
    'collect_objects',
    'fetch_remote_catalog',
    'list_bags',
    'read_local_catalog',
    'read_remote_catalog',
    'write_catalog',
]
