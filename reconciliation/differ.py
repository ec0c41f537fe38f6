"""Set reconciliation between a local and a remote object catalog."""
from catalog.models import DiffReport, LocalCatalog, RemoteCatalog
from catalog.ordering import sort_ids


def missing_per_bag(local_ids: set[str], bags: dict[str, list[str]]) -> dict[str, list[str]]:
    """Map each bag to the objects it lists that are not held locally.

    The bag's own object order is preserved. Bags with nothing missing are
    omitted.
    """
    result: dict[str, list[str]] = {}
    for bag_id, objects in bags.items():
        missing = [object_id for object_id in objects if object_id not in local_ids]
        if missing:
            result[bag_id] = missing
    return result


def diff(local: LocalCatalog, remote: RemoteCatalog) -> DiffReport:
    """Reconcile local objects against the objects the remote assigns to the node.

    - unexpected_local: local objects absent from every remote bag (orphans)
    - missing_objects_per_bag: per bag, its objects absent locally
    - missing_objects_count: distinct missing objects across all bags. An
      object missing from several bags is listed under each of them but
      counted once, so this can be lower than the sum of the per-bag counts.

    Pure function: no I/O, no logging.
    """
    local_ids = set(local.objects)
    remote_ids: set[str] = set()
    for objects in remote.bags.values():
        remote_ids.update(objects)

    unexpected = sort_ids(local_ids - remote_ids)
    missing = missing_per_bag(local_ids, remote.bags)

    distinct_missing: set[str] = set()
    for objects in missing.values():
        distinct_missing.update(objects)

    return DiffReport(
        bag_filter=remote.bag_filter,
        unexpected_local=unexpected,
        missing_objects_per_bag=missing,
        missing_objects_count=len(distinct_missing),
        unexpected_local_count=len(unexpected),
    )
