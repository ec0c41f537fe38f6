"""
Remote catalog retrieval: bags assigned to a bucket and their accepted objects.

Fetch flow:
1. list_bags() pages through the bucket's bags (createdAt order, id tiebreaker)
2. collect_objects() splits the bag ids into chunks no larger than the query
   node's id-list cap and pages through each chunk's bags and objects
3. Only accepted objects are kept; bags left empty are dropped

Chunks run one at a time unless max_concurrency > 1. Either way the result
mapping is assembled in chunk order, so the output does not depend on which
request finishes first. When one chunk fails the others are cancelled and
awaited before the error propagates.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Sequence

from catalog.models import RemoteCatalog
from catalog.ordering import sort_ids
from querynode.client import QueryNodeClient, QueryNodeQueryError
from querynode.queries import STORAGE_BAGS_OBJECTS, STORAGE_BUCKET_BAGS

logger = logging.getLogger(__name__)

# Maximum length of the id_in list accepted by the query node
MAX_BAG_IDS_PER_QUERY = 1000

DEFAULT_BAGS_PAGE_SIZE = 3000
DEFAULT_OBJECTS_PAGE_SIZE = 1000


def chunked(items: Sequence[str], size: int) -> list[list[str]]:
    """Split items into consecutive lists of at most ``size`` elements."""
    if size < 1:
        raise ValueError(f"chunk size must be at least 1, got {size}")
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


async def list_bags(
    client: QueryNodeClient,
    bucket_id: str,
    bag_filter: Optional[str] = None,
    page_size: int = DEFAULT_BAGS_PAGE_SIZE,
) -> list[str]:
    """Return the ids of all bags assigned to ``bucket_id``, in server order.

    Args:
        client:     Query node client
        bucket_id:  Storage bucket id
        bag_filter: Keep only bag ids containing this substring
                    ("42" matches "dynamic:channel:142" and "dynamic:channel:421")
        page_size:  Bags per request
    """
    logger.info("Getting bags...")
    bags = await client.fetch_all(
        STORAGE_BUCKET_BAGS,
        {"storageBucket": bucket_id},
        page_size,
        "storageBags",
    )
    bag_ids = [bag["id"] for bag in bags]
    logger.info(f"Found {len(bag_ids)} bags")

    if bag_filter is not None:
        bag_ids = [bag_id for bag_id in bag_ids if bag_filter in str(bag_id)]
        logger.info(f"{len(bag_ids)} bags match filter '{bag_filter}'")

    return bag_ids


def _accepted_objects(bags: list[dict]) -> dict[str, list[str]]:
    """Reduce a chunk's bag records to bag id -> sorted accepted object ids.

    Raises:
        QueryNodeQueryError: a record is malformed or a bag id repeats
    """
    result: dict[str, list[str]] = {}
    seen: set[str] = set()
    for bag in bags:
        try:
            bag_id = bag["id"]
            objects = bag.get("objects") or []
            accepted = [obj["id"] for obj in objects if obj.get("isAccepted")]
        except (KeyError, TypeError, AttributeError) as exc:
            raise QueryNodeQueryError(f"Malformed bag record: {bag!r}") from exc
        if bag_id in seen:
            raise QueryNodeQueryError(f"Bag {bag_id} returned more than once in a chunk")
        seen.add(bag_id)
        if accepted:
            result[bag_id] = sort_ids(accepted)
    return result


async def collect_objects(
    client: QueryNodeClient,
    bag_ids: Sequence[str],
    chunk_size: int = MAX_BAG_IDS_PER_QUERY,
    page_size: int = DEFAULT_OBJECTS_PAGE_SIZE,
    max_concurrency: int = 1,
) -> dict[str, list[str]]:
    """Fetch the accepted objects of every bag in ``bag_ids``.

    Args:
        client:          Query node client
        bag_ids:         Bags to fetch; duplicates are ignored
        chunk_size:      Bag ids per query (capped at MAX_BAG_IDS_PER_QUERY)
        page_size:       Bags per request within a chunk
        max_concurrency: Chunks in flight at once (1 = sequential)

    Returns:
        Mapping bag id -> naturally sorted accepted object ids. Bags without
        accepted objects are omitted.
    """
    if max_concurrency < 1:
        raise ValueError(f"max_concurrency must be at least 1, got {max_concurrency}")

    unique_ids = list(dict.fromkeys(bag_ids))
    chunks = chunked(unique_ids, min(chunk_size, MAX_BAG_IDS_PER_QUERY))
    semaphore = asyncio.Semaphore(max_concurrency)

    logger.info("Getting objects...")

    async def fetch_chunk(index: int, chunk: list[str]) -> dict[str, list[str]]:
        async with semaphore:
            logger.debug(f"Fetching chunk {index + 1}/{len(chunks)} ({len(chunk)} bags)")
            bags = await client.fetch_all(
                STORAGE_BAGS_OBJECTS,
                {"storageBags": chunk},
                page_size,
                "storageBags",
            )
            return _accepted_objects(bags)

    if max_concurrency == 1:
        chunk_results = [await fetch_chunk(i, chunk) for i, chunk in enumerate(chunks)]
    else:
        tasks = [asyncio.ensure_future(fetch_chunk(i, chunk)) for i, chunk in enumerate(chunks)]
        try:
            # gather returns results in argument order regardless of completion order
            chunk_results = await asyncio.gather(*tasks)
        except Exception:
            # No chunk may outlive a failed collection
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    result: dict[str, list[str]] = {}
    for chunk_result in chunk_results:
        for bag_id, objects in chunk_result.items():
            if bag_id in result:
                raise QueryNodeQueryError(f"Bag {bag_id} returned by more than one chunk")
            result[bag_id] = objects

    logger.info(f"Found {sum(len(v) for v in result.values())} objects in {len(result)} bags")
    return result


async def fetch_remote_catalog(
    client: QueryNodeClient,
    bucket_id: str,
    bag_filter: Optional[str] = None,
    bags_page_size: int = DEFAULT_BAGS_PAGE_SIZE,
    objects_page_size: int = DEFAULT_OBJECTS_PAGE_SIZE,
    chunk_size: int = MAX_BAG_IDS_PER_QUERY,
    max_concurrency: int = 1,
) -> RemoteCatalog:
    """List a bucket's bags and collect their accepted objects into a RemoteCatalog."""
    bag_ids = await list_bags(client, bucket_id, bag_filter, page_size=bags_page_size)
    bags = await collect_objects(
        client,
        bag_ids,
        chunk_size=chunk_size,
        page_size=objects_page_size,
        max_concurrency=max_concurrency,
    )
    return RemoteCatalog(bucket_id=bucket_id, bag_filter=bag_filter, bags=bags)
