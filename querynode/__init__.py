"""
querynode — GraphQL access to the storage query node.

Public API:
    QueryNodeClient           -- async GraphQL client with offset pagination
    TransportError            -- non-success HTTP response
    QueryNodeConnectionError  -- server unreachable or timed out
    QueryNodeQueryError       -- GraphQL errors array or malformed payload
    STORAGE_BUCKET_BAGS       -- bags-by-bucket query
    STORAGE_BAGS_OBJECTS      -- objects-by-bag-id-list query
"""

from querynode.client import (
    DEFAULT_QUERY_NODE_URL,
    QueryNodeClient,
    QueryNodeConnectionError,
    QueryNodeQueryError,
    TransportError,
)
from querynode.queries import STORAGE_BAGS_OBJECTS, STORAGE_BUCKET_BAGS

__all__ = [
    "DEFAULT_QUERY_NODE_URL",
    "QueryNodeClient",
    "QueryNodeConnectionError",
    "QueryNodeQueryError",
    "TransportError",
    "STORAGE_BAGS_OBJECTS",
    "STORAGE_BUCKET_BAGS",
]
