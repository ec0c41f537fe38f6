"""
querynode.client — Async GraphQL client for the storage query node.

Design notes:
- Async-only: all public methods are coroutines. The CLI calls them via asyncio.run().
- Uses httpx.AsyncClient for async HTTP. Caller must call close() when done
  (or use the client as an async context manager).
- fetch_all() implements offset pagination: a page shorter than the page size
  is the only exhaustion signal, so a final page of exactly ``page_size``
  records costs one extra (empty) request.
- No retries. Any failed request aborts the whole fetch and nothing collected
  so far is returned.

Exports:
    QueryNodeClient          -- async GraphQL client
    TransportError           -- non-success HTTP response (carries status_code)
    QueryNodeConnectionError -- query node unreachable or timed out
    QueryNodeQueryError      -- GraphQL errors array or malformed payload
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from validation.errors import TransportError

log = logging.getLogger(__name__)

DEFAULT_QUERY_NODE_URL = "https://query.joystream.org/graphql"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class QueryNodeConnectionError(TransportError):
    """
    No usable response: the connection was refused or the request timed out.

    ``status_code`` is always None.
    """


class QueryNodeQueryError(TransportError):
    """
    GraphQL response contained an errors array, or lacked the expected data.

    Raised when the query node returns HTTP 200 but the response body has
    ``{"errors": [...]}`` or the requested field is missing or not a list.
    """


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class QueryNodeClient:
    """
    Async GraphQL client for a storage query node.

    Usage::

        async with QueryNodeClient("https://query.joystream.org/graphql") as client:
            bags = await client.fetch_all(QUERY, {"storageBucket": "1"}, 3000, "storageBags")
    """

    def __init__(
        self,
        url: str = DEFAULT_QUERY_NODE_URL,
        timeout: float = 60.0,
    ) -> None:
        """
        Create the async query node client.

        Args:
            url:     Full GraphQL endpoint URL, e.g. ``https://query.joystream.org/graphql``.
            timeout: Total request timeout in seconds (default 60). Connect
                     timeout is fixed at 10 seconds.
        """
        self._url = url

        self._client = httpx.AsyncClient(
            headers={"Content-Type": "application/json"},
            timeout=httpx.Timeout(timeout, connect=10.0),
        )
        log.debug("QueryNodeClient initialised — url=%s timeout=%s", self._url, timeout)

    @property
    def url(self) -> str:
        return self._url

    async def close(self) -> None:
        """Close the underlying httpx client and release connections."""
        await self._client.aclose()

    async def __aenter__(self) -> "QueryNodeClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _gql(self, query: str, variables: dict) -> dict:
        """
        Execute a GraphQL query against the query node.

        Args:
            query:     GraphQL query string.
            variables: Variable dict to pass alongside the query.

        Returns:
            The ``data`` dict from the GraphQL response.

        Raises:
            QueryNodeConnectionError: Server unreachable or request timed out.
            TransportError:           Non-2xx HTTP status.
            QueryNodeQueryError:      Response contained a GraphQL ``errors`` array.
        """
        try:
            resp = await self._client.post(
                self._url,
                json={"query": query, "variables": variables},
            )
        except httpx.TimeoutException as exc:
            raise QueryNodeConnectionError(f"Query node request timed out: {exc}") from exc
        except httpx.TransportError as exc:
            raise QueryNodeConnectionError(f"Cannot connect to query node: {exc}") from exc

        if not resp.is_success:
            log.debug("Query node error body: %s", resp.text)
            raise TransportError(
                f"Error fetching data: HTTP {resp.status_code} {resp.reason_phrase}",
                status_code=resp.status_code,
            )

        try:
            body = resp.json()
        except ValueError as exc:
            raise QueryNodeQueryError(
                f"Query node returned invalid JSON: {exc}", status_code=resp.status_code
            ) from exc

        if not isinstance(body, dict):
            raise QueryNodeQueryError("Query node response is not a JSON object", status_code=resp.status_code)

        if body.get("errors"):
            messages = "; ".join(e.get("message", str(e)) for e in body["errors"])
            raise QueryNodeQueryError(f"GraphQL errors: {messages}", status_code=resp.status_code)

        return body.get("data") or {}

    async def fetch_all(
        self,
        query: str,
        variables: dict,
        page_size: int,
        field: str,
    ) -> list[dict]:
        """
        Fetch every record of a limit/offset paginated query.

        Issues requests with ``limit=page_size`` and ``offset`` advancing by
        ``page_size`` until a page shorter than ``page_size`` comes back.

        Args:
            query:     GraphQL query accepting ``$limit`` and ``$offset``.
            variables: Base variables; ``limit`` and ``offset`` are added per page.
            page_size: Records per request. Must be at least 1.
            field:     Top-level ``data`` field holding the page's record list.

        Returns:
            All records, concatenated in server order.

        Raises:
            ValueError:          page_size is smaller than 1.
            TransportError:      Any request failed (no partial result is returned).
            QueryNodeQueryError: ``data[field]`` is missing or not a list.
        """
        if page_size < 1:
            raise ValueError(f"page_size must be at least 1, got {page_size}")

        records: list[dict] = []
        offset = 0

        while True:
            data = await self._gql(query, {**variables, "limit": page_size, "offset": offset})
            page = data.get(field)
            if not isinstance(page, list):
                raise QueryNodeQueryError(f"Response has no '{field}' list at offset {offset}")

            records.extend(page)
            log.debug("Fetched %d %s at offset %d", len(page), field, offset)

            if len(page) < page_size:
                break
            offset += page_size

        return records
