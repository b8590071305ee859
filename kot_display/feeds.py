"""
HTTP client for the restaurant and bar order feeds.

Both feeds are fetched concurrently per poll; the pair succeeds or fails as a
unit. Status updates are routed to the feed the order came from.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from kot_display.constant import BAR, COMPLETED_STATUS, FEED_PATHS, RESTAURANT
from kot_display.models import RawOrder

logger = logging.getLogger(__name__)


class KotDisplayError(Exception):
    """Base class for recoverable feed errors."""


class FetchFailure(KotDisplayError):
    """A feed request failed or returned an unusable response."""


class CompletionFailure(KotDisplayError):
    """A status update was not accepted by the origin feed."""


def parse_orders(payload: Any, origin: str) -> list[RawOrder]:
    """Turn one feed's JSON body into orders, skipping entries without an id."""
    if not isinstance(payload, list):
        raise FetchFailure(f"{origin} feed returned {type(payload).__name__}, expected a list")

    orders: list[RawOrder] = []
    for entry in payload:
        if not isinstance(entry, dict):
            logger.warning("Skipping non-object %s order entry: %r", origin, entry)
            continue
        try:
            orders.append(RawOrder.from_payload(entry, origin))
        except ValueError as exc:
            logger.warning("Skipping %s order: %s", origin, exc)
    return orders


class FeedClient:
    """
    Async client for the order feeds.

    Example:
        >>> client = FeedClient("http://localhost:3000/api")
        >>> restaurant, bar = await client.fetch_all()
        >>> await client.update_status("B1", "bar")
    """

    def __init__(self, base_url: str, timeout: float = 10.0, http_client: httpx.AsyncClient | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = http_client or httpx.AsyncClient(timeout=timeout)

    async def close(self) -> None:
        """Close HTTP client."""
        await self.client.aclose()

    def _feed_url(self, origin: str) -> str:
        try:
            path = FEED_PATHS[origin]
        except KeyError:
            raise ValueError(f"Unknown origin feed {origin!r}") from None
        return f"{self.base_url}/{path}"

    async def fetch_feed(self, origin: str) -> list[RawOrder]:
        """Fetch one feed.

        Raises:
            FetchFailure: On transport errors, non-2xx responses or a non-list body.
        """
        url = self._feed_url(origin)
        try:
            response = await self.client.get(url)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise FetchFailure(f"{origin} feed returned HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise FetchFailure(f"{origin} feed request failed: {exc}") from exc
        except ValueError as exc:
            raise FetchFailure(f"{origin} feed returned invalid JSON") from exc
        return parse_orders(payload, origin)

    async def fetch_all(self) -> tuple[list[RawOrder], list[RawOrder]]:
        """Fetch restaurant and bar feeds concurrently.

        Returns:
            ``(restaurant_orders, bar_orders)``

        Raises:
            FetchFailure: If either feed fails; the other result is discarded.
        """
        results = await asyncio.gather(
            self.fetch_feed(RESTAURANT),
            self.fetch_feed(BAR),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                if isinstance(result, FetchFailure):
                    raise result
                raise FetchFailure(f"Failed to fetch orders: {result}") from result
        restaurant, bar = results
        return restaurant, bar  # type: ignore[return-value]

    async def update_status(self, order_id: str, origin: str, status: str = COMPLETED_STATUS) -> None:
        """PATCH an order's status on its origin feed.

        Raises:
            CompletionFailure: On transport errors or non-2xx responses.
        """
        url = f"{self._feed_url(origin)}/{order_id}/status"
        try:
            response = await self.client.patch(url, json={"status": status})
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise CompletionFailure(f"HTTP {exc.response.status_code} from {origin} feed") from exc
        except httpx.HTTPError as exc:
            raise CompletionFailure(f"{origin} feed request failed: {exc}") from exc
        logger.info("Order %s marked %s on %s feed", order_id, status, origin)
