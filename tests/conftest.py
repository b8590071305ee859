"""Shared fixtures: feed payload builders and an in-memory feed client."""

from __future__ import annotations

from typing import Any

import pytest

from kot_display.buckets import BucketLayout
from kot_display.constant import BAR, RESTAURANT
from kot_display.feeds import CompletionFailure, FetchFailure, parse_orders
from kot_display.models import RawOrder


def order_payload(
    order_id: str,
    *items: dict[str, Any],
    status: str = "pending",
    created_at: str | None = "2026-01-10T12:00:00Z",
    **extra: Any,
) -> dict[str, Any]:
    payload: dict[str, Any] = {"orderId": order_id, "status": status, "items": list(items)}
    if created_at is not None:
        payload["createdAt"] = created_at
    payload.update(extra)
    return payload


def item(name: str, category: str = "kitchen", quantity: int = 1, **extra: Any) -> dict[str, Any]:
    return {"name": name, "category": category, "quantity": quantity, **extra}


class FakeFeedClient:
    """Feed client double; set ``restaurant``/``bar`` payloads or ``fetch_error``."""

    def __init__(self) -> None:
        self.restaurant: list[dict[str, Any]] = []
        self.bar: list[dict[str, Any]] = []
        self.fetch_error: str | None = None
        self.completion_error: str | None = None
        self.fetch_calls = 0
        self.status_updates: list[tuple[str, str]] = []
        self.closed = False

    async def fetch_all(self) -> tuple[list[RawOrder], list[RawOrder]]:
        self.fetch_calls += 1
        if self.fetch_error is not None:
            raise FetchFailure(self.fetch_error)
        return parse_orders(self.restaurant, RESTAURANT), parse_orders(self.bar, BAR)

    async def update_status(self, order_id: str, origin: str, status: str = "completed") -> None:
        self.status_updates.append((order_id, origin))
        if self.completion_error is not None:
            raise CompletionFailure(self.completion_error)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture()
def kitchen_bar_layout() -> BucketLayout:
    return BucketLayout.from_config("kitchen_bar")


@pytest.fixture()
def restaurant_bar_layout() -> BucketLayout:
    return BucketLayout.from_config("restaurant_bar")


@pytest.fixture()
def feed_client() -> FakeFeedClient:
    return FakeFeedClient()
