"""Domain models for kot-display."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping

from kot_display.constant import ACTIVE_STATUSES, ITEM_NAME_KEYS, KITCHEN


def _text_or_none(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _time_or_none(value: Any) -> str | int | float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    return _text_or_none(value)


def parse_timestamp(value: str | int | float | None) -> datetime | None:
    """Parse an ISO-8601 instant or epoch milliseconds; naive values are taken as UTC."""
    if value is None or value == "" or isinstance(value, bool):
        return None
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value.strip())
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    raw = value.strip()
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class Item:
    """One ticket line."""

    name: str
    quantity: int = 1
    category: str = ""
    serving_type: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> Item:
        """Build an item from feed JSON, falling back field by field."""
        name = ""
        for key in ITEM_NAME_KEYS:
            candidate = _text_or_none(payload.get(key))
            if candidate:
                name = candidate
                break

        try:
            quantity = int(payload.get("quantity", 1))
        except (TypeError, ValueError):
            quantity = 1
        if quantity < 1:
            quantity = 1

        return cls(
            name=name,
            quantity=quantity,
            category=_text_or_none(payload.get("category")) or "",
            serving_type=_text_or_none(payload.get("servingType")),
        )

    def is_kitchen_class(self, kitchen_categories: frozenset[str]) -> bool:
        return self.category.lower() in kitchen_categories


@dataclass(frozen=True)
class RawOrder:
    """An order as returned by one feed for one poll."""

    order_id: str
    origin: str
    status: str
    items: tuple[Item, ...] = ()
    created_at: str | int | float | None = None
    timestamp: str | int | float | None = None
    table_no: str | None = None
    order_type: str | None = None
    customer_name: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], origin: str) -> RawOrder:
        order_id = _text_or_none(payload.get("orderId"))
        if order_id is None:
            raise ValueError("order payload has no orderId")
        raw_items = payload.get("items") or []
        items = tuple(Item.from_payload(item) for item in raw_items if isinstance(item, Mapping))
        return cls(
            order_id=order_id,
            origin=origin,
            status=_text_or_none(payload.get("status")) or "",
            items=items,
            created_at=_time_or_none(payload.get("createdAt")),
            timestamp=_time_or_none(payload.get("timestamp")),
            table_no=_text_or_none(payload.get("tableNo")),
            order_type=_text_or_none(payload.get("orderType")),
            customer_name=_text_or_none(payload.get("customerName")),
        )

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES

    @property
    def placed_at(self) -> str | int | float | None:
        """Effective placement time: ``createdAt`` when present, else ``timestamp``."""
        return self.created_at or self.timestamp

    @property
    def placed_at_time(self) -> datetime | None:
        return parse_timestamp(self.placed_at)

    def project(self, items: tuple[Item, ...], partition: str) -> DerivedOrder:
        """Copy this order into one partition with only ``items``."""
        return DerivedOrder(
            order_id=self.order_id,
            origin=self.origin,
            status=self.status,
            items=items,
            created_at=self.created_at,
            timestamp=self.timestamp,
            table_no=self.table_no,
            order_type=self.order_type,
            customer_name=self.customer_name,
            partition=partition,
        )


@dataclass(frozen=True)
class DerivedOrder(RawOrder):
    """A raw order projected into one bucket partition."""

    partition: str = KITCHEN
