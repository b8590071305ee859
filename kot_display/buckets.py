"""Order classification and per-bucket aggregation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Mapping

from kot_display.constant import BUCKET_LAYOUTS, KITCHEN, OTHER
from kot_display.models import DerivedOrder, RawOrder

logger = logging.getLogger(__name__)

Buckets = dict[str, tuple[DerivedOrder, ...]]

_UNTIMED = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class BucketSpec:
    """A named display partition and the (origin, partition) pairs it accepts."""

    name: str
    title: str
    sources: frozenset[tuple[str, str]]
    empty_message: str = ""


@dataclass(frozen=True)
class BucketLayout:
    """Deployment-specific bucket table plus the kitchen-class category names."""

    name: str
    buckets: tuple[BucketSpec, ...]
    kitchen_categories: frozenset[str]

    def __post_init__(self) -> None:
        claimed: dict[tuple[str, str], str] = {}
        for spec in self.buckets:
            for source in spec.sources:
                if source in claimed:
                    raise ValueError(
                        f"Layout {self.name!r}: {source} claimed by both {claimed[source]!r} and {spec.name!r}"
                    )
                claimed[source] = spec.name
        object.__setattr__(
            self, "kitchen_categories", frozenset(category.lower() for category in self.kitchen_categories)
        )

    @property
    def bucket_names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.buckets)

    def bucket_for(self, origin: str, partition: str) -> str | None:
        for spec in self.buckets:
            if (origin, partition) in spec.sources:
                return spec.name
        return None

    def spec(self, name: str) -> BucketSpec:
        for spec in self.buckets:
            if spec.name == name:
                return spec
        raise KeyError(name)

    @classmethod
    def from_config(cls, name: str, table: Mapping[str, object] | None = None) -> BucketLayout:
        """Build a layout from an entry of ``BUCKET_LAYOUTS`` (or an explicit table)."""
        if table is None:
            if name not in BUCKET_LAYOUTS:
                raise ValueError(f"Unknown bucket layout {name!r}; expected one of {sorted(BUCKET_LAYOUTS)}")
            table = BUCKET_LAYOUTS[name]

        buckets = tuple(
            BucketSpec(
                name=str(entry["name"]),
                title=str(entry.get("title") or entry["name"]),
                sources=frozenset((str(origin), str(partition)) for origin, partition in entry["sources"]),
                empty_message=str(entry.get("empty_message") or ""),
            )
            for entry in table["buckets"]  # type: ignore[union-attr]
        )
        return cls(
            name=name,
            buckets=buckets,
            kitchen_categories=frozenset(table["kitchen_categories"]),  # type: ignore[arg-type]
        )


def split_order(
    order: RawOrder, kitchen_categories: frozenset[str]
) -> tuple[DerivedOrder | None, DerivedOrder | None]:
    """Split an order into its kitchen-class part and the remainder.

    Either side is ``None`` when it would carry no items.
    """
    kitchen_items = tuple(item for item in order.items if item.is_kitchen_class(kitchen_categories))
    other_items = tuple(item for item in order.items if not item.is_kitchen_class(kitchen_categories))
    kitchen = order.project(kitchen_items, KITCHEN) if kitchen_items else None
    other = order.project(other_items, OTHER) if other_items else None
    return kitchen, other


def _placed_sort_key(order: DerivedOrder) -> datetime:
    return order.placed_at_time or _UNTIMED


def aggregate(
    restaurant_orders: Iterable[RawOrder],
    bar_orders: Iterable[RawOrder],
    layout: BucketLayout,
) -> Buckets:
    """Build every bucket of ``layout`` from one poll's raw feed results.

    Only pending/preparing orders are kept. Restaurant orders pass through whole
    as kitchen-partition orders; bar orders are split by category. Each bucket is
    sorted newest first, keeping feed order on ties.
    """
    grouped: dict[str, list[DerivedOrder]] = {name: [] for name in layout.bucket_names}

    derived: list[DerivedOrder] = []
    for order in restaurant_orders:
        if order.is_active:
            derived.append(order.project(order.items, KITCHEN))
    for order in bar_orders:
        if not order.is_active:
            continue
        for part in split_order(order, layout.kitchen_categories):
            if part is not None:
                derived.append(part)

    for order in derived:
        bucket = layout.bucket_for(order.origin, order.partition)
        if bucket is None:
            logger.debug("No bucket for %s/%s order %s", order.origin, order.partition, order.order_id)
            continue
        grouped[bucket].append(order)

    return {name: tuple(sorted(orders, key=_placed_sort_key, reverse=True)) for name, orders in grouped.items()}


def without_order(buckets: Buckets, order_id: str) -> Buckets:
    """Return ``buckets`` with every entry for ``order_id`` removed."""
    return {name: tuple(order for order in orders if order.order_id != order_id) for name, orders in buckets.items()}
