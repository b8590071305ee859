"""New-arrival detection across polls."""

from __future__ import annotations

from typing import Mapping, Sequence

from kot_display.models import DerivedOrder


class ChangeDetector:
    """Diff each bucket's order IDs against the previous poll's snapshot."""

    def __init__(self) -> None:
        self.snapshots: dict[str, frozenset[str]] = {}
        self.primed = False

    def observe(self, buckets: Mapping[str, Sequence[DerivedOrder]]) -> frozenset[str]:
        """Record ``buckets`` and return IDs that entered any bucket since the last call.

        The first call only primes the snapshots, so the initial dataset never
        counts as new.
        """
        current = {name: frozenset(order.order_id for order in orders) for name, orders in buckets.items()}

        new_ids: set[str] = set()
        if self.primed:
            for name, ids in current.items():
                new_ids |= ids - self.snapshots.get(name, frozenset())

        self.snapshots = current
        self.primed = True
        return frozenset(new_ids)
