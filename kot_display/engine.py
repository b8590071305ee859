"""Order board: owns bucket state, new-order highlights and completions."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from kot_display.buckets import BucketLayout, Buckets, aggregate, without_order
from kot_display.changes import ChangeDetector
from kot_display.feeds import CompletionFailure, FeedClient, FetchFailure
from kot_display.models import DerivedOrder

logger = logging.getLogger(__name__)


class OrderBoard:
    """
    Aggregation engine behind the display.

    One instance owns every piece of mutable state: the current buckets, the
    per-bucket snapshots, the highlight set, the fetch error and the single
    in-flight completion slot. ``on_update`` is called after any of them change;
    ``on_alert`` is called when new orders arrive.
    """

    def __init__(
        self,
        client: FeedClient,
        layout: BucketLayout,
        highlight_seconds: float = 3.0,
        on_update: Callable[[], None] | None = None,
        on_alert: Callable[[], None] | None = None,
    ) -> None:
        self.client = client
        self.layout = layout
        self.highlight_seconds = highlight_seconds
        self.on_update = on_update
        self.on_alert = on_alert

        self.buckets: Buckets = {name: () for name in layout.bucket_names}
        self.detector = ChangeDetector()
        self.highlighted: frozenset[str] = frozenset()
        self.error: str | None = None
        self.loaded = False
        self.completing: str | None = None

        self._polling = False
        self._stopped = False
        self._highlight_timer: asyncio.TimerHandle | None = None

    @property
    def polling(self) -> bool:
        return self._polling

    @property
    def stopped(self) -> bool:
        return self._stopped

    def _notify(self) -> None:
        if self.on_update is not None and not self._stopped:
            self.on_update()

    async def poll(self) -> bool:
        """Run one fetch -> classify -> aggregate -> detect cycle.

        Returns False when the poll was skipped, ignored or failed; on failure the
        previous buckets are kept and ``error`` is set.
        """
        if self._polling or self._stopped:
            logger.debug("Skipping poll (polling=%s stopped=%s)", self._polling, self._stopped)
            return False

        self._polling = True
        try:
            restaurant, bar = await self.client.fetch_all()
        except FetchFailure as exc:
            if self._stopped:
                return False
            logger.warning("Poll failed: %s", exc)
            self.error = str(exc)
            self.loaded = True
            self._notify()
            return False
        finally:
            self._polling = False

        if self._stopped:
            logger.debug("Ignoring poll result after stop")
            return False

        buckets = aggregate(restaurant, bar, self.layout)
        new_ids = self.detector.observe(buckets)
        self.buckets = buckets
        self.error = None
        self.loaded = True
        logger.debug(
            "Poll ok: %s",
            ", ".join(f"{name}={len(orders)}" for name, orders in buckets.items()),
        )

        if new_ids:
            self._flag_new(new_ids)
        self._notify()
        return True

    def _flag_new(self, new_ids: frozenset[str]) -> None:
        logger.info("New orders: %s", ", ".join(sorted(new_ids)))
        self.highlighted = new_ids

        if self.on_alert is not None:
            try:
                self.on_alert()
            except Exception as exc:
                logger.debug("Alert failed: %r", exc)

        # Restart the clear timer from the latest detection.
        if self._highlight_timer is not None:
            self._highlight_timer.cancel()
        loop = asyncio.get_running_loop()
        self._highlight_timer = loop.call_later(self.highlight_seconds, self._clear_highlight)

    def _clear_highlight(self) -> None:
        self._highlight_timer = None
        if not self.highlighted:
            return
        self.highlighted = frozenset()
        self._notify()

    async def complete(self, order_id: str, origin: str) -> bool:
        """Mark an order completed on its origin feed and drop it from every bucket.

        Returns False without sending anything if another completion is in flight.

        Raises:
            CompletionFailure: If the feed rejects the update; buckets are unchanged.
            ValueError: If ``origin`` names no known feed.
        """
        if self.completing is not None:
            logger.debug("Completion of %s rejected; %s in flight", order_id, self.completing)
            return False

        self.completing = order_id
        self._notify()
        try:
            await self.client.update_status(order_id, origin)
            if not self._stopped:
                self.buckets = without_order(self.buckets, order_id)
        except (CompletionFailure, ValueError) as exc:
            logger.warning("Completing %s failed: %s", order_id, exc)
            raise
        finally:
            self.completing = None
            self._notify()
        return True

    def stop(self) -> None:
        """Stop accepting results and cancel the highlight timer."""
        self._stopped = True
        if self._highlight_timer is not None:
            self._highlight_timer.cancel()
            self._highlight_timer = None

    def orders_in(self, bucket: str) -> tuple[DerivedOrder, ...]:
        return self.buckets.get(bucket, ())

    def is_highlighted(self, order_id: str) -> bool:
        return order_id in self.highlighted
