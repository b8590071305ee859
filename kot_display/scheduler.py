"""Fixed-interval poll loop and display clock."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Callable

from kot_display.engine import OrderBoard

logger = logging.getLogger(__name__)


class PollScheduler:
    """Drive ``board.poll`` every ``poll_seconds`` and ``on_clock`` every ``clock_seconds``.

    The first poll runs immediately. Ticks that land while a poll is still in
    flight are skipped, not queued. There is no backoff: a failed poll is retried
    on the next tick.
    """

    def __init__(
        self,
        board: OrderBoard,
        poll_seconds: float = 5.0,
        clock_seconds: float = 1.0,
        on_clock: Callable[[datetime], None] | None = None,
    ) -> None:
        self.board = board
        self.poll_seconds = poll_seconds
        self.clock_seconds = clock_seconds
        self.on_clock = on_clock
        self._loops: list[asyncio.Task[None]] = []
        self._in_flight: set[asyncio.Task[bool]] = set()

    @property
    def running(self) -> bool:
        return bool(self._loops)

    def start(self) -> None:
        if self._loops:
            return
        self._loops = [
            asyncio.create_task(self._poll_loop(), name="kot-poll"),
            asyncio.create_task(self._clock_loop(), name="kot-clock"),
        ]

    def stop(self) -> None:
        """Cancel both timers; polls already in flight finish but are ignored."""
        for task in self._loops:
            task.cancel()
        self._loops = []
        self.board.stop()

    def _fire_poll(self) -> None:
        if self.board.polling:
            logger.debug("Poll still in flight; skipping tick")
            return
        task = asyncio.create_task(self.board.poll())
        self._in_flight.add(task)
        task.add_done_callback(self._poll_done)

    def _poll_done(self, task: asyncio.Task[bool]) -> None:
        self._in_flight.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Poll crashed", exc_info=task.exception())

    async def _poll_loop(self) -> None:
        while True:
            self._fire_poll()
            await asyncio.sleep(self.poll_seconds)

    async def _clock_loop(self) -> None:
        while True:
            if self.on_clock is not None:
                self.on_clock(datetime.now().astimezone())
            await asyncio.sleep(self.clock_seconds)
