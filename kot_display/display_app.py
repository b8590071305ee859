"""Main Textual app class."""

from __future__ import annotations

from datetime import datetime

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.css.query import NoMatches
from textual.reactive import reactive
from textual.widgets import Header, Static

from kot_display.engine import OrderBoard
from kot_display.error_modal import CompletionErrorModal
from kot_display.feeds import KotDisplayError
from kot_display.models import DerivedOrder
from kot_display.rendering import format_clock, format_ticket
from kot_display.scheduler import PollScheduler

_LINES_PER_TICKET = 6


class KotDisplayApp(App):
    """A Textual app showing live kitchen and bar tickets, one tab per bucket."""

    TITLE = "KOT Display"

    CSS = """
    Screen {
        layout: vertical;
    }

    #clock-bar {
        height: 1;
        padding: 0 1;
        text-align: right;
    }

    #tabs {
        height: 1;
        padding: 0 1;
        margin-bottom: 1;
    }

    #error-banner {
        height: auto;
        padding: 0 1;
        background: #5c1a1a;
        color: #ffb3b3;
    }

    #orders-pane {
        height: 1fr;
        border: round $primary;
        padding: 0 1;
    }

    #orders-list {
        height: 1fr;
    }

    #status-bar {
        height: 1;
        padding: 0 1;
        color: $text-muted;
    }
    """

    active_index = reactive(0)
    selected_index = reactive(0)

    BINDINGS = [
        Binding("tab", "next_tab(1)", "Next tab", priority=True),
        Binding("shift+tab", "next_tab(-1)", "Previous tab", priority=True),
        ("1", "show_tab(0)", "Tab 1"),
        ("2", "show_tab(1)", "Tab 2"),
        ("3", "show_tab(2)", "Tab 3"),
        ("j", "move_selection(1)", "Next ticket"),
        ("down", "move_selection(1)", "Next ticket"),
        ("k", "move_selection(-1)", "Previous ticket"),
        ("up", "move_selection(-1)", "Previous ticket"),
        ("enter", "complete_selected", "Done"),
        ("d", "complete_selected", "Done"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, board: OrderBoard, poll_seconds: float = 5.0, clock_seconds: float = 1.0) -> None:
        super().__init__()
        self.board = board
        self.board.on_update = self._refresh_all
        self.board.on_alert = self.bell
        self.scheduler = PollScheduler(
            board,
            poll_seconds=poll_seconds,
            clock_seconds=clock_seconds,
            on_clock=self._on_clock,
        )
        self.now = datetime.now().astimezone()
        self.system_status = ""

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(id="clock-bar")
        yield Static(id="tabs")
        yield Static(id="error-banner")
        with Vertical(id="orders-pane"):
            yield Static("Loading orders...", id="orders-list")
        yield Static(id="status-bar")

    def on_mount(self) -> None:
        self._refresh_all()
        self.scheduler.start()

    async def on_unmount(self) -> None:
        self.scheduler.stop()
        await self.board.client.close()

    @property
    def active_bucket(self) -> str:
        return self.board.layout.bucket_names[self.active_index]

    def action_next_tab(self, delta: int) -> None:
        count = len(self.board.layout.bucket_names)
        self.active_index = (self.active_index + delta) % count
        self.selected_index = 0
        self._refresh_all()

    def action_show_tab(self, index: int) -> None:
        if not (0 <= index < len(self.board.layout.bucket_names)):
            return
        self.active_index = index
        self.selected_index = 0
        self._refresh_all()

    def action_move_selection(self, delta: int) -> None:
        orders = self.board.orders_in(self.active_bucket)
        if not orders:
            return
        self.selected_index = (self.selected_index + delta) % len(orders)
        self._refresh_orders()

    def action_complete_selected(self) -> None:
        order = self._selected_order()
        if order is None:
            return
        if self.board.completing is not None:
            self.system_status = f"Still completing #{self.board.completing}"
            self._refresh_status()
            return
        self.run_worker(self._complete(order), group="complete")

    async def _complete(self, order: DerivedOrder) -> None:
        try:
            done = await self.board.complete(order.order_id, order.origin)
        except (KotDisplayError, ValueError) as exc:
            self.system_status = f"#{order.order_id} not completed"
            self._refresh_status()
            self.push_screen(CompletionErrorModal(order.order_id, str(exc)))
            return
        if done:
            self.system_status = f"Completed #{order.order_id}"
            self._refresh_all()

    def _on_clock(self, now: datetime) -> None:
        self.now = now
        self._refresh_clock()
        self._refresh_orders()

    def _selected_order(self) -> DerivedOrder | None:
        orders = self.board.orders_in(self.active_bucket)
        if not (0 <= self.selected_index < len(orders)):
            return None
        return orders[self.selected_index]

    def _refresh_all(self) -> None:
        self._refresh_clock()
        self._refresh_tabs()
        self._refresh_banner()
        self._refresh_orders()
        self._refresh_status()

    def _refresh_clock(self) -> None:
        try:
            widget = self.query_one("#clock-bar", Static)
        except NoMatches:
            return
        text = Text()
        text.append("● LIVE", style="bold #5fbf72")
        text.append(f"   {format_clock(self.now)}")
        widget.update(text)

    def _refresh_tabs(self) -> None:
        try:
            widget = self.query_one("#tabs", Static)
        except NoMatches:
            return
        text = Text()
        for idx, spec in enumerate(self.board.layout.buckets):
            if idx > 0:
                text.append("  ")
            label = f" {idx + 1} {spec.title} ({len(self.board.orders_in(spec.name))}) "
            text.append(label, style="bold reverse" if idx == self.active_index else "")
        widget.update(text)

    def _refresh_banner(self) -> None:
        try:
            widget = self.query_one("#error-banner", Static)
        except NoMatches:
            return
        widget.display = self.board.error is not None
        if self.board.error is not None:
            widget.update(f"⚠ {self.board.error} - retrying automatically...")

    def _refresh_status(self) -> None:
        try:
            widget = self.query_one("#status-bar", Static)
        except NoMatches:
            return
        status = self.system_status or "Ready"
        widget.update(f"Tab/1-3 switch. j/k move. Enter done. Ctrl+Q quit.  {status}")

    def _visible_tickets(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 4
        return max(1, height // _LINES_PER_TICKET)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            start = max(0, selected - rows // 2)
            start = min(start, total - rows)

        return (start, start + rows)

    def _refresh_orders(self) -> None:
        try:
            widget = self.query_one("#orders-list", Static)
        except NoMatches:
            return
        if not self.board.loaded:
            widget.update("Loading orders...")
            return

        orders = self.board.orders_in(self.active_bucket)
        if not orders:
            self.selected_index = 0
            spec = self.board.layout.spec(self.active_bucket)
            widget.update(Text(f"No Active Orders\n{spec.empty_message}", style="dim"))
            return

        if self.selected_index >= len(orders):
            self.selected_index = len(orders) - 1

        start, end = self._window_bounds(len(orders), self._visible_tickets(widget), self.selected_index)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")
        for idx in range(start, end):
            if idx > start:
                lines.append("\n\n")
            order = orders[idx]
            lines.append_text(
                format_ticket(
                    order,
                    self.now,
                    highlighted=self.board.is_highlighted(order.order_id),
                    completing=self.board.completing == order.order_id,
                    selected=idx == self.selected_index,
                )
            )
        if end < len(orders):
            lines.append("\n⋮", style="dim")

        widget.update(lines)
