"""Rendering helpers for order tickets."""

from __future__ import annotations

from datetime import datetime

from rich.text import Text

from kot_display.models import DerivedOrder, Item, parse_timestamp


def badge_style(status: str) -> str:
    """Return a consistent badge style for order statuses."""
    if status == "pending":
        return "bold #1f1300 on #e0a526"
    if status == "preparing":
        return "bold #ffffff on #2f6db5"
    return "bold #ffffff on #555555"


def format_table_info(order: DerivedOrder) -> str:
    if order.table_no:
        return f"Table {order.table_no}"
    if (order.order_type or "").lower() == "parcel":
        return "Parcel"
    return "Walk-in"


def format_item_line(item: Item) -> Text:
    """Render ``name (servingType)`` with a right-hand quantity."""
    text = Text()
    text.append(item.name or "?", style="bold")
    if item.serving_type:
        text.append(f" ({item.serving_type})", style="dim")
    text.append(f"  ×{item.quantity}")
    return text


def format_time_ago(placed: datetime, now: datetime) -> str:
    seconds = max(0, int((now - placed).total_seconds()))
    if seconds < 60:
        return f"{seconds}s ago"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    return f"{seconds // 3600}h {(seconds % 3600) // 60}m ago"


def format_clock(now: datetime) -> str:
    return now.strftime("%I:%M:%S %p")


def format_placed(order: DerivedOrder, now: datetime) -> str:
    """Render ``hh:mm AM · 5m ago`` in the local time of ``now``."""
    placed = parse_timestamp(order.placed_at)
    if placed is None:
        return "--:--"
    if now.tzinfo is not None:
        placed = placed.astimezone(now.tzinfo)
        return f"{placed.strftime('%I:%M %p')} · {format_time_ago(placed, now)}"
    return placed.strftime("%I:%M %p")


def format_ticket(
    order: DerivedOrder,
    now: datetime,
    *,
    highlighted: bool = False,
    completing: bool = False,
    selected: bool = False,
) -> Text:
    """Render one ticket card as a few lines of text."""
    text = Text()
    text.append("➤ " if selected else "  ")
    text.append(f"#{order.order_id}", style="bold reverse" if highlighted else "bold")
    text.append(f"  {format_table_info(order)}  ")
    text.append(f" {order.status} ", style=badge_style(order.status))
    if highlighted:
        text.append("  NEW", style="bold #ff8c00")

    if order.customer_name:
        text.append(f"\n    {order.customer_name}", style="italic")

    for item in order.items:
        text.append("\n    ")
        text.append_text(format_item_line(item))

    text.append(f"\n    {format_placed(order, now)}", style="dim")
    text.append("   ")
    text.append("[...]" if completing else "[✓ Done]", style="dim" if completing else "bold green")
    return text
