from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from kot_display.models import DerivedOrder, Item
from kot_display.rendering import (
    format_clock,
    format_item_line,
    format_placed,
    format_table_info,
    format_ticket,
    format_time_ago,
)

NOW = datetime(2026, 1, 10, 12, 0, 0, tzinfo=timezone.utc)


def _order(**kwargs) -> DerivedOrder:
    defaults = {"order_id": "R1", "origin": "restaurant", "status": "pending"}
    defaults.update(kwargs)
    return DerivedOrder(**defaults)


@pytest.mark.parametrize(
    ("delta", "expected"),
    [
        (timedelta(seconds=42), "42s ago"),
        (timedelta(minutes=5, seconds=59), "5m ago"),
        (timedelta(hours=2, minutes=7), "2h 7m ago"),
        (timedelta(seconds=-30), "0s ago"),
    ],
)
def test_format_time_ago(delta: timedelta, expected: str) -> None:
    assert format_time_ago(NOW - delta, NOW) == expected


def test_table_info_variants() -> None:
    assert format_table_info(_order(table_no="4")) == "Table 4"
    assert format_table_info(_order(order_type="parcel")) == "Parcel"
    assert format_table_info(_order()) == "Walk-in"


def test_item_line_includes_serving_type_and_quantity() -> None:
    line = format_item_line(Item(name="Fries", quantity=2, serving_type="large")).plain

    assert line == "Fries (large)  ×2"


def test_format_clock() -> None:
    assert format_clock(datetime(2026, 1, 10, 15, 4, 5)) == "03:04:05 PM"


def test_format_placed_uses_created_at() -> None:
    order = _order(created_at="2026-01-10T11:55:00Z", timestamp="2026-01-10T08:00:00Z")

    assert format_placed(order, NOW) == "11:55 AM · 5m ago"


def test_format_placed_without_time() -> None:
    assert format_placed(_order(), NOW) == "--:--"


def test_ticket_marks_new_and_completing() -> None:
    order = _order(customer_name="Asha", items=(Item(name="Soup", quantity=2),), created_at="2026-01-10T11:59:30Z")

    plain = format_ticket(order, NOW, highlighted=True, completing=True, selected=True).plain

    assert plain.startswith("➤ #R1")
    assert "NEW" in plain
    assert "Asha" in plain
    assert "Soup  ×2" in plain
    assert "30s ago" in plain
    assert "[...]" in plain


def test_ticket_default_shows_done_button() -> None:
    plain = format_ticket(_order(), NOW).plain

    assert "NEW" not in plain
    assert "[✓ Done]" in plain
