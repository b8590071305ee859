from __future__ import annotations

from kot_display.changes import ChangeDetector
from kot_display.models import DerivedOrder


def _order(order_id: str, origin: str = "restaurant") -> DerivedOrder:
    return DerivedOrder(order_id=order_id, origin=origin, status="pending")


def test_first_observation_only_primes() -> None:
    detector = ChangeDetector()

    new_ids = detector.observe({"kitchen": (_order("R1"),), "bar": (_order("B1", "bar"),)})

    assert new_ids == frozenset()
    assert detector.primed
    assert detector.snapshots == {"kitchen": frozenset({"R1"}), "bar": frozenset({"B1"})}


def test_new_ids_are_unioned_across_buckets() -> None:
    detector = ChangeDetector()
    detector.observe({"kitchen": (_order("R1"),), "bar": ()})

    new_ids = detector.observe(
        {"kitchen": (_order("R1"), _order("R2"), _order("B7", "bar")), "bar": (_order("B7", "bar"),)}
    )

    assert new_ids == frozenset({"R2", "B7"})


def test_identical_poll_has_no_new_ids() -> None:
    detector = ChangeDetector()
    buckets = {"kitchen": (_order("R1"),), "bar": (_order("B1", "bar"),)}
    detector.observe(buckets)

    assert detector.observe(buckets) == frozenset()


def test_order_moving_into_another_bucket_counts_as_new() -> None:
    detector = ChangeDetector()
    detector.observe({"kitchen": (_order("B1", "bar"),), "bar": ()})

    assert detector.observe({"kitchen": (_order("B1", "bar"),), "bar": (_order("B1", "bar"),)}) == frozenset({"B1"})


def test_snapshot_replaced_each_observation() -> None:
    detector = ChangeDetector()
    detector.observe({"kitchen": (_order("R1"),)})
    detector.observe({"kitchen": ()})

    # R1 left and came back, so it is new again.
    assert detector.observe({"kitchen": (_order("R1"),)}) == frozenset({"R1"})
