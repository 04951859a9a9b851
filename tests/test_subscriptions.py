"""
Tests for publish-on-change availability snapshots.
"""
import threading
import time
from datetime import date
from unittest.mock import Mock

import pytest

from table_booking.error_handling.exceptions import SlotUnavailableError
from table_booking.models.slots import TimeSlot

FRIDAY = date(2025, 7, 25)


def friday_six_pm(snapshot):
    day = next(d for d in snapshot if d.date == FRIDAY)
    return day.get_slot(TimeSlot.SIX_PM)


class TestSubscribe:
    """Test subscriber registration."""

    def test_subscribe_emits_current_snapshot(self, store):
        """Test a new subscriber immediately receives the calendar."""
        subscriber = Mock()

        store.subscribe(subscriber)

        subscriber.assert_called_once()
        snapshot = subscriber.call_args[0][0]
        assert len(snapshot) == 8

    def test_subscribe_without_initial_snapshot(self, store):
        subscriber = Mock()

        store.subscribe(subscriber, emit_current=False)

        subscriber.assert_not_called()

    def test_unsubscribe_callable(self, store, make_form):
        subscriber = Mock()
        unsubscribe = store.subscribe(subscriber, emit_current=False)

        unsubscribe()
        store.create_reservation(make_form())

        subscriber.assert_not_called()

    def test_unsubscribe_unknown_callback_is_noop(self, store):
        store.unsubscribe(Mock())


class TestPublishOnChange:
    """Test snapshots published after mutations."""

    def test_publish_after_create(self, small_slot_store, make_form):
        """Test the snapshot after booking shows the reduced capacity."""
        subscriber = Mock()
        small_slot_store.subscribe(subscriber, emit_current=False)

        small_slot_store.create_reservation(make_form(party_size=4))

        subscriber.assert_called_once()
        assert friday_six_pm(subscriber.call_args[0][0]).remaining_capacity == 6

    def test_publish_after_cancel(self, small_slot_store, make_form):
        subscriber = Mock()
        reservation = small_slot_store.create_reservation(make_form(party_size=4))
        small_slot_store.subscribe(subscriber, emit_current=False)

        small_slot_store.cancel_reservation(reservation.reservation_id)

        subscriber.assert_called_once()
        assert friday_six_pm(subscriber.call_args[0][0]).remaining_capacity == 10

    def test_no_publish_on_failed_create(self, small_slot_store, make_form):
        subscriber = Mock()
        small_slot_store.subscribe(subscriber, emit_current=False)

        with pytest.raises(SlotUnavailableError):
            small_slot_store.create_reservation(make_form(party_size=11))

        subscriber.assert_not_called()

    def test_no_publish_on_unknown_cancel(self, store):
        subscriber = Mock()
        store.subscribe(subscriber, emit_current=False)

        store.cancel_reservation("missing")

        subscriber.assert_not_called()

    def test_no_publish_on_reads(self, store):
        subscriber = Mock()
        store.subscribe(subscriber, emit_current=False)

        store.check_date_availability(FRIDAY)
        store.get_alternative_time_slots(FRIDAY, TimeSlot.SIX_PM, 2)
        store.get_all_reservations()

        subscriber.assert_not_called()

    def test_failing_subscriber_does_not_block_others(self, store, make_form):
        """Test one broken subscriber neither stops delivery nor undoes the booking."""
        broken = Mock(side_effect=RuntimeError("boom"))
        healthy = Mock()
        store.subscribe(broken, emit_current=False)
        store.subscribe(healthy, emit_current=False)

        reservation = store.create_reservation(make_form())

        healthy.assert_called_once()
        assert store.get_reservation_by_id(reservation.reservation_id) == reservation

    def test_subscribers_receive_independent_copies(self, store, make_form):
        """Test a subscriber mutating its snapshot affects neither the store nor other subscribers."""
        received = []

        def vandal(snapshot):
            friday_six_pm(snapshot).remaining_capacity = 0

        store.subscribe(vandal, emit_current=False)
        store.subscribe(received.append, emit_current=False)

        store.create_reservation(make_form(party_size=2))

        assert friday_six_pm(received[0]).remaining_capacity == 58
        assert store.check_time_slot_availability(FRIDAY, TimeSlot.SIX_PM).remaining_capacity == 58


class TestDeliveryOrder:
    """Test concurrent mutations never leave a subscriber on an old snapshot."""

    def test_slow_subscriber_ends_on_latest_snapshot(self, store, make_form):
        """Test a delivery held up in the callback cannot land after a newer one."""
        first_delivery = threading.Event()
        release = threading.Event()
        seen = []

        def slow_first(snapshot):
            if not first_delivery.is_set():
                first_delivery.set()
                release.wait(timeout=5)
            seen.append(friday_six_pm(snapshot).remaining_capacity)

        store.subscribe(slow_first, emit_current=False)

        first = threading.Thread(target=store.create_reservation, args=(make_form(party_size=4),))
        first.start()
        assert first_delivery.wait(timeout=5)

        second = threading.Thread(target=store.create_reservation, args=(make_form(party_size=2),))
        second.start()

        # Wait for the second booking to commit before letting the first delivery finish
        deadline = time.monotonic() + 5
        while store.check_time_slot_availability(FRIDAY, TimeSlot.SIX_PM).remaining_capacity != 54:
            assert time.monotonic() < deadline
            time.sleep(0.01)
        release.set()

        first.join(timeout=5)
        second.join(timeout=5)

        assert seen[-1] == 54
        assert seen[-1] == store.check_time_slot_availability(FRIDAY, TimeSlot.SIX_PM).remaining_capacity

    def test_stale_snapshot_dropped(self, store, make_form):
        """Test a snapshot older than the last one delivered is skipped."""
        seen = []
        store.subscribe(seen.append, emit_current=False)

        store.create_reservation(make_form(party_size=2))
        stale_version = 0
        store._publish(stale_version, store.get_availability_snapshot())

        assert len(seen) == 1
        assert friday_six_pm(seen[0]).remaining_capacity == 58
