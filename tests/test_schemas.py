"""
Tests for Pydantic models and reference data.
"""
import importlib
from datetime import date, datetime, time

import pytest
from pydantic import ValidationError

from table_booking.models import (
    REGION_CATALOG,
    DateAvailability,
    Region,
    ReservationFormData,
    SlotAvailability,
    TimeSlot,
    format_time_slot,
    get_all_regions,
    get_all_time_slots,
    get_region_display_name,
    get_region_info,
)


def full_day(remaining=10):
    return [
        SlotAvailability(time_slot=slot, remaining_capacity=remaining, max_capacity=10)
        for slot in TimeSlot
    ]


class TestPackage:
    """Test the public package imports and builds its models."""

    def test_import_and_build_form(self):
        table_booking = importlib.import_module("table_booking")

        form = table_booking.ReservationFormData(
            date=date(2025, 7, 25),
            time_slot="19:00",
            party_size=2,
            region="bar_area",
            customer_name="Jane Doe",
            email="jane@example.com",
            phone="5551234567"
        )

        assert form.date == date(2025, 7, 25)
        assert ReservationFormData.model_fields["date"].annotation is date


class TestTimeSlot:
    """Test time slot reference data."""

    def test_nine_slots_from_six_to_ten(self):
        slots = get_all_time_slots()

        assert len(slots) == 9
        assert slots[0] == TimeSlot.SIX_PM
        assert slots[-1] == TimeSlot.TEN_PM

    def test_minutes_since_midnight(self):
        assert TimeSlot.SIX_PM.minutes == 18 * 60
        assert TimeSlot.NINE_THIRTY_PM.minutes == 21 * 60 + 30

    def test_time(self):
        assert TimeSlot.EIGHT_THIRTY_PM.time == time(20, 30)

    @pytest.mark.parametrize("slot,label", [
        (TimeSlot.SIX_PM, "6:00 PM"),
        (TimeSlot.SIX_THIRTY_PM, "6:30 PM"),
        (TimeSlot.TEN_PM, "10:00 PM"),
    ])
    def test_labels(self, slot, label):
        assert format_time_slot(slot) == label
        assert slot.label == label

    def test_from_value(self):
        assert TimeSlot("19:30") is TimeSlot.SEVEN_THIRTY_PM


class TestRegion:
    """Test seating region reference data."""

    def test_all_regions(self):
        assert get_all_regions() == [
            Region.MAIN_DINING,
            Region.BAR_AREA,
            Region.OUTDOOR_PATIO,
            Region.PRIVATE_ROOM,
        ]

    def test_display_names(self):
        assert get_region_display_name(Region.MAIN_DINING) == "Main Dining Room"
        assert Region.OUTDOOR_PATIO.display_name == "Outdoor Patio"

    def test_catalog_covers_every_region(self):
        assert set(REGION_CATALOG) == set(Region)
        assert get_region_info("outdoor_patio").is_outdoor is True
        assert get_region_info(Region.BAR_AREA).name == "Bar Area"


class TestSlotAvailability:
    """Test slot capacity invariants."""

    def test_available_derived_from_capacity(self):
        slot = SlotAvailability(time_slot=TimeSlot.SIX_PM, remaining_capacity=1, max_capacity=10)
        assert slot.available is True

        slot.remaining_capacity = 0
        assert slot.available is False

    def test_remaining_above_max_rejected(self):
        with pytest.raises(ValidationError):
            SlotAvailability(time_slot=TimeSlot.SIX_PM, remaining_capacity=11, max_capacity=10)

    def test_negative_remaining_rejected(self):
        with pytest.raises(ValidationError):
            SlotAvailability(time_slot=TimeSlot.SIX_PM, remaining_capacity=-1, max_capacity=10)

    def test_zero_max_rejected(self):
        with pytest.raises(ValidationError):
            SlotAvailability(time_slot=TimeSlot.SIX_PM, remaining_capacity=0, max_capacity=0)

    def test_negative_assignment_rejected(self):
        slot = SlotAvailability(time_slot=TimeSlot.SIX_PM, remaining_capacity=5, max_capacity=10)

        with pytest.raises(ValidationError):
            slot.remaining_capacity = -1

    def test_can_seat(self):
        slot = SlotAvailability(time_slot=TimeSlot.SIX_PM, remaining_capacity=5, max_capacity=10)

        assert slot.can_seat(5) is True
        assert slot.can_seat(6) is False

    def test_serialization_includes_available(self):
        slot = SlotAvailability(time_slot=TimeSlot.SIX_PM, remaining_capacity=0, max_capacity=10)

        assert slot.model_dump()["available"] is False


class TestDateAvailability:
    """Test per-date availability."""

    def test_fully_booked_when_all_slots_full(self):
        assert DateAvailability(date=date(2025, 7, 25), time_slots=full_day(0)).is_fully_booked is True
        assert DateAvailability(date=date(2025, 7, 25), time_slots=full_day(1)).is_fully_booked is False

    def test_missing_slot_rejected(self):
        with pytest.raises(ValidationError):
            DateAvailability(date=date(2025, 7, 25), time_slots=full_day()[1:])

    def test_out_of_order_rejected(self):
        with pytest.raises(ValidationError):
            DateAvailability(date=date(2025, 7, 25), time_slots=list(reversed(full_day())))

    def test_datetime_truncated(self):
        availability = DateAvailability(date=datetime(2025, 7, 25, 19, 0), time_slots=full_day())

        assert availability.date == date(2025, 7, 25)

    def test_get_slot(self):
        availability = DateAvailability(date=date(2025, 7, 25), time_slots=full_day())

        assert availability.get_slot("20:00").time_slot == TimeSlot.EIGHT_PM


class TestReservationFormData:
    """Test reservation request validation."""

    def valid(self, **overrides):
        data = {
            "date": date(2025, 7, 25),
            "time_slot": "19:00",
            "party_size": 4,
            "region": "main_dining",
            "customer_name": "  Jane Doe  ",
            "email": "jane@example.com",
            "phone": "(555) 123-4567",
        }
        data.update(overrides)
        return data

    def test_valid_form(self):
        form = ReservationFormData(**self.valid())

        assert form.time_slot == TimeSlot.SEVEN_PM
        assert form.region == Region.MAIN_DINING
        assert form.customer_name == "Jane Doe"
        assert form.has_children is False
        assert form.smoking_requested is False

    def test_datetime_truncated_to_day(self):
        form = ReservationFormData(**self.valid(date=datetime(2025, 7, 25, 23, 15)))

        assert form.date == date(2025, 7, 25)

    @pytest.mark.parametrize("party_size", [0, -2])
    def test_party_size_below_one(self, party_size):
        with pytest.raises(ValidationError):
            ReservationFormData(**self.valid(party_size=party_size))

    def test_upper_party_limit_left_to_settings(self):
        """Test the schema accepts large parties; the configured maximum is checked by the store."""
        form = ReservationFormData(**self.valid(party_size=15))

        assert form.party_size == 15

    @pytest.mark.parametrize("field,value", [
        ("time_slot", "17:00"),
        ("region", "rooftop"),
        ("customer_name", "J"),
        ("customer_name", "R2-D2"),
        ("email", "not-an-email"),
        ("phone", "12345"),
        ("phone", "0123456789"),
    ])
    def test_invalid_fields(self, field, value):
        with pytest.raises(ValidationError) as exc_info:
            ReservationFormData(**self.valid(**{field: value}))

        assert exc_info.value.errors()[0]["loc"] == (field,)
