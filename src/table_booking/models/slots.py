"""
Fixed reference data: reservation time slots and seating regions.
"""
from datetime import time
from enum import Enum
from typing import Dict, List


class TimeSlot(str, Enum):
    """Half-hour reservation times from 6:00 PM to 10:00 PM."""

    SIX_PM = "18:00"
    SIX_THIRTY_PM = "18:30"
    SEVEN_PM = "19:00"
    SEVEN_THIRTY_PM = "19:30"
    EIGHT_PM = "20:00"
    EIGHT_THIRTY_PM = "20:30"
    NINE_PM = "21:00"
    NINE_THIRTY_PM = "21:30"
    TEN_PM = "22:00"

    @property
    def minutes(self) -> int:
        """Minutes since midnight, used to measure distance between slots."""
        hours, minutes = map(int, self.value.split(":"))
        return hours * 60 + minutes

    @property
    def time(self) -> time:
        return time(hour=self.minutes // 60, minute=self.minutes % 60)

    @property
    def label(self) -> str:
        """12-hour display label, e.g. '6:30 PM'."""
        return format_time_slot(self)

    def __str__(self) -> str:
        return self.value


class Region(str, Enum):
    """Seating areas a guest can ask for."""

    MAIN_DINING = "main_dining"
    BAR_AREA = "bar_area"
    OUTDOOR_PATIO = "outdoor_patio"
    PRIVATE_ROOM = "private_room"

    @property
    def display_name(self) -> str:
        return get_region_display_name(self)

    def __str__(self) -> str:
        return self.value


_REGION_NAMES: Dict[Region, str] = {
    Region.MAIN_DINING: "Main Dining Room",
    Region.BAR_AREA: "Bar Area",
    Region.OUTDOOR_PATIO: "Outdoor Patio",
    Region.PRIVATE_ROOM: "Private Room",
}


def get_all_time_slots() -> List[TimeSlot]:
    """All time slots in chronological order."""
    return list(TimeSlot)


def get_all_regions() -> List[Region]:
    return list(Region)


def format_time_slot(time_slot: TimeSlot) -> str:
    """
    Format a time slot for display.

    Args:
        time_slot: Slot to format

    Returns:
        12-hour string such as '6:00 PM' or '9:30 PM'
    """
    hour, minute = divmod(time_slot.minutes, 60)
    period = "PM" if hour >= 12 else "AM"
    display_hour = hour - 12 if hour > 12 else hour
    if display_hour == 0:
        display_hour = 12
    return f"{display_hour}:{minute:02d} {period}"


def get_region_display_name(region: Region) -> str:
    return _REGION_NAMES[region]
