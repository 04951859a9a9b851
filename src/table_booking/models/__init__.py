"""
Models package - reference enumerations and Pydantic schemas.
"""
from .slots import (
    TimeSlot,
    Region,
    get_all_time_slots,
    get_all_regions,
    format_time_slot,
    get_region_display_name,
)

from .schemas import (
    SlotAvailability,
    DateAvailability,
    RegionInfo,
    ReservationFormData,
    Reservation,
    REGION_CATALOG,
    get_region_info,
)

__all__ = [
    # Reference data
    "TimeSlot",
    "Region",
    "get_all_time_slots",
    "get_all_regions",
    "format_time_slot",
    "get_region_display_name",
    # Pydantic schemas
    "SlotAvailability",
    "DateAvailability",
    "RegionInfo",
    "ReservationFormData",
    "Reservation",
    "REGION_CATALOG",
    "get_region_info",
]
