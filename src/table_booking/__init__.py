"""
Table booking engine for restaurant reservations.

Tracks per-date, per-slot seating capacity for a fixed booking window,
suggests alternative times and books or cancels tables.
"""
from .config import Settings, get_settings
from .models import (
    TimeSlot,
    Region,
    SlotAvailability,
    DateAvailability,
    ReservationFormData,
    Reservation,
)
from .services import ReservationStore, DriftSimulator
from .error_handling import SlotUnavailableError, ConfigurationError

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "get_settings",
    "TimeSlot",
    "Region",
    "SlotAvailability",
    "DateAvailability",
    "ReservationFormData",
    "Reservation",
    "ReservationStore",
    "DriftSimulator",
    "SlotUnavailableError",
    "ConfigurationError",
]
