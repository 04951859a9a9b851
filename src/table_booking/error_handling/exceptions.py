"""
Custom exception classes for the table booking engine.

Each exception carries a technical message for logging, a user-facing
message for display, and context for recovery.
"""
from datetime import date
from typing import Any, Dict, List, Optional


class BookingSystemError(Exception):
    """Base exception for all booking system errors."""

    def __init__(
        self,
        message: str,
        user_message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        recoverable: bool = True
    ):
        """
        Initialize booking system error.

        Args:
            message: Technical error message for logging
            user_message: User-friendly message for display
            context: Additional context for error recovery
            recoverable: Whether the error is recoverable
        """
        super().__init__(message)
        self.message = message
        self.user_message = user_message or message
        self.context = context or {}
        self.recoverable = recoverable


# ============================================================================
# Business Logic Errors
# ============================================================================

class BookingValidationError(BookingSystemError):
    """
    Raised when a reservation request is rejected.

    Examples:
    - Date outside the booking window
    - Party size outside the accepted range
    - Requested slot cannot seat the party
    """

    def __init__(
        self,
        message: str,
        user_message: Optional[str] = None,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        alternatives: Optional[list] = None,
        **kwargs
    ):
        """
        Initialize booking validation error.

        Args:
            message: Technical error message
            user_message: User-friendly message
            field: Field that failed validation (date, time_slot, party_size)
            value: Invalid value
            alternatives: List of alternative valid options
            **kwargs: Additional context
        """
        context = {
            "field": field,
            "value": value,
            "alternatives": alternatives or [],
            **kwargs
        }
        super().__init__(message, user_message, context, recoverable=True)
        self.field = field
        self.value = value
        self.alternatives = alternatives or []


class SlotUnavailableError(BookingValidationError):
    """
    Raised when the requested slot cannot seat the party at booking time.

    The caller is expected to re-check availability and may offer the
    attached alternatives; the store never retries on its own.
    """

    def __init__(
        self,
        date: date,
        time_slot: Any,
        party_size: int,
        remaining_capacity: Optional[int] = None,
        alternatives: Optional[List[Any]] = None,
        **kwargs
    ):
        """
        Initialize slot unavailable error.

        Args:
            date: Requested date
            time_slot: Requested time slot
            party_size: Requested party size
            remaining_capacity: Seats left on the slot, None if the date is not bookable
            alternatives: Alternative SlotAvailability entries on the same date
            **kwargs: Additional context
        """
        if remaining_capacity is None:
            message = f"Date {date} is outside the booking window"
        else:
            message = (
                f"Slot {date} {time_slot} has {remaining_capacity} seats left, "
                f"cannot seat party of {party_size}"
            )
        super().__init__(
            message=message,
            user_message="Selected time slot is no longer available. Please choose another time.",
            field="time_slot",
            value=time_slot,
            alternatives=alternatives,
            date=date,
            party_size=party_size,
            remaining_capacity=remaining_capacity,
            **kwargs
        )
        self.date = date
        self.time_slot = time_slot
        self.party_size = party_size
        self.remaining_capacity = remaining_capacity


# ============================================================================
# Configuration Errors
# ============================================================================

class ConfigurationError(BookingSystemError):
    """Raised when the store is built from an invalid window or capacity seed."""

    def __init__(self, message: str, setting: Optional[str] = None, **kwargs):
        super().__init__(
            message,
            user_message="The reservation system is not configured correctly.",
            context={"setting": setting, **kwargs},
            recoverable=False
        )
        self.setting = setting
