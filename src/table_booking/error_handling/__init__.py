"""
Error handling module for the table booking engine.

Main Components:
    - exceptions: Custom exception classes
    - error_messages: User-friendly message generation
    - logging_config: loguru setup and booking audit events
"""

from .exceptions import (
    BookingSystemError,
    BookingValidationError,
    SlotUnavailableError,
    ConfigurationError,
)

from .error_messages import (
    generate_error_message,
    get_slot_unavailable_message,
    format_date_friendly,
    format_time_friendly,
    format_alternatives,
)

from .logging_config import (
    configure_logging,
    init_logging,
    log_booking_event,
)

__all__ = [
    # Exceptions
    "BookingSystemError",
    "BookingValidationError",
    "SlotUnavailableError",
    "ConfigurationError",

    # Error Messages
    "generate_error_message",
    "get_slot_unavailable_message",
    "format_date_friendly",
    "format_time_friendly",
    "format_alternatives",

    # Logging
    "configure_logging",
    "init_logging",
    "log_booking_event",
]
