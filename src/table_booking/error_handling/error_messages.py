"""
User-facing error message generation for the reservation form.

Turns exceptions into friendly sentences, suggesting alternative times
where the error carries them.
"""
from datetime import date, datetime, time
from typing import Any, List, Optional

from loguru import logger

from .exceptions import (
    BookingSystemError,
    BookingValidationError,
    ConfigurationError,
    SlotUnavailableError,
)


def format_date_friendly(date_obj: date, today: Optional[date] = None) -> str:
    """
    Format date in a friendly format.

    Args:
        date_obj: Date to format
        today: Reference day, defaults to the current date

    Returns:
        Friendly date string (e.g., "today", "tomorrow", "July 25th")
    """
    today = today or datetime.now().date()
    delta = (date_obj - today).days

    if delta == 0:
        return "today"
    elif delta == 1:
        return "tomorrow"

    day = date_obj.day
    suffix = "th" if 11 <= day <= 13 else {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return date_obj.strftime(f"%B {day}{suffix}")


def format_time_friendly(time_obj: time) -> str:
    """
    Format time in a friendly format.

    Args:
        time_obj: Time to format

    Returns:
        Friendly time string (e.g., "6:30 PM", "7 PM")
    """
    hour = time_obj.hour
    minute = time_obj.minute

    if hour == 12 and minute == 0:
        return "noon"
    elif hour == 0 and minute == 0:
        return "midnight"

    period = "PM" if hour >= 12 else "AM"
    display_hour = hour if hour <= 12 else hour - 12
    if display_hour == 0:
        display_hour = 12

    if minute == 0:
        return f"{display_hour} {period}"
    return f"{display_hour}:{minute:02d} {period}"


def _slot_time(alternative: Any) -> Optional[time]:
    slot = getattr(alternative, "time_slot", alternative)
    if isinstance(slot, dict):
        slot = slot.get("time_slot")
    if hasattr(slot, "time") and isinstance(slot.time, time):
        return slot.time
    if isinstance(slot, str):
        try:
            return datetime.strptime(slot, "%H:%M").time()
        except ValueError:
            return None
    return None


def format_alternatives(alternatives: List[Any], max_count: int = 3) -> str:
    """
    Format alternative time slots as a sentence.

    Args:
        alternatives: SlotAvailability entries, TimeSlot values or "HH:MM" strings
        max_count: Maximum number of alternatives to mention

    Returns:
        Formatted alternatives string, empty if none are usable
    """
    time_strings = []
    for alternative in alternatives[:max_count]:
        slot_time = _slot_time(alternative)
        if slot_time is not None:
            time_strings.append(format_time_friendly(slot_time))

    if not time_strings:
        return ""

    if len(time_strings) == 1:
        return f"We have availability at {time_strings[0]}."
    elif len(time_strings) == 2:
        return f"We have availability at {time_strings[0]} or {time_strings[1]}."
    return f"We have availability at {', '.join(time_strings[:-1])}, or {time_strings[-1]}."


def get_slot_unavailable_message(error: SlotUnavailableError) -> str:
    """Generate message for an unavailable slot, offering alternatives."""
    when = format_date_friendly(error.date)

    if error.remaining_capacity is None:
        return f"I'm sorry, we are not taking reservations for {when}. Please choose another date."

    slot_time = _slot_time(error.time_slot)
    at = f" at {format_time_friendly(slot_time)}" if slot_time else ""
    base_msg = f"I'm sorry, {when}{at} can't seat a party of {error.party_size}."

    alternatives_msg = format_alternatives(error.alternatives)
    if alternatives_msg:
        return f"{base_msg} {alternatives_msg}"
    return f"{base_msg} Please choose another date."


def generate_error_message(error: Exception) -> str:
    """
    Generate a user-facing message for any error.

    Args:
        error: Exception raised while handling a reservation

    Returns:
        Message suitable for display to the guest
    """
    if isinstance(error, SlotUnavailableError):
        return get_slot_unavailable_message(error)
    if isinstance(error, BookingValidationError):
        return error.user_message
    if isinstance(error, ConfigurationError):
        return "Reservations are unavailable right now. Please try again later."
    if isinstance(error, BookingSystemError):
        return error.user_message

    logger.debug(f"No specific message for {type(error).__name__}, using generic")
    return "Error creating reservation. Please try again."
