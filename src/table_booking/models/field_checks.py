"""
Field rules for the reservation form.

Each check returns an error message suitable for display, or None when the
value is acceptable. They are shared by the pydantic schemas and the form
validation service.
"""
import re
from typing import Any, Optional

from ..config import MAX_NAME_LENGTH, MAX_PARTY_SIZE, MIN_NAME_LENGTH, MIN_PARTY_SIZE
from .slots import Region, TimeSlot

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[+]?[1-9]\d{0,15}$")
NAME_PATTERN = re.compile(r"^[a-zA-Z\s\-']+$")


def check_time_slot(value: Any) -> Optional[str]:
    if value is None or value == "":
        return "Please select a time for your reservation"
    try:
        TimeSlot(value)
    except ValueError:
        return "Please select a valid time slot"
    return None


def check_region(value: Any) -> Optional[str]:
    if value is None or value == "":
        return "Please select a seating area preference"
    try:
        Region(value)
    except ValueError:
        return "Please select a valid seating area"
    return None


def check_party_size(
    value: Any,
    min_size: int = MIN_PARTY_SIZE,
    max_size: int = MAX_PARTY_SIZE
) -> Optional[str]:
    """
    Check the number of guests.

    Args:
        value: Party size as entered
        min_size: Smallest accepted party
        max_size: Largest accepted party

    Returns:
        Error message or None
    """
    if value is None or isinstance(value, bool) or not isinstance(value, (int, float)) or not value:
        return "Please enter the number of guests"
    if value < min_size:
        suffix = "guest" if min_size == 1 else "guests"
        return f"Minimum party size is {min_size} {suffix}"
    if value > max_size:
        return f"Maximum party size is {max_size} guests"
    if isinstance(value, float) and not value.is_integer():
        return "Party size must be a whole number"
    return None


def check_customer_name(value: Optional[str]) -> Optional[str]:
    if not value or not value.strip():
        return "Please enter your name"

    name = value.strip()
    if len(name) < MIN_NAME_LENGTH:
        return f"Name must be at least {MIN_NAME_LENGTH} characters long"
    if len(name) > MAX_NAME_LENGTH:
        return f"Name cannot exceed {MAX_NAME_LENGTH} characters"
    if not NAME_PATTERN.match(name):
        return "Name can only contain letters, spaces, hyphens, and apostrophes"
    return None


def check_email(value: Optional[str]) -> Optional[str]:
    if not value or not value.strip():
        return "Please enter your email address"
    if not EMAIL_PATTERN.match(value.strip()):
        return "Please enter a valid email address"
    return None


def check_phone(value: Optional[str]) -> Optional[str]:
    """
    Check a phone number.

    Separators are ignored; only the digits are counted.
    Accepts formats like: +1 555 123 4567, (555) 123-4567, 5551234567
    """
    if not value or not value.strip():
        return "Please enter your phone number"

    digits = re.sub(r"\D", "", value)
    if len(digits) < 10:
        return "Phone number must have at least 10 digits"
    if len(digits) > 15:
        return "Phone number cannot exceed 15 digits"
    if not PHONE_PATTERN.match(digits):
        return "Please enter a valid phone number"
    return None
