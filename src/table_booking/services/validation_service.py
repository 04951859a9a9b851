"""
Form validation for the multi-step reservation form.

Collects a message per invalid field so a form can show them next to the
inputs. Unlike ReservationFormData, this also checks the date against the
configured booking window.
"""
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional

from ..config import Settings, get_settings
from ..models.field_checks import (
    check_customer_name,
    check_email,
    check_party_size,
    check_phone,
    check_region,
    check_time_slot,
)

# Fields collected on each step of the form
FORM_STEPS: Dict[int, List[str]] = {
    0: ["date", "time_slot"],
    1: ["party_size", "region"],
    2: ["customer_name", "email", "phone"],
    3: ["has_children", "smoking_requested"],
}


def validate_date(value: Any, settings: Optional[Settings] = None) -> Optional[str]:
    """
    Check the reservation date against the booking window.

    Args:
        value: date or datetime; time-of-day is ignored
        settings: Configuration holding the window

    Returns:
        Error message or None
    """
    if value is None or value == "":
        return "Please select a date for your reservation"
    if isinstance(value, datetime):
        value = value.date()
    if not isinstance(value, date):
        return "Please select a valid date"

    settings = settings or get_settings()
    if value < settings.booking_start_date:
        return (
            "Reservations are only available from "
            f"{settings.booking_start_date.strftime('%B %d, %Y')}"
        )
    if value > settings.booking_end_date:
        return (
            "Reservations are only available until "
            f"{settings.booking_end_date.strftime('%B %d, %Y')}"
        )
    return None


def _field_error(field: str, value: Any, settings: Settings) -> Optional[str]:
    if field == "date":
        return validate_date(value, settings)
    if field == "time_slot":
        return check_time_slot(value)
    if field == "party_size":
        return check_party_size(value, settings.min_party_size, settings.max_party_size)
    if field == "region":
        return check_region(value)
    if field == "customer_name":
        return check_customer_name(value)
    if field == "email":
        return check_email(value)
    if field == "phone":
        return check_phone(value)
    # Preference checkboxes accept anything
    return None


def validate_fields(
    data: Mapping[str, Any],
    fields: List[str],
    settings: Optional[Settings] = None
) -> Dict[str, str]:
    settings = settings or get_settings()
    errors = {}
    for field in fields:
        error = _field_error(field, data.get(field), settings)
        if error:
            errors[field] = error
    return errors


def validate_reservation_form(
    data: Mapping[str, Any],
    settings: Optional[Settings] = None
) -> Dict[str, str]:
    """
    Validate the complete reservation form.

    Args:
        data: Raw form values keyed by field name
        settings: Configuration holding the window and party size limits

    Returns:
        Mapping of field name to error message; empty when the form is valid
    """
    fields = [field for step in sorted(FORM_STEPS) for field in FORM_STEPS[step]]
    return validate_fields(data, fields, settings)


def is_form_valid(data: Mapping[str, Any], settings: Optional[Settings] = None) -> bool:
    return not validate_reservation_form(data, settings)


def validate_step(
    step: int,
    data: Mapping[str, Any],
    settings: Optional[Settings] = None
) -> Dict[str, str]:
    """Validate only the fields collected on one form step."""
    return validate_fields(data, FORM_STEPS.get(step, []), settings)
