"""
Services package - Availability, reservations and form validation.
"""
from .reservation_store import ReservationStore, AvailabilitySubscriber
from .drift_simulator import DriftSimulator
from .capacity_policy import (
    SeedPolicy,
    DriftPolicy,
    baseline_seed_policy,
    random_seed_policy,
    random_drift_policy,
    no_drift,
    generate_reservation_id,
    generate_confirmation_code,
)
from .validation_service import (
    FORM_STEPS,
    validate_date,
    validate_reservation_form,
    validate_step,
    is_form_valid,
)

__all__ = [
    "ReservationStore",
    "AvailabilitySubscriber",
    "DriftSimulator",
    "SeedPolicy",
    "DriftPolicy",
    "baseline_seed_policy",
    "random_seed_policy",
    "random_drift_policy",
    "no_drift",
    "generate_reservation_id",
    "generate_confirmation_code",
    "FORM_STEPS",
    "validate_date",
    "validate_reservation_form",
    "validate_step",
    "is_form_valid",
]
