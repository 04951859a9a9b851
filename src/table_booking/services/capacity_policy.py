"""
Injectable policies for the reservation store.

- Seed policies decide the starting capacity of every slot
- Drift policies decide how much capacity a slot loses on a simulated tick
- Generators produce reservation identifiers and confirmation codes
"""
import random
import secrets
import string
import time
from datetime import date
from typing import Callable, Optional, Tuple

from ..models.schemas import SlotAvailability
from ..models.slots import TimeSlot

# (date, slot) -> (max_capacity, remaining_capacity)
SeedPolicy = Callable[[date, TimeSlot], Tuple[int, int]]

# (date, slot) -> seats to remove
DriftPolicy = Callable[[date, SlotAvailability], int]

_ID_ALPHABET = string.ascii_uppercase + string.digits


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def baseline_seed_policy(weekday_capacity: int = 60, weekend_capacity: int = 40) -> SeedPolicy:
    """
    Seed every slot empty, sized by the day of the week.

    Args:
        weekday_capacity: Seats per slot Monday to Friday
        weekend_capacity: Seats per slot Saturday and Sunday

    Returns:
        Seed policy giving a full slot
    """
    def seed(day: date, time_slot: TimeSlot) -> Tuple[int, int]:
        capacity = weekend_capacity if is_weekend(day) else weekday_capacity
        return capacity, capacity

    return seed


def random_seed_policy(
    weekday_capacity: int = 60,
    weekend_capacity: int = 40,
    rng: Optional[random.Random] = None
) -> SeedPolicy:
    """
    Seed every slot partially booked at random, for demos.

    Remaining capacity is uniform in [0, max_capacity), so a slot may start full.
    """
    rng = rng or random.Random()

    def seed(day: date, time_slot: TimeSlot) -> Tuple[int, int]:
        capacity = weekend_capacity if is_weekend(day) else weekday_capacity
        return capacity, rng.randrange(capacity)

    return seed


def no_drift(day: date, slot: SlotAvailability) -> int:
    return 0


def random_drift_policy(
    probability: float = 0.1,
    max_step: int = 4,
    rng: Optional[random.Random] = None
) -> DriftPolicy:
    """
    Emulate outside demand: each slot has a small chance of losing a few seats.

    Args:
        probability: Chance per slot and tick of any change
        max_step: Largest reduction on a single tick
        rng: Random source, seeded in tests

    Returns:
        Drift policy
    """
    rng = rng or random.Random()

    def drift(day: date, slot: SlotAvailability) -> int:
        if rng.random() < probability:
            return rng.randint(0, max_step)
        return 0

    return drift


def generate_reservation_id() -> str:
    """
    Generate a unique reservation ID.

    Millisecond timestamp plus 9 random base36 characters, e.g.
    ``RES-1753380000000-K3J9Z0QW1``.
    """
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"RES-{int(time.time() * 1000)}-{suffix}"


def generate_confirmation_code() -> str:
    """6-digit code drawn uniformly from 000000-999999."""
    return f"{secrets.randbelow(1_000_000):06d}"
