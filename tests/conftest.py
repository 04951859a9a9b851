"""
Pytest configuration and shared fixtures.
"""
import sys
from datetime import date
from pathlib import Path
from typing import Callable

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from table_booking import config
from table_booking.config import Settings
from table_booking.error_handling.logging_config import init_logging
from table_booking.models.schemas import ReservationFormData
from table_booking.models.slots import Region, TimeSlot
from table_booking.services.reservation_store import ReservationStore

# July 24 2025 is a Thursday; the 26th and 27th are the weekend
WINDOW_START = date(2025, 7, 24)
WINDOW_END = date(2025, 7, 31)
FRIDAY = date(2025, 7, 25)
SATURDAY = date(2025, 7, 26)


@pytest.fixture(scope="session", autouse=True)
def quiet_logging():
    """Only warnings and above during tests."""
    init_logging("test", settings=Settings(_env_file=None))


@pytest.fixture(autouse=True)
def reset_global_settings():
    """Each test starts without a cached Settings instance."""
    config.reset_settings()
    yield
    config.reset_settings()


@pytest.fixture(scope="function")
def settings() -> Settings:
    """
    Default settings, ignoring any .env file in the working directory.
    """
    return Settings(_env_file=None)


@pytest.fixture(scope="function")
def store(settings: Settings) -> ReservationStore:
    """
    Store over the default window with every slot empty.
    """
    return ReservationStore(settings=settings)


def fixed_seed(overrides: dict, default=(60, 60)) -> Callable:
    """Seed policy returning overrides[(date, slot)] or the default pair."""
    def seed(day, time_slot):
        return overrides.get((day, time_slot), default)
    return seed


@pytest.fixture(scope="function")
def small_slot_store(settings: Settings) -> ReservationStore:
    """
    Store where Friday 18:00 holds 20 seats with 10 already taken.
    """
    seed = fixed_seed({(FRIDAY, TimeSlot.SIX_PM): (20, 10)})
    return ReservationStore(settings=settings, seed_policy=seed)


@pytest.fixture(scope="function")
def make_form() -> Callable[..., ReservationFormData]:
    """
    Build ReservationFormData with sensible defaults, overridable per test.
    """
    def factory(**overrides) -> ReservationFormData:
        data = {
            "date": FRIDAY,
            "time_slot": TimeSlot.SIX_PM,
            "party_size": 4,
            "region": Region.MAIN_DINING,
            "customer_name": "Jane Doe",
            "email": "jane.doe@example.com",
            "phone": "+1 555 123 4567",
            "has_children": False,
            "smoking_requested": False,
        }
        data.update(overrides)
        return ReservationFormData(**data)
    return factory


@pytest.fixture(scope="function")
def mock_env_vars(monkeypatch):
    """
    Set up environment variables for a short, small-capacity window.
    """
    monkeypatch.setenv("BOOKING_START_DATE", "2025-08-01")
    monkeypatch.setenv("BOOKING_END_DATE", "2025-08-03")
    monkeypatch.setenv("WEEKDAY_CAPACITY", "30")
    monkeypatch.setenv("WEEKEND_CAPACITY", "20")
    monkeypatch.setenv("MAX_PARTY_SIZE", "8")
    monkeypatch.setenv("RESTAURANT_NAME", "Test Bistro")


@pytest.fixture(scope="function")
def make_store(settings: Settings) -> Callable[..., ReservationStore]:
    """
    Build a store whose slots are seeded from an overrides mapping.

    Usage: make_store({(FRIDAY, TimeSlot.SIX_PM): (20, 10)}, default=(60, 60))
    """
    def factory(overrides=None, default=(60, 60), **kwargs) -> ReservationStore:
        return ReservationStore(
            settings=settings,
            seed_policy=fixed_seed(overrides or {}, default),
            **kwargs
        )
    return factory
