"""
Configuration module for the table booking engine.

Loads environment variables and provides configuration settings including
the booking window, party size limits and seating capacity baselines.
"""
from datetime import date
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Constants the form and the store must agree on
MIN_PARTY_SIZE = 1
MAX_PARTY_SIZE = 12
MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 50
BOOKING_START_DATE = date(2025, 7, 24)
BOOKING_END_DATE = date(2025, 7, 31)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        restaurant_name: Name used in confirmations
        booking_start_date: First bookable day (inclusive)
        booking_end_date: Last bookable day (inclusive)
        min_party_size: Smallest party accepted
        max_party_size: Largest party accepted
        weekday_capacity: Seats per slot Monday to Friday
        weekend_capacity: Seats per slot on Saturday and Sunday
        max_alternatives: How many alternative slots to suggest
        drift_enabled: Whether the background capacity drift runs
        log_level: Minimum log level, None for the environment default
        log_dir, log_rotation, log_retention: Log file placement and lifetime
        environment: development, production or test
    """

    restaurant_name: str = Field(
        default="Kafè",
        alias="RESTAURANT_NAME",
        description="Restaurant name for confirmations"
    )

    # Booking window
    booking_start_date: date = Field(
        default=BOOKING_START_DATE,
        alias="BOOKING_START_DATE",
        description="First date reservations may be made for"
    )

    booking_end_date: date = Field(
        default=BOOKING_END_DATE,
        alias="BOOKING_END_DATE",
        description="Last date reservations may be made for"
    )

    # Party size
    min_party_size: int = Field(
        default=MIN_PARTY_SIZE,
        ge=1,
        alias="MIN_PARTY_SIZE",
        description="Minimum number of guests"
    )

    max_party_size: int = Field(
        default=MAX_PARTY_SIZE,
        ge=1,
        alias="MAX_PARTY_SIZE",
        description="Maximum number of guests"
    )

    # Capacity seeding
    weekday_capacity: int = Field(
        default=60,
        gt=0,
        alias="WEEKDAY_CAPACITY",
        description="Seats per time slot on weekdays"
    )

    weekend_capacity: int = Field(
        default=40,
        gt=0,
        alias="WEEKEND_CAPACITY",
        description="Seats per time slot on weekends"
    )

    max_alternatives: int = Field(
        default=3,
        ge=0,
        alias="MAX_ALTERNATIVES",
        description="Number of alternative slots to suggest"
    )

    # Simulated live activity
    drift_enabled: bool = Field(
        default=False,
        alias="DRIFT_ENABLED",
        description="Run the background capacity drift simulator"
    )

    drift_interval_seconds: float = Field(
        default=30.0,
        gt=0,
        alias="DRIFT_INTERVAL_SECONDS",
        description="Seconds between drift ticks"
    )

    drift_probability: float = Field(
        default=0.1,
        ge=0,
        le=1,
        alias="DRIFT_PROBABILITY",
        description="Chance per slot and tick of a capacity change"
    )

    drift_max_step: int = Field(
        default=4,
        ge=0,
        alias="DRIFT_MAX_STEP",
        description="Largest capacity reduction per slot and tick"
    )

    # Logging
    log_level: Optional[str] = Field(
        default=None,
        alias="LOG_LEVEL",
        description="Minimum log level, defaults to the environment's level"
    )

    log_dir: str = Field(
        default="logs",
        alias="LOG_DIR",
        description="Directory for rotated log files"
    )

    log_rotation: str = Field(
        default="50 MB",
        alias="LOG_ROTATION",
        description="Size or age at which log files rotate"
    )

    log_retention: str = Field(
        default="30 days",
        alias="LOG_RETENTION",
        description="How long rotated general and error logs are kept"
    )

    booking_log_retention: str = Field(
        default="1 year",
        alias="BOOKING_LOG_RETENTION",
        description="How long the booking audit log is kept"
    )

    environment: str = Field(
        default="development",
        alias="ENVIRONMENT",
        description="development, production or test"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True
    )

    @model_validator(mode="after")
    def check_ranges(self) -> "Settings":
        """Reject an empty booking window or an inverted party size range."""
        if self.booking_start_date > self.booking_end_date:
            raise ValueError(
                f"Booking window start {self.booking_start_date} "
                f"is after end {self.booking_end_date}"
            )
        if self.min_party_size > self.max_party_size:
            raise ValueError(
                f"min_party_size {self.min_party_size} exceeds "
                f"max_party_size {self.max_party_size}"
            )
        return self


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get or create the global settings instance.

    Returns:
        Settings instance with loaded configuration
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
