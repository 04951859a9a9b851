"""
Centralized logging configuration for the booking engine.

Sinks, levels and file lifetimes come from Settings; each environment
picks a profile deciding the default level, the format and whether files
and variable values in tracebacks are written at all.
"""
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

from ..config import Settings, get_settings

BOOKING_CATEGORY = "BOOKING"

LOG_FORMATS = {
    "simple": "<level>{level: <8}</level> | <level>{message}</level>",
    "detailed": (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>"
    ),
}

# diagnose=True writes local variables, guest contact details included, into tracebacks
ENVIRONMENT_PROFILES: Dict[str, Dict[str, Any]] = {
    "production": {"level": "INFO", "files": True, "format": "detailed", "diagnose": False},
    "development": {"level": "DEBUG", "files": True, "format": "detailed", "diagnose": True},
    "test": {"level": "WARNING", "files": False, "format": "simple", "diagnose": False},
}


def _is_booking_event(record: Dict[str, Any]) -> bool:
    return record["extra"].get("category") == BOOKING_CATEGORY


def configure_logging(
    log_level: str = "INFO",
    log_dir: Optional[str] = "logs",
    rotation: str = "50 MB",
    retention: str = "30 days",
    booking_retention: str = "1 year",
    format_type: str = "detailed",
    diagnose: bool = False
) -> None:
    """
    Replace all loguru sinks with the booking engine's sinks.

    Args:
        log_level: Minimum level for the console and general log file
        log_dir: Directory for log files, None for console only
        rotation: When general and error files rotate (e.g., "50 MB", "1 day")
        retention: How long rotated general and error files are kept
        booking_retention: How long the daily booking audit files are kept
        format_type: "simple" or "detailed"
        diagnose: Include variable values in tracebacks
    """
    log_format = LOG_FORMATS[format_type]

    logger.remove()
    logger.add(
        sys.stderr,
        format=log_format,
        level=log_level,
        colorize=True,
        backtrace=True,
        diagnose=diagnose
    )

    if log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        # (file name, level, rotation, retention, filter)
        file_sinks = [
            ("table_booking_{time:YYYY-MM-DD}.log", log_level, rotation, retention, None),
            ("errors_{time:YYYY-MM-DD}.log", "ERROR", rotation, retention, None),
            ("bookings_{time:YYYY-MM-DD}.log", "INFO", "1 day", booking_retention, _is_booking_event),
        ]
        for file_name, level, file_rotation, file_retention, record_filter in file_sinks:
            logger.add(
                log_path / file_name,
                format=log_format,
                level=level,
                rotation=file_rotation,
                retention=file_retention,
                compression="zip",
                backtrace=True,
                diagnose=diagnose,
                filter=record_filter
            )

    logger.info(
        f"Logging configured: level={log_level}, log_dir={log_dir}, "
        f"format={format_type}, diagnose={diagnose}"
    )


def log_booking_event(
    event_type: str,
    reservation_id: Optional[str] = None,
    customer: Optional[str] = None,
    details: Optional[dict] = None
) -> None:
    """
    Log a reservation event for the audit trail.

    Args:
        event_type: Type of event ("CREATED", "CANCELLED", "REJECTED")
        reservation_id: Internal reservation identifier
        customer: Guest email or phone
        details: Additional event details
    """
    details = details or {}

    logger.bind(category=BOOKING_CATEGORY).info(
        f"BOOKING {event_type} | "
        f"customer={customer} | "
        f"reservation_id={reservation_id} | "
        f"details={details}"
    )


def init_logging(
    environment: Optional[str] = None,
    log_level: Optional[str] = None,
    settings: Optional[Settings] = None
) -> None:
    """
    Initialize logging for an environment.

    Args:
        environment: "development", "production" or "test"; defaults to settings
        log_level: Overrides both LOG_LEVEL and the environment's default level
        settings: Source of LOG_DIR, rotation and retention; defaults to the global settings
    """
    settings = settings or get_settings()
    environment = environment or settings.environment
    profile = ENVIRONMENT_PROFILES.get(environment, ENVIRONMENT_PROFILES["development"])

    configure_logging(
        log_level=log_level or settings.log_level or profile["level"],
        log_dir=settings.log_dir if profile["files"] else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
        booking_retention=settings.booking_log_retention,
        format_type=profile["format"],
        diagnose=profile["diagnose"]
    )

    logger.info(f"Logging initialized for {environment} environment")
