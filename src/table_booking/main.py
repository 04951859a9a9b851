"""
Command-line entry point for the table booking engine.

Usage:
    table-booking availability 2025-07-25
    table-booking alternatives 2025-07-25 19:00 6
    table-booking book --date 2025-07-25 --time 19:00 --party-size 4 \\
        --region main_dining --name "Jane Doe" --email jane@example.com \\
        --phone "+1 555 123 4567"

State lives in memory for the lifetime of the process only.
"""
import argparse
import random
import sys
from datetime import date
from typing import List, Optional

from loguru import logger
from pydantic import ValidationError

from .config import get_settings
from .error_handling import BookingSystemError, generate_error_message, init_logging
from .models import ReservationFormData, get_all_regions, get_all_time_slots
from .services import (
    DriftSimulator,
    ReservationStore,
    random_drift_policy,
    random_seed_policy,
    validate_reservation_form,
)


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="table-booking",
        description="Check availability and book tables"
    )
    parser.add_argument(
        "--demo-seed",
        type=int,
        default=None,
        help="Start slots partially booked, using this random seed"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    availability = subparsers.add_parser("availability", help="Show availability for a date")
    availability.add_argument("date", type=_parse_date)

    alternatives = subparsers.add_parser("alternatives", help="Suggest other times on a date")
    alternatives.add_argument("date", type=_parse_date)
    alternatives.add_argument("time", choices=[slot.value for slot in get_all_time_slots()])
    alternatives.add_argument("party_size", type=int)

    book = subparsers.add_parser("book", help="Make a reservation")
    book.add_argument("--date", required=True, type=_parse_date)
    book.add_argument("--time", required=True, dest="time_slot")
    book.add_argument("--party-size", required=True, type=int)
    book.add_argument("--region", required=True, choices=[r.value for r in get_all_regions()])
    book.add_argument("--name", required=True, dest="customer_name")
    book.add_argument("--email", required=True)
    book.add_argument("--phone", required=True)
    book.add_argument("--children", action="store_true", dest="has_children")
    book.add_argument("--smoking", action="store_true", dest="smoking_requested")

    return parser


def _print_availability(store: ReservationStore, day: date) -> int:
    availability = store.check_date_availability(day)
    if availability is None:
        start, end = store.booking_window
        print(f"No reservations for {day}. Booking window: {start} to {end}.")
        return 1

    status = "fully booked" if availability.is_fully_booked else "open"
    print(f"{day.strftime('%A, %B %d, %Y')} ({status})")
    for slot in availability.time_slots:
        marker = " " if slot.available else "x"
        print(
            f"  [{marker}] {slot.time_slot.label:>8}  "
            f"{slot.remaining_capacity:>3}/{slot.max_capacity} seats"
        )
    return 0


def _print_alternatives(store: ReservationStore, day: date, time_slot: str, party_size: int) -> int:
    alternatives = store.get_alternative_time_slots(day, time_slot, party_size)
    if not alternatives:
        print("No alternative times available.")
        return 1
    for slot in alternatives:
        print(f"  {slot.time_slot.label:>8}  {slot.remaining_capacity} seats left")
    return 0


def _book(store: ReservationStore, args: argparse.Namespace) -> int:
    data = {
        "date": args.date,
        "time_slot": args.time_slot,
        "party_size": args.party_size,
        "region": args.region,
        "customer_name": args.customer_name,
        "email": args.email,
        "phone": args.phone,
        "has_children": args.has_children,
        "smoking_requested": args.smoking_requested,
    }

    errors = validate_reservation_form(data, store.settings)
    if errors:
        for field, message in errors.items():
            print(f"  {field}: {message}")
        return 1

    try:
        reservation = store.create_reservation(ReservationFormData(**data))
    except ValidationError as e:
        logger.warning(f"Form rejected: {e}")
        print(str(e))
        return 1
    except BookingSystemError as e:
        print(generate_error_message(e))
        return 1

    print(f"Reservation confirmed at {store.settings.restaurant_name}!")
    for key, value in reservation.summary().items():
        print(f"  {key.replace('_', ' ').title()}: {value}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the command-line demo.
    """
    settings = get_settings()
    init_logging(settings=settings)

    args = build_parser().parse_args(argv)

    seed_policy = None
    if args.demo_seed is not None:
        seed_policy = random_seed_policy(
            settings.weekday_capacity,
            settings.weekend_capacity,
            rng=random.Random(args.demo_seed)
        )

    simulator = None
    try:
        store = ReservationStore(settings=settings, seed_policy=seed_policy)

        if settings.drift_enabled:
            simulator = DriftSimulator(
                store,
                interval_seconds=settings.drift_interval_seconds,
                policy=random_drift_policy(settings.drift_probability, settings.drift_max_step)
            )
            simulator.start()

        if args.command == "availability":
            return _print_availability(store, args.date)
        if args.command == "alternatives":
            return _print_alternatives(store, args.date, args.time, args.party_size)
        return _book(store, args)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130

    except BookingSystemError as e:
        logger.error(f"Failed to start reservation store: {e}")
        print(generate_error_message(e))
        return 2

    finally:
        if simulator is not None:
            simulator.stop()


if __name__ == "__main__":
    sys.exit(main())
