#!/usr/bin/env python3
"""
Walkthrough demo of the reservation form against a live store.

This script fills in the four form steps, books the table and then shows
what a second guest sees when the slot fills up:
1. Date and time
2. Party size and seating area
3. Contact details
4. Preferences
5. Booking created
6. Slot fills up, a second party is offered alternatives
7. Cancellation frees the seats

Usage:
    python scripts/demo.py [--mode MODE] [--seed N]

Options:
    --mode MODE     Demo mode: 'interactive' or 'auto' (default: auto)
                    - interactive: Prompts for each field
                    - auto: Uses predefined answers
    --seed N        Start slots partially booked, using this random seed
"""
import argparse
import random
import sys
import time
from datetime import date
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from table_booking.config import get_settings
from table_booking.error_handling import (
    BookingValidationError,
    generate_error_message,
    init_logging,
)
from table_booking.models import ReservationFormData
from table_booking.services import (
    FORM_STEPS,
    ReservationStore,
    random_seed_policy,
    validate_step,
)


class Colors:
    """ANSI color codes for terminal output."""
    BLUE = '\033[94m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    CYAN = '\033[96m'
    MAGENTA = '\033[95m'
    BOLD = '\033[1m'
    END = '\033[0m'


STEP_TITLES = {
    0: "Date and Time",
    1: "Party Size and Seating",
    2: "Contact Details",
    3: "Preferences",
}

AUTO_ANSWERS = {
    "date": "2025-07-25",
    "time_slot": "19:00",
    "party_size": "4",
    "region": "main_dining",
    "customer_name": "Jane Doe",
    "email": "jane.doe@example.com",
    "phone": "+1 555 123 4567",
    "has_children": "no",
    "smoking_requested": "no",
}


def print_header(text: str):
    print(f"\n{Colors.BOLD}{Colors.BLUE}{'=' * 60}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.BLUE}{text.center(60)}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.BLUE}{'=' * 60}{Colors.END}\n")


def print_user(text: str):
    print(f"{Colors.CYAN}Guest: {Colors.END}{text}")


def print_system(text: str):
    print(f"{Colors.YELLOW}System: {Colors.END}{text}")


def print_success(text: str):
    print(f"{Colors.GREEN}OK {text}{Colors.END}")


def print_error(text: str):
    print(f"{Colors.RED}!! {text}{Colors.END}")


def print_info(text: str):
    print(f"{Colors.MAGENTA}   {text}{Colors.END}")


def get_user_input(field: str, mode: str) -> str:
    """
    Get a field value based on mode.

    Args:
        field: Form field being filled in
        mode: Demo mode ('interactive' or 'auto')

    Returns:
        Raw answer string
    """
    if mode == "interactive":
        return input(f"{Colors.CYAN}{field.replace('_', ' ')}: {Colors.END}")
    time.sleep(0.3)
    print_user(f"{field.replace('_', ' ')} = {AUTO_ANSWERS[field]}")
    return AUTO_ANSWERS[field]


def parse_answer(field: str, raw: str):
    """Convert a typed answer to the value the form expects."""
    raw = raw.strip()
    if field == "date":
        try:
            return date.fromisoformat(raw)
        except ValueError:
            return raw or None
    if field == "party_size":
        return int(raw) if raw.isdigit() else None
    if field in ("has_children", "smoking_requested"):
        return raw.lower() in ("y", "yes", "true", "1")
    return raw


def fill_step(step: int, data: dict, mode: str, settings) -> None:
    """Collect one step's fields until the step validates."""
    print_header(f"STEP {step + 1}: {STEP_TITLES[step]}")

    while True:
        for field in FORM_STEPS[step]:
            data[field] = parse_answer(field, get_user_input(field, mode))

        errors = validate_step(step, data, settings)
        if not errors:
            print_success("Step complete")
            return

        for field, message in errors.items():
            print_error(f"{field}: {message}")
        if mode != "interactive":
            raise SystemExit(1)


def show_slot(store: ReservationStore, day: date, slot: str) -> None:
    availability = store.check_time_slot_availability(day, slot)
    if availability is not None:
        print_info(
            f"{availability.time_slot.label} on {day:%B %d}: "
            f"{availability.remaining_capacity}/{availability.max_capacity} seats left"
        )


def run_demo(mode: str, seed: int = None) -> int:
    """
    Run the complete demo.

    Args:
        mode: Demo mode ('interactive' or 'auto')
        seed: Random seed for a partially booked calendar, None for empty slots
    """
    settings = get_settings()
    init_logging("test", settings=settings)

    print_header(f"{settings.restaurant_name} - Reservation Demo")

    try:
        seed_policy = None
        if seed is not None:
            seed_policy = random_seed_policy(
                settings.weekday_capacity,
                settings.weekend_capacity,
                rng=random.Random(seed)
            )
        store = ReservationStore(settings=settings, seed_policy=seed_policy)
        start, end = store.booking_window
        print_system(f"Taking reservations from {start:%B %d} to {end:%B %d}")

        updates = []
        unsubscribe = store.subscribe(updates.append)

        data = {}
        for step in sorted(FORM_STEPS):
            fill_step(step, data, mode, settings)

        print_header("Booking")
        try:
            reservation = store.create_reservation(ReservationFormData(**data))
        except BookingValidationError as e:
            print_error(generate_error_message(e))
            return 1

        print_success(f"Reservation confirmed at {settings.restaurant_name}!")
        for key, value in reservation.summary().items():
            print_info(f"{key.replace('_', ' ').title()}: {value}")
        show_slot(store, reservation.date, reservation.time_slot)

        print_header("The Slot Fills Up")

        def other_bookings(day, slot):
            if day == reservation.date and slot.time_slot == reservation.time_slot:
                return max(0, slot.remaining_capacity - 2)
            return 0

        store.apply_drift(other_bookings)
        print_system("Other guests booked the same time online")
        show_slot(store, reservation.date, reservation.time_slot)

        walk_in = dict(data, customer_name="Sam Rivera", email="sam@example.com", party_size=3)
        print_system("A party of 3 asks for the same slot")
        try:
            store.create_reservation(walk_in)
            print_info("There was still room for them too")
        except BookingValidationError as e:
            print_error(generate_error_message(e))

        print_header("Cancellation")
        store.cancel_reservation(reservation.reservation_id)
        print_success(f"Reservation {reservation.confirmation_code} cancelled")
        show_slot(store, reservation.date, reservation.time_slot)

        unsubscribe()
        print_system(f"Availability updates received by the subscriber: {len(updates)}")
        return 0

    except KeyboardInterrupt:
        print("\n")
        print_info("Demo interrupted by user.")
        return 130


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Walkthrough of the reservation form and store"
    )
    parser.add_argument(
        "--mode",
        choices=["interactive", "auto"],
        default="auto",
        help="Demo mode: interactive (user input) or auto (predefined answers)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Start slots partially booked, using this random seed"
    )

    args = parser.parse_args()

    sys.exit(run_demo(args.mode, args.seed))


if __name__ == "__main__":
    main()
