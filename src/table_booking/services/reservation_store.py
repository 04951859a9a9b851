"""
ReservationStore - Availability and reservation engine for the restaurant.

This store handles:
- The per-date, per-slot capacity calendar for the booking window
- Availability lookups and alternative time slot suggestions
- Reservation creation and cancellation with atomic capacity updates
- Publishing the full availability snapshot to subscribers on change
"""
import threading
from datetime import date, datetime, timedelta
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from loguru import logger

from ..config import Settings, get_settings
from ..error_handling.exceptions import (
    BookingValidationError,
    ConfigurationError,
    SlotUnavailableError,
)
from ..error_handling.logging_config import log_booking_event
from ..models.field_checks import check_party_size
from ..models.schemas import (
    DateAvailability,
    Reservation,
    ReservationFormData,
    SlotAvailability,
)
from ..models.slots import TimeSlot
from .capacity_policy import (
    DriftPolicy,
    SeedPolicy,
    baseline_seed_policy,
    generate_confirmation_code,
    generate_reservation_id,
)

AvailabilitySubscriber = Callable[[List[DateAvailability]], None]


def _calendar_day(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _coerce_slot(value: Any) -> Optional[TimeSlot]:
    try:
        return TimeSlot(value)
    except ValueError:
        return None


class _Subscription:
    """A subscriber callback and the newest snapshot version it was given."""

    def __init__(self, callback: AvailabilitySubscriber):
        self.callback = callback
        self.last_version = -1
        # Held for the whole callback so deliveries to one subscriber never overlap
        self.lock = threading.RLock()


class ReservationStore:
    """
    In-memory owner of the availability calendar and active reservations.

    All mutations hold the store lock for the whole check-then-write, so
    concurrent bookings can never oversell a slot. Subscribers receive deep
    copies of the calendar and cannot modify store state.

    Every mutation bumps a version number under the lock. A subscriber is
    never handed a snapshot older than one it has already received, so the
    last snapshot it sees is always the current state.
    """

    def __init__(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        seed_policy: Optional[SeedPolicy] = None,
        settings: Optional[Settings] = None,
        id_factory: Callable[[], str] = generate_reservation_id,
        code_factory: Callable[[], str] = generate_confirmation_code,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Build the calendar for the booking window.

        Args:
            start_date: First bookable day, defaults to settings
            end_date: Last bookable day (inclusive), defaults to settings
            seed_policy: Gives (max_capacity, remaining_capacity) per date and slot
            settings: Configuration, defaults to the global settings
            id_factory: Produces reservation identifiers
            code_factory: Produces 6-digit confirmation codes
            clock: Source of reservation creation timestamps

        Raises:
            ConfigurationError: If the window is empty or a seeded capacity is invalid
        """
        self.settings = settings or get_settings()
        self.start_date = _calendar_day(start_date or self.settings.booking_start_date)
        self.end_date = _calendar_day(end_date or self.settings.booking_end_date)
        self.max_alternatives = self.settings.max_alternatives

        if self.start_date > self.end_date:
            raise ConfigurationError(
                f"Booking window start {self.start_date} is after end {self.end_date}",
                setting="booking_window",
                start_date=self.start_date,
                end_date=self.end_date
            )

        self._seed_policy = seed_policy or baseline_seed_policy(
            self.settings.weekday_capacity,
            self.settings.weekend_capacity
        )
        self._id_factory = id_factory
        self._code_factory = code_factory
        self._clock = clock

        self._lock = threading.RLock()
        self._calendar: Dict[date, DateAvailability] = {}
        self._reservations: List[Reservation] = []
        self._subscribers: List[_Subscription] = []
        self._version = 0

        self._build_calendar()

    def _build_calendar(self) -> None:
        """Seed one DateAvailability per day of the window."""
        day = self.start_date
        while day <= self.end_date:
            slots = []
            for time_slot in TimeSlot:
                max_capacity, remaining = self._seed_policy(day, time_slot)
                if max_capacity <= 0 or not 0 <= remaining <= max_capacity:
                    raise ConfigurationError(
                        f"Invalid seeded capacity for {day} {time_slot}: "
                        f"max={max_capacity}, remaining={remaining}",
                        setting="seed_policy",
                        date=day,
                        time_slot=time_slot
                    )
                slots.append(SlotAvailability(
                    time_slot=time_slot,
                    remaining_capacity=remaining,
                    max_capacity=max_capacity
                ))
            self._calendar[day] = DateAvailability(date=day, time_slots=slots)
            day += timedelta(days=1)

        logger.info(
            f"Reservation calendar ready: {self.start_date} to {self.end_date}, "
            f"{len(self._calendar)} dates x {len(TimeSlot)} slots"
        )

    @property
    def booking_window(self) -> Tuple[date, date]:
        return self.start_date, self.end_date

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    def check_date_availability(self, day: Union[date, datetime]) -> Optional[DateAvailability]:
        """
        Get availability for every slot on a date.

        Args:
            day: Requested date; any time-of-day is ignored

        Returns:
            Copy of the date's availability, or None outside the booking window
        """
        with self._lock:
            entry = self._calendar.get(_calendar_day(day))
            if entry is None:
                logger.debug(f"Date {day} is outside the booking window")
                return None
            return entry.model_copy(deep=True)

    def check_time_slot_availability(
        self,
        day: Union[date, datetime],
        time_slot: Union[TimeSlot, str]
    ) -> Optional[SlotAvailability]:
        """
        Get availability for a single slot.

        Returns:
            Copy of the slot's availability, or None if the date is not bookable
        """
        slot = _coerce_slot(time_slot)
        with self._lock:
            entry = self._calendar.get(_calendar_day(day))
            if entry is None or slot is None:
                return None
            return entry.get_slot(slot).model_copy()

    def is_time_slot_available(
        self,
        day: Union[date, datetime],
        time_slot: Union[TimeSlot, str],
        party_size: int
    ) -> bool:
        """True if the slot exists and can seat the whole party right now."""
        availability = self.check_time_slot_availability(day, time_slot)
        return availability is not None and availability.can_seat(party_size)

    def get_alternative_time_slots(
        self,
        day: Union[date, datetime],
        time_slot: Union[TimeSlot, str],
        party_size: int
    ) -> List[SlotAvailability]:
        """
        Suggest other slots on the same date that can seat the party.

        Candidates are ordered by distance in minutes from the requested
        slot; on a tie the earlier slot comes first.

        Args:
            day: Requested date
            time_slot: Requested slot, excluded from the result
            party_size: Number of guests

        Returns:
            Up to ``max_alternatives`` slot copies, empty if the date is not bookable
        """
        requested = _coerce_slot(time_slot)
        with self._lock:
            entry = self._calendar.get(_calendar_day(day))
            if entry is None or requested is None:
                return []

            candidates = [
                slot for slot in entry.time_slots
                if slot.available
                and slot.remaining_capacity >= party_size
                and slot.time_slot != requested
            ]
            # sorted() is stable and slots are in chronological order
            candidates = sorted(
                candidates,
                key=lambda slot: abs(slot.time_slot.minutes - requested.minutes)
            )
            return [slot.model_copy() for slot in candidates[:self.max_alternatives]]

    def get_availability_snapshot(self) -> List[DateAvailability]:
        """Deep copy of the whole calendar in date order."""
        with self._lock:
            return self._snapshot()

    def _snapshot(self) -> List[DateAvailability]:
        return [entry.model_copy(deep=True) for entry in self._calendar.values()]

    def _commit(self) -> Tuple[int, List[DateAvailability]]:
        """Record a mutation. Must be called with the store lock held."""
        self._version += 1
        return self._version, self._snapshot()

    # ------------------------------------------------------------------
    # Reservations
    # ------------------------------------------------------------------

    def create_reservation(
        self,
        form_data: Union[ReservationFormData, Mapping[str, Any]]
    ) -> Reservation:
        """
        Book a table and take the party's seats from the slot.

        The availability check, the new reservation and the capacity
        decrement happen under one lock acquisition.

        Args:
            form_data: Validated form data (a mapping is validated first)

        Returns:
            The confirmed Reservation

        Raises:
            BookingValidationError: If the party is outside the configured size limits
            SlotUnavailableError: If the date is not bookable or the slot cannot seat the party
            pydantic.ValidationError: If a mapping fails form validation
        """
        if not isinstance(form_data, ReservationFormData):
            form_data = ReservationFormData.model_validate(form_data)

        day = form_data.date
        party_size = form_data.party_size

        size_error = check_party_size(
            party_size,
            self.settings.min_party_size,
            self.settings.max_party_size
        )
        if size_error:
            logger.warning(f"Party size {party_size} rejected: {size_error}")
            raise BookingValidationError(
                f"party_size={party_size} outside "
                f"{self.settings.min_party_size}-{self.settings.max_party_size}",
                user_message=size_error,
                field="party_size",
                value=party_size
            )

        with self._lock:
            entry = self._calendar.get(day)
            slot = entry.get_slot(form_data.time_slot) if entry else None

            if slot is None or not slot.can_seat(party_size):
                remaining = slot.remaining_capacity if slot else None
                alternatives = self.get_alternative_time_slots(day, form_data.time_slot, party_size)
                logger.warning(
                    f"Slot unavailable: {day} {form_data.time_slot} "
                    f"party_size={party_size} remaining={remaining}"
                )
                log_booking_event(
                    event_type="REJECTED",
                    customer=form_data.email,
                    details={
                        "date": str(day),
                        "time_slot": str(form_data.time_slot),
                        "party_size": party_size,
                        "remaining_capacity": remaining
                    }
                )
                raise SlotUnavailableError(
                    date=day,
                    time_slot=form_data.time_slot,
                    party_size=party_size,
                    remaining_capacity=remaining,
                    alternatives=alternatives
                )

            reservation = Reservation(
                reservation_id=self._id_factory(),
                customer_name=form_data.customer_name,
                date=day,
                time_slot=form_data.time_slot,
                party_size=party_size,
                region=form_data.region,
                email=form_data.email,
                phone=form_data.phone,
                has_children=form_data.has_children,
                smoking_requested=form_data.smoking_requested,
                confirmation_code=self._code_factory(),
                created_at=self._clock()
            )
            self._reservations.append(reservation)
            slot.remaining_capacity = max(0, slot.remaining_capacity - party_size)
            version, snapshot = self._commit()

        log_booking_event(
            event_type="CREATED",
            reservation_id=reservation.reservation_id,
            customer=reservation.email,
            details={
                "date": str(day),
                "time_slot": str(reservation.time_slot),
                "party_size": party_size,
                "region": str(reservation.region)
            }
        )
        self._publish(version, snapshot)
        return reservation

    def cancel_reservation(self, reservation_id: str) -> bool:
        """
        Cancel a reservation and give its seats back to the slot.

        Args:
            reservation_id: Identifier returned at booking

        Returns:
            True if cancelled, False if no such reservation exists
        """
        with self._lock:
            index = next(
                (i for i, r in enumerate(self._reservations) if r.reservation_id == reservation_id),
                None
            )
            if index is None:
                logger.debug(f"Cancel ignored, unknown reservation {reservation_id}")
                return False

            reservation = self._reservations.pop(index)
            entry = self._calendar.get(reservation.date)
            if entry is not None:
                slot = entry.get_slot(reservation.time_slot)
                slot.remaining_capacity = min(
                    slot.max_capacity,
                    slot.remaining_capacity + reservation.party_size
                )
            version, snapshot = self._commit()

        log_booking_event(
            event_type="CANCELLED",
            reservation_id=reservation.reservation_id,
            customer=reservation.email,
            details={
                "date": str(reservation.date),
                "time_slot": str(reservation.time_slot),
                "party_size": reservation.party_size
            }
        )
        self._publish(version, snapshot)
        return True

    def get_all_reservations(self) -> List[Reservation]:
        with self._lock:
            return list(self._reservations)

    def get_reservation_by_id(self, reservation_id: str) -> Optional[Reservation]:
        with self._lock:
            return next(
                (r for r in self._reservations if r.reservation_id == reservation_id),
                None
            )

    # ------------------------------------------------------------------
    # Simulated outside demand
    # ------------------------------------------------------------------

    def apply_drift(self, policy: DriftPolicy) -> int:
        """
        Reduce slot capacities by the amounts the drift policy asks for.

        Capacity never drops below zero. Subscribers are notified once if
        anything changed.

        Args:
            policy: Called with (date, slot copy), returns seats to remove

        Returns:
            Number of slots whose capacity changed
        """
        changed = 0
        with self._lock:
            for day, entry in self._calendar.items():
                for slot in entry.time_slots:
                    reduction = max(0, policy(day, slot.model_copy()))
                    new_remaining = max(0, slot.remaining_capacity - reduction)
                    if new_remaining != slot.remaining_capacity:
                        slot.remaining_capacity = new_remaining
                        changed += 1
            if not changed:
                return 0
            version, snapshot = self._commit()

        logger.debug(f"Capacity drift changed {changed} slots")
        self._publish(version, snapshot)
        return changed

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(
        self,
        callback: AvailabilitySubscriber,
        emit_current: bool = True
    ) -> Callable[[], None]:
        """
        Register for availability snapshots.

        Args:
            callback: Receives the full calendar after every change
            emit_current: Deliver the current snapshot immediately

        Returns:
            Function that removes the subscription
        """
        subscription = _Subscription(callback)
        with self._lock:
            self._subscribers.append(subscription)
            version = self._version
            snapshot = self._snapshot() if emit_current else None

        if snapshot is not None:
            self._deliver(subscription, version, snapshot)

        return lambda: self._remove(subscription)

    def unsubscribe(self, callback: AvailabilitySubscriber) -> None:
        with self._lock:
            for subscription in self._subscribers:
                if subscription.callback == callback:
                    self._subscribers.remove(subscription)
                    return

    def _remove(self, subscription: _Subscription) -> None:
        with self._lock:
            if subscription in self._subscribers:
                self._subscribers.remove(subscription)

    def _publish(self, version: int, snapshot: List[DateAvailability]) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for subscription in subscribers:
            self._deliver(subscription, version, snapshot)

    def _deliver(
        self,
        subscription: _Subscription,
        version: int,
        snapshot: List[DateAvailability]
    ) -> None:
        """
        Hand one subscriber its own copy of a snapshot.

        Snapshots older than one the subscriber already received are dropped.
        """
        with subscription.lock:
            if version <= subscription.last_version:
                logger.debug(
                    f"Dropping stale snapshot v{version} for {subscription.callback!r}, "
                    f"already at v{subscription.last_version}"
                )
                return
            subscription.last_version = version
            try:
                subscription.callback([entry.model_copy(deep=True) for entry in snapshot])
            except Exception:
                logger.exception(f"Availability subscriber {subscription.callback!r} failed")
