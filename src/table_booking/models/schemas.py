"""
Pydantic models for availability, reservation requests and confirmations.
"""
from datetime import date, datetime
from typing import Any, Dict, List

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)

from ..config import MAX_PARTY_SIZE, MIN_PARTY_SIZE
from .field_checks import check_customer_name, check_email, check_phone
from .slots import Region, TimeSlot


def _to_calendar_day(value: Any) -> Any:
    """Drop the time-of-day from datetimes; other values pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


class SlotAvailability(BaseModel):
    """
    Capacity of one time slot on one date.

    ``available`` is derived from ``remaining_capacity`` so the two can
    never disagree.
    """
    time_slot: TimeSlot
    remaining_capacity: int = Field(..., ge=0, description="Seats still free")
    max_capacity: int = Field(..., gt=0, description="Seats when empty")

    model_config = ConfigDict(
        validate_assignment=True,
        json_schema_extra={
            "example": {
                "time_slot": "18:30",
                "remaining_capacity": 18,
                "max_capacity": 60,
                "available": True
            }
        }
    )

    @computed_field
    @property
    def available(self) -> bool:
        return self.remaining_capacity > 0

    @model_validator(mode="after")
    def check_capacity_bounds(self) -> "SlotAvailability":
        """Remaining capacity cannot exceed the slot's maximum."""
        if self.remaining_capacity > self.max_capacity:
            raise ValueError(
                f"remaining_capacity {self.remaining_capacity} exceeds "
                f"max_capacity {self.max_capacity}"
            )
        return self

    def can_seat(self, party_size: int) -> bool:
        return self.available and self.remaining_capacity >= party_size


class DateAvailability(BaseModel):
    """
    Availability for every time slot of a single date.
    """
    date: date
    time_slots: List[SlotAvailability]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "date": "2025-07-25",
                "time_slots": [
                    {"time_slot": "18:00", "remaining_capacity": 0, "max_capacity": 60},
                    {"time_slot": "18:30", "remaining_capacity": 12, "max_capacity": 60}
                ],
                "is_fully_booked": False
            }
        }
    )

    @computed_field
    @property
    def is_fully_booked(self) -> bool:
        return all(not slot.available for slot in self.time_slots)

    @field_validator("date", mode="before")
    @classmethod
    def truncate_datetime(cls, v: Any) -> Any:
        return _to_calendar_day(v)

    @field_validator("time_slots")
    @classmethod
    def validate_all_slots_present(cls, v: List[SlotAvailability]) -> List[SlotAvailability]:
        """Every enumerated slot must appear exactly once, in chronological order."""
        if [slot.time_slot for slot in v] != list(TimeSlot):
            raise ValueError("time_slots must cover every time slot once, in order")
        return v

    def get_slot(self, time_slot: TimeSlot) -> SlotAvailability:
        return self.time_slots[list(TimeSlot).index(TimeSlot(time_slot))]


class RegionInfo(BaseModel):
    """Descriptive details for a seating area."""
    id: Region
    name: str
    description: str
    max_party_size: int = Field(..., ge=1)
    has_smoking: bool = False
    is_outdoor: bool = False

    model_config = ConfigDict(frozen=True)


REGION_CATALOG: Dict[Region, RegionInfo] = {
    Region.MAIN_DINING: RegionInfo(
        id=Region.MAIN_DINING,
        name=Region.MAIN_DINING.display_name,
        description="Our main room with views of the open kitchen",
        max_party_size=MAX_PARTY_SIZE,
    ),
    Region.BAR_AREA: RegionInfo(
        id=Region.BAR_AREA,
        name=Region.BAR_AREA.display_name,
        description="High tables and counter seats beside the bar",
        max_party_size=6,
    ),
    Region.OUTDOOR_PATIO: RegionInfo(
        id=Region.OUTDOOR_PATIO,
        name=Region.OUTDOOR_PATIO.display_name,
        description="Open-air terrace with a smoking section",
        max_party_size=10,
        has_smoking=True,
        is_outdoor=True,
    ),
    Region.PRIVATE_ROOM: RegionInfo(
        id=Region.PRIVATE_ROOM,
        name=Region.PRIVATE_ROOM.display_name,
        description="Secluded room for celebrations and business dinners",
        max_party_size=MAX_PARTY_SIZE,
    ),
}


def get_region_info(region: Region) -> RegionInfo:
    return REGION_CATALOG[Region(region)]


class ReservationFormData(BaseModel):
    """
    Pydantic model for validating an incoming reservation request.

    Window-independent field rules are enforced here. Whether the date
    falls inside the booking window and whether the party fits the
    configured size limits are decided by the store.
    """
    date: date
    time_slot: TimeSlot = Field(..., description="Reservation time slot")
    party_size: int = Field(
        ...,
        ge=MIN_PARTY_SIZE,
        description="Number of guests, capped by the configured max_party_size"
    )
    region: Region = Field(..., description="Seating area preference")
    customer_name: str = Field(..., description="Guest name")
    email: str = Field(..., description="Guest email")
    phone: str = Field(..., description="Guest phone number")
    has_children: bool = False
    smoking_requested: bool = False

    @field_validator("date", mode="before")
    @classmethod
    def truncate_datetime(cls, v: Any) -> Any:
        """Reservations are made per calendar day; drop any time-of-day."""
        return _to_calendar_day(v)

    @field_validator("customer_name")
    @classmethod
    def validate_customer_name(cls, v: str) -> str:
        error = check_customer_name(v)
        if error:
            raise ValueError(error)
        return v.strip()

    @field_validator("email")
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        error = check_email(v)
        if error:
            raise ValueError(error)
        return v.strip()

    @field_validator("phone")
    @classmethod
    def validate_phone_format(cls, v: str) -> str:
        error = check_phone(v)
        if error:
            raise ValueError(error)
        return v.strip()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "date": "2025-07-25",
                "time_slot": "19:00",
                "party_size": 4,
                "region": "main_dining",
                "customer_name": "Jane Doe",
                "email": "jane.doe@example.com",
                "phone": "+1 555 123 4567",
                "has_children": False,
                "smoking_requested": False
            }
        }
    )


class Reservation(BaseModel):
    """
    A confirmed reservation. Immutable once created.
    """
    reservation_id: str
    customer_name: str
    date: date
    time_slot: TimeSlot
    party_size: int = Field(..., ge=1)
    region: Region
    email: str
    phone: str
    has_children: bool = False
    smoking_requested: bool = False
    confirmation_code: str = Field(..., pattern=r"^\d{6}$")
    created_at: datetime

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "reservation_id": "RES-1753380000000-K3J9Z0QW1",
                "customer_name": "Jane Doe",
                "date": "2025-07-25",
                "time_slot": "19:00",
                "party_size": 4,
                "region": "main_dining",
                "email": "jane.doe@example.com",
                "phone": "+1 555 123 4567",
                "has_children": False,
                "smoking_requested": False,
                "confirmation_code": "042917",
                "created_at": "2025-07-20T10:30:00"
            }
        }
    )

    def summary(self) -> Dict[str, Any]:
        """Display-ready fields for a confirmation screen."""
        return {
            "confirmation_code": self.confirmation_code,
            "name": self.customer_name,
            "date": self.date.strftime("%A, %B %d, %Y"),
            "time": self.time_slot.label,
            "guests": self.party_size,
            "seating": self.region.display_name,
        }
