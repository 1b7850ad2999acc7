import logging
from datetime import date, datetime, time
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator, model_validator

logger = logging.getLogger(__name__)


class BookingStatus(StrEnum):
    pending = "pending"
    confirmed = "confirmed"
    in_progress = "inProgress"
    completed = "completed"
    cancelled = "cancelled"


BLOCKING_STATUSES = frozenset(
    {BookingStatus.confirmed, BookingStatus.in_progress, BookingStatus.completed}
)


def _parse_timestamp(value: object) -> datetime | None:
    """Best-effort timestamp coercion. Unparseable values become None."""
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            logger.debug("Unparseable booking timestamp: %r", value)
            return None
    return None


def _parse_status(value: object) -> BookingStatus | None:
    """Unknown stored statuses become None, which never blocks."""
    if value is None or isinstance(value, BookingStatus):
        return value
    try:
        return BookingStatus(value)
    except ValueError:
        logger.debug("Unknown booking status: %r", value)
        return None


class Booking(BaseModel):
    id: int
    car_id: int
    user_id: int | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    status: BookingStatus | None = BookingStatus.pending
    pickup_location: str | None = None
    dropoff_location: str | None = None
    total_amount: float | None = None
    currency: str = "FCFA"
    payment_method: str | None = None
    created_at: datetime | None = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _lenient_dates(cls, v: object) -> datetime | None:
        return _parse_timestamp(v)

    @field_validator("status", mode="before")
    @classmethod
    def _lenient_status(cls, v: object) -> BookingStatus | None:
        return _parse_status(v)

    @property
    def is_blocking(self) -> bool:
        return self.status in BLOCKING_STATUSES


class BookingCreate(BaseModel):
    car_id: int
    user_id: int
    start_date: datetime
    end_date: datetime
    pickup_location: str
    dropoff_location: str
    total_amount: float = Field(..., ge=0)
    currency: str = "FCFA"
    payment_method: str | None = None
    status: BookingStatus = BookingStatus.pending

    @model_validator(mode="after")
    def _end_not_before_start(self) -> "BookingCreate":
        # Same-day rentals are allowed
        if self.end_date.date() < self.start_date.date():
            raise ValueError("end_date must not be before start_date")
        return self


class StatusUpdate(BaseModel):
    status: BookingStatus


class UnavailabilityInterval(BaseModel):
    start_date: date
    end_date: date


class SelectionPhase(StrEnum):
    start = "start"
    end = "end"


class DateSelection(BaseModel):
    start_date: date | None = None
    end_date: date | None = None
    phase: SelectionPhase = SelectionPhase.start
