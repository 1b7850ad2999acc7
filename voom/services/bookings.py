import logging
from datetime import date, timedelta

from voom.exceptions.custom import BookingConflictError, InvalidTransitionError
from voom.mappers.availability import (
    blocking_intervals,
    overlaps_any,
    select_date,
    unavailable_days,
)
from voom.schemas.booking import Booking, BookingCreate, BookingStatus, DateSelection
from voom.schemas.responses import AvailabilityResponse, SelectionResponse
from voom.services.supabase import SupabaseService

logger = logging.getLogger(__name__)

# completed and cancelled are terminal
ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.pending: frozenset({BookingStatus.confirmed, BookingStatus.cancelled}),
    BookingStatus.confirmed: frozenset({BookingStatus.in_progress, BookingStatus.cancelled}),
    BookingStatus.in_progress: frozenset({BookingStatus.completed}),
    BookingStatus.completed: frozenset(),
    BookingStatus.cancelled: frozenset(),
}


class BookingService:
    def __init__(
        self,
        supabase: SupabaseService,
        verify_on_create: bool = False,
        window_days: int = 90,
    ):
        self._supabase = supabase
        self._verify_on_create = verify_on_create
        self._window_days = window_days

    async def car_bookings(self, car_id: int) -> list[Booking]:
        return await self._supabase.list_bookings(car_id=car_id)

    async def unavailability(
        self, car_id: int, today: date | None = None
    ) -> AvailabilityResponse:
        today = today or date.today()
        intervals = blocking_intervals(await self.car_bookings(car_id))
        days = unavailable_days(
            intervals,
            window_start=today,
            window_end=today + timedelta(days=self._window_days),
            today=today,
        )
        return AvailabilityResponse(
            car_id=car_id,
            today=today,
            intervals=intervals,
            unavailable_days=days,
        )

    async def select(
        self,
        car_id: int,
        selection: DateSelection,
        day: date,
        today: date | None = None,
    ) -> SelectionResponse:
        intervals = blocking_intervals(await self.car_bookings(car_id))
        result = select_date(selection, day, intervals, today=today)
        if not result.accepted:
            logger.debug("Car %s: rejected %s (%s)", car_id, day, result.reason)
        return result

    async def create_booking(self, payload: BookingCreate) -> Booking:
        if self._verify_on_create:
            intervals = blocking_intervals(await self.car_bookings(payload.car_id))
            start, end = payload.start_date.date(), payload.end_date.date()
            if overlaps_any(start, end, intervals):
                raise BookingConflictError(
                    f"Car {payload.car_id} is already booked between {start} and {end}",
                    car_id=payload.car_id,
                )
        else:
            # Concurrent inserts for the same dates are not detected here
            logger.debug("Creating booking for car %s without re-check", payload.car_id)

        return await self._supabase.create_booking(payload.model_dump(mode="json"))

    async def get_booking(self, booking_id: int) -> Booking:
        return await self._supabase.get_booking(booking_id)

    async def user_bookings(self, user_id: int) -> list[Booking]:
        return await self._supabase.list_bookings(order="created_at.desc", user_id=user_id)

    async def last_booked_car(self, user_id: int) -> int | None:
        bookings = await self.user_bookings(user_id)
        return bookings[0].car_id if bookings else None

    async def transition(self, booking_id: int, target: BookingStatus) -> Booking:
        booking = await self._supabase.get_booking(booking_id)
        # A booking with an unknown stored status cannot be moved
        if target not in ALLOWED_TRANSITIONS.get(booking.status, frozenset()):
            raise InvalidTransitionError(str(booking.status), target.value)
        updated = await self._supabase.update_booking(booking_id, {"status": target.value})
        logger.info("Booking %s: %s -> %s", booking_id, booking.status, target)
        return updated

    async def cancel(self, booking_id: int) -> Booking:
        return await self.transition(booking_id, BookingStatus.cancelled)

    async def complete(self, booking_id: int) -> Booking:
        return await self.transition(booking_id, BookingStatus.completed)
