"""Pure functions for booking-date availability and range selection.

No I/O. Bookings come in already fetched; selections go out through the
returned state and the optional callbacks.
"""

import logging
from collections.abc import Callable, Iterable
from datetime import date, timedelta

from voom.schemas.booking import (
    Booking,
    DateSelection,
    SelectionPhase,
    UnavailabilityInterval,
)
from voom.schemas.responses import SelectionResponse

logger = logging.getLogger(__name__)

DateCallback = Callable[[date], None]


def to_interval(booking: Booking) -> UnavailabilityInterval | None:
    """Project a booking onto the calendar days it occupies.

    Returns None when the booking's dates are missing or inverted.
    """
    if booking.start_date is None or booking.end_date is None:
        logger.debug("Booking %s has no usable dates, skipping", booking.id)
        return None
    start = booking.start_date.date()
    end = booking.end_date.date()
    if end < start:
        logger.debug("Booking %s ends before it starts, skipping", booking.id)
        return None
    return UnavailabilityInterval(start_date=start, end_date=end)


def blocking_intervals(bookings: Iterable[Booking]) -> list[UnavailabilityInterval]:
    """Intervals of every confirmed, in-progress or completed booking."""
    intervals: list[UnavailabilityInterval] = []
    for booking in bookings:
        if not booking.is_blocking:
            continue
        interval = to_interval(booking)
        if interval is not None:
            intervals.append(interval)
    return intervals


def is_date_unavailable(
    day: date,
    intervals: Iterable[UnavailabilityInterval],
    today: date | None = None,
) -> bool:
    """True for past days and for days inside any interval (boundaries included)."""
    if today is None:
        today = date.today()
    if day < today:
        return True
    return any(i.start_date <= day <= i.end_date for i in intervals)


def straddles_booking(
    start: date, end: date, intervals: Iterable[UnavailabilityInterval]
) -> bool:
    """True when an interval starts or ends strictly between *start* and *end*."""
    return any(
        start < i.start_date < end or start < i.end_date < end
        for i in intervals
    )


def overlaps_any(
    start: date, end: date, intervals: Iterable[UnavailabilityInterval]
) -> bool:
    """True when the closed range ``[start, end]`` shares a day with any interval."""
    return any(i.start_date <= end and start <= i.end_date for i in intervals)


def unavailable_days(
    intervals: Iterable[UnavailabilityInterval],
    window_start: date,
    window_end: date,
    today: date | None = None,
) -> list[date]:
    """Every unavailable day in ``[window_start, window_end]``, ascending."""
    intervals = list(intervals)
    days: list[date] = []
    day = window_start
    while day <= window_end:
        if is_date_unavailable(day, intervals, today):
            days.append(day)
        day += timedelta(days=1)
    return days


def select_date(
    selection: DateSelection,
    day: date,
    intervals: Iterable[UnavailabilityInterval],
    today: date | None = None,
    on_select_start: DateCallback | None = None,
    on_select_end: DateCallback | None = None,
) -> SelectionResponse:
    """Apply one calendar click to *selection*.

    Phase ``start`` takes the pickup day and moves to ``end``. Phase ``end``
    takes the return day and moves back to ``start``, keeping the completed
    range. Rejected clicks return the selection untouched and fire no
    callback. The input selection is never mutated.
    """
    intervals = list(intervals)

    if is_date_unavailable(day, intervals, today):
        return SelectionResponse(
            accepted=False, selection=selection, reason="unavailable"
        )

    if selection.phase == SelectionPhase.end and selection.start_date is not None:
        start = selection.start_date
        # The start may be stale or client-supplied, so check it again
        if is_date_unavailable(start, intervals, today):
            return SelectionResponse(
                accepted=False, selection=selection, reason="start_unavailable"
            )
        if day < start:
            return SelectionResponse(
                accepted=False, selection=selection, reason="before_start"
            )
        if overlaps_any(start, day, intervals):
            return SelectionResponse(
                accepted=False, selection=selection, reason="straddles_booking"
            )

        if on_select_end is not None:
            on_select_end(day)
        return SelectionResponse(
            accepted=True,
            selection=selection.model_copy(
                update={"end_date": day, "phase": SelectionPhase.start}
            ),
        )

    # Start phase (or an end phase that never got a start)
    end_cleared = selection.end_date is not None and selection.end_date < day
    if on_select_start is not None:
        on_select_start(day)
    return SelectionResponse(
        accepted=True,
        end_cleared=end_cleared,
        selection=DateSelection(
            start_date=day,
            end_date=None if end_cleared else selection.end_date,
            phase=SelectionPhase.end,
        ),
    )
