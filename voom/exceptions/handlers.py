import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from .custom import (
    BookingConflictError,
    InvalidTransitionError,
    NotFoundError,
    RateLimitError,
    SupabaseError,
)

logger = logging.getLogger(__name__)


async def supabase_error_handler(_request: Request, exc: SupabaseError) -> JSONResponse:
    logger.error("Supabase error: %s (status=%s)", exc.message, exc.status_code)
    return JSONResponse(
        status_code=502,
        content={"detail": f"Supabase error: {exc.message}"},
    )


async def not_found_error_handler(_request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info("Not found: %s", exc.message)
    return JSONResponse(status_code=404, content={"detail": exc.message})


async def booking_conflict_error_handler(
    _request: Request, exc: BookingConflictError
) -> JSONResponse:
    logger.warning("Booking conflict on car %s: %s", exc.car_id, exc.message)
    return JSONResponse(status_code=409, content={"detail": exc.message})


async def invalid_transition_error_handler(
    _request: Request, exc: InvalidTransitionError
) -> JSONResponse:
    logger.warning("Rejected status change: %s", exc.message)
    return JSONResponse(status_code=409, content={"detail": exc.message})


async def rate_limit_error_handler(_request: Request, exc: RateLimitError) -> JSONResponse:
    logger.warning("Rate limit hit for %s", exc.service)
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded for {exc.service}"},
    )
