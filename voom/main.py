import logging
import sys
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from voom.config import Settings
from voom.exceptions.custom import (
    BookingConflictError,
    InvalidTransitionError,
    NotFoundError,
    RateLimitError,
    SupabaseError,
)
from voom.exceptions.handlers import (
    booking_conflict_error_handler,
    invalid_transition_error_handler,
    not_found_error_handler,
    rate_limit_error_handler,
    supabase_error_handler,
)
from voom.routers.bookings import router as bookings_router
from voom.routers.favorites import router as favorites_router
from voom.routers.vehicles import router as vehicles_router
from voom.services.bookings import BookingService
from voom.services.catalog import CatalogService
from voom.services.supabase import SupabaseService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    async with httpx.AsyncClient(timeout=settings.request_timeout) as client:
        supabase = SupabaseService(client, settings.supabase_url, settings.supabase_key)

        app.state.supabase_service = supabase
        app.state.catalog_service = CatalogService(supabase)
        app.state.booking_service = BookingService(
            supabase,
            verify_on_create=settings.verify_availability_on_create,
            window_days=settings.availability_window_days,
        )

        if not settings.verify_availability_on_create:
            logger.info("Booking availability is not re-checked on insert")

        yield


app = FastAPI(title="VOOM", lifespan=lifespan)

app.add_exception_handler(SupabaseError, supabase_error_handler)
app.add_exception_handler(NotFoundError, not_found_error_handler)
app.add_exception_handler(BookingConflictError, booking_conflict_error_handler)
app.add_exception_handler(InvalidTransitionError, invalid_transition_error_handler)
app.add_exception_handler(RateLimitError, rate_limit_error_handler)

app.include_router(vehicles_router)
app.include_router(bookings_router)
app.include_router(favorites_router)


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}
