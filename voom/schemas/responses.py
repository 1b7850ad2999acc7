from __future__ import annotations

from datetime import date

from pydantic import BaseModel

from voom.schemas.booking import DateSelection, UnavailabilityInterval
from voom.schemas.vehicle import Vehicle


class CatalogResponse(BaseModel):
    total: int
    limit: int
    offset: int
    results: list[Vehicle]


class AvailabilityResponse(BaseModel):
    car_id: int
    today: date
    intervals: list[UnavailabilityInterval]
    unavailable_days: list[date]


class SelectionRequest(BaseModel):
    day: date
    selection: DateSelection = DateSelection()


class SelectionResponse(BaseModel):
    accepted: bool
    selection: DateSelection
    end_cleared: bool = False
    # "unavailable" | "start_unavailable" | "before_start" | "straddles_booking"
    reason: str | None = None
