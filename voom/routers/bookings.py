from fastapi import APIRouter

from voom.dependencies import BookingDep
from voom.schemas.booking import Booking, BookingCreate, StatusUpdate
from voom.schemas.responses import (
    AvailabilityResponse,
    SelectionRequest,
    SelectionResponse,
)

router = APIRouter(prefix="/api")


@router.get("/bookings/car/{car_id}", response_model=list[Booking])
async def list_car_bookings(car_id: int, service: BookingDep) -> list[Booking]:
    return await service.car_bookings(car_id)


@router.get("/cars/{car_id}/availability", response_model=AvailabilityResponse)
async def get_availability(car_id: int, service: BookingDep) -> AvailabilityResponse:
    return await service.unavailability(car_id)


@router.post("/cars/{car_id}/availability/select", response_model=SelectionResponse)
async def select_day(
    car_id: int, request: SelectionRequest, service: BookingDep
) -> SelectionResponse:
    return await service.select(car_id, request.selection, request.day)


@router.get("/bookings", response_model=list[Booking])
async def list_user_bookings(user_id: int, service: BookingDep) -> list[Booking]:
    return await service.user_bookings(user_id)


@router.get("/bookings/last-car")
async def last_booked_car(user_id: int, service: BookingDep) -> int | None:
    return await service.last_booked_car(user_id)


@router.get("/bookings/{booking_id}", response_model=Booking)
async def get_booking(booking_id: int, service: BookingDep) -> Booking:
    return await service.get_booking(booking_id)


@router.post("/bookings", response_model=Booking, status_code=201)
async def create_booking(payload: BookingCreate, service: BookingDep) -> Booking:
    return await service.create_booking(payload)


@router.post("/bookings/{booking_id}/status", response_model=Booking)
async def update_status(
    booking_id: int, update: StatusUpdate, service: BookingDep
) -> Booking:
    return await service.transition(booking_id, update.status)


@router.post("/bookings/{booking_id}/cancel", response_model=Booking)
async def cancel_booking(booking_id: int, service: BookingDep) -> Booking:
    return await service.cancel(booking_id)


@router.post("/bookings/{booking_id}/complete", response_model=Booking)
async def complete_booking(booking_id: int, service: BookingDep) -> Booking:
    return await service.complete(booking_id)
