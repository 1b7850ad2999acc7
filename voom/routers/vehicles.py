from typing import Annotated

from fastapi import APIRouter, HTTPException, Query
from pydantic import ValidationError

from voom.dependencies import CatalogDep
from voom.schemas.filters import FilterSpec
from voom.schemas.responses import CatalogResponse
from voom.schemas.vehicle import Vehicle, VehicleCreate

router = APIRouter(prefix="/api")


def build_filter_spec(
    category: str | None = None,
    make: list[str] | None = None,
    model: list[str] | None = None,
    available: bool = False,
    min_price: float | None = None,
    max_price: float | None = None,
    year: int | None = None,
    min_rating: float | None = None,
    transmission: str | None = None,
    fuel_type: str | None = None,
    seats: int | None = None,
    feature: list[str] | None = None,
    host_id: int | None = None,
    q: str | None = None,
    sort: str | None = None,
) -> FilterSpec:
    """Validate raw query parameters into a FilterSpec, once, at the boundary."""
    try:
        spec = FilterSpec(
            category=category,
            makes=make or [],
            models=model or [],
            available_only=available,
            min_price=min_price,
            max_price=max_price,
            year=year,
            min_rating=min_rating,
            transmission=transmission,
            fuel_type=fuel_type,
            seats=seats,
            features=feature or [],
            host_id=host_id,
            search=q,
            sort=sort,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors(include_url=False)) from exc

    if not spec.has_valid_price_range:
        raise HTTPException(status_code=422, detail="min_price must not exceed max_price")
    return spec


@router.get("/cars", response_model=CatalogResponse)
async def list_cars(
    service: CatalogDep,
    category: str | None = None,
    make: Annotated[list[str] | None, Query()] = None,
    model: Annotated[list[str] | None, Query()] = None,
    available: bool = False,
    min_price: float | None = None,
    max_price: float | None = None,
    year: int | None = None,
    min_rating: float | None = None,
    transmission: str | None = None,
    fuel_type: str | None = None,
    seats: int | None = None,
    feature: Annotated[list[str] | None, Query()] = None,
    host_id: int | None = None,
    q: str | None = None,
    sort: str | None = None,
    limit: Annotated[int | None, Query(ge=1)] = None,
    offset: Annotated[int | None, Query(ge=0)] = None,
) -> CatalogResponse:
    spec = build_filter_spec(
        category=category,
        make=make,
        model=model,
        available=available,
        min_price=min_price,
        max_price=max_price,
        year=year,
        min_rating=min_rating,
        transmission=transmission,
        fuel_type=fuel_type,
        seats=seats,
        feature=feature,
        host_id=host_id,
        q=q,
        sort=sort,
    )
    return await service.search(spec, limit=limit, offset=offset)


@router.get("/cars/{car_id}", response_model=Vehicle)
async def get_car(car_id: int, service: CatalogDep) -> Vehicle:
    return await service.get_vehicle(car_id)


@router.post("/cars", response_model=Vehicle, status_code=201)
async def create_car(payload: VehicleCreate, service: CatalogDep) -> Vehicle:
    return await service.create_vehicle(payload)


@router.get("/hosts/{host_id}/cars", response_model=list[Vehicle])
async def list_host_cars(host_id: int, service: CatalogDep) -> list[Vehicle]:
    return await service.list_host_vehicles(host_id)
