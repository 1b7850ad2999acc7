"""Pure functions for catalog filtering and sorting.

Every clause is skipped when its filter field is unset, so a default
``FilterSpec`` matches every vehicle.
"""

from collections.abc import Iterable

from voom.schemas.filters import FilterSpec, SortKey
from voom.schemas.vehicle import Vehicle

ALL_CATEGORIES = "all"


def _same_text(value: str | None, wanted: str) -> bool:
    return value is not None and value.strip().lower() == wanted.strip().lower()


def _matches_search(vehicle: Vehicle, query: str) -> bool:
    needle = query.strip().lower()
    if not needle:
        return True
    haystacks = (vehicle.make, vehicle.model, vehicle.description or "")
    return any(needle in h.lower() for h in haystacks)


def matches_filters(vehicle: Vehicle, spec: FilterSpec) -> bool:
    if spec.category and spec.category.strip().lower() != ALL_CATEGORIES:
        if not _same_text(vehicle.type, spec.category):
            return False

    if spec.makes and vehicle.make not in spec.makes:
        return False
    if spec.models and vehicle.model not in spec.models:
        return False

    if spec.available_only and not vehicle.available:
        return False

    # An inverted range fails both bounds for every vehicle
    if spec.min_price is not None and vehicle.daily_rate < spec.min_price:
        return False
    if spec.max_price is not None and vehicle.daily_rate > spec.max_price:
        return False

    if spec.year is not None and vehicle.year != spec.year:
        return False

    if spec.min_rating is not None:
        if vehicle.rating is None or vehicle.rating < spec.min_rating:
            return False

    if spec.transmission and not _same_text(vehicle.transmission, spec.transmission):
        return False
    if spec.fuel_type and not _same_text(vehicle.fuel_type, spec.fuel_type):
        return False

    if spec.seats is not None and vehicle.seats != spec.seats:
        return False

    if spec.features:
        if not vehicle.features:
            return False
        owned = set(vehicle.features)
        if not all(f in owned for f in spec.features):
            return False

    if spec.host_id is not None and vehicle.host_id != spec.host_id:
        return False

    if spec.search and not _matches_search(vehicle, spec.search):
        return False

    return True


def filter_vehicles(vehicles: Iterable[Vehicle], spec: FilterSpec) -> list[Vehicle]:
    return [v for v in vehicles if matches_filters(v, spec)]


def _default_key(vehicle: Vehicle) -> tuple[bool, float, float]:
    # Rated first (highest rating first), unrated last, then cheapest first
    if vehicle.rating is None:
        return (True, 0.0, vehicle.daily_rate)
    return (False, -vehicle.rating, vehicle.daily_rate)


def sort_vehicles(vehicles: Iterable[Vehicle], sort: SortKey | None = None) -> list[Vehicle]:
    """Stable sort; equal keys keep their incoming relative order."""
    items = list(vehicles)
    if sort == SortKey.price_asc:
        return sorted(items, key=lambda v: v.daily_rate)
    if sort == SortKey.price_desc:
        return sorted(items, key=lambda v: v.daily_rate, reverse=True)
    if sort == SortKey.rating_desc:
        return sorted(items, key=lambda v: v.rating or 0.0, reverse=True)
    if sort == SortKey.newest:
        return sorted(items, key=lambda v: v.year, reverse=True)
    return sorted(items, key=_default_key)


def apply_filters(vehicles: Iterable[Vehicle], spec: FilterSpec) -> list[Vehicle]:
    return sort_vehicles(filter_vehicles(vehicles, spec), spec.sort)
