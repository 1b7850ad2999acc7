import logging

from voom.mappers.catalog import apply_filters
from voom.mappers.query_builder import (
    build_pagination,
    build_vehicle_filters,
    build_vehicle_order,
)
from voom.schemas.filters import MAX_PAGE_SIZE, FilterSpec
from voom.schemas.responses import CatalogResponse
from voom.schemas.vehicle import Vehicle, VehicleCreate
from voom.services.supabase import SupabaseService

logger = logging.getLogger(__name__)


class CatalogService:
    def __init__(self, supabase: SupabaseService):
        self._supabase = supabase

    async def search(
        self,
        spec: FilterSpec,
        limit: int | None = None,
        offset: int | None = None,
    ) -> CatalogResponse:
        """Filter and sort the catalog.

        The filter is pushed down to Postgres and then re-applied in memory,
        so the page honours the engine's rules even where SQL semantics
        differ (NULL ratings, case folding).
        """
        safe_limit, safe_offset = build_pagination(limit, offset)
        vehicles, total = await self._supabase.list_vehicles(
            build_vehicle_filters(spec),
            build_vehicle_order(spec.sort),
            safe_limit,
            safe_offset,
        )

        results = apply_filters(vehicles, spec)
        # Dropped rows are not back-filled, so this page can be shorter than limit
        if len(results) != len(vehicles):
            logger.warning(
                "In-memory filter dropped %d of %d cars returned by the database; page is short",
                len(vehicles) - len(results),
                len(vehicles),
            )
            total -= len(vehicles) - len(results)

        return CatalogResponse(
            total=total,
            limit=safe_limit,
            offset=safe_offset,
            results=results,
        )

    async def get_vehicle(self, car_id: int) -> Vehicle:
        return await self._supabase.get_vehicle(car_id)

    async def list_host_vehicles(self, host_id: int) -> list[Vehicle]:
        """Every car listed by *host_id*, fetched page by page."""
        spec = FilterSpec(host_id=host_id)
        filters = build_vehicle_filters(spec)
        order = build_vehicle_order(spec.sort)

        vehicles: list[Vehicle] = []
        while True:
            page, total = await self._supabase.list_vehicles(
                filters, order, MAX_PAGE_SIZE, len(vehicles)
            )
            vehicles.extend(page)
            if not page or len(vehicles) >= total:
                break

        logger.info("Host %s has %d cars", host_id, len(vehicles))
        return apply_filters(vehicles, spec)

    async def create_vehicle(self, payload: VehicleCreate) -> Vehicle:
        return await self._supabase.create_vehicle(payload.model_dump(mode="json"))

    async def favorite_cars(self, user_id: int) -> list[Vehicle]:
        favorites = await self._supabase.list_favorites(user_id)
        ids = [f.car_id for f in favorites]
        vehicles = {v.id: v for v in await self._supabase.list_vehicles_by_ids(ids)}
        # Keep most recently favorited first
        return [vehicles[i] for i in ids if i in vehicles]
