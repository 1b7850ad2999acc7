import logging

import httpx

from voom.exceptions.custom import NotFoundError, RateLimitError, SupabaseError
from voom.schemas.booking import Booking
from voom.schemas.vehicle import Favorite, Vehicle

logger = logging.getLogger(__name__)

REST_PATH = "/rest/v1"

CARS_TABLE = "cars"
BOOKINGS_TABLE = "bookings"
FAVORITES_TABLE = "favorites"


def parse_total(content_range: str | None) -> int | None:
    """Total row count from a PostgREST ``Content-Range`` header.

    "0-24/3573" → 3573, "*/0" → 0, "0-24/*" → None
    """
    if not content_range or "/" not in content_range:
        return None
    total = content_range.rsplit("/", 1)[1]
    if not total.isdigit():
        return None
    return int(total)


class SupabaseService:
    """Thin client for the Supabase REST (PostgREST) endpoint."""

    def __init__(self, client: httpx.AsyncClient, base_url: str, api_key: str):
        self._client = client
        self._rest_url = base_url.rstrip("/") + REST_PATH
        self._headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    def table_url(self, table: str) -> str:
        return f"{self._rest_url}/{table}"

    def _raise_for_status(self, resp: httpx.Response) -> None:
        if resp.status_code == 429:
            raise RateLimitError("Supabase")
        if resp.status_code >= 400:
            raise SupabaseError(resp.text, status_code=resp.status_code)

    async def _select(
        self, table: str, params: list[tuple[str, str]], headers: dict | None = None,
    ) -> httpx.Response:
        resp = await self._client.get(
            self.table_url(table),
            params=[("select", "*"), *params],
            headers={**self._headers, **(headers or {})},
        )
        self._raise_for_status(resp)
        return resp

    async def _insert(self, table: str, payload: dict) -> dict:
        resp = await self._client.post(
            self.table_url(table),
            json=payload,
            headers={**self._headers, "Prefer": "return=representation"},
        )
        self._raise_for_status(resp)
        rows = resp.json()
        return rows[0] if isinstance(rows, list) else rows

    # --- cars ---

    async def list_vehicles(
        self,
        filters: list[tuple[str, str]],
        order: str,
        limit: int,
        offset: int,
    ) -> tuple[list[Vehicle], int]:
        """One page of cars plus the total number of matching rows."""
        params = [
            *filters,
            ("order", order),
            ("limit", str(limit)),
            ("offset", str(offset)),
        ]
        resp = await self._select(CARS_TABLE, params, headers={"Prefer": "count=exact"})
        vehicles = [Vehicle(**row) for row in resp.json()]

        total = parse_total(resp.headers.get("content-range"))
        if total is None:
            total = offset + len(vehicles)

        logger.info("Fetched %d of %d cars", len(vehicles), total)
        return vehicles, total

    async def list_vehicles_by_ids(self, ids: list[int]) -> list[Vehicle]:
        if not ids:
            return []
        id_list = ",".join(str(i) for i in ids)
        resp = await self._select(CARS_TABLE, [("id", f"in.({id_list})")])
        return [Vehicle(**row) for row in resp.json()]

    async def get_vehicle(self, car_id: int) -> Vehicle:
        resp = await self._select(CARS_TABLE, [("id", f"eq.{car_id}")])
        rows = resp.json()
        if not rows:
            raise NotFoundError("Car", car_id)
        return Vehicle(**rows[0])

    async def create_vehicle(self, payload: dict) -> Vehicle:
        row = await self._insert(CARS_TABLE, payload)
        logger.info("Created car %s for host %s", row.get("id"), row.get("host_id"))
        return Vehicle(**row)

    # --- bookings ---

    async def list_bookings(
        self, order: str = "start_date.asc", **equals: int | str,
    ) -> list[Booking]:
        params = [(column, f"eq.{value}") for column, value in equals.items()]
        params.append(("order", order))
        resp = await self._select(BOOKINGS_TABLE, params)
        bookings = [Booking(**row) for row in resp.json()]
        logger.debug("Fetched %d bookings for %s", len(bookings), equals)
        return bookings

    async def get_booking(self, booking_id: int) -> Booking:
        resp = await self._select(BOOKINGS_TABLE, [("id", f"eq.{booking_id}")])
        rows = resp.json()
        if not rows:
            raise NotFoundError("Booking", booking_id)
        return Booking(**rows[0])

    async def create_booking(self, payload: dict) -> Booking:
        row = await self._insert(BOOKINGS_TABLE, payload)
        logger.info("Created booking %s for car %s", row.get("id"), row.get("car_id"))
        return Booking(**row)

    async def update_booking(self, booking_id: int, fields: dict) -> Booking:
        resp = await self._client.patch(
            self.table_url(BOOKINGS_TABLE),
            params={"id": f"eq.{booking_id}"},
            json=fields,
            headers={**self._headers, "Prefer": "return=representation"},
        )
        self._raise_for_status(resp)
        rows = resp.json()
        if not rows:
            raise NotFoundError("Booking", booking_id)
        logger.info("Updated booking %s: %s", booking_id, sorted(fields))
        return Booking(**rows[0])

    # --- favorites ---

    async def list_favorites(self, user_id: int) -> list[Favorite]:
        resp = await self._select(
            FAVORITES_TABLE,
            [("user_id", f"eq.{user_id}"), ("order", "created_at.desc")],
        )
        return [Favorite(**row) for row in resp.json()]

    async def add_favorite(self, user_id: int, car_id: int) -> Favorite:
        row = await self._insert(FAVORITES_TABLE, {"user_id": user_id, "car_id": car_id})
        return Favorite(**row)

    async def remove_favorite(self, user_id: int, car_id: int) -> None:
        resp = await self._client.delete(
            self.table_url(FAVORITES_TABLE),
            params={"user_id": f"eq.{user_id}", "car_id": f"eq.{car_id}"},
            headers=self._headers,
        )
        self._raise_for_status(resp)
        logger.info("Removed car %s from favorites of user %s", car_id, user_id)
