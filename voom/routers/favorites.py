from fastapi import APIRouter
from pydantic import BaseModel

from voom.dependencies import CatalogDep, SupabaseDep
from voom.schemas.vehicle import Favorite, Vehicle

router = APIRouter(prefix="/api")


class FavoriteRequest(BaseModel):
    user_id: int
    car_id: int


@router.get("/favorites", response_model=list[Vehicle])
async def list_favorite_cars(user_id: int, service: CatalogDep) -> list[Vehicle]:
    return await service.favorite_cars(user_id)


@router.get("/favorites/ids", response_model=list[int])
async def list_favorite_ids(user_id: int, supabase: SupabaseDep) -> list[int]:
    return [f.car_id for f in await supabase.list_favorites(user_id)]


@router.post("/favorites", response_model=Favorite, status_code=201)
async def add_favorite(request: FavoriteRequest, supabase: SupabaseDep) -> Favorite:
    return await supabase.add_favorite(request.user_id, request.car_id)


@router.delete("/favorites/{car_id}")
async def remove_favorite(car_id: int, user_id: int, supabase: SupabaseDep) -> dict:
    await supabase.remove_favorite(user_id, car_id)
    return {"success": True}
