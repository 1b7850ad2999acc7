from datetime import datetime

from pydantic import BaseModel, Field


class Vehicle(BaseModel):
    id: int
    host_id: int | None = None
    make: str
    model: str
    year: int
    daily_rate: float
    currency: str = "FCFA"
    location: str | None = None
    description: str | None = None
    image_url: str | None = None
    rating: float | None = None  # 0-5, None when never rated
    rating_count: int = 0
    available: bool = True
    features: list[str] | None = None
    type: str | None = None  # sedan, suv, truck, ...
    transmission: str | None = None
    fuel_type: str | None = None
    seats: int | None = None
    created_at: datetime | None = None


class VehicleCreate(BaseModel):
    host_id: int
    make: str
    model: str
    year: int = Field(..., ge=1900, le=2100)
    daily_rate: float = Field(..., ge=0)
    currency: str = "FCFA"
    location: str
    description: str | None = None
    image_url: str | None = None
    rating: float | None = Field(None, ge=0, le=5)
    rating_count: int = 0
    available: bool = True
    features: list[str] = []
    type: str | None = None
    transmission: str | None = None
    fuel_type: str | None = None
    seats: int | None = Field(None, ge=1)


class Favorite(BaseModel):
    id: int | None = None
    user_id: int
    car_id: int
    created_at: datetime | None = None
