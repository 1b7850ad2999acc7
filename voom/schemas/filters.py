from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100


class SortKey(StrEnum):
    price_asc = "price_asc"
    price_desc = "price_desc"
    rating_desc = "rating_desc"
    newest = "newest"
    default = "default"


class FilterSpec(BaseModel):
    """Every active catalog constraint. ``None`` or empty means unconstrained."""

    category: str | None = None  # "all" behaves like None
    makes: list[str] = []
    models: list[str] = []
    available_only: bool = False
    min_price: float | None = None
    max_price: float | None = None
    year: int | None = None
    min_rating: float | None = Field(None, ge=0, le=5)
    transmission: str | None = None
    fuel_type: str | None = None
    seats: int | None = None
    features: list[str] = []
    host_id: int | None = None
    search: str | None = None
    sort: SortKey = SortKey.default

    model_config = {"frozen": True}

    @field_validator("sort", mode="before")
    @classmethod
    def _normalize_sort(cls, v: object) -> object:
        # The web client spells keys with hyphens ("price-asc")
        if v is None or v == "":
            return SortKey.default
        if isinstance(v, str):
            return v.strip().lower().replace("-", "_")
        return v

    @property
    def has_valid_price_range(self) -> bool:
        if self.min_price is None or self.max_price is None:
            return True
        return self.min_price <= self.max_price
