"""Render a FilterSpec as PostgREST query parameters for the ``cars`` table.

Mirrors ``mappers.catalog`` so the database narrows the same rows the
in-memory engine keeps.
"""

from voom.schemas.filters import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, FilterSpec, SortKey

_ORDER_CLAUSES: dict[SortKey, str] = {
    SortKey.price_asc: "daily_rate.asc",
    SortKey.price_desc: "daily_rate.desc",
    SortKey.rating_desc: "rating.desc.nullslast",
    SortKey.newest: "year.desc",
    SortKey.default: "rating.desc.nullslast,daily_rate.asc",
}

# PostgREST reserves these inside in.() and cs.{} lists
_RESERVED = set(',.:(){}"\\')


def _quote(value: str) -> str:
    if any(ch in _RESERVED or ch.isspace() for ch in value):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return value


def _number(value: float) -> str:
    # 1500000.0 → "1500000", 4.5 → "4.5"
    return str(int(value)) if float(value).is_integer() else str(value)


def _ilike_exact(value: str) -> str:
    # ilike without wildcards is a case-insensitive equality
    escaped = value.strip().replace("%", "\\%").replace("_", "\\_")
    return f"ilike.{escaped}"


def _in_list(values: list[str]) -> str:
    return "in.(" + ",".join(_quote(v) for v in values) + ")"


def build_vehicle_filters(spec: FilterSpec) -> list[tuple[str, str]]:
    """Return (column, operator.value) pairs; a column may repeat."""
    params: list[tuple[str, str]] = []

    if spec.category and spec.category.strip().lower() != "all":
        params.append(("type", _ilike_exact(spec.category)))
    if spec.makes:
        params.append(("make", _in_list(spec.makes)))
    if spec.models:
        params.append(("model", _in_list(spec.models)))
    if spec.available_only:
        params.append(("available", "is.true"))
    if spec.min_price is not None:
        params.append(("daily_rate", "gte." + _number(spec.min_price)))
    if spec.max_price is not None:
        params.append(("daily_rate", "lte." + _number(spec.max_price)))
    if spec.year is not None:
        params.append(("year", f"eq.{spec.year}"))
    if spec.min_rating is not None:
        params.append(("rating", "gte." + _number(spec.min_rating)))
    if spec.transmission:
        params.append(("transmission", _ilike_exact(spec.transmission)))
    if spec.fuel_type:
        params.append(("fuel_type", _ilike_exact(spec.fuel_type)))
    if spec.seats is not None:
        params.append(("seats", f"eq.{spec.seats}"))
    if spec.features:
        params.append(("features", "cs.{" + ",".join(_quote(f) for f in spec.features) + "}"))
    if spec.host_id is not None:
        params.append(("host_id", f"eq.{spec.host_id}"))
    if spec.search and spec.search.strip():
        term = _quote(f"*{spec.search.strip()}*")
        params.append(
            ("or", f"(make.ilike.{term},model.ilike.{term},description.ilike.{term})")
        )

    return params


def build_vehicle_order(sort: SortKey | None) -> str:
    return _ORDER_CLAUSES.get(sort or SortKey.default, _ORDER_CLAUSES[SortKey.default])


def build_pagination(limit: int | None = None, offset: int | None = None) -> tuple[int, int]:
    """Clamp to ``(1..MAX_PAGE_SIZE, >= 0)``; missing or zero limit uses the default."""
    safe_limit = min(limit or DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE)
    safe_limit = max(safe_limit, 1)
    safe_offset = max(offset or 0, 0)
    return safe_limit, safe_offset
