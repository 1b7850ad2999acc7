"""Tests for the catalog filter/sort mapper (pure functions, no I/O)."""

import pytest

from voom.mappers.catalog import (
    apply_filters,
    filter_vehicles,
    matches_filters,
    sort_vehicles,
)
from voom.schemas.filters import FilterSpec, SortKey
from voom.schemas.vehicle import Vehicle


def _car(car_id, **overrides):
    data = {
        "id": car_id,
        "host_id": 1,
        "make": "Toyota",
        "model": "Corolla",
        "year": 2020,
        "daily_rate": 30000,
        "location": "Douala",
        "rating": 4.5,
        "available": True,
        "features": ["airbags", "bluetooth"],
        "type": "Sedan",
        "transmission": "Automatic",
        "fuel_type": "Petrol",
        "seats": 5,
    }
    data.update(overrides)
    return Vehicle(**data)


def _catalog():
    return [
        _car(1),
        _car(2, make="Honda", model="Civic", daily_rate=25000, rating=None, year=2022),
        _car(3, make="Toyota", model="Land Cruiser", daily_rate=60000, type="SUV", rating=4.8, seats=7),
        _car(4, make="Ford", model="Ranger", daily_rate=45000, type="Truck", available=False,
             transmission="Manual", fuel_type="Diesel", features=None, year=2018, rating=3.9),
    ]


# --- matches_filters ---


def test_empty_spec_matches_everything():
    assert filter_vehicles(_catalog(), FilterSpec()) == _catalog()


def test_example_price_make_available():
    spec = FilterSpec(min_price=20000, max_price=50000, makes=["Toyota"], available_only=True)
    toyota_ok = _car(10, daily_rate=30000)
    toyota_expensive = _car(11, daily_rate=60000)
    honda = _car(12, make="Honda", daily_rate=30000)

    assert matches_filters(toyota_ok, spec)
    assert not matches_filters(toyota_expensive, spec)
    assert not matches_filters(honda, spec)


def test_price_bounds_inclusive():
    spec = FilterSpec(min_price=30000, max_price=30000)
    assert matches_filters(_car(1, daily_rate=30000), spec)


def test_inverted_price_range_matches_nothing():
    spec = FilterSpec(min_price=50000, max_price=20000)
    assert filter_vehicles(_catalog(), spec) == []


def test_category_case_insensitive_and_all():
    assert [v.id for v in filter_vehicles(_catalog(), FilterSpec(category="suv"))] == [3]
    assert len(filter_vehicles(_catalog(), FilterSpec(category="All"))) == 4


def test_availability_toggle():
    ids = [v.id for v in filter_vehicles(_catalog(), FilterSpec(available_only=True))]
    assert 4 not in ids


def test_year_exact():
    assert [v.id for v in filter_vehicles(_catalog(), FilterSpec(year=2022))] == [2]


def test_min_rating_excludes_unrated():
    ids = [v.id for v in filter_vehicles(_catalog(), FilterSpec(min_rating=4.0))]
    assert ids == [1, 3]


def test_transmission_and_fuel_case_insensitive():
    assert [v.id for v in filter_vehicles(_catalog(), FilterSpec(transmission="manual"))] == [4]
    assert [v.id for v in filter_vehicles(_catalog(), FilterSpec(fuel_type="DIESEL"))] == [4]


def test_missing_transmission_fails_when_filtered():
    assert not matches_filters(_car(1, transmission=None), FilterSpec(transmission="automatic"))


def test_seats_exact():
    assert [v.id for v in filter_vehicles(_catalog(), FilterSpec(seats=7))] == [3]


@pytest.mark.parametrize(
    "required, expected",
    [
        (["airbags"], True),
        (["airbags", "bluetooth"], True),
        (["airbags", "gps"], False),
    ],
)
def test_feature_and_semantics(required, expected):
    assert matches_filters(_car(1, features=["airbags", "bluetooth"]), FilterSpec(features=required)) is expected


def test_vehicle_without_features_fails_feature_filter():
    assert not matches_filters(_car(1, features=None), FilterSpec(features=["airbags"]))
    assert not matches_filters(_car(1, features=[]), FilterSpec(features=["airbags"]))


def test_search_matches_make_model_description():
    catalog = _catalog() + [_car(5, make="Kia", model="Rio", description="Great for city trips")]
    assert [v.id for v in filter_vehicles(catalog, FilterSpec(search="cruiser"))] == [3]
    assert [v.id for v in filter_vehicles(catalog, FilterSpec(search="CITY"))] == [5]


def test_host_and_model_filters():
    catalog = _catalog() + [_car(5, host_id=2)]
    assert [v.id for v in filter_vehicles(catalog, FilterSpec(host_id=2))] == [5]
    assert [v.id for v in filter_vehicles(catalog, FilterSpec(models=["Civic"]))] == [2]


def test_adding_constraints_never_grows_result():
    catalog = _catalog()
    steps = [
        {},
        {"makes": ["Toyota", "Honda", "Ford"]},
        {"available_only": True},
        {"max_price": 50000},
        {"features": ["airbags"]},
        {"min_rating": 4.0},
    ]
    spec_kwargs: dict = {}
    previous = {v.id for v in catalog}
    for step in steps:
        spec_kwargs.update(step)
        current = {v.id for v in filter_vehicles(catalog, FilterSpec(**spec_kwargs))}
        assert current <= previous
        previous = current


def test_spec_not_mutated():
    spec = FilterSpec(makes=["Toyota"], features=["airbags"])
    before = spec.model_dump()
    apply_filters(_catalog(), spec)
    assert spec.model_dump() == before


# --- sort_vehicles ---


def test_rating_desc_treats_unrated_as_zero():
    cars = [_car(1, rating=4.2), _car(2, rating=None), _car(3, rating=4.8)]
    assert [v.rating for v in sort_vehicles(cars, SortKey.rating_desc)] == [4.8, 4.2, None]


def test_price_sorts():
    catalog = _catalog()
    assert [v.id for v in sort_vehicles(catalog, SortKey.price_asc)] == [2, 1, 4, 3]
    assert [v.id for v in sort_vehicles(catalog, SortKey.price_desc)] == [3, 4, 1, 2]


def test_newest_by_year():
    assert [v.id for v in sort_vehicles(_catalog(), SortKey.newest)] == [2, 1, 3, 4]


def test_default_sort_rating_then_price():
    cars = [
        _car(1, rating=4.5, daily_rate=40000),
        _car(2, rating=None, daily_rate=10000),
        _car(3, rating=4.5, daily_rate=20000),
        _car(4, rating=4.9, daily_rate=90000),
    ]
    assert [v.id for v in sort_vehicles(cars, SortKey.default)] == [4, 3, 1, 2]
    assert [v.id for v in sort_vehicles(cars, None)] == [4, 3, 1, 2]


def test_sort_is_stable_for_ties():
    cars = [_car(i, daily_rate=30000) for i in range(1, 6)]
    assert [v.id for v in sort_vehicles(cars, SortKey.price_asc)] == [1, 2, 3, 4, 5]
    assert [v.id for v in sort_vehicles(cars, SortKey.price_desc)] == [1, 2, 3, 4, 5]


def test_sorting_twice_is_identical():
    catalog = _catalog()
    for key in SortKey:
        assert sort_vehicles(catalog, key) == sort_vehicles(catalog, key)


def test_apply_filters_filters_then_sorts():
    spec = FilterSpec(makes=["Toyota"], sort=SortKey.price_desc)
    assert [v.id for v in apply_filters(_catalog(), spec)] == [3, 1]
