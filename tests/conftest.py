import httpx
import pytest
from httpx import ASGITransport


@pytest.fixture
def mock_env(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://test.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "test-anon-key")
    monkeypatch.setenv("VERIFY_AVAILABILITY_ON_CREATE", "false")


@pytest.fixture
async def client(mock_env):
    from voom.main import app, lifespan

    async with lifespan(app):
        async with httpx.AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as c:
            yield c


@pytest.fixture
def car_row():
    """Factory for a Supabase ``cars`` row."""

    def _make(car_id=1, **overrides):
        row = {
            "id": car_id,
            "host_id": 1,
            "make": "Toyota",
            "model": "Corolla",
            "year": 2020,
            "daily_rate": 30000,
            "currency": "FCFA",
            "location": "Douala",
            "rating": 4.5,
            "rating_count": 12,
            "available": True,
            "features": ["airbags", "bluetooth"],
            "type": "Sedan",
            "transmission": "Automatic",
            "fuel_type": "Petrol",
            "seats": 5,
        }
        row.update(overrides)
        return row

    return _make


@pytest.fixture
def booking_row():
    """Factory for a Supabase ``bookings`` row."""

    def _make(booking_id=1, **overrides):
        row = {
            "id": booking_id,
            "car_id": 1,
            "user_id": 1,
            "start_date": "2025-06-10T00:00:00+00:00",
            "end_date": "2025-06-15T00:00:00+00:00",
            "status": "confirmed",
            "pickup_location": "Douala",
            "dropoff_location": "Douala",
            "total_amount": 150000,
            "currency": "FCFA",
            "payment_method": "mobile_money",
        }
        row.update(overrides)
        return row

    return _make
