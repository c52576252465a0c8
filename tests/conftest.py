import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock

from app.main import app
from app.routers.places import get_feed_service
from app.services.feed_service import FeedAssemblyService


def make_place(place_id: str, name: str | None = None, rating: float | None = None, **extra) -> dict:
    """Google Nearby Search-style result dict for testing."""
    out = {
        "place_id": place_id,
        "name": name or f"Place {place_id}",
        "vicinity": "123 Test St",
        "geometry": {"location": {"lat": 37.77, "lng": -122.41}},
        "types": ["restaurant", "food"],
    }
    if rating is not None:
        out["rating"] = rating
    out.update(extra)
    return out


@pytest.fixture
def fetch_places():
    """Async upstream fetch stub; returns no places unless configured."""
    return AsyncMock(return_value=[])


@pytest.fixture
def feed_service(fetch_places):
    """Feed service wired to the stub fetch, live mode."""
    return FeedAssemblyService(fetch_places, use_fallback_data=False)


@pytest.fixture(scope="function")
def client(feed_service):
    """Create a test client with the feed service dependency overridden."""
    app.dependency_overrides[get_feed_service] = lambda: feed_service
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
