"""Restaurant feed endpoint: Google Places proxy with fallback data."""

from fastapi import APIRouter, Depends, Query

from app.core.config import settings
from app.schemas.places import ErrorResponse, FeedResponse
from app.services.feed_service import (
    FeedAssemblyService,
    build_feed_service,
    parse_feed_query,
)

router = APIRouter(prefix="/places", tags=["places"])


def get_feed_service() -> FeedAssemblyService:
    """Dependency providing the feed service built from settings. Overridden in tests."""
    return build_feed_service(settings)


@router.get(
    "",
    response_model=FeedResponse,
    responses={400: {"model": ErrorResponse, "description": "Missing or invalid lat/lng"}},
)
async def get_places(
    lat: str | None = Query(None, description="Latitude (-90 to 90)"),
    lng: str | None = Query(None, description="Longitude (-180 to 180)"),
    min_rating: str | None = Query(
        None,
        alias="minRating",
        description="Only return places rated at least this much (optional)",
    ),
    feed_service: FeedAssemblyService = Depends(get_feed_service),
) -> FeedResponse:
    """
    Restaurants near (lat, lng), highest rated first.

    Searches Google Places within 1.5 km for restaurants. If Google is
    unavailable (or fallback mode is on) the static sample restaurants are
    returned instead, still filtered and sorted. The response shape is the
    same either way.

    Example curl:
    ```bash
    curl "http://localhost:3001/api/places?lat=37.7749&lng=-122.4194&minRating=4.5"
    ```

    Missing or non-numeric lat/lng returns 400 with {"error": "..."}.
    """
    # Raises FeedQueryError -> 400 via the handler in app.main
    query = parse_feed_query(lat, lng, min_rating)
    return await feed_service.get_feed(query)
