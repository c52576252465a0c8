"""
Restaurant feed assembly: validate -> fetch with fallback -> filter -> sort.

The service holds only construction-time configuration, so a single instance
can serve concurrent requests.
"""

import logging
import math
from collections.abc import Awaitable, Callable, Sequence
from functools import partial

from pydantic import ValidationError

from app.core.config import Settings
from app.schemas.places import FeedQuery, FeedResponse, RestaurantRecord
from app.seed.fallback_restaurants import FALLBACK_RESTAURANTS
from app.services import places_client
from app.services.feed_filters import (
    FilterFactory,
    SortKey,
    meal_time_filter_factory,
    min_rating_filter_factory,
    rating_sort_key,
)
from app.services.places_client import PlacesUpstreamError

logger = logging.getLogger(__name__)

MISSING_COORDINATES_ERROR = "Missing required parameters: lat and lng"

# Coordinate bounds for validation
LAT_MIN, LAT_MAX = -90.0, 90.0
LNG_MIN, LNG_MAX = -180.0, 180.0

# (lat, lng) -> raw Google result dicts; raises PlacesUpstreamError on failure
FetchPlaces = Callable[[float, float], Awaitable[list[dict]]]


class FeedQueryError(ValueError):
    """Inbound feed parameters are missing or invalid (HTTP 400)."""


def _parse_coordinate(raw: str, name: str, low: float, high: float) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise FeedQueryError(f"Invalid parameter: {name} must be a number")
    if not math.isfinite(value):
        raise FeedQueryError(f"Invalid parameter: {name} must be a number")
    if not low <= value <= high:
        raise FeedQueryError(f"Invalid parameter: {name} must be between {low:g} and {high:g}")
    return value


def _parse_min_rating(raw: str | None) -> float | None:
    """Parse minRating; anything unparseable is treated as not supplied."""
    if raw is None or raw.strip() == "":
        return None
    try:
        value = float(raw)
    except ValueError:
        logger.info(f"Ignoring unparseable minRating={raw!r}")
        return None
    if math.isnan(value):
        logger.info(f"Ignoring unparseable minRating={raw!r}")
        return None
    return value


def parse_feed_query(lat: str | None, lng: str | None, min_rating: str | None = None) -> FeedQuery:
    """
    Build a FeedQuery from raw query-string values.

    Raises FeedQueryError if lat or lng is missing, not numeric or out of range.
    minRating is not range-checked.
    """
    if lat is None or lng is None or lat.strip() == "" or lng.strip() == "":
        raise FeedQueryError(MISSING_COORDINATES_ERROR)

    return FeedQuery(
        latitude=_parse_coordinate(lat, "lat", LAT_MIN, LAT_MAX),
        longitude=_parse_coordinate(lng, "lng", LNG_MIN, LNG_MAX),
        min_rating=_parse_min_rating(min_rating),
    )


def normalize_places(raw_results: Sequence) -> list[RestaurantRecord]:
    """
    Validate raw Google results into RestaurantRecords, preserving order.

    Items that fail validation are skipped; a repeated place_id keeps only
    its first occurrence.
    """
    records: list[RestaurantRecord] = []
    seen_ids: set[str] = set()
    for index, place in enumerate(raw_results):
        try:
            record = RestaurantRecord.model_validate(place)
        except ValidationError as e:
            logger.warning(f"Skipping invalid place at index {index}: {e.error_count()} validation error(s)")
            continue
        if record.place_id in seen_ids:
            logger.warning(f"Skipping duplicate place_id={record.place_id}")
            continue
        seen_ids.add(record.place_id)
        records.append(record)
    return records


class FeedAssemblyService:
    """
    Produces the restaurant feed for a query and never fails for a valid one.

    Upstream errors are replaced by the fallback dataset; the same
    filter/sort pipeline runs on whichever source was used.
    """

    def __init__(
        self,
        fetch_places: FetchPlaces,
        *,
        use_fallback_data: bool = False,
        fallback: Sequence[RestaurantRecord] = FALLBACK_RESTAURANTS,
        filter_factories: Sequence[FilterFactory] = (min_rating_filter_factory,),
        sort_key: SortKey = rating_sort_key,
    ):
        self._fetch_places = fetch_places
        self._use_fallback_data = use_fallback_data
        self._fallback = tuple(fallback)
        self._filter_factories = tuple(filter_factories)
        self._sort_key = sort_key

    @property
    def use_fallback_data(self) -> bool:
        return self._use_fallback_data

    async def _fetch_candidates(self, query: FeedQuery) -> list[RestaurantRecord]:
        if self._use_fallback_data:
            logger.info("Fallback mode enabled; returning fallback restaurant data")
            return list(self._fallback)

        # Single attempt; retries would wrap fetch_places without changing the contract
        try:
            raw_results = await self._fetch_places(query.latitude, query.longitude)
        except PlacesUpstreamError as e:
            logger.error(f"Google Places API error: {e}")
            logger.warning("Falling back to static restaurant data")
            return list(self._fallback)
        except Exception as e:
            logger.exception("Unexpected error fetching places: %s", e)
            logger.warning("Falling back to static restaurant data")
            return list(self._fallback)

        return normalize_places(raw_results)

    def _apply_filters(self, query: FeedQuery, records: list[RestaurantRecord]) -> list[RestaurantRecord]:
        for factory in self._filter_factories:
            predicate = factory(query)
            if predicate is None:
                continue
            records = [r for r in records if predicate(r)]
        return records

    async def get_feed(self, query: FeedQuery) -> FeedResponse:
        """Fetch (or fall back), filter and sort the feed for a validated query."""
        candidates = await self._fetch_candidates(query)
        filtered = self._apply_filters(query, candidates)
        # sorted() is stable, so equal ratings keep their upstream order
        results = sorted(filtered, key=self._sort_key, reverse=True)

        logger.info(
            f"Feed assembled: lat={query.latitude}, lng={query.longitude}, "
            f"min_rating={query.min_rating}, candidates={len(candidates)}, results={len(results)}"
        )
        return FeedResponse(results=results)


def build_feed_service(settings: Settings) -> FeedAssemblyService:
    """Wire a FeedAssemblyService from application settings."""
    fetch_places = partial(
        places_client.nearby_search,
        api_key=settings.google_maps_api_key,
        radius=settings.places_search_radius_m,
        place_type=settings.places_type,
        timeout=settings.places_request_timeout,
    )

    filter_factories: list[FilterFactory] = [min_rating_filter_factory]
    if settings.meal_filter_enabled:
        filter_factories.append(meal_time_filter_factory())

    return FeedAssemblyService(
        fetch_places,
        use_fallback_data=settings.use_fallback_data,
        filter_factories=filter_factories,
    )
