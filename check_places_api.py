"""
Diagnostics for the Google Places integration.

Run with: python check_places_api.py [--backend-url http://localhost:3001]

Checks the API key, makes one live Nearby Search call, prints sample
restaurants and the rating distribution, and optionally verifies that a
running backend is serving live data rather than the fallback dataset.
"""
import argparse
import asyncio
from collections import Counter
from datetime import datetime

import httpx
from dotenv import load_dotenv

# Load .env into the process environment before app settings are built
load_dotenv()

from app.core.config import settings  # noqa: E402
from app.seed.fallback_restaurants import FALLBACK_RESTAURANTS  # noqa: E402
from app.services import places_client  # noqa: E402
from app.services.feed_filters import meal_for_hour, meal_time_filter, min_rating_filter  # noqa: E402
from app.services.feed_service import normalize_places  # noqa: E402

# San Francisco
TEST_LAT = 37.7749
TEST_LNG = -122.4194
DEBUG_MIN_RATING = 4.0

FALLBACK_IDS = {r.place_id for r in FALLBACK_RESTAURANTS}


def check_api_key() -> bool:
    print("\n1. API key configuration")
    api_key = settings.google_maps_api_key
    if not api_key:
        print("   FAIL: GOOGLE_MAPS_API_KEY is not set")
        return False
    print(f"   OK: key found ({api_key[:6]}...)")
    return True


async def check_nearby_search() -> list[dict] | None:
    print("\n2. Nearby Search call")
    try:
        results = await places_client.nearby_search(
            TEST_LAT,
            TEST_LNG,
            api_key=settings.google_maps_api_key,
            radius=settings.places_search_radius_m,
            place_type=settings.places_type,
            timeout=settings.places_request_timeout,
        )
    except places_client.PlacesUpstreamError as e:
        print(f"   FAIL: {e}")
        return None
    print(f"   OK: {len(results)} results")
    return results


def report_restaurants(raw_results: list[dict]) -> None:
    print("\n3. Restaurant data")
    records = normalize_places(raw_results)
    if not records:
        print("   WARN: no restaurants found; this can be normal for some locations")
        return
    print(f"   {len(records)} of {len(raw_results)} results are valid restaurant records")
    for i, r in enumerate(records[:3], start=1):
        print(f"   {i}. {r.name}")
        print(f"      Rating: {r.rating if r.rating is not None else 'N/A'}")
        print(f"      Address: {r.vicinity or 'N/A'}")
        print(f"      Price level: {r.price_level if r.price_level is not None else 'N/A'}")
        print(f"      Photos: {len(r.photos)}")

    print("\n4. Filter debug")
    distribution = Counter(int(r.rating) for r in records if r.rating is not None)
    print(f"   Rating distribution: {dict(sorted(distribution.items()))}")
    meal = meal_for_hour(datetime.now().hour)
    after_meal = [r for r in records if meal_time_filter(meal)(r)]
    print(f"   Meal filter ({meal}) keeps {len(after_meal)} of {len(records)}")
    after_rating = [r for r in after_meal if min_rating_filter(DEBUG_MIN_RATING)(r)]
    print(f"   minRating={DEBUG_MIN_RATING} then keeps {len(after_rating)}")
    if not after_rating:
        print("   WARN: nothing passes both filters; lower minRating or leave MEAL_FILTER_ENABLED off")


def check_backend(backend_url: str) -> bool:
    print(f"\n5. Backend at {backend_url}")
    try:
        response = httpx.get(
            f"{backend_url.rstrip('/')}/api/places",
            params={"lat": TEST_LAT, "lng": TEST_LNG},
            timeout=settings.places_request_timeout,
        )
    except httpx.RequestError as e:
        print(f"   FAIL: {e}")
        return False
    results = response.json().get("results", []) if response.status_code == 200 else []
    print(f"   Status {response.status_code}, {len(results)} results")
    if results and all(r.get("place_id") in FALLBACK_IDS for r in results):
        print("   WARN: backend is serving fallback data (Google may be failing)")
        return False
    return response.status_code == 200


def main():
    """Run all checks and print a summary."""
    parser = argparse.ArgumentParser(description="Check the Google Places integration")
    parser.add_argument("--backend-url", default=None, help="Also query a running backend")
    args = parser.parse_args()

    print("Google Places API diagnostics")
    ok = check_api_key()
    if ok:
        raw_results = asyncio.run(check_nearby_search())
        ok = raw_results is not None
        if ok:
            report_restaurants(raw_results)
    if args.backend_url:
        ok = check_backend(args.backend_url) and ok

    print("\nAll checks passed" if ok else "\nSome checks failed")
    raise SystemExit(0 if ok else 1)


if __name__ == "__main__":
    main()
