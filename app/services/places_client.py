"""Google Places Nearby Search client used by the feed service."""

import logging
import re

import httpx

logger = logging.getLogger(__name__)

GOOGLE_PLACES_BASE = "https://maps.googleapis.com/maps/api/place"
NEARBY_SEARCH_URL = f"{GOOGLE_PLACES_BASE}/nearbysearch/json"
REQUEST_TIMEOUT = 10.0  # seconds

# Google "status" values that carry a usable results list
OK_STATUSES = ("OK", "ZERO_RESULTS")


class PlacesUpstreamError(Exception):
    """Google Places could not produce a usable result list."""


def _redact_api_key(url: str) -> str:
    """Remove API key from URL for safe logging."""
    return re.sub(r'key=[^&]+', 'key=REDACTED', str(url))


async def _call_google_api(
    url: str,
    params: dict,
    timeout: float = REQUEST_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict:
    """
    Call Google Places API with logging. Returns parsed JSON object.

    Raises PlacesUpstreamError on timeout, transport error, non-200 status
    or a body that is not a JSON object.
    """
    full_url = httpx.URL(url, params=params)
    safe_url = _redact_api_key(str(full_url))

    logger.info(f"Calling Google Places API: {safe_url}")

    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.get(url, params=params)
    except httpx.TimeoutException as e:
        raise PlacesUpstreamError(f"Google Places API timed out after {timeout}s: {safe_url}") from e
    except httpx.RequestError as e:
        # httpx includes the request URL (and key) in some messages
        raise PlacesUpstreamError(f"Google Places API request error: {_redact_api_key(str(e))}") from e

    response_text = response.text
    truncated_body = response_text[:500] if response_text else "(empty)"

    logger.info(
        f"Google API response: status={response.status_code}, "
        f"body_preview={truncated_body}"
    )

    if response.status_code != 200:
        raise PlacesUpstreamError(f"Google API HTTP {response.status_code}: {truncated_body}")

    try:
        data = response.json()
    except ValueError as e:
        raise PlacesUpstreamError(f"Google API returned malformed JSON: {truncated_body}") from e

    if not isinstance(data, dict):
        raise PlacesUpstreamError(f"Google API returned unexpected payload: {truncated_body}")

    return data


async def nearby_search(
    lat: float,
    lng: float,
    *,
    api_key: str | None,
    radius: int = 1500,
    place_type: str = "restaurant",
    timeout: float = REQUEST_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[dict]:
    """
    Run a single Nearby Search request and return the raw result dicts.

    Makes exactly one attempt. ZERO_RESULTS is a normal empty list; every
    other non-OK Google status (REQUEST_DENIED, OVER_QUERY_LIMIT, ...) raises
    PlacesUpstreamError, as does a missing API key.
    """
    if not api_key:
        raise PlacesUpstreamError("GOOGLE_MAPS_API_KEY missing")

    params = {
        "location": f"{lat},{lng}",
        "radius": radius,
        "type": place_type,
        "key": api_key,
    }

    data = await _call_google_api(NEARBY_SEARCH_URL, params, timeout=timeout, transport=transport)

    status = data.get("status", "UNKNOWN_ERROR")
    if status not in OK_STATUSES:
        error_msg = data.get("error_message", status)
        raise PlacesUpstreamError(f"Google API status={status}: {error_msg}")

    results = data.get("results", [])
    if not isinstance(results, list):
        raise PlacesUpstreamError(f"Google API results is {type(results).__name__}, expected list")

    logger.info(f"Nearby search returned {len(results)} results (status={status})")
    return results
