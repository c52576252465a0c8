"""Schemas for the restaurant feed served by GET /api/places."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PlacePhoto(BaseModel):
    """Photo reference as returned by Google Nearby Search."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    photo_reference: str


class RestaurantRecord(BaseModel):
    """
    One restaurant in the feed.

    Field names follow Google Nearby Search so upstream results pass through
    unchanged; unknown upstream fields (geometry, types, ...) are dropped.
    A missing rating counts as 0 for filtering and sorting.
    """
    model_config = ConfigDict(frozen=True, extra="ignore")

    place_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    rating: Optional[float] = Field(default=None, ge=0.0, le=5.0)
    vicinity: Optional[str] = None
    price_level: Optional[int] = Field(default=None, ge=0, le=4)
    photos: tuple[PlacePhoto, ...] = ()


class FeedQuery(BaseModel):
    """Validated inbound feed request."""
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    # Not range-checked: negative or >5 thresholds are compared as given
    min_rating: Optional[float] = None


class FeedResponse(BaseModel):
    """Response for the feed endpoint. results may be empty."""
    results: list[RestaurantRecord]


class ErrorResponse(BaseModel):
    """Body of a 400 response."""
    error: str
