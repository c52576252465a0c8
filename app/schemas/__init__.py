from app.schemas.places import (
    ErrorResponse,
    FeedQuery,
    FeedResponse,
    PlacePhoto,
    RestaurantRecord,
)

__all__ = [
    "ErrorResponse",
    "FeedQuery",
    "FeedResponse",
    "PlacePhoto",
    "RestaurantRecord",
]
