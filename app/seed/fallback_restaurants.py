"""Static sample restaurants served when Google Places is disabled or unavailable."""

from app.schemas.places import PlacePhoto, RestaurantRecord

# Photo references starting with this prefix are not real Google references;
# the UI shows a placeholder card image for them.
PLACEHOLDER_PHOTO_PREFIX = "dummy_"


def _photo(n: int) -> tuple[PlacePhoto, ...]:
    return (PlacePhoto(photo_reference=f"{PLACEHOLDER_PHOTO_PREFIX}photo_{n}"),)


FALLBACK_RESTAURANTS: tuple[RestaurantRecord, ...] = (
    RestaurantRecord(
        place_id="dummy1",
        name="The Golden Spoon",
        rating=4.4,
        vicinity="123 Main St, Downtown",
        price_level=2,
        photos=_photo(1),
    ),
    RestaurantRecord(
        place_id="dummy2",
        name="Bella Italia",
        rating=4.7,
        vicinity="456 Oak Ave, Little Italy",
        price_level=3,
        photos=_photo(2),
    ),
    RestaurantRecord(
        place_id="dummy3",
        name="Sunrise Cafe",
        rating=4.2,
        vicinity="789 Pine St, Arts District",
        price_level=1,
        photos=_photo(3),
    ),
    RestaurantRecord(
        place_id="dummy4",
        name="Dragon Palace",
        rating=4.6,
        vicinity="321 Elm St, Chinatown",
        price_level=2,
        photos=_photo(4),
    ),
    # No photo: exercises the UI's missing-image card
    RestaurantRecord(
        place_id="dummy5",
        name="Burger Junction",
        rating=4.1,
        vicinity="654 Maple Dr, Food Court",
        price_level=1,
    ),
    RestaurantRecord(
        place_id="dummy6",
        name="Le Petit Bistro",
        rating=4.8,
        vicinity="987 Rose Blvd, French Quarter",
        price_level=4,
        photos=_photo(6),
    ),
)


def is_placeholder_photo(photo_reference: str | None) -> bool:
    """True for references that belong to the fallback dataset, not Google."""
    return bool(photo_reference) and photo_reference.startswith(PLACEHOLDER_PHOTO_PREFIX)
