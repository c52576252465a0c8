"""Filter predicates and sort keys for the restaurant feed pipeline."""

from collections.abc import Callable
from datetime import datetime
from typing import Literal

from app.schemas.places import FeedQuery, RestaurantRecord

RecordPredicate = Callable[[RestaurantRecord], bool]
# Builds a predicate for one query, or returns None when it does not apply
FilterFactory = Callable[[FeedQuery], RecordPredicate | None]
SortKey = Callable[[RestaurantRecord], float]

Meal = Literal["breakfast", "lunch", "dinner"]

# Name substrings a restaurant must contain to be shown for a meal; None shows everything
MEAL_NAME_KEYWORDS: dict[str, tuple[str, ...] | None] = {
    "breakfast": ("breakfast", "cafe"),
    "lunch": ("lunch", "cafe", "deli"),
    "dinner": None,
}


def rating_value(record: RestaurantRecord) -> float:
    """Rating used for thresholds and ordering; missing counts as 0."""
    return record.rating if record.rating is not None else 0.0


def rating_sort_key(record: RestaurantRecord) -> float:
    """Sort key for highest-rated-first ordering (use with reverse=True)."""
    return rating_value(record)


def min_rating_filter(min_rating: float) -> RecordPredicate:
    """
    Keep records rated at least min_rating.

    A missing rating compares as 0, so an explicit threshold of 0 (or any
    negative threshold) keeps everything while any positive one drops
    unrated places.
    """
    def predicate(record: RestaurantRecord) -> bool:
        return rating_value(record) >= min_rating

    return predicate


def min_rating_filter_factory(query: FeedQuery) -> RecordPredicate | None:
    if query.min_rating is None:
        return None
    return min_rating_filter(query.min_rating)


def meal_for_hour(hour: int) -> Meal:
    """Map a local hour (0-23) to breakfast (<11), lunch (<16) or dinner."""
    if hour < 11:
        return "breakfast"
    if hour < 16:
        return "lunch"
    return "dinner"


def meal_time_filter(meal: Meal) -> RecordPredicate:
    """Case-insensitive name-substring filter for the given meal."""
    keywords = MEAL_NAME_KEYWORDS[meal]

    def predicate(record: RestaurantRecord) -> bool:
        if keywords is None:
            return True
        name = record.name.lower()
        return any(k in name for k in keywords)

    return predicate


def meal_time_filter_factory(clock: Callable[[], datetime] = datetime.now) -> FilterFactory:
    """Filter factory that picks the meal from the current local time at request time."""
    def factory(query: FeedQuery) -> RecordPredicate | None:
        return meal_time_filter(meal_for_hour(clock().hour))

    return factory
