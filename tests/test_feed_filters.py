"""Tests for feed filter predicates, meal-time rules and settings wiring."""

from datetime import datetime

import pytest

from app.core.config import Settings
from app.schemas.places import FeedQuery, RestaurantRecord
from app.seed.fallback_restaurants import FALLBACK_RESTAURANTS, is_placeholder_photo
from app.services.feed_filters import (
    meal_for_hour,
    meal_time_filter,
    meal_time_filter_factory,
    min_rating_filter,
    min_rating_filter_factory,
    rating_sort_key,
)
from app.services.feed_service import build_feed_service


def _record(name: str, rating: float | None = None) -> RestaurantRecord:
    return RestaurantRecord(place_id=name.lower().replace(" ", "-"), name=name, rating=rating)


def test_rating_sort_key_missing_is_zero():
    assert rating_sort_key(_record("A")) == 0.0
    assert rating_sort_key(_record("B", 4.2)) == 4.2


def test_min_rating_filter_boundaries():
    keep = min_rating_filter(4.5)
    assert keep(_record("A", 4.5))
    assert not keep(_record("B", 4.49))
    assert not keep(_record("C"))


def test_min_rating_filter_factory_only_when_supplied():
    assert min_rating_filter_factory(FeedQuery(latitude=0, longitude=0)) is None
    assert min_rating_filter_factory(FeedQuery(latitude=0, longitude=0, min_rating=0)) is not None


@pytest.mark.parametrize(
    "hour,meal",
    [(0, "breakfast"), (10, "breakfast"), (11, "lunch"), (15, "lunch"), (16, "dinner"), (23, "dinner")],
)
def test_meal_for_hour(hour, meal):
    assert meal_for_hour(hour) == meal


def test_meal_time_filter_name_rules():
    names = ["Breakfast Club", "Sunrise CAFE", "Corner Deli", "Lunch Box", "Steak House"]
    records = [_record(n) for n in names]

    def kept(meal):
        return [r.name for r in records if meal_time_filter(meal)(r)]

    assert kept("breakfast") == ["Breakfast Club", "Sunrise CAFE"]
    assert kept("lunch") == ["Sunrise CAFE", "Corner Deli", "Lunch Box"]
    assert kept("dinner") == names


def test_meal_time_filter_factory_uses_clock():
    factory = meal_time_filter_factory(clock=lambda: datetime(2024, 5, 1, 8, 30))
    predicate = factory(FeedQuery(latitude=0, longitude=0))
    assert predicate(_record("Sunrise Cafe"))
    assert not predicate(_record("Steak House"))


def test_build_feed_service_meal_filter_disabled_by_default():
    service = build_feed_service(Settings(google_maps_api_key=None))
    assert len(service._filter_factories) == 1
    assert not service.use_fallback_data


def test_build_feed_service_meal_filter_enabled():
    service = build_feed_service(Settings(meal_filter_enabled=True, use_fallback_data=True))
    assert len(service._filter_factories) == 2
    assert service.use_fallback_data


def test_fallback_dataset_shape():
    ids = [r.place_id for r in FALLBACK_RESTAURANTS]
    assert len(ids) == len(set(ids)) == 6
    ratings = [r.rating for r in FALLBACK_RESTAURANTS]
    assert min(ratings) == 4.1 and max(ratings) == 4.8
    with_photo = [r for r in FALLBACK_RESTAURANTS if r.photos]
    assert with_photo and len(with_photo) < len(FALLBACK_RESTAURANTS)
    assert all(is_placeholder_photo(r.photos[0].photo_reference) for r in with_photo)


def test_fallback_records_are_immutable():
    with pytest.raises(Exception):
        FALLBACK_RESTAURANTS[0].rating = 1.0


def test_is_placeholder_photo():
    assert is_placeholder_photo("dummy_photo_1")
    assert not is_placeholder_photo("AWU5eFhx")
    assert not is_placeholder_photo(None)
