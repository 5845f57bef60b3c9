"""Tests for the location service: caching, rebuilds and validation."""

import pytest

from journey_search.adapters.cache import NullCache
from journey_search.domain.errors import QueryValidationError
from journey_search.domain.models import LocationGroups, LocationKind, LocationToken
from journey_search.services import LocationService


class LowerTransliterator:
    def transliterate(self, name: str) -> str:
        return name.lower()


def test_build_is_lazy_and_cached(location_service, fake_directory):
    assert not location_service.is_built

    assert location_service.resolve("北京") == LocationToken(LocationKind.CITY, "北京")
    assert location_service.is_built
    location_service.resolve("上海")
    location_service.build()

    assert fake_directory.calls == 1


def test_discard_rebuilds_from_cache(location_service, fake_directory):
    location_service.build()
    location_service.discard()

    assert not location_service.is_built
    location_service.resolve("北京")
    assert fake_directory.calls == 1


def test_invalidate_refetches(location_service, fake_directory):
    location_service.build()
    fake_directory.groups.cities["浙江省"] = ["杭州"]

    location_service.invalidate()

    assert location_service.resolve("杭州") == LocationToken(LocationKind.CITY, "杭州")
    assert fake_directory.calls == 2


def test_null_cache_refetches_every_build(fake_directory):
    service = LocationService(
        directory=fake_directory,
        transliterator=LowerTransliterator(),
        cache=NullCache(),
    )

    service.build()
    service.build()

    assert fake_directory.calls == 2


def test_station_resolution(location_service):
    assert location_service.resolve("北京南站") == LocationToken(LocationKind.STATION, "北京南")
    assert location_service.resolve("南通站") is None


def test_suggest_uses_default_limit(fake_directory):
    service = LocationService(
        directory=fake_directory,
        transliterator=LowerTransliterator(),
        cache=NullCache(),
        suggestion_limit=1,
    )

    assert service.suggest("南") == ["南京"]
    assert service.suggest("南", limit=5) == ["南京", "南通", "南京南"]


def test_require_returns_token(location_service):
    assert location_service.require("上海", "arrival") == LocationToken(LocationKind.CITY, "上海")


def test_require_raises_with_suggestions(location_service):
    with pytest.raises(QueryValidationError) as excinfo:
        location_service.require("北京西南", "departure")

    error = excinfo.value
    assert error.field_name == "departure"
    assert "北京西" in error.suggestions
    assert "北京西南" in error.message


def test_marked_station_names_from_directory(fake_directory):
    fake_directory.groups = LocationGroups(
        cities={"北京市": ["北京"]},
        stations={"北京": ["北京南站", "北京西站"]},
    )
    service = LocationService(
        directory=fake_directory,
        transliterator=LowerTransliterator(),
        cache=NullCache(),
    )

    suggestions = service.suggest("北京南")

    assert suggestions == ["北京南站"]
    token = service.require(suggestions[0], "departure")
    assert token == LocationToken(LocationKind.STATION, "北京南")
    assert token.query_name == "北京南站"
    assert service.resolve("北京南").query_name == "北京南站"
