"""Tests for food catalog service and cache."""

from datetime import UTC, datetime, timedelta

import pytest

from nutrition_analytics.domain.nutrition import FoodCatalogEntry, Macros
from nutrition_analytics.services.cache import InMemoryCache
from nutrition_analytics.services.catalog import FoodCatalogService
from tests.conftest import InMemoryFoodCatalogRepository, sample_catalog


class FakeClock:
    def __init__(self) -> None:
        self.now = datetime(2024, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now


def test_catalog_is_keyed_by_name_and_cached(
    catalog_service: FoodCatalogService,
    catalog_repository: InMemoryFoodCatalogRepository,
) -> None:
    first = catalog_service.get_catalog()
    second = catalog_service.get_catalog()

    assert set(first) == {"Egg", "Chicken", "Rice"}
    assert first["Egg"].is_unit_food is True
    assert second is first
    assert catalog_repository.list_calls == 1


def test_catalog_expires_after_ttl() -> None:
    clock = FakeClock()
    repository = InMemoryFoodCatalogRepository(foods=sample_catalog())
    service = FoodCatalogService(
        repository=repository, cache=InMemoryCache(clock=clock), ttl_seconds=60
    )

    service.get_catalog()
    clock.now += timedelta(seconds=59)
    service.get_catalog()
    clock.now += timedelta(seconds=1)
    service.get_catalog()

    assert repository.list_calls == 2


def test_save_food_invalidates_cache(
    catalog_service: FoodCatalogService,
    catalog_repository: InMemoryFoodCatalogRepository,
) -> None:
    catalog_service.get_catalog()

    catalog_service.save_food(
        FoodCatalogEntry(name="Banana", nutrition=Macros(carbs=23, calories=89))
    )
    catalog = catalog_service.get_catalog()

    assert "Banana" in catalog
    assert catalog_repository.list_calls == 2


def test_duplicate_names_keep_last_entry() -> None:
    repository = InMemoryFoodCatalogRepository(
        foods=[
            FoodCatalogEntry(name="Milk", nutrition=Macros(calories=42)),
            FoodCatalogEntry(name="Milk", nutrition=Macros(calories=64)),
        ]
    )
    service = FoodCatalogService(repository=repository, cache=InMemoryCache())

    assert service.get_catalog()["Milk"].nutrition.calories == 64


def test_cache_invalidate_missing_key() -> None:
    cache = InMemoryCache()
    cache.invalidate("missing")

    assert cache.get("missing") is None


def test_catalog_is_read_only(catalog_service: FoodCatalogService) -> None:
    catalog = catalog_service.get_catalog()

    replacement = FoodCatalogEntry(name="Egg", nutrition=Macros())
    with pytest.raises(TypeError):
        catalog["Egg"] = replacement  # type: ignore[index]

    assert catalog_service.get_catalog()["Egg"].is_unit_food is True
