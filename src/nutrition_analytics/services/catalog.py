"""Food catalog lookups with caching."""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Protocol

from nutrition_analytics.domain.nutrition import FoodCatalogEntry
from nutrition_analytics.services.cache import Cache
from nutrition_analytics.services.macros import FoodCatalog

_CATALOG_KEY = "catalog:foods"

_logger = logging.getLogger(__name__)


class FoodCatalogRepository(Protocol):
    """Persistence interface for catalog foods."""

    def list_foods(self) -> list[FoodCatalogEntry]:
        """Return every catalog food."""

    def upsert_food(self, entry: FoodCatalogEntry) -> None:
        """Create or replace a food keyed by name."""


@dataclass
class FoodCatalogService:
    """Serves the food catalog keyed by name."""

    repository: FoodCatalogRepository
    cache: Cache
    ttl_seconds: int = 300

    def get_catalog(self) -> FoodCatalog:
        """Return the catalog, loading it from the store when not cached."""
        cached = self.cache.get(_CATALOG_KEY)
        if isinstance(cached, MappingProxyType):
            return cached
        foods = self.repository.list_foods()
        catalog = MappingProxyType({food.name: food for food in foods})
        if len(catalog) != len(foods):
            _logger.warning(
                "Duplicate food names; later entries win (%s rows, %s names)",
                len(foods),
                len(catalog),
            )
        self.cache.set(_CATALOG_KEY, catalog, ttl_seconds=self.ttl_seconds)
        return catalog

    def save_food(self, entry: FoodCatalogEntry) -> None:
        """Persist a food and drop the cached catalog."""
        self.repository.upsert_food(entry)
        self.cache.invalidate(_CATALOG_KEY)
