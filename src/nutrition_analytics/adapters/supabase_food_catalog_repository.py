"""Supabase repository for the food catalog."""

from dataclasses import dataclass

from supabase import Client

from nutrition_analytics.domain.nutrition import FoodCatalogEntry, Macros
from nutrition_analytics.services.catalog import FoodCatalogRepository
from nutrition_analytics.services.costs import cost_per_100g_from_kg

_COLUMNS = "name, category, protein, fats, carbs, calories, price, is_unit_food"


@dataclass
class SupabaseFoodCatalogRepository(FoodCatalogRepository):
    """Supabase implementation for catalog foods.

    ``price`` is stored per unit for unit foods and per kilogram otherwise.
    """

    client: Client

    def list_foods(self) -> list[FoodCatalogEntry]:
        """Return every food ordered by name."""
        response = (
            self.client.table("foods")
            .select(_COLUMNS)
            .order("name", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def upsert_food(self, entry: FoodCatalogEntry) -> None:
        """Create or replace a food by name."""
        price = entry.cost
        if price is not None and not entry.is_unit_food:
            price = price * 10  # per 100 g back to per kg
        self.client.table("foods").upsert(
            {
                "name": entry.name,
                "category": entry.category,
                "protein": entry.nutrition.protein,
                "fats": entry.nutrition.fats,
                "carbs": entry.nutrition.carbs,
                "calories": entry.nutrition.calories,
                "price": price,
                "is_unit_food": entry.is_unit_food,
            },
            on_conflict="name",
        ).execute()


def _parse_row(row: dict[str, object]) -> FoodCatalogEntry:
    is_unit_food = bool(row.get("is_unit_food"))
    price = row.get("price")
    cost: float | None = None
    if isinstance(price, int | float):
        cost = float(price) if is_unit_food else cost_per_100g_from_kg(float(price))
    return FoodCatalogEntry(
        name=str(row.get("name") or ""),
        category=row.get("category"),
        nutrition=Macros(
            protein=float(row.get("protein") or 0.0),
            fats=float(row.get("fats") or 0.0),
            carbs=float(row.get("carbs") or 0.0),
            calories=float(row.get("calories") or 0.0),
        ),
        cost=cost,
        is_unit_food=is_unit_food,
    )
