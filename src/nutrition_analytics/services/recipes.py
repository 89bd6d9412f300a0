"""Recipe and shopping-list nutrition and cost calculations."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from nutrition_analytics.domain.nutrition import ZERO_MACROS, FoodSelection, Macros
from nutrition_analytics.services.costs import portion_cost
from nutrition_analytics.services.macros import FoodCatalog, food_macros


class ShoppingPeriod(StrEnum):
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


PERIOD_DAYS: dict[ShoppingPeriod, int] = {
    ShoppingPeriod.WEEK: 7,
    ShoppingPeriod.MONTH: 31,
    ShoppingPeriod.YEAR: 365,
}


@dataclass(frozen=True)
class IngredientLine:
    """Nutrition and cost of one ingredient portion."""

    name: str
    amount: float
    nutrition: Macros
    cost: float


@dataclass(frozen=True)
class RecipeSummary:
    """Per-ingredient lines, whole-recipe totals and per-serving values."""

    ingredients: list[IngredientLine]
    total_nutrition: Macros
    total_cost: float
    servings: int
    nutrition_per_serving: Macros
    cost_per_serving: float


@dataclass(frozen=True)
class ShoppingTotals:
    nutrition: Macros
    cost: float


def ingredient_line(selection: FoodSelection, catalog: FoodCatalog) -> IngredientLine:
    """Price and nutrition for one ingredient.

    Negative amounts count as zero. Unknown or unpriced foods cost nothing.
    """
    amount = max(0.0, selection.amount)
    portion = FoodSelection(name=selection.name, amount=amount)
    cost = portion_cost(catalog.get(selection.name), amount)
    return IngredientLine(
        name=selection.name,
        amount=amount,
        nutrition=food_macros(portion, catalog),
        cost=max(0.0, cost or 0.0),
    )


def calculate_recipe(
    ingredients: Iterable[FoodSelection], servings: int, catalog: FoodCatalog
) -> RecipeSummary:
    """Totals for a recipe and their share per serving.

    With fewer than one serving the per-serving values are zero.
    """
    lines = [ingredient_line(selection, catalog) for selection in ingredients]
    total = ZERO_MACROS
    for line in lines:
        total = total.plus(line.nutrition)
    total_cost = sum(line.cost for line in lines)
    if servings > 0:
        per_serving = total.scaled(1 / servings)
        cost_per_serving = total_cost / servings
    else:
        per_serving = ZERO_MACROS
        cost_per_serving = 0.0
    return RecipeSummary(
        ingredients=lines,
        total_nutrition=total,
        total_cost=total_cost,
        servings=servings,
        nutrition_per_serving=per_serving,
        cost_per_serving=cost_per_serving,
    )


def shopping_list_totals(
    items: Iterable[FoodSelection], catalog: FoodCatalog
) -> ShoppingTotals:
    """Summed nutrition and cost for a list of daily quantities."""
    nutrition = ZERO_MACROS
    cost = 0.0
    for item in items:
        line = ingredient_line(item, catalog)
        nutrition = nutrition.plus(line.nutrition)
        cost += line.cost
    return ShoppingTotals(nutrition=nutrition, cost=cost)


def scale_to_period(totals: ShoppingTotals, period: ShoppingPeriod) -> ShoppingTotals:
    """Scale daily shopping totals to a week, month or year."""
    days = PERIOD_DAYS[period]
    return ShoppingTotals(
        nutrition=totals.nutrition.scaled(days), cost=totals.cost * days
    )
