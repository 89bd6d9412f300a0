"""Meal cost aggregation from the food catalog."""

from collections.abc import Iterable, Mapping

from nutrition_analytics.domain.nutrition import (
    DailyCost,
    FoodCatalogEntry,
    FoodSelection,
    MealCost,
    TimeslotPlan,
)
from nutrition_analytics.services.macros import FoodCatalog, portion_multiplier


def cost_per_100g_from_kg(cost_per_kg: float) -> float:
    """Convert a per-kilogram price to the per-100 g reference rate."""
    return cost_per_kg / 10


def portion_cost(entry: FoodCatalogEntry | None, amount: float) -> float | None:
    """Cost of a portion, or None when the food or its price is unknown."""
    if entry is None or entry.cost is None:
        return None
    return entry.cost * portion_multiplier(entry, amount)


def meal_cost(selections: Iterable[FoodSelection], catalog: FoodCatalog) -> MealCost:
    """Per-food and total cost for one time-slot.

    A food selected more than once has its portions summed in the breakdown.
    Foods without a price show 0 and add nothing to the total.
    """
    individual: dict[str, float] = {}
    total = 0.0
    for selection in selections:
        cost = portion_cost(catalog.get(selection.name), selection.amount)
        individual[selection.name] = individual.get(selection.name, 0.0) + (cost or 0.0)
        if cost is not None:
            total += cost
    return MealCost(individual_costs=individual, total_cost=total)


def daily_cost(
    timeslots: Mapping[str, TimeslotPlan], catalog: FoodCatalog
) -> DailyCost:
    """Cost per time-slot and the sum across them."""
    breakdown = {
        timeslot_id: meal_cost(plan.selected_foods, catalog)
        for timeslot_id, plan in timeslots.items()
    }
    return DailyCost(
        timeslots=breakdown,
        total_cost=sum(cost.total_cost for cost in breakdown.values()),
    )
