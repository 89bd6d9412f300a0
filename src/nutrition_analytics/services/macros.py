"""Aggregation of catalog foods and external nutrition into macro totals."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from nutrition_analytics.domain.nutrition import (
    ZERO_MACROS,
    DailyRecord,
    FoodCatalogEntry,
    FoodSelection,
    Macros,
    TimeslotPlan,
)
from nutrition_analytics.domain.profile import MacroTargets
from nutrition_analytics.services.numbers import ratio

FoodCatalog = Mapping[str, FoodCatalogEntry]


@dataclass(frozen=True)
class MacroProgress:
    """Consumed macros as a percentage of targets."""

    protein: float
    fats: float
    carbs: float
    calories: float
    remaining: Macros


@dataclass(frozen=True)
class PeriodTotals:
    """Daily totals for a span of records with per-day averages."""

    daily: list[Macros]
    total: Macros
    average: Macros
    days_with_records: int


def portion_multiplier(entry: FoodCatalogEntry, amount: float) -> float:
    """Return units for unit foods, otherwise hundreds of grams."""
    return amount if entry.is_unit_food else amount / 100


def food_macros(selection: FoodSelection, catalog: FoodCatalog) -> Macros:
    """Nutrition contributed by one selection; unknown foods contribute zero."""
    entry = catalog.get(selection.name)
    if entry is None:
        return ZERO_MACROS
    return entry.nutrition.scaled(portion_multiplier(entry, selection.amount))


def total_food_macros(
    selections: Iterable[FoodSelection], catalog: FoodCatalog
) -> Macros:
    """Sum nutrition across food selections."""
    total = ZERO_MACROS
    for selection in selections:
        total = total.plus(food_macros(selection, catalog))
    return total


def timeslot_macros(plan: TimeslotPlan, catalog: FoodCatalog) -> Macros:
    """Foods plus external nutrition for one time-slot."""
    return total_food_macros(plan.selected_foods, catalog).plus(plan.external_nutrition)


def combined_macros(
    timeslots: Iterable[TimeslotPlan], catalog: FoodCatalog
) -> Macros:
    """Field-wise sum across time-slots."""
    total = ZERO_MACROS
    for plan in timeslots:
        total = total.plus(timeslot_macros(plan, catalog))
    return total


def daily_macros(timeslots: Mapping[str, TimeslotPlan], catalog: FoodCatalog) -> Macros:
    """Total macros for a day keyed by time-slot id."""
    return combined_macros(timeslots.values(), catalog)


def macro_progress(consumed: Macros, targets: MacroTargets) -> MacroProgress:
    """Percent of each target consumed.

    A zero target yields inf (or nan for 0/0) rather than raising.
    """
    return MacroProgress(
        protein=ratio(consumed.protein, targets.protein) * 100,
        fats=ratio(consumed.fats, targets.fats) * 100,
        carbs=ratio(consumed.carbs, targets.carbs) * 100,
        calories=ratio(consumed.calories, targets.calories) * 100,
        remaining=Macros(
            protein=targets.protein - consumed.protein,
            fats=targets.fats - consumed.fats,
            carbs=targets.carbs - consumed.carbs,
            calories=targets.calories - consumed.calories,
        ),
    )


def period_totals(records: list[DailyRecord], days: int) -> PeriodTotals:
    """Totals and per-day averages for records spanning ``days`` days."""
    daily = [record.total_macros for record in records]
    total = ZERO_MACROS
    for entry in daily:
        total = total.plus(entry)
    total_days = max(days, 1)
    return PeriodTotals(
        daily=daily,
        total=total,
        average=total.scaled(1 / total_days),
        days_with_records=len(records),
    )
