"""Nutrition domain models."""

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class Macros:
    """Protein, fats and carbs in grams alongside calories."""

    protein: float = 0.0
    fats: float = 0.0
    carbs: float = 0.0
    calories: float = 0.0

    def plus(self, other: "Macros") -> "Macros":
        """Return the field-wise sum with another value."""
        return Macros(
            protein=self.protein + other.protein,
            fats=self.fats + other.fats,
            carbs=self.carbs + other.carbs,
            calories=self.calories + other.calories,
        )

    def scaled(self, factor: float) -> "Macros":
        """Return every field multiplied by a factor."""
        return Macros(
            protein=self.protein * factor,
            fats=self.fats * factor,
            carbs=self.carbs * factor,
            calories=self.calories * factor,
        )


ZERO_MACROS = Macros()


@dataclass(frozen=True)
class ExternalNutrition(Macros):
    """Manually entered nutrition not tracked through the catalog.

    Negative inputs are clamped to zero.
    """

    def __post_init__(self) -> None:
        for name in ("protein", "fats", "carbs", "calories"):
            object.__setattr__(self, name, max(0.0, float(getattr(self, name))))


@dataclass(frozen=True)
class FoodCatalogEntry:
    """Catalog food with nutrition and cost per reference quantity.

    The reference quantity is one unit for unit foods and 100 g otherwise.
    """

    name: str
    nutrition: Macros
    cost: float | None = None
    is_unit_food: bool = False
    category: str | None = None


@dataclass(frozen=True)
class FoodSelection:
    """A catalog food picked for a time-slot; grams or unit count."""

    name: str
    amount: float


@dataclass(frozen=True)
class TimeslotPlan:
    """Foods and external nutrition logged for one time-slot."""

    selected_foods: list[FoodSelection] = field(default_factory=list)
    external_nutrition: ExternalNutrition = field(default_factory=ExternalNutrition)


@dataclass(frozen=True)
class DailyRecord:
    """One calendar day of time-slot plans and completion flags."""

    day: date
    timeslots: dict[str, TimeslotPlan]
    total_macros: Macros
    completion: dict[str, bool] = field(default_factory=dict)


@dataclass(frozen=True)
class MealCost:
    """Cost breakdown for one time-slot."""

    individual_costs: dict[str, float]
    total_cost: float


@dataclass(frozen=True)
class DailyCost:
    """Cost breakdown across time-slots."""

    timeslots: dict[str, MealCost]
    total_cost: float
