"""Pydantic request models for the HTTP API."""

from pydantic import BaseModel, ConfigDict, Field

from nutrition_analytics.domain.nutrition import (
    ExternalNutrition,
    FoodSelection,
    TimeslotPlan,
)
from nutrition_analytics.domain.profile import (
    ActivityLevel,
    BiometricProfile,
    Gender,
    MacroTargets,
)
from nutrition_analytics.domain.water import WaterSource
from nutrition_analytics.services.goals import parse_goal
from nutrition_analytics.services.recipes import ShoppingPeriod


class ProfilePayload(BaseModel):
    """Biometric profile input.

    ``goal`` stays a plain string so unknown keys surface as
    ``UnsupportedGoalError`` rather than a schema error.
    """

    gender: Gender
    age: int = Field(gt=0)
    height_cm: float = Field(gt=0)
    weight_kg: float = Field(gt=0)
    activity_level: ActivityLevel
    goal: str
    body_fat_percentage: float | None = Field(default=None, ge=0, lt=100)

    def to_domain(self) -> BiometricProfile:
        return BiometricProfile(
            gender=self.gender,
            age=self.age,
            height_cm=self.height_cm,
            weight_kg=self.weight_kg,
            activity_level=self.activity_level,
            goal=parse_goal(self.goal),
            body_fat_percentage=self.body_fat_percentage,
        )


class TargetsPayload(BaseModel):
    """User-set macro targets."""

    protein: float = Field(ge=0)
    fats: float = Field(ge=0)
    carbs: float = Field(ge=0)
    calories: float = Field(ge=0)

    def to_domain(self) -> MacroTargets:
        return MacroTargets(
            protein=self.protein,
            fats=self.fats,
            carbs=self.carbs,
            calories=self.calories,
        )


class FoodSelectionPayload(BaseModel):
    """Selected food and amount."""

    name: str
    amount: float = Field(ge=0)


class NutritionPayload(BaseModel):
    """Macros entered outside the catalog."""

    protein: float = 0.0
    fats: float = 0.0
    carbs: float = 0.0
    calories: float = 0.0


class TimeslotPayload(BaseModel):
    """Foods and external nutrition for one time-slot."""

    model_config = ConfigDict(populate_by_name=True)

    selected_foods: list[FoodSelectionPayload] = Field(
        default_factory=list, alias="selectedFoods"
    )
    external_nutrition: NutritionPayload = Field(
        default_factory=NutritionPayload, alias="externalNutrition"
    )

    def to_domain(self) -> TimeslotPlan:
        return TimeslotPlan(
            selected_foods=[
                FoodSelection(name=food.name, amount=food.amount)
                for food in self.selected_foods
            ],
            external_nutrition=ExternalNutrition(
                protein=self.external_nutrition.protein,
                fats=self.external_nutrition.fats,
                carbs=self.external_nutrition.carbs,
                calories=self.external_nutrition.calories,
            ),
        )


class PlanPayload(BaseModel):
    """A day's time-slots with optional completion flags."""

    timeslots: dict[str, TimeslotPayload] = Field(default_factory=dict)
    completion: dict[str, bool] | None = None


class CompletionPayload(BaseModel):
    """Completion toggle."""

    completed: bool


class WaterIntakePayload(BaseModel):
    """Water intake entry."""

    amount: float = Field(gt=0)
    source: WaterSource = WaterSource.MANUAL


class WaterTargetPayload(BaseModel):
    """Daily water target in ml."""

    target: float = Field(gt=0)


class RecipePayload(BaseModel):
    """Recipe ingredients and the number of servings they make."""

    ingredients: list[FoodSelectionPayload] = Field(default_factory=list)
    servings: int = Field(default=1, ge=0)

    def to_domain(self) -> list[FoodSelection]:
        return [
            FoodSelection(name=item.name, amount=item.amount)
            for item in self.ingredients
        ]


class ShoppingListPayload(BaseModel):
    """Daily quantities to scale to a shopping period."""

    items: list[FoodSelectionPayload] = Field(default_factory=list)
    period: ShoppingPeriod = ShoppingPeriod.WEEK

    def to_domain(self) -> list[FoodSelection]:
        return [
            FoodSelection(name=item.name, amount=item.amount) for item in self.items
        ]
