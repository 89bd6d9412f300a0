"""Biometric profile and goal domain models."""

from dataclasses import dataclass
from enum import StrEnum


class Gender(StrEnum):
    """Biological sex used by the BMR formula."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(StrEnum):
    """Self-reported activity level."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class GoalType(StrEnum):
    """Weight-change goal categories, including legacy keys."""

    LOSE_20_25 = "lose_20_25"
    LOSE_15_20 = "lose_15_20"
    LOSE_10_15 = "lose_10_15"
    LOSE_5_10 = "lose_5_10"
    LOSE_3_5 = "lose_3_5"
    LOSE_2_3 = "lose_2_3"
    MAINTAIN = "maintain"
    GAIN_2_3 = "gain_2_3"
    GAIN_3_5 = "gain_3_5"
    GAIN_5_10 = "gain_5_10"
    GAIN_10_15 = "gain_10_15"
    GAIN_15_20 = "gain_15_20"
    GAIN_20_25 = "gain_20_25"
    # Legacy keys still present in stored profiles.
    LOSE_WEIGHT = "lose_weight"
    GAIN_MUSCLE = "gain_muscle"
    LOSE_AGGRESSIVE = "lose_aggressive"
    LOSE_MODERATE = "lose_moderate"
    LOSE_GRADUAL = "lose_gradual"
    LOSE_CONSERVATIVE = "lose_conservative"
    LOSE_MILD = "lose_mild"
    GAIN_MILD = "gain_mild"
    GAIN_CONSERVATIVE = "gain_conservative"
    GAIN_GRADUAL = "gain_gradual"
    GAIN_MODERATE = "gain_moderate"
    GAIN_AGGRESSIVE = "gain_aggressive"


@dataclass(frozen=True)
class BiometricProfile:
    """Inputs for the calorie and macro target calculation."""

    gender: Gender
    age: int
    height_cm: float
    weight_kg: float
    activity_level: ActivityLevel
    goal: GoalType
    body_fat_percentage: float | None = None


@dataclass(frozen=True)
class MacroTargets:
    """Daily macro targets, either user-set or derived from a profile."""

    protein: float
    fats: float
    carbs: float
    calories: float


@dataclass(frozen=True)
class CalculatedMacros:
    """Result of a full goal calculation."""

    bmr: int
    tdee: int
    adjusted_calories: int
    protein: int
    carbs: int
    fats: int
    calories: int

    def to_targets(self) -> MacroTargets:
        """Return the macro portion as targets."""
        return MacroTargets(
            protein=self.protein,
            fats=self.fats,
            carbs=self.carbs,
            calories=self.calories,
        )
