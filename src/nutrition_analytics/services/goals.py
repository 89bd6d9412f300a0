"""Calorie and macro target calculation from a biometric profile.

BMR uses Katch-McArdle when a body fat percentage is known and Mifflin-St Jeor
otherwise. TDEE scales BMR by an activity multiplier, and the goal adds a
deficit or surplus before calories are split into protein, carbs and fat.
"""

from dataclasses import dataclass

from nutrition_analytics.domain.profile import (
    ActivityLevel,
    BiometricProfile,
    CalculatedMacros,
    Gender,
    GoalType,
    MacroTargets,
)
from nutrition_analytics.services.numbers import ratio, round_half_up

PROTEIN_KCAL_PER_G = 4
CARBS_KCAL_PER_G = 4
FAT_KCAL_PER_G = 9
CALORIE_TOLERANCE_PERCENT = 10.0

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}


class UnsupportedGoalError(ValueError):
    """Raised when a goal key has no adjustment rule."""

    def __init__(self, goal: str) -> None:
        super().__init__(f"Unsupported goal: {goal!r}")
        self.goal = goal


@dataclass(frozen=True)
class MacroSplit:
    """Share of calories assigned to each macro."""

    protein: float
    carbs: float
    fat: float


AGGRESSIVE_CUT = MacroSplit(protein=0.35, carbs=0.35, fat=0.30)
MODERATE_CUT = MacroSplit(protein=0.30, carbs=0.40, fat=0.30)
BALANCED = MacroSplit(protein=0.25, carbs=0.45, fat=0.30)
SURPLUS = MacroSplit(protein=0.25, carbs=0.50, fat=0.25)


@dataclass(frozen=True)
class GoalRule:
    """Calorie adjustment fraction and macro split for a goal."""

    adjustment: float
    split: MacroSplit


GOAL_RULES: dict[GoalType, GoalRule] = {
    GoalType.LOSE_20_25: GoalRule(-0.225, AGGRESSIVE_CUT),
    GoalType.LOSE_15_20: GoalRule(-0.175, AGGRESSIVE_CUT),
    GoalType.LOSE_10_15: GoalRule(-0.125, MODERATE_CUT),
    GoalType.LOSE_5_10: GoalRule(-0.075, BALANCED),
    GoalType.LOSE_3_5: GoalRule(-0.04, BALANCED),
    GoalType.LOSE_2_3: GoalRule(-0.025, BALANCED),
    GoalType.MAINTAIN: GoalRule(0.0, BALANCED),
    GoalType.GAIN_2_3: GoalRule(0.025, SURPLUS),
    GoalType.GAIN_3_5: GoalRule(0.04, SURPLUS),
    GoalType.GAIN_5_10: GoalRule(0.075, SURPLUS),
    GoalType.GAIN_10_15: GoalRule(0.125, SURPLUS),
    GoalType.GAIN_15_20: GoalRule(0.175, SURPLUS),
    GoalType.GAIN_20_25: GoalRule(0.225, SURPLUS),
    GoalType.LOSE_WEIGHT: GoalRule(-0.15, BALANCED),
    GoalType.GAIN_MUSCLE: GoalRule(0.15, SURPLUS),
    GoalType.LOSE_AGGRESSIVE: GoalRule(-0.25, AGGRESSIVE_CUT),
    GoalType.LOSE_MODERATE: GoalRule(-0.20, MODERATE_CUT),
    GoalType.LOSE_GRADUAL: GoalRule(-0.15, BALANCED),
    GoalType.LOSE_CONSERVATIVE: GoalRule(-0.10, BALANCED),
    GoalType.LOSE_MILD: GoalRule(-0.05, BALANCED),
    GoalType.GAIN_MILD: GoalRule(0.05, SURPLUS),
    GoalType.GAIN_CONSERVATIVE: GoalRule(0.10, SURPLUS),
    GoalType.GAIN_GRADUAL: GoalRule(0.15, SURPLUS),
    GoalType.GAIN_MODERATE: GoalRule(0.20, SURPLUS),
    GoalType.GAIN_AGGRESSIVE: GoalRule(0.25, SURPLUS),
}

_UNMAPPED_GOALS = set(GoalType) - set(GOAL_RULES)
if _UNMAPPED_GOALS:
    raise RuntimeError(f"Goals without a rule: {sorted(_UNMAPPED_GOALS)}")


@dataclass(frozen=True)
class CalorieCheck:
    """Comparison of stated calories against the macro-derived value."""

    valid: bool
    calculated_calories: int
    difference: float


def parse_goal(raw: str | GoalType) -> GoalType:
    """Resolve a stored goal key, failing loudly on unknown keys."""
    try:
        return GoalType(raw)
    except ValueError as exc:
        raise UnsupportedGoalError(str(raw)) from exc


def goal_rule(goal: str | GoalType) -> GoalRule:
    """Return the adjustment rule for a goal."""
    return GOAL_RULES[parse_goal(goal)]


def calculate_bmr(
    gender: Gender,
    weight_kg: float,
    height_cm: float,
    age: int,
    body_fat_percentage: float | None = None,
) -> float:
    """Return basal metabolic rate in kcal/day."""
    if body_fat_percentage is not None and body_fat_percentage > 0:
        lean_mass = weight_kg * (1 - body_fat_percentage / 100)
        return 370 + 21.6 * lean_mass
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    return base + 5 if gender == Gender.MALE else base - 161


def calculate_tdee(bmr: float, activity_level: ActivityLevel) -> float:
    """Scale BMR by the activity multiplier."""
    return bmr * ACTIVITY_MULTIPLIERS[ActivityLevel(activity_level)]


def calculate_adjusted_calories(tdee: float, goal: str | GoalType) -> int:
    """Apply the goal's deficit or surplus to TDEE."""
    return round_half_up(tdee * (1 + goal_rule(goal).adjustment))


def calculate_macro_split(calories: float, goal: str | GoalType) -> MacroTargets:
    """Split calories into whole-gram macros; grams are rounded independently."""
    split = goal_rule(goal).split
    return MacroTargets(
        protein=round_half_up(calories * split.protein / PROTEIN_KCAL_PER_G),
        carbs=round_half_up(calories * split.carbs / CARBS_KCAL_PER_G),
        fats=round_half_up(calories * split.fat / FAT_KCAL_PER_G),
        calories=round_half_up(calories),
    )


def calculate_macros(profile: BiometricProfile) -> CalculatedMacros:
    """Run the full BMR, TDEE and macro pipeline for a profile.

    Inputs are not validated; callers must reject non-positive values first.
    """
    bmr = calculate_bmr(
        profile.gender,
        profile.weight_kg,
        profile.height_cm,
        profile.age,
        profile.body_fat_percentage,
    )
    tdee = calculate_tdee(bmr, profile.activity_level)
    adjusted = calculate_adjusted_calories(tdee, profile.goal)
    split = calculate_macro_split(adjusted, profile.goal)
    return CalculatedMacros(
        bmr=round_half_up(bmr),
        tdee=round_half_up(tdee),
        adjusted_calories=adjusted,
        protein=int(split.protein),
        carbs=int(split.carbs),
        fats=int(split.fats),
        calories=int(split.calories),
    )


def calories_from_macros(protein: float, fats: float, carbs: float) -> int:
    """Return calories implied by macro grams."""
    return round_half_up(
        protein * PROTEIN_KCAL_PER_G + fats * FAT_KCAL_PER_G + carbs * CARBS_KCAL_PER_G
    )


def check_calorie_targets(
    targets: MacroTargets, tolerance_percent: float = CALORIE_TOLERANCE_PERCENT
) -> CalorieCheck:
    """Flag targets whose calories diverge from their macros beyond tolerance."""
    calculated = calories_from_macros(targets.protein, targets.fats, targets.carbs)
    difference = abs(targets.calories - calculated)
    percent_diff = ratio(difference, calculated) * 100
    return CalorieCheck(
        valid=percent_diff <= tolerance_percent,
        calculated_calories=calculated,
        difference=difference,
    )
