"""Tests for calorie and macro target calculation."""

import pytest

from nutrition_analytics.domain.profile import (
    ActivityLevel,
    BiometricProfile,
    Gender,
    GoalType,
    MacroTargets,
)
from nutrition_analytics.services.goals import (
    GOAL_RULES,
    UnsupportedGoalError,
    calculate_adjusted_calories,
    calculate_bmr,
    calculate_macro_split,
    calculate_macros,
    calculate_tdee,
    calories_from_macros,
    check_calorie_targets,
    goal_rule,
    parse_goal,
)
from nutrition_analytics.services.numbers import round_half_up


def _profile(**overrides) -> BiometricProfile:  # type: ignore[no-untyped-def]
    values = {
        "gender": Gender.MALE,
        "age": 30,
        "height_cm": 175,
        "weight_kg": 70,
        "activity_level": ActivityLevel.MODERATE,
        "goal": GoalType.MAINTAIN,
    }
    values.update(overrides)
    return BiometricProfile(**values)


def test_calculate_macros_for_maintenance_profile() -> None:
    result = calculate_macros(_profile())

    assert result.bmr == 1649
    assert result.tdee == 2556
    assert result.adjusted_calories == 2556
    assert result.calories == 2556
    assert result.protein == 160
    assert result.carbs == 288
    assert result.fats == 85


def test_maintain_keeps_rounded_tdee() -> None:
    for level in ActivityLevel:
        bmr = calculate_bmr(Gender.FEMALE, 62, 168, 41)
        tdee = calculate_tdee(bmr, level)

        assert tdee >= bmr
        assert calculate_adjusted_calories(tdee, GoalType.MAINTAIN) == round_half_up(
            tdee
        )


def test_female_bmr_uses_lower_offset() -> None:
    assert calculate_bmr(Gender.FEMALE, 60, 165, 25) == pytest.approx(1345.25)
    assert calculate_bmr(Gender.MALE, 60, 165, 25) == pytest.approx(1511.25)


def test_body_fat_switches_to_lean_mass_formula() -> None:
    bmr = calculate_bmr(Gender.MALE, 80, 180, 35, body_fat_percentage=20)

    assert bmr == pytest.approx(370 + 21.6 * 64)


def test_zero_body_fat_falls_back_to_mifflin() -> None:
    with_zero = calculate_bmr(Gender.MALE, 80, 180, 35, body_fat_percentage=0)

    assert with_zero == calculate_bmr(Gender.MALE, 80, 180, 35)


def test_deficit_goal_uses_moderate_cut_split() -> None:
    calories = calculate_adjusted_calories(2000, GoalType.LOSE_10_15)
    split = calculate_macro_split(calories, GoalType.LOSE_10_15)

    assert calories == 1750
    assert split == MacroTargets(protein=131, fats=58, carbs=175, calories=1750)


def test_every_goal_has_a_rule() -> None:
    assert set(GOAL_RULES) == set(GoalType)


def test_legacy_goal_keys_resolve() -> None:
    assert goal_rule("lose_weight").adjustment == pytest.approx(-0.15)
    assert goal_rule("gain_aggressive").adjustment == pytest.approx(0.25)
    assert parse_goal("gain_muscle") is GoalType.GAIN_MUSCLE


def test_unknown_goal_raises() -> None:
    with pytest.raises(UnsupportedGoalError) as excinfo:
        calculate_adjusted_calories(2000, "bulk_forever")

    assert excinfo.value.goal == "bulk_forever"
    assert isinstance(excinfo.value, ValueError)


def test_macro_split_is_non_negative_for_all_goals() -> None:
    for goal in GoalType:
        split = calculate_macro_split(1800, goal)

        assert split.protein >= 0
        assert split.carbs >= 0
        assert split.fats >= 0


def test_calories_from_macros() -> None:
    assert calories_from_macros(protein=150, fats=70, carbs=200) == 2030


def test_check_calorie_targets_within_tolerance() -> None:
    check = check_calorie_targets(
        MacroTargets(protein=150, fats=70, carbs=200, calories=2000)
    )

    assert check.valid is True
    assert check.calculated_calories == 2030
    assert check.difference == 30


def test_check_calorie_targets_flags_divergence() -> None:
    check = check_calorie_targets(
        MacroTargets(protein=150, fats=70, carbs=200, calories=3000)
    )

    assert check.valid is False
    assert check.difference == 970


def test_check_calorie_targets_with_no_macros_is_invalid() -> None:
    check = check_calorie_targets(MacroTargets(protein=0, fats=0, carbs=0, calories=0))

    assert check.valid is False
    assert check.calculated_calories == 0
