"""Tests for streak tracking."""

from datetime import date, timedelta

from nutrition_analytics.services.streaks import (
    MAX_STREAK_LOOKBACK_DAYS,
    compute_streak,
    current_streak,
    longest_streak,
    lookup_from_mapping,
)

TODAY = date(2024, 5, 20)


def _history(flags: list[bool]) -> dict[date, bool]:
    """Map flags, oldest first, onto days ending today."""
    start = TODAY - timedelta(days=len(flags) - 1)
    return {start + timedelta(days=index): flag for index, flag in enumerate(flags)}


def test_current_streak_stops_at_first_miss() -> None:
    achieved = lookup_from_mapping(_history([True, True, False, True, True, True]))

    assert current_streak(achieved, TODAY) == 3


def test_no_records_means_no_streak() -> None:
    assert current_streak(lambda _day: None, TODAY) == 0


def test_streak_is_zero_when_today_not_achieved() -> None:
    achieved = lookup_from_mapping(_history([True, True, True, False]))

    assert current_streak(achieved, TODAY) == 0


def test_missing_day_breaks_streak() -> None:
    history = _history([True, True, True])
    del history[TODAY - timedelta(days=1)]

    assert current_streak(lookup_from_mapping(history), TODAY) == 1


def test_streak_is_capped_and_marked_truncated() -> None:
    result = compute_streak(lambda _day: True, TODAY)

    assert result.length == MAX_STREAK_LOOKBACK_DAYS + 1
    assert result.truncated is True


def test_streak_below_cap_is_not_truncated() -> None:
    achieved = lookup_from_mapping(_history([False, True, True]))
    result = compute_streak(achieved, TODAY, max_lookback=5)

    assert result.length == 2
    assert result.truncated is False


def test_custom_lookback_cap() -> None:
    result = compute_streak(lambda _day: True, TODAY, max_lookback=5)

    assert result.length == 6
    assert result.truncated is True


def test_longest_streak_over_window() -> None:
    flags = [True, True, True, True, False, True, True, False, True]
    achieved = lookup_from_mapping(_history(flags))
    start = TODAY - timedelta(days=len(flags) - 1)

    assert longest_streak(achieved, start, TODAY) == 4


def test_longest_streak_of_empty_window() -> None:
    assert longest_streak(lambda _day: None, TODAY - timedelta(days=30), TODAY) == 0
