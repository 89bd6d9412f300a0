"""Consecutive-day streaks over sparse daily records."""

from collections.abc import Callable, Mapping
from datetime import date, timedelta

from nutrition_analytics.domain.activity import StreakResult

MAX_STREAK_LOOKBACK_DAYS = 365

AchievedLookup = Callable[[date], bool | None]


def lookup_from_mapping(achieved_by_day: Mapping[date, bool]) -> AchievedLookup:
    """Adapt a day -> achieved mapping; missing days return None."""
    return achieved_by_day.get


def compute_streak(
    achieved: AchievedLookup,
    start: date,
    max_lookback: int = MAX_STREAK_LOOKBACK_DAYS,
) -> StreakResult:
    """Count achieved days ending at ``start``, walking backward.

    The walk stops at the first day that is not achieved or has no record,
    or after ``max_lookback`` prior days, in which case the result is
    marked truncated.
    """
    if achieved(start) is not True:
        return StreakResult(length=0)
    streak = 1
    day = start
    for _ in range(max_lookback):
        day -= timedelta(days=1)
        if achieved(day) is not True:
            return StreakResult(length=streak)
        streak += 1
    return StreakResult(length=streak, truncated=True)


def current_streak(
    achieved: AchievedLookup,
    start: date,
    max_lookback: int = MAX_STREAK_LOOKBACK_DAYS,
) -> int:
    """Length of the streak ending at ``start``."""
    return compute_streak(achieved, start, max_lookback).length


def longest_streak(achieved: AchievedLookup, first: date, last: date) -> int:
    """Longest run of achieved days within ``first``..``last`` inclusive."""
    best = 0
    running = 0
    day = first
    while day <= last:
        if achieved(day) is True:
            running += 1
            best = max(best, running)
        else:
            running = 0
        day += timedelta(days=1)
    return best
