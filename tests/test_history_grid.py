"""Tests for gap-filled history grids."""

from datetime import date

from nutrition_analytics.domain.activity import DayProgress
from nutrition_analytics.services.history_grid import (
    DEFAULT_GRID_DAYS,
    build_history_grid,
)

TODAY = date(2024, 3, 10)


def test_grid_fills_missing_days() -> None:
    grid = build_history_grid(
        lambda day: DayProgress(completed=True, value=1, max_value=1)
        if day == TODAY
        else None,
        TODAY,
        days=10,
    )

    assert len(grid) == 10
    assert grid[0].day == date(2024, 3, 1)
    assert grid[-1].day == TODAY
    assert grid[-1].completed is True
    assert sum(1 for day in grid if day.is_today) == 1
    for cell in grid[:-1]:
        assert cell.completed is False
        assert cell.value == 0
        assert cell.max_value == 1


def test_grid_flags_weekends() -> None:
    grid = build_history_grid(lambda _day: None, TODAY, days=10)

    weekends = [cell.day for cell in grid if cell.is_weekend]

    assert weekends == [
        date(2024, 3, 2),
        date(2024, 3, 3),
        date(2024, 3, 9),
        date(2024, 3, 10),
    ]


def test_grid_is_ordered_and_defaults_to_hundred_days() -> None:
    grid = build_history_grid(lambda _day: None, TODAY)

    assert len(grid) == DEFAULT_GRID_DAYS
    assert [cell.day for cell in grid] == sorted(cell.day for cell in grid)


def test_grid_keeps_stored_values() -> None:
    grid = build_history_grid(
        lambda _day: DayProgress(completed=False, value=1200, max_value=2500),
        TODAY,
        days=3,
    )

    assert all(cell.value == 1200 and cell.max_value == 2500 for cell in grid)
