"""Fixed-window, gap-filled daily grids for calendar and heatmap views."""

from collections.abc import Callable
from datetime import date, timedelta

from nutrition_analytics.domain.activity import ActivityDay, DayProgress

DEFAULT_GRID_DAYS = 100
SATURDAY = 5

MISSING_DAY = DayProgress(completed=False, value=0, max_value=1)


def build_history_grid(
    record_for: Callable[[date], DayProgress | None],
    today: date,
    days: int = DEFAULT_GRID_DAYS,
) -> list[ActivityDay]:
    """Return ``days`` entries from ``today - (days - 1)`` through ``today``."""
    grid: list[ActivityDay] = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        progress = record_for(day) or MISSING_DAY
        grid.append(
            ActivityDay(
                day=day,
                completed=progress.completed,
                value=progress.value,
                max_value=progress.max_value,
                is_today=day == today,
                is_weekend=day.weekday() >= SATURDAY,
            )
        )
    return grid
