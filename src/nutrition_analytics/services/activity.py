"""Activity completion history."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol
from uuid import UUID

from nutrition_analytics.domain.activity import (
    ActivityDay,
    ActivityHistoryRecord,
    DayProgress,
)
from nutrition_analytics.services.history_grid import (
    DEFAULT_GRID_DAYS,
    build_history_grid,
)
from nutrition_analytics.services.streaks import (
    MAX_STREAK_LOOKBACK_DAYS,
    current_streak,
    longest_streak,
)

DECEMBER = 12


class ActivityHistoryRepository(Protocol):
    """Persistence interface for activity history rows."""

    def upsert_record(self, record: ActivityHistoryRecord) -> None:
        """Create or overwrite the row for (user, day, activity type)."""

    def list_records(
        self,
        user_id: UUID,
        start: date,
        end: date,
        activity_type: str | None = None,
    ) -> list[ActivityHistoryRecord]:
        """Return rows with ``start <= day <= end``."""


@dataclass(frozen=True)
class ActivityStreaks:
    """Current and longest completion streaks."""

    current: int
    longest: int


@dataclass
class ActivityHistoryService:
    """Service for completion toggles, grids and streaks."""

    repository: ActivityHistoryRepository

    def record_completion(
        self, user_id: UUID, day: date, activity_type: str, completed: bool
    ) -> ActivityHistoryRecord:
        """Store the completion flag for one activity on one day."""
        record = ActivityHistoryRecord(
            user_id=user_id,
            day=day,
            activity_type=activity_type,
            completed=completed,
        )
        self.repository.upsert_record(record)
        return record

    def get_grid(
        self,
        user_id: UUID,
        activity_type: str,
        today: date,
        days: int = DEFAULT_GRID_DAYS,
    ) -> list[ActivityDay]:
        """Return a gap-filled grid ending today."""
        start = today - timedelta(days=max(days, 1) - 1)
        by_day = self._completion_by_day(user_id, activity_type, start, today)

        def record_for(day: date) -> DayProgress | None:
            completed = by_day.get(day)
            if completed is None:
                return None
            return DayProgress(completed=completed, value=int(completed), max_value=1)

        return build_history_grid(record_for, today, days)

    def get_streaks(
        self, user_id: UUID, activity_type: str, today: date
    ) -> ActivityStreaks:
        """Return current and longest streaks within the lookback window."""
        start = today - timedelta(days=MAX_STREAK_LOOKBACK_DAYS)
        by_day = self._completion_by_day(user_id, activity_type, start, today)
        return ActivityStreaks(
            current=current_streak(by_day.get, today),
            longest=longest_streak(by_day.get, start, today),
        )

    def list_for_month(
        self, user_id: UUID, year: int, month: int
    ) -> list[ActivityHistoryRecord]:
        """Return all activity rows in a calendar month."""
        start = date(year, month, 1)
        if month == DECEMBER:
            end = date(year + 1, 1, 1) - timedelta(days=1)
        else:
            end = date(year, month + 1, 1) - timedelta(days=1)
        return self.repository.list_records(user_id, start, end)

    def list_for_day(self, user_id: UUID, day: date) -> list[ActivityHistoryRecord]:
        """Return all activity rows for a single day."""
        return self.repository.list_records(user_id, day, day)

    def _completion_by_day(
        self, user_id: UUID, activity_type: str, start: date, end: date
    ) -> dict[date, bool]:
        records = self.repository.list_records(user_id, start, end, activity_type)
        return {record.day: record.completed for record in records}
