"""Water intake tracking with streaks and optimistic writes."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID

from nutrition_analytics.domain.activity import ActivityDay, DayProgress
from nutrition_analytics.domain.water import (
    WaterEntry,
    WaterIntakeRecord,
    WaterSource,
    WaterStats,
)
from nutrition_analytics.services.history_grid import (
    DEFAULT_GRID_DAYS,
    build_history_grid,
)
from nutrition_analytics.services.numbers import ratio
from nutrition_analytics.services.streaks import (
    MAX_STREAK_LOOKBACK_DAYS,
    current_streak,
    longest_streak,
)

_logger = logging.getLogger(__name__)


class ConcurrentUpdateError(RuntimeError):
    """Raised when a record keeps changing underneath a write."""


class WaterRepository(Protocol):
    """Persistence interface for daily water records."""

    def get_record(self, user_id: UUID, day: date) -> WaterIntakeRecord | None:
        """Return the record for a day, if any."""

    def list_records(
        self, user_id: UUID, start: date, end: date
    ) -> list[WaterIntakeRecord]:
        """Return records with ``start <= day <= end`` ordered by day."""

    def create_record(self, record: WaterIntakeRecord) -> bool:
        """Insert a new record; False when one already exists for the day."""

    def update_record(self, record: WaterIntakeRecord, expected_version: int) -> bool:
        """Replace a record only if its stored version still matches."""

    def get_target(self, user_id: UUID) -> float | None:
        """Return the user's preferred daily target in ml."""


@dataclass
class WaterService:
    """Service for daily water intake."""

    repository: WaterRepository
    default_target_ml: float = 2500
    max_retries: int = 3

    def get_day(self, user_id: UUID, day: date) -> WaterIntakeRecord:
        """Return the stored record or an empty one for the day."""
        return self.repository.get_record(user_id, day) or self._empty(user_id, day)

    def add_intake(
        self,
        user_id: UUID,
        amount: float,
        today: date,
        source: WaterSource = WaterSource.MANUAL,
        now: datetime | None = None,
    ) -> WaterIntakeRecord:
        """Append an entry and refresh the running total, goal and streak."""
        entry = WaterEntry(
            amount=amount,
            timestamp=now or datetime.now(tz=UTC),
            source=source,
        )

        def apply(base: WaterIntakeRecord) -> WaterIntakeRecord:
            total = base.total_amount + amount
            return replace(
                base,
                total_amount=total,
                entries=[*base.entries, entry],
                goal_achieved=total >= base.target_amount,
            )

        record = self._write(user_id, today, apply, create_missing=True)
        if record is None:
            raise ConcurrentUpdateError("Water record vanished during update")
        return record

    def update_daily_target(
        self, user_id: UUID, today: date, target: float
    ) -> WaterIntakeRecord | None:
        """Change today's target; returns None when there is no record yet."""

        def apply(base: WaterIntakeRecord) -> WaterIntakeRecord:
            return replace(
                base,
                target_amount=target,
                goal_achieved=base.total_amount >= target,
            )

        return self._write(user_id, today, apply, create_missing=False)

    def get_stats(self, user_id: UUID, today: date) -> WaterStats:
        """Return today's progress, streaks and monthly completion."""
        start = today - timedelta(days=MAX_STREAK_LOOKBACK_DAYS)
        records = self.repository.list_records(user_id, start, today)
        by_day = {record.day: record for record in records}
        achieved = {record.day: record.goal_achieved for record in records}
        today_record = by_day.get(today) or self._empty(user_id, today)
        monthly = [
            record
            for record in records
            if record.day.year == today.year and record.day.month == today.month
        ]
        monthly_completed = sum(1 for record in monthly if record.goal_achieved)
        return WaterStats(
            today_amount=today_record.total_amount,
            today_target=today_record.target_amount,
            today_progress=min(
                ratio(today_record.total_amount, today_record.target_amount) * 100,
                100.0,
            ),
            current_streak=current_streak(achieved.get, today),
            longest_streak=longest_streak(achieved.get, start, today),
            monthly_completed=monthly_completed,
            monthly_total=len(monthly),
            monthly_percentage=(
                monthly_completed / len(monthly) * 100 if monthly else 0.0
            ),
        )

    def get_activity_grid(
        self, user_id: UUID, today: date, days: int = DEFAULT_GRID_DAYS
    ) -> list[ActivityDay]:
        """Return a gap-filled grid of goal completion ending today."""
        start = today - timedelta(days=max(days, 1) - 1)
        by_day = {
            record.day: record
            for record in self.repository.list_records(user_id, start, today)
        }

        def record_for(day: date) -> DayProgress | None:
            record = by_day.get(day)
            if record is None:
                return None
            return DayProgress(
                completed=record.goal_achieved,
                value=record.total_amount,
                max_value=record.target_amount,
            )

        return build_history_grid(record_for, today, days)

    def _write(
        self,
        user_id: UUID,
        day: date,
        apply: Callable[[WaterIntakeRecord], WaterIntakeRecord],
        *,
        create_missing: bool,
    ) -> WaterIntakeRecord | None:
        """Read-modify-write with compare-and-swap and bounded retries."""
        for attempt in range(self.max_retries + 1):
            current = self.repository.get_record(user_id, day)
            if current is None and not create_missing:
                return None
            base = current or self._empty(user_id, day)
            updated = apply(base)
            updated = replace(
                updated,
                streak_count=self._streak(user_id, day, updated.goal_achieved),
                version=base.version + 1,
            )
            if current is None:
                written = self.repository.create_record(updated)
            else:
                written = self.repository.update_record(
                    updated, expected_version=current.version
                )
            if written:
                return updated
            _logger.warning(
                "Water write conflict: user=%s day=%s attempt=%s/%s",
                user_id,
                day,
                attempt + 1,
                self.max_retries + 1,
            )
        raise ConcurrentUpdateError(
            f"Failed to update water intake for {day.isoformat()} "
            f"after {self.max_retries + 1} attempts"
        )

    def _streak(self, user_id: UUID, day: date, achieved_today: bool) -> int:
        if not achieved_today:
            return 0
        start = day - timedelta(days=MAX_STREAK_LOOKBACK_DAYS)
        history = self.repository.list_records(
            user_id, start, day - timedelta(days=1)
        )
        achieved = {record.day: record.goal_achieved for record in history}
        achieved[day] = True
        return current_streak(achieved.get, day)

    def _empty(self, user_id: UUID, day: date) -> WaterIntakeRecord:
        target = self.repository.get_target(user_id) or self.default_target_ml
        return WaterIntakeRecord(
            user_id=user_id,
            day=day,
            total_amount=0,
            target_amount=target,
        )
