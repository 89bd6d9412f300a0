"""Daily meal plans, completion flags and day summaries."""

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Protocol
from uuid import UUID

from nutrition_analytics.domain.nutrition import (
    ZERO_MACROS,
    DailyCost,
    DailyRecord,
    Macros,
    TimeslotPlan,
)
from nutrition_analytics.domain.profile import MacroTargets
from nutrition_analytics.services.activity import ActivityHistoryService
from nutrition_analytics.services.catalog import FoodCatalogService
from nutrition_analytics.services.costs import daily_cost
from nutrition_analytics.services.macros import (
    MacroProgress,
    PeriodTotals,
    daily_macros,
    macro_progress,
    period_totals,
)

_logger = logging.getLogger(__name__)


class DailyPlanRepository(Protocol):
    """Persistence interface for daily plans."""

    def get_plan(self, user_id: UUID, day: date) -> DailyRecord | None:
        """Return the plan for a day, if any."""

    def save_plan(self, user_id: UUID, record: DailyRecord) -> None:
        """Create or replace the plan for ``record.day``."""

    def list_plans(self, user_id: UUID, start: date, end: date) -> list[DailyRecord]:
        """Return plans with ``start <= day <= end`` ordered by day."""


@dataclass(frozen=True)
class DaySummary:
    """Totals, cost and progress for one day."""

    day: date
    totals: Macros
    cost: DailyCost
    progress: MacroProgress | None


@dataclass
class DailyPlanService:
    """Service for saving plans and deriving their totals."""

    repository: DailyPlanRepository
    catalog_service: FoodCatalogService
    activity_service: ActivityHistoryService

    def save_plan(
        self,
        user_id: UUID,
        day: date,
        timeslots: dict[str, TimeslotPlan],
        completion: dict[str, bool] | None = None,
    ) -> DailyRecord:
        """Persist a day's time-slots with freshly aggregated totals.

        Completion flags are explicit; when omitted the stored flags are kept.
        """
        if completion is None:
            existing = self.repository.get_plan(user_id, day)
            completion = dict(existing.completion) if existing else {}
        record = DailyRecord(
            day=day,
            timeslots=timeslots,
            total_macros=daily_macros(timeslots, self.catalog_service.get_catalog()),
            completion=completion,
        )
        self.repository.save_plan(user_id, record)
        _logger.info(
            "Saved plan: user=%s day=%s timeslots=%s calories=%.0f",
            user_id,
            day,
            len(timeslots),
            record.total_macros.calories,
        )
        return record

    def load_plan(self, user_id: UUID, day: date) -> DailyRecord | None:
        """Return the stored plan for a day."""
        return self.repository.get_plan(user_id, day)

    def update_completion(
        self, user_id: UUID, day: date, activity_type: str, completed: bool
    ) -> DailyRecord:
        """Set one completion flag and mirror it into activity history.

        The history row is written first so a failed write leaves the plan
        unchanged.
        """
        self.activity_service.record_completion(user_id, day, activity_type, completed)
        existing = self.repository.get_plan(user_id, day) or DailyRecord(
            day=day, timeslots={}, total_macros=ZERO_MACROS
        )
        record = replace(
            existing, completion={**existing.completion, activity_type: completed}
        )
        self.repository.save_plan(user_id, record)
        return record

    def get_day_summary(
        self, user_id: UUID, day: date, targets: MacroTargets | None
    ) -> DaySummary | None:
        """Return totals, cost and target progress for a stored plan."""
        record = self.repository.get_plan(user_id, day)
        if record is None:
            return None
        catalog = self.catalog_service.get_catalog()
        return DaySummary(
            day=day,
            totals=record.total_macros,
            cost=daily_cost(record.timeslots, catalog),
            progress=(
                macro_progress(record.total_macros, targets) if targets else None
            ),
        )

    def get_period(self, user_id: UUID, start: date, end: date) -> PeriodTotals:
        """Return totals and averages for plans in a date range."""
        records = self.repository.list_plans(user_id, start, end)
        return period_totals(records, (end - start).days + 1)
