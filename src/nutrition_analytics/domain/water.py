"""Water intake domain models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID


class WaterSource(StrEnum):
    """How a water entry was added."""

    MANUAL = "manual"
    PRESET_300ML = "preset-300ml"
    PRESET_700ML = "preset-700ml"
    PRESET_1L = "preset-1L"


@dataclass(frozen=True)
class WaterEntry:
    """Single water intake entry."""

    amount: float
    timestamp: datetime
    source: WaterSource = WaterSource.MANUAL


@dataclass(frozen=True)
class WaterIntakeRecord:
    """Daily water intake for a user.

    ``version`` is bumped on every write and guards compare-and-swap updates.
    """

    user_id: UUID
    day: date
    total_amount: float
    target_amount: float
    entries: list[WaterEntry] = field(default_factory=list)
    goal_achieved: bool = False
    streak_count: int = 0
    version: int = 0


@dataclass(frozen=True)
class WaterStats:
    """Water summary for dashboards."""

    today_amount: float
    today_target: float
    today_progress: float
    current_streak: int
    longest_streak: int
    monthly_completed: int
    monthly_total: int
    monthly_percentage: float
