"""Activity history domain models."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID


@dataclass(frozen=True)
class ActivityHistoryRecord:
    """Completion of one activity type on one day."""

    user_id: UUID
    day: date
    activity_type: str
    completed: bool


@dataclass(frozen=True)
class DayProgress:
    """Completion value for a single day, as stored."""

    completed: bool
    value: float
    max_value: float


@dataclass(frozen=True)
class ActivityDay:
    """One cell of a gap-filled activity grid."""

    day: date
    completed: bool
    value: float
    max_value: float
    is_today: bool
    is_weekend: bool


@dataclass(frozen=True)
class StreakResult:
    """Current streak length and whether the lookback cap cut it short."""

    length: int
    truncated: bool = False
