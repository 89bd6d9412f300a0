"""Supabase repository for daily plans."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from nutrition_analytics.domain.nutrition import (
    DailyRecord,
    ExternalNutrition,
    FoodSelection,
    Macros,
    TimeslotPlan,
)
from nutrition_analytics.services.plans import DailyPlanRepository

_COLUMNS = "date, timeslots, total_macros, completion_status"


@dataclass
class SupabaseDailyPlanRepository(DailyPlanRepository):
    """Supabase implementation keyed by (user_id, date)."""

    client: Client

    def get_plan(self, user_id: UUID, day: date) -> DailyRecord | None:
        """Return the plan row for a day."""
        response = (
            self.client.table("daily_plans")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def save_plan(self, user_id: UUID, record: DailyRecord) -> None:
        """Upsert the plan row for ``record.day``."""
        response = (
            self.client.table("daily_plans")
            .upsert(
                {
                    "user_id": str(user_id),
                    "date": record.day.isoformat(),
                    "timeslots": {
                        timeslot_id: _dump_timeslot(plan)
                        for timeslot_id, plan in record.timeslots.items()
                    },
                    "total_macros": _dump_macros(record.total_macros),
                    "completion_status": dict(record.completion),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="user_id,date",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save daily plan")

    def list_plans(self, user_id: UUID, start: date, end: date) -> list[DailyRecord]:
        """Return plans in an inclusive date range."""
        response = (
            self.client.table("daily_plans")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _dump_macros(macros: Macros) -> dict[str, float]:
    return {
        "protein": macros.protein,
        "fats": macros.fats,
        "carbs": macros.carbs,
        "calories": macros.calories,
    }


def _dump_timeslot(plan: TimeslotPlan) -> dict[str, object]:
    return {
        "selectedFoods": [
            {"name": food.name, "amount": food.amount} for food in plan.selected_foods
        ],
        "externalNutrition": _dump_macros(plan.external_nutrition),
    }


def _parse_macros(raw: object) -> dict[str, float]:
    data = raw if isinstance(raw, dict) else {}
    return {
        key: float(data.get(key) or 0.0)
        for key in ("protein", "fats", "carbs", "calories")
    }


def _parse_timeslot(raw: object) -> TimeslotPlan:
    data = raw if isinstance(raw, dict) else {}
    foods = [
        FoodSelection(
            name=str(food.get("name") or ""),
            amount=float(food.get("amount") or 0.0),
        )
        for food in data.get("selectedFoods") or []
        if isinstance(food, dict)
    ]
    return TimeslotPlan(
        selected_foods=foods,
        external_nutrition=ExternalNutrition(
            **_parse_macros(data.get("externalNutrition"))
        ),
    )


def _parse_row(row: dict[str, object]) -> DailyRecord:
    timeslots = row.get("timeslots") or {}
    completion = row.get("completion_status") or {}
    return DailyRecord(
        day=date.fromisoformat(str(row["date"])),
        timeslots={
            str(timeslot_id): _parse_timeslot(raw)
            for timeslot_id, raw in timeslots.items()
        },
        total_macros=Macros(**_parse_macros(row.get("total_macros"))),
        completion={str(key): bool(value) for key, value in completion.items()},
    )
