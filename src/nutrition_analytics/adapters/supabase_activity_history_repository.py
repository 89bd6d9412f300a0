"""Supabase repository for activity history."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from nutrition_analytics.domain.activity import ActivityHistoryRecord
from nutrition_analytics.services.activity import ActivityHistoryRepository


@dataclass
class SupabaseActivityHistoryRepository(ActivityHistoryRepository):
    """Supabase implementation keyed by (user_id, date, activity_type)."""

    client: Client

    def upsert_record(self, record: ActivityHistoryRecord) -> None:
        """Overwrite the completion row for the key."""
        self.client.table("activity_history").upsert(
            {
                "user_id": str(record.user_id),
                "date": record.day.isoformat(),
                "activity_type": record.activity_type,
                "completed": record.completed,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id,date,activity_type",
        ).execute()

    def list_records(
        self,
        user_id: UUID,
        start: date,
        end: date,
        activity_type: str | None = None,
    ) -> list[ActivityHistoryRecord]:
        """Return rows in an inclusive date range."""
        query = (
            self.client.table("activity_history")
            .select("user_id, date, activity_type, completed")
            .eq("user_id", str(user_id))
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
        )
        if activity_type is not None:
            query = query.eq("activity_type", activity_type)
        response = query.order("date", desc=False).execute()
        return [
            ActivityHistoryRecord(
                user_id=UUID(str(row["user_id"])),
                day=date.fromisoformat(str(row["date"])),
                activity_type=str(row["activity_type"]),
                completed=bool(row.get("completed")),
            )
            for row in response.data or []
        ]
