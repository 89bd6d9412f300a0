"""Supabase repository for water intake."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from nutrition_analytics.domain.water import (
    WaterEntry,
    WaterIntakeRecord,
    WaterSource,
)
from nutrition_analytics.services.water import WaterRepository

_COLUMNS = (
    "user_id, date, total_amount, target_amount, entries, goal_achieved, "
    "streak_count, version"
)


@dataclass
class SupabaseWaterRepository(WaterRepository):
    """Supabase implementation with version-checked updates."""

    client: Client

    def get_record(self, user_id: UUID, day: date) -> WaterIntakeRecord | None:
        """Return the record for a day."""
        response = (
            self.client.table("water_intake")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def list_records(
        self, user_id: UUID, start: date, end: date
    ) -> list[WaterIntakeRecord]:
        """Return records in an inclusive date range."""
        response = (
            self.client.table("water_intake")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def create_record(self, record: WaterIntakeRecord) -> bool:
        """Insert unless a row already exists for (user_id, date)."""
        response = (
            self.client.table("water_intake")
            .upsert(
                _dump_record(record),
                on_conflict="user_id,date",
                ignore_duplicates=True,
            )
            .execute()
        )
        return bool(response.data)

    def update_record(self, record: WaterIntakeRecord, expected_version: int) -> bool:
        """Update only if the stored version matches ``expected_version``."""
        response = (
            self.client.table("water_intake")
            .update(_dump_record(record))
            .eq("user_id", str(record.user_id))
            .eq("date", record.day.isoformat())
            .eq("version", expected_version)
            .execute()
        )
        return bool(response.data)

    def get_target(self, user_id: UUID) -> float | None:
        """Return the user's water goal in ml."""
        response = (
            self.client.table("user_preferences")
            .select("water_target_ml")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        target = response.data[0].get("water_target_ml")
        return float(target) if target else None


def _dump_record(record: WaterIntakeRecord) -> dict[str, object]:
    return {
        "user_id": str(record.user_id),
        "date": record.day.isoformat(),
        "total_amount": record.total_amount,
        "target_amount": record.target_amount,
        "entries": [
            {
                "amount": entry.amount,
                "timestamp": entry.timestamp.isoformat(),
                "source": entry.source.value,
            }
            for entry in record.entries
        ],
        "goal_achieved": record.goal_achieved,
        "streak_count": record.streak_count,
        "version": record.version,
        "updated_at": datetime.now(tz=UTC).isoformat(),
    }


def _parse_entry(raw: dict[str, object]) -> WaterEntry:
    timestamp_raw = raw.get("timestamp")
    timestamp = (
        datetime.fromisoformat(timestamp_raw)
        if isinstance(timestamp_raw, str) and timestamp_raw
        else datetime.min.replace(tzinfo=UTC)
    )
    source_raw = raw.get("source") or WaterSource.MANUAL.value
    try:
        source = WaterSource(source_raw)
    except ValueError:
        source = WaterSource.MANUAL
    return WaterEntry(
        amount=float(raw.get("amount") or 0.0),
        timestamp=timestamp,
        source=source,
    )


def _parse_row(row: dict[str, object]) -> WaterIntakeRecord:
    return WaterIntakeRecord(
        user_id=UUID(str(row["user_id"])),
        day=date.fromisoformat(str(row["date"])),
        total_amount=float(row.get("total_amount") or 0.0),
        target_amount=float(row.get("target_amount") or 0.0),
        entries=[
            _parse_entry(entry)
            for entry in row.get("entries") or []
            if isinstance(entry, dict)
        ],
        goal_achieved=bool(row.get("goal_achieved")),
        streak_count=int(row.get("streak_count") or 0),
        version=int(row.get("version") or 0),
    )
