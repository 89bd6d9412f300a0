"""Supabase repository for biometric profiles and macro targets."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from nutrition_analytics.domain.profile import (
    ActivityLevel,
    BiometricProfile,
    Gender,
    MacroTargets,
)
from nutrition_analytics.services.goals import parse_goal
from nutrition_analytics.services.nutrition_goals import NutritionGoalRepository


@dataclass
class SupabaseNutritionGoalRepository(NutritionGoalRepository):
    """Supabase implementation for profiles and targets."""

    client: Client

    def get_profile(self, user_id: UUID) -> BiometricProfile | None:
        """Return the stored profile for a user."""
        response = (
            self.client.table("user_profiles")
            .select(
                "gender, age, height_cm, weight_kg, activity_level, goal, "
                "body_fat_percentage"
            )
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        body_fat = row.get("body_fat_percentage")
        return BiometricProfile(
            gender=Gender(row["gender"]),
            age=int(row["age"]),
            height_cm=float(row["height_cm"]),
            weight_kg=float(row["weight_kg"]),
            activity_level=ActivityLevel(row["activity_level"]),
            goal=parse_goal(str(row["goal"])),
            body_fat_percentage=float(body_fat) if body_fat is not None else None,
        )

    def save_profile(self, user_id: UUID, profile: BiometricProfile) -> None:
        """Upsert the profile row."""
        self.client.table("user_profiles").upsert(
            {
                "user_id": str(user_id),
                "gender": profile.gender.value,
                "age": profile.age,
                "height_cm": profile.height_cm,
                "weight_kg": profile.weight_kg,
                "activity_level": profile.activity_level.value,
                "goal": profile.goal.value,
                "body_fat_percentage": profile.body_fat_percentage,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id",
        ).execute()

    def get_targets(self, user_id: UUID) -> MacroTargets | None:
        """Return the stored macro targets."""
        response = (
            self.client.table("macro_targets")
            .select("protein, fats, carbs, calories")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return MacroTargets(
            protein=float(row.get("protein") or 0.0),
            fats=float(row.get("fats") or 0.0),
            carbs=float(row.get("carbs") or 0.0),
            calories=float(row.get("calories") or 0.0),
        )

    def save_targets(
        self, user_id: UUID, targets: MacroTargets, *, user_set: bool
    ) -> None:
        """Upsert the targets row."""
        self.client.table("macro_targets").upsert(
            {
                "user_id": str(user_id),
                "protein": targets.protein,
                "fats": targets.fats,
                "carbs": targets.carbs,
                "calories": targets.calories,
                "user_set": user_set,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id",
        ).execute()
