"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import date
from uuid import UUID

import pytest

from nutrition_analytics.config import Settings
from nutrition_analytics.containers import AppContainer
from nutrition_analytics.domain.activity import ActivityHistoryRecord
from nutrition_analytics.domain.nutrition import DailyRecord, FoodCatalogEntry, Macros
from nutrition_analytics.domain.profile import BiometricProfile, MacroTargets
from nutrition_analytics.domain.water import WaterIntakeRecord
from nutrition_analytics.services.activity import (
    ActivityHistoryRepository,
    ActivityHistoryService,
)
from nutrition_analytics.services.cache import InMemoryCache
from nutrition_analytics.services.catalog import (
    FoodCatalogRepository,
    FoodCatalogService,
)
from nutrition_analytics.services.nutrition_goals import (
    NutritionGoalRepository,
    NutritionGoalService,
)
from nutrition_analytics.services.plans import DailyPlanRepository, DailyPlanService
from nutrition_analytics.services.water import WaterRepository, WaterService


@dataclass
class InMemoryFoodCatalogRepository(FoodCatalogRepository):
    foods: list[FoodCatalogEntry] = field(default_factory=list)
    list_calls: int = 0

    def list_foods(self) -> list[FoodCatalogEntry]:
        self.list_calls += 1
        return list(self.foods)

    def upsert_food(self, entry: FoodCatalogEntry) -> None:
        self.foods = [food for food in self.foods if food.name != entry.name]
        self.foods.append(entry)


@dataclass
class InMemoryNutritionGoalRepository(NutritionGoalRepository):
    profiles: dict[UUID, BiometricProfile] = field(default_factory=dict)
    targets: dict[UUID, MacroTargets] = field(default_factory=dict)
    user_set: dict[UUID, bool] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> BiometricProfile | None:
        return self.profiles.get(user_id)

    def save_profile(self, user_id: UUID, profile: BiometricProfile) -> None:
        self.profiles[user_id] = profile

    def get_targets(self, user_id: UUID) -> MacroTargets | None:
        return self.targets.get(user_id)

    def save_targets(
        self, user_id: UUID, targets: MacroTargets, *, user_set: bool
    ) -> None:
        self.targets[user_id] = targets
        self.user_set[user_id] = user_set


@dataclass
class InMemoryActivityHistoryRepository(ActivityHistoryRepository):
    records: dict[tuple[UUID, date, str], ActivityHistoryRecord] = field(
        default_factory=dict
    )

    def upsert_record(self, record: ActivityHistoryRecord) -> None:
        self.records[(record.user_id, record.day, record.activity_type)] = record

    def list_records(
        self,
        user_id: UUID,
        start: date,
        end: date,
        activity_type: str | None = None,
    ) -> list[ActivityHistoryRecord]:
        return sorted(
            (
                record
                for record in self.records.values()
                if record.user_id == user_id
                and start <= record.day <= end
                and (activity_type is None or record.activity_type == activity_type)
            ),
            key=lambda record: record.day,
        )


@dataclass
class InMemoryWaterRepository(WaterRepository):
    records: dict[tuple[UUID, date], WaterIntakeRecord] = field(default_factory=dict)
    targets: dict[UUID, float] = field(default_factory=dict)
    conflicts: int = 0
    write_attempts: int = 0

    def get_record(self, user_id: UUID, day: date) -> WaterIntakeRecord | None:
        return self.records.get((user_id, day))

    def list_records(
        self, user_id: UUID, start: date, end: date
    ) -> list[WaterIntakeRecord]:
        return sorted(
            (
                record
                for (owner, day), record in self.records.items()
                if owner == user_id and start <= day <= end
            ),
            key=lambda record: record.day,
        )

    def create_record(self, record: WaterIntakeRecord) -> bool:
        self.write_attempts += 1
        if self._conflict():
            return False
        key = (record.user_id, record.day)
        if key in self.records:
            return False
        self.records[key] = record
        return True

    def update_record(self, record: WaterIntakeRecord, expected_version: int) -> bool:
        self.write_attempts += 1
        if self._conflict():
            return False
        key = (record.user_id, record.day)
        current = self.records.get(key)
        if current is None or current.version != expected_version:
            return False
        self.records[key] = record
        return True

    def get_target(self, user_id: UUID) -> float | None:
        return self.targets.get(user_id)

    def _conflict(self) -> bool:
        """Simulate another writer winning the race."""
        if self.conflicts <= 0:
            return False
        self.conflicts -= 1
        return True

    def bump_version(self, user_id: UUID, day: date) -> None:
        current = self.records[(user_id, day)]
        self.records[(user_id, day)] = replace(current, version=current.version + 1)


@dataclass
class InMemoryDailyPlanRepository(DailyPlanRepository):
    plans: dict[tuple[UUID, date], DailyRecord] = field(default_factory=dict)

    def get_plan(self, user_id: UUID, day: date) -> DailyRecord | None:
        return self.plans.get((user_id, day))

    def save_plan(self, user_id: UUID, record: DailyRecord) -> None:
        self.plans[(user_id, record.day)] = record

    def list_plans(self, user_id: UUID, start: date, end: date) -> list[DailyRecord]:
        return sorted(
            (
                record
                for (owner, day), record in self.plans.items()
                if owner == user_id and start <= day <= end
            ),
            key=lambda record: record.day,
        )


def sample_catalog() -> list[FoodCatalogEntry]:
    return [
        FoodCatalogEntry(
            name="Egg",
            nutrition=Macros(protein=6, fats=5, carbs=0.5, calories=70),
            cost=0.5,
            is_unit_food=True,
        ),
        FoodCatalogEntry(
            name="Chicken",
            nutrition=Macros(protein=31, fats=3.6, carbs=0, calories=165),
            cost=0.4,
        ),
        FoodCatalogEntry(
            name="Rice",
            nutrition=Macros(protein=2.7, fats=0.3, carbs=28, calories=130),
        ),
    ]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
    )


@pytest.fixture
def catalog_repository() -> InMemoryFoodCatalogRepository:
    return InMemoryFoodCatalogRepository(foods=sample_catalog())


@pytest.fixture
def goal_repository() -> InMemoryNutritionGoalRepository:
    return InMemoryNutritionGoalRepository()


@pytest.fixture
def activity_repository() -> InMemoryActivityHistoryRepository:
    return InMemoryActivityHistoryRepository()


@pytest.fixture
def water_repository() -> InMemoryWaterRepository:
    return InMemoryWaterRepository()


@pytest.fixture
def plan_repository() -> InMemoryDailyPlanRepository:
    return InMemoryDailyPlanRepository()


@pytest.fixture
def catalog_service(
    catalog_repository: InMemoryFoodCatalogRepository,
) -> FoodCatalogService:
    return FoodCatalogService(repository=catalog_repository, cache=InMemoryCache())


@pytest.fixture
def activity_service(
    activity_repository: InMemoryActivityHistoryRepository,
) -> ActivityHistoryService:
    return ActivityHistoryService(activity_repository)


@pytest.fixture
def plan_service(
    plan_repository: InMemoryDailyPlanRepository,
    catalog_service: FoodCatalogService,
    activity_service: ActivityHistoryService,
) -> DailyPlanService:
    return DailyPlanService(
        repository=plan_repository,
        catalog_service=catalog_service,
        activity_service=activity_service,
    )


@pytest.fixture
def water_service(water_repository: InMemoryWaterRepository) -> WaterService:
    return WaterService(water_repository)


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    catalog_service: FoodCatalogService,
    goal_repository: InMemoryNutritionGoalRepository,
    activity_service: ActivityHistoryService,
    plan_service: DailyPlanService,
    water_service: WaterService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        catalog_service=catalog_service,
        nutrition_goal_service=NutritionGoalService(goal_repository),
        activity_service=activity_service,
        plan_service=plan_service,
        water_service=water_service,
    )
