"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from nutrition_analytics.adapters.supabase_activity_history_repository import (
    SupabaseActivityHistoryRepository,
)
from nutrition_analytics.adapters.supabase_daily_plan_repository import (
    SupabaseDailyPlanRepository,
)
from nutrition_analytics.adapters.supabase_food_catalog_repository import (
    SupabaseFoodCatalogRepository,
)
from nutrition_analytics.adapters.supabase_nutrition_goal_repository import (
    SupabaseNutritionGoalRepository,
)
from nutrition_analytics.adapters.supabase_water_repository import (
    SupabaseWaterRepository,
)
from nutrition_analytics.config import Settings
from nutrition_analytics.services.activity import ActivityHistoryService
from nutrition_analytics.services.cache import InMemoryCache
from nutrition_analytics.services.catalog import FoodCatalogService
from nutrition_analytics.services.nutrition_goals import NutritionGoalService
from nutrition_analytics.services.plans import DailyPlanService
from nutrition_analytics.services.water import WaterService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog_service: FoodCatalogService
    nutrition_goal_service: NutritionGoalService
    activity_service: ActivityHistoryService
    plan_service: DailyPlanService
    water_service: WaterService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    catalog_service = FoodCatalogService(
        repository=SupabaseFoodCatalogRepository(supabase_client),
        cache=InMemoryCache(),
        ttl_seconds=resolved_settings.catalog_ttl_seconds,
    )
    activity_service = ActivityHistoryService(
        SupabaseActivityHistoryRepository(supabase_client)
    )
    return AppContainer(
        settings=resolved_settings,
        catalog_service=catalog_service,
        nutrition_goal_service=NutritionGoalService(
            SupabaseNutritionGoalRepository(supabase_client)
        ),
        activity_service=activity_service,
        plan_service=DailyPlanService(
            repository=SupabaseDailyPlanRepository(supabase_client),
            catalog_service=catalog_service,
            activity_service=activity_service,
        ),
        water_service=WaterService(
            repository=SupabaseWaterRepository(supabase_client),
            default_target_ml=resolved_settings.default_water_target_ml,
            max_retries=resolved_settings.water_write_retries,
        ),
    )
