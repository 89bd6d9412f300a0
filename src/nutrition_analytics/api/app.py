"""FastAPI application factory."""

import logging
import math
from dataclasses import asdict
from datetime import date
from uuid import UUID

from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse

from nutrition_analytics.api.models import (
    CompletionPayload,
    PlanPayload,
    ProfilePayload,
    RecipePayload,
    ShoppingListPayload,
    TargetsPayload,
    WaterIntakePayload,
    WaterTargetPayload,
)
from nutrition_analytics.app_logging import configure_logging
from nutrition_analytics.config import local_today
from nutrition_analytics.containers import AppContainer
from nutrition_analytics.services.goals import UnsupportedGoalError, calculate_macros
from nutrition_analytics.services.recipes import (
    calculate_recipe,
    scale_to_period,
    shopping_list_totals,
)
from nutrition_analytics.services.water import ConcurrentUpdateError


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    @app.exception_handler(UnsupportedGoalError)
    async def unsupported_goal(
        request: Request, exc: UnsupportedGoalError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc)},
        )

    @app.exception_handler(ConcurrentUpdateError)
    async def concurrent_update(
        request: Request, exc: ConcurrentUpdateError
    ) -> JSONResponse:
        logger.warning("Write conflict on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": str(exc)},
        )

    @app.exception_handler(RuntimeError)
    async def storage_failure(request: Request, exc: RuntimeError) -> JSONResponse:
        logger.exception("Request failed: %s", request.url.path)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Storage operation failed"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/macros/calculate")
    async def calculate(payload: ProfilePayload) -> dict[str, object]:
        """Calculate BMR, TDEE and macro targets without storing anything."""
        return asdict(calculate_macros(payload.to_domain()))

    @app.post("/recipes/calculate")
    async def calculate_recipe_totals(
        payload: RecipePayload, request: Request
    ) -> dict[str, object]:
        """Price a recipe from the catalog and split it into servings."""
        state_container: AppContainer = request.app.state.container
        summary = calculate_recipe(
            payload.to_domain(),
            payload.servings,
            state_container.catalog_service.get_catalog(),
        )
        return asdict(summary)

    @app.post("/shopping-list/calculate")
    async def calculate_shopping_list(
        payload: ShoppingListPayload, request: Request
    ) -> dict[str, object]:
        """Scale daily shopping quantities to the requested period."""
        state_container: AppContainer = request.app.state.container
        daily = shopping_list_totals(
            payload.to_domain(), state_container.catalog_service.get_catalog()
        )
        return {
            "period": payload.period,
            "daily": asdict(daily),
            "total": asdict(scale_to_period(daily, payload.period)),
        }

    @app.get("/users/{user_id}/profile")
    async def get_profile(user_id: UUID, request: Request) -> dict[str, object]:
        """Return the stored biometric profile."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.nutrition_goal_service.get_profile(user_id)
        if profile is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return asdict(profile)

    @app.put("/users/{user_id}/profile")
    async def save_profile(
        user_id: UUID, payload: ProfilePayload, request: Request
    ) -> dict[str, object]:
        """Store a profile and derive targets from it."""
        state_container: AppContainer = request.app.state.container
        calculated = state_container.nutrition_goal_service.save_profile(
            user_id, payload.to_domain()
        )
        return asdict(calculated)

    @app.get("/users/{user_id}/targets")
    async def get_targets(user_id: UUID, request: Request) -> dict[str, object]:
        """Return stored macro targets."""
        state_container: AppContainer = request.app.state.container
        targets = state_container.nutrition_goal_service.get_targets(user_id)
        if targets is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return asdict(targets)

    @app.put("/users/{user_id}/targets")
    async def set_targets(
        user_id: UUID, payload: TargetsPayload, request: Request
    ) -> dict[str, object]:
        """Store user-set targets and report the calorie identity check."""
        state_container: AppContainer = request.app.state.container
        update = state_container.nutrition_goal_service.set_targets(
            user_id, payload.to_domain()
        )
        return _json_safe(asdict(update))

    @app.post("/users/{user_id}/targets/recalculate")
    async def recalculate_targets(
        user_id: UUID, request: Request
    ) -> dict[str, object]:
        """Re-derive targets from the stored profile."""
        state_container: AppContainer = request.app.state.container
        calculated = state_container.nutrition_goal_service.recalculate(user_id)
        if calculated is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found"
            )
        return asdict(calculated)

    @app.get("/users/{user_id}/plans")
    async def plan_period(
        user_id: UUID, start: date, end: date, request: Request
    ) -> dict[str, object]:
        """Return totals and per-day averages across a date range."""
        if end < start:
            raise HTTPException(
                status_code=422,
                detail="end must not be before start",
            )
        state_container: AppContainer = request.app.state.container
        period = state_container.plan_service.get_period(user_id, start, end)
        return asdict(period)

    @app.get("/users/{user_id}/plans/{day}")
    async def load_plan(
        user_id: UUID, day: date, request: Request
    ) -> dict[str, object]:
        """Return the stored plan for a day."""
        state_container: AppContainer = request.app.state.container
        record = state_container.plan_service.load_plan(user_id, day)
        if record is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return asdict(record)

    @app.put("/users/{user_id}/plans/{day}")
    async def save_plan(
        user_id: UUID, day: date, payload: PlanPayload, request: Request
    ) -> dict[str, object]:
        """Store a day's time-slots with freshly computed totals."""
        state_container: AppContainer = request.app.state.container
        record = state_container.plan_service.save_plan(
            user_id,
            day,
            {
                timeslot_id: timeslot.to_domain()
                for timeslot_id, timeslot in payload.timeslots.items()
            },
            payload.completion,
        )
        return asdict(record)

    @app.get("/users/{user_id}/plans/{day}/summary")
    async def day_summary(
        user_id: UUID, day: date, request: Request
    ) -> dict[str, object]:
        """Return totals, cost and target progress for a day."""
        state_container: AppContainer = request.app.state.container
        targets = state_container.nutrition_goal_service.get_targets(user_id)
        summary = state_container.plan_service.get_day_summary(user_id, day, targets)
        if summary is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return _json_safe(asdict(summary))

    @app.put("/users/{user_id}/plans/{day}/completion/{activity_type}")
    async def update_completion(
        user_id: UUID,
        day: date,
        activity_type: str,
        payload: CompletionPayload,
        request: Request,
    ) -> dict[str, object]:
        """Toggle completion for one activity on one day."""
        state_container: AppContainer = request.app.state.container
        record = state_container.plan_service.update_completion(
            user_id, day, activity_type, payload.completed
        )
        return {"day": record.day, "completion": record.completion}

    @app.get("/users/{user_id}/activity")
    async def list_activity(
        user_id: UUID,
        request: Request,
        day: date | None = None,
        year: int | None = None,
        month: int | None = Query(default=None, ge=1, le=12),
    ) -> dict[str, object]:
        """Return activity rows for one day or one calendar month."""
        state_container: AppContainer = request.app.state.container
        if day is not None:
            records = state_container.activity_service.list_for_day(user_id, day)
        elif year is not None and month is not None:
            records = state_container.activity_service.list_for_month(
                user_id, year, month
            )
        else:
            raise HTTPException(
                status_code=422,
                detail="Pass either day or year and month",
            )
        return {"records": [asdict(record) for record in records]}

    @app.get("/users/{user_id}/activity/{activity_type}/grid")
    async def activity_grid(
        user_id: UUID,
        activity_type: str,
        request: Request,
        days: int | None = None,
    ) -> dict[str, object]:
        """Return a gap-filled completion grid ending today."""
        state_container: AppContainer = request.app.state.container
        settings = state_container.settings
        grid = state_container.activity_service.get_grid(
            user_id,
            activity_type,
            local_today(settings.timezone),
            _grid_days(days, settings.activity_grid_days),
        )
        return {"days": [asdict(day) for day in grid]}

    @app.get("/users/{user_id}/activity/{activity_type}/streak")
    async def activity_streak(
        user_id: UUID, activity_type: str, request: Request
    ) -> dict[str, object]:
        """Return current and longest completion streaks."""
        state_container: AppContainer = request.app.state.container
        streaks = state_container.activity_service.get_streaks(
            user_id, activity_type, local_today(state_container.settings.timezone)
        )
        return asdict(streaks)

    @app.post("/users/{user_id}/water")
    async def add_water(
        user_id: UUID, payload: WaterIntakePayload, request: Request
    ) -> dict[str, object]:
        """Add a water entry for today."""
        state_container: AppContainer = request.app.state.container
        record = state_container.water_service.add_intake(
            user_id,
            payload.amount,
            local_today(state_container.settings.timezone),
            payload.source,
        )
        return asdict(record)

    @app.put("/users/{user_id}/water/target")
    async def update_water_target(
        user_id: UUID, payload: WaterTargetPayload, request: Request
    ) -> dict[str, object]:
        """Change today's water target."""
        state_container: AppContainer = request.app.state.container
        record = state_container.water_service.update_daily_target(
            user_id, local_today(state_container.settings.timezone), payload.target
        )
        if record is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No water record for today",
            )
        return asdict(record)

    @app.get("/users/{user_id}/water/stats")
    async def water_stats(user_id: UUID, request: Request) -> dict[str, object]:
        """Return today's progress, streaks and monthly completion."""
        state_container: AppContainer = request.app.state.container
        stats = state_container.water_service.get_stats(
            user_id, local_today(state_container.settings.timezone)
        )
        return _json_safe(asdict(stats))

    @app.get("/users/{user_id}/water/grid")
    async def water_grid(
        user_id: UUID, request: Request, days: int | None = None
    ) -> dict[str, object]:
        """Return a gap-filled water goal grid ending today."""
        state_container: AppContainer = request.app.state.container
        settings = state_container.settings
        grid = state_container.water_service.get_activity_grid(
            user_id,
            local_today(settings.timezone),
            _grid_days(days, settings.activity_grid_days),
        )
        return {"days": [asdict(day) for day in grid]}

    return app


def _grid_days(requested: int | None, default: int) -> int:
    if requested is None:
        return default
    if requested < 1:
        raise HTTPException(
            status_code=422,
            detail="days must be positive",
        )
    return requested


def _json_safe(value: object) -> object:
    """Replace inf and nan, which JSON cannot carry, with None."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: _json_safe(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_json_safe(item) for item in value]
    return value
