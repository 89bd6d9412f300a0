"""Profile and macro target management."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutrition_analytics.domain.profile import (
    BiometricProfile,
    CalculatedMacros,
    MacroTargets,
)
from nutrition_analytics.services.goals import (
    CalorieCheck,
    calculate_macros,
    check_calorie_targets,
)

_logger = logging.getLogger(__name__)


class NutritionGoalRepository(Protocol):
    """Persistence interface for profiles and targets."""

    def get_profile(self, user_id: UUID) -> BiometricProfile | None:
        """Return the stored biometric profile."""

    def save_profile(self, user_id: UUID, profile: BiometricProfile) -> None:
        """Create or replace the biometric profile."""

    def get_targets(self, user_id: UUID) -> MacroTargets | None:
        """Return the stored macro targets."""

    def save_targets(
        self, user_id: UUID, targets: MacroTargets, *, user_set: bool
    ) -> None:
        """Create or replace the macro targets."""


@dataclass(frozen=True)
class TargetUpdate:
    """Saved targets with the calorie identity check."""

    targets: MacroTargets
    check: CalorieCheck


@dataclass
class NutritionGoalService:
    """Service that derives and stores macro targets."""

    repository: NutritionGoalRepository

    def get_profile(self, user_id: UUID) -> BiometricProfile | None:
        """Return the user's profile, if any."""
        return self.repository.get_profile(user_id)

    def save_profile(
        self, user_id: UUID, profile: BiometricProfile
    ) -> CalculatedMacros:
        """Persist a profile and replace targets with derived ones."""
        calculated = calculate_macros(profile)
        self.repository.save_profile(user_id, profile)
        self.repository.save_targets(user_id, calculated.to_targets(), user_set=False)
        return calculated

    def recalculate(self, user_id: UUID) -> CalculatedMacros | None:
        """Re-derive targets from the stored profile."""
        profile = self.repository.get_profile(user_id)
        if profile is None:
            return None
        calculated = calculate_macros(profile)
        self.repository.save_targets(user_id, calculated.to_targets(), user_set=False)
        return calculated

    def get_targets(self, user_id: UUID) -> MacroTargets | None:
        """Return stored targets."""
        return self.repository.get_targets(user_id)

    def set_targets(self, user_id: UUID, targets: MacroTargets) -> TargetUpdate:
        """Store user-set targets; calorie divergence is flagged, not rejected."""
        check = check_calorie_targets(targets)
        if not check.valid:
            _logger.warning(
                "Calorie target diverges from macros: user=%s stated=%s calculated=%s",
                user_id,
                targets.calories,
                check.calculated_calories,
            )
        self.repository.save_targets(user_id, targets, user_set=True)
        return TargetUpdate(targets=targets, check=check)
