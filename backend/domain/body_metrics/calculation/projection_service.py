"""ProjectionService - expected weight change for a daily energy balance."""

from typing import Optional

import numpy as np
import structlog

from ..core.settings import DEFAULT_SETTINGS, CalculationSettings
from ..core.value_objects.biometric_profile import positive_or_none
from ..core.value_objects.projection import WeightProjection

logger = structlog.get_logger(__name__)

WEEKS_PER_MONTH = 4.33


class ProjectionService:
    """Project weight change from a sustained daily energy balance.

    Weekly change = |balance| × 7 / kcal_per_kg, with a ±10% band to
    account for metabolic adaptation. The monthly figure is a point
    estimate (weekly × 4.33).
    """

    def __init__(self, settings: CalculationSettings = DEFAULT_SETTINGS):
        self._settings = settings

    def project(
        self,
        daily_energy_balance_kcal: float,
        current_weight_kg: Optional[float] = None,
        weeks: int = 12,
    ) -> WeightProjection:
        """Project weight change.

        Args:
            daily_energy_balance_kcal: Intake minus expenditure (negative
                is a deficit)
            current_weight_kg: Starting weight for the weekly trajectory
            weeks: Length of the trajectory

        Returns:
            WeightProjection: Rates and, when a weight is given, the
                projected weight at the end of each week

        Example:
            >>> projection = ProjectionService().project(-500)
            >>> round(projection.weekly_change_kg, 3)
            0.455
        """
        balance = float(daily_energy_balance_kcal)
        direction = int(np.sign(balance))
        weekly = abs(balance) * 7 / self._settings.kcal_per_kg_body_weight
        spread = weekly * self._settings.projection_uncertainty

        trajectory: tuple[float, ...] = ()
        start = positive_or_none(current_weight_kg)
        if start is not None and weeks > 0:
            steps = np.arange(1, weeks + 1, dtype=float)
            weights = start + direction * weekly * steps
            trajectory = tuple(float(w) for w in np.round(weights, 2))

        logger.debug(
            "weight_projection_computed",
            balance_kcal=balance,
            weekly_change_kg=round(weekly, 3),
            weeks=len(trajectory),
        )
        return WeightProjection(
            daily_energy_balance_kcal=balance,
            direction=direction,
            weekly_change_kg=weekly,
            weekly_change_min_kg=max(0.0, weekly - spread),
            weekly_change_max_kg=weekly + spread,
            monthly_change_kg=weekly * WEEKS_PER_MONTH,
            trajectory_kg=trajectory,
        )
