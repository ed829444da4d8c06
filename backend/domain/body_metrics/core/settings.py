"""Calculation settings - tunable constants of the body metrics engine."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .value_objects.activity_level import ALLOWED_ACTIVITY_FACTORS
from .value_objects.energy import CORE_BMR_PROTOCOLS, BMRProtocol


class CalculationSettings(BaseModel):
    """Immutable settings shared by every calculator.

    Defaults reproduce the clinical constants of the engine; deployments
    may override them through the environment (see
    ``infrastructure.config.get_calculation_settings``).

    Attributes:
        kcal_per_kg_body_weight: Energy content of 1 kg of body weight
        max_safe_deficit_kcal: Largest sustainable daily deficit
        conservative_deficit_kcal: Comfortable daily deficit
        min_effective_deficit_kcal: Below this a loss plan is noted as too slow
        max_safe_surplus_kcal: Largest sustainable daily surplus
        conservative_surplus_kcal: Comfortable daily surplus
        goal_adjustment_min_kcal: Lowest accepted calorie goal adjustment
        goal_adjustment_max_kcal: Highest accepted calorie goal adjustment
        whr_sex_specific: Use sex-specific WHR cut points
        energy_comparison_protocols: Protocols evaluated by default
        default_activity_factor: Factor used when none is supplied
        projection_uncertainty: Relative band around projected weight change
    """

    model_config = ConfigDict(frozen=True)

    kcal_per_kg_body_weight: float = Field(7700.0, gt=0)

    max_safe_deficit_kcal: float = Field(1000.0, gt=0)
    conservative_deficit_kcal: float = Field(500.0, gt=0)
    min_effective_deficit_kcal: float = Field(200.0, gt=0)
    max_safe_surplus_kcal: float = Field(500.0, gt=0)
    conservative_surplus_kcal: float = Field(300.0, gt=0)

    goal_adjustment_min_kcal: int = -1000
    goal_adjustment_max_kcal: int = 1000

    whr_sex_specific: bool = False
    energy_comparison_protocols: tuple[BMRProtocol, ...] = CORE_BMR_PROTOCOLS
    default_activity_factor: float = 1.55
    projection_uncertainty: float = Field(0.10, ge=0, lt=1)

    @field_validator("energy_comparison_protocols", mode="before")
    @classmethod
    def parse_protocols(cls, v: object) -> object:
        """Accept a comma-separated string of protocol ids."""
        if isinstance(v, str):
            return tuple(item.strip() for item in v.split(",") if item.strip())
        return v

    @field_validator("energy_comparison_protocols")
    @classmethod
    def protocols_not_empty(cls, v: tuple[BMRProtocol, ...]) -> tuple[BMRProtocol, ...]:
        if not v:
            raise ValueError("At least one comparison protocol is required")
        # Keep first occurrence order, drop duplicates
        return tuple(dict.fromkeys(v))

    @field_validator("default_activity_factor")
    @classmethod
    def factor_allowed(cls, v: float) -> float:
        if not any(math.isclose(v, allowed) for allowed in ALLOWED_ACTIVITY_FACTORS):
            raise ValueError(f"default_activity_factor must be one of {ALLOWED_ACTIVITY_FACTORS}")
        return v

    @model_validator(mode="after")
    def check_limits(self) -> CalculationSettings:
        if self.conservative_deficit_kcal > self.max_safe_deficit_kcal:
            raise ValueError("conservative_deficit_kcal cannot exceed max_safe_deficit_kcal")
        if self.conservative_surplus_kcal > self.max_safe_surplus_kcal:
            raise ValueError("conservative_surplus_kcal cannot exceed max_safe_surplus_kcal")
        if not self.goal_adjustment_min_kcal <= 0 <= self.goal_adjustment_max_kcal:
            raise ValueError("Goal adjustment range must contain 0")
        return self


DEFAULT_SETTINGS = CalculationSettings()
