"""Configuration utilities for infrastructure layer."""

import os
from functools import lru_cache
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from domain.body_metrics.core.exceptions.domain_errors import InvalidSettingsError
from domain.body_metrics.core.settings import CalculationSettings

# Environment variable -> CalculationSettings field
_ENV_FIELDS = {
    "BODY_METRICS_KCAL_PER_KG": "kcal_per_kg_body_weight",
    "BODY_METRICS_MAX_SAFE_DEFICIT_KCAL": "max_safe_deficit_kcal",
    "BODY_METRICS_CONSERVATIVE_DEFICIT_KCAL": "conservative_deficit_kcal",
    "BODY_METRICS_MIN_EFFECTIVE_DEFICIT_KCAL": "min_effective_deficit_kcal",
    "BODY_METRICS_MAX_SAFE_SURPLUS_KCAL": "max_safe_surplus_kcal",
    "BODY_METRICS_CONSERVATIVE_SURPLUS_KCAL": "conservative_surplus_kcal",
    "BODY_METRICS_GOAL_ADJUSTMENT_MIN_KCAL": "goal_adjustment_min_kcal",
    "BODY_METRICS_GOAL_ADJUSTMENT_MAX_KCAL": "goal_adjustment_max_kcal",
    "BODY_METRICS_WHR_SEX_SPECIFIC": "whr_sex_specific",
    "BODY_METRICS_ENERGY_PROTOCOLS": "energy_comparison_protocols",
    "BODY_METRICS_DEFAULT_ACTIVITY_FACTOR": "default_activity_factor",
    "BODY_METRICS_PROJECTION_UNCERTAINTY": "projection_uncertainty",
}


def load_calculation_settings(environ: Optional[Mapping[str, str]] = None) -> CalculationSettings:
    """
    Build CalculationSettings from environment variables.

    Only variables that are set (and not blank) override the defaults.

    Example .env:
        BODY_METRICS_WHR_SEX_SPECIFIC=true
        BODY_METRICS_ENERGY_PROTOCOLS=mifflin_st_jeor,harris_benedict,katch_mcardle

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Validated settings

    Raises:
        InvalidSettingsError: If a value cannot be parsed or the combination
            is inconsistent
    """
    environ = os.environ if environ is None else environ
    overrides: dict[str, Any] = {}
    for variable, field_name in _ENV_FIELDS.items():
        value = environ.get(variable)
        if value is not None and value.strip():
            overrides[field_name] = value.strip()

    try:
        return CalculationSettings(**overrides)
    except ValidationError as e:
        raise InvalidSettingsError(f"Invalid body metrics settings: {e}") from e


@lru_cache(maxsize=1)
def get_calculation_settings() -> CalculationSettings:
    """
    Get process-wide calculation settings.

    Loaded once from the environment; call ``get_calculation_settings.cache_clear()``
    after changing the environment (tests do).
    """
    return load_calculation_settings()


def get_log_level() -> str:
    """
    Get log level.

    Returns:
        Log level from LOG_LEVEL env var, defaults to "INFO"
    """
    return os.getenv("LOG_LEVEL", "INFO").upper()
