"""Ports for body metrics domain."""

from .calculators import (
    IBodyCompositionEstimator,
    IEnergyExpenditureCalculator,
    IGoalPlanner,
)

__all__ = [
    "IBodyCompositionEstimator",
    "IEnergyExpenditureCalculator",
    "IGoalPlanner",
]
