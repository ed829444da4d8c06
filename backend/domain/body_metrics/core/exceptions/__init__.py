"""Domain exceptions for body metrics."""

from .domain_errors import (
    BodyMetricsDomainError,
    GoalAdjustmentOutOfRangeError,
    InvalidActivityFactorError,
    InvalidBiometricDataError,
    InvalidDateRangeError,
    InvalidGoalError,
    InvalidMeasurementError,
    InvalidSettingsError,
)

__all__ = [
    "BodyMetricsDomainError",
    "InvalidBiometricDataError",
    "InvalidMeasurementError",
    "InvalidActivityFactorError",
    "GoalAdjustmentOutOfRangeError",
    "InvalidGoalError",
    "InvalidDateRangeError",
    "InvalidSettingsError",
]
