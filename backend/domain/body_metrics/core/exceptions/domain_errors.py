"""Domain exceptions for body metrics calculations.

Missing inputs are never an error here: calculators return ``None``,
``NotComputable`` or ``available=False`` instead. These exceptions are
reserved for genuinely invalid combinations.
"""


class BodyMetricsDomainError(Exception):
    """Base exception for body metrics domain errors."""

    pass


class InvalidBiometricDataError(BodyMetricsDomainError, ValueError):
    """Raised when a biometric value has the wrong type or is not finite."""

    pass


class InvalidMeasurementError(BodyMetricsDomainError, ValueError):
    """Raised when a skinfold or circumference set is malformed."""

    def __init__(self, site: str, reason: str):
        super().__init__(f"Invalid measurement '{site}': {reason}")
        self.site = site
        self.reason = reason


class InvalidActivityFactorError(BodyMetricsDomainError, ValueError):
    """Raised when an activity factor is not one of the allowed multipliers."""

    def __init__(self, factor: object, allowed: tuple[float, ...]):
        allowed_str = ", ".join(str(value) for value in allowed)
        super().__init__(f"Activity factor must be one of [{allowed_str}], got {factor}")
        self.factor = factor
        self.allowed = allowed


class GoalAdjustmentOutOfRangeError(BodyMetricsDomainError, ValueError):
    """Raised when a calorie goal adjustment is not an integer in range."""

    def __init__(self, adjustment: object, minimum: int, maximum: int):
        super().__init__(
            f"Goal adjustment must be an integer in [{minimum}, {maximum}] kcal, "
            f"got {adjustment}"
        )
        self.adjustment = adjustment
        self.minimum = minimum
        self.maximum = maximum


class InvalidGoalError(BodyMetricsDomainError, ValueError):
    """Raised when goal planner inputs are invalid."""

    pass


class InvalidDateRangeError(InvalidGoalError):
    """Raised when the goal target date is not after the start date."""

    def __init__(self, start_date: object, target_date: object):
        super().__init__(
            f"Target date must be after start date "
            f"(start={start_date}, target={target_date})"
        )
        self.start_date = start_date
        self.target_date = target_date


class InvalidSettingsError(BodyMetricsDomainError, ValueError):
    """Raised when calculation settings cannot be loaded."""

    pass
