"""Weight projection value objects."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class WeightProjection:
    """Expected weight change for a sustained daily energy balance.

    Rates are magnitudes; ``direction`` tells whether weight goes down
    (-1), up (+1) or stays (0).

    Attributes:
        daily_energy_balance_kcal: Intake minus expenditure, per day
        direction: Sign of the expected change
        weekly_change_kg: Expected weekly change
        weekly_change_min_kg: Lower bound (-10%)
        weekly_change_max_kg: Upper bound (+10%)
        monthly_change_kg: Expected monthly change
        trajectory_kg: Projected weight at the end of each week
    """

    daily_energy_balance_kcal: float
    direction: int
    weekly_change_kg: float
    weekly_change_min_kg: float
    weekly_change_max_kg: float
    monthly_change_kg: float
    trajectory_kg: tuple[float, ...] = field(default_factory=tuple)
