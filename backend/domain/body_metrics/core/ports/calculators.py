"""Calculator ports - interfaces for body composition and energy calculations."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence, Union

from ..value_objects.biometric_profile import BiometricProfile
from ..value_objects.composition import (
    CompositionProtocol,
    CompositionResult,
    NotComputable,
)
from ..value_objects.energy import BMRProtocol, FormulaBreakdown, ProtocolEstimate
from ..value_objects.goal_plan import GoalPlan
from ..value_objects.measurements import SkinfoldSet


class IBodyCompositionEstimator(ABC):
    """Port for body fat estimation.

    Estimates body fat from skinfolds (via body density and the Siri
    equation) or takes it directly from bioimpedance.
    """

    @abstractmethod
    def estimate(
        self,
        protocol: CompositionProtocol,
        profile: BiometricProfile,
        skinfolds: Optional[SkinfoldSet] = None,
        bioimpedance_body_fat_percent: Optional[float] = None,
    ) -> Union[CompositionResult, NotComputable]:
        """Estimate body composition with a single protocol.

        Args:
            protocol: Protocol to use
            profile: Biometric inputs (weight, sex, age)
            skinfolds: Caliper readings, required by skinfold protocols
            bioimpedance_body_fat_percent: Measured body fat, required by
                the bioimpedance protocol

        Returns:
            CompositionResult, or NotComputable when inputs are missing or
            the result falls outside (0, 100)
        """
        pass


class IEnergyExpenditureCalculator(ABC):
    """Port for BMR calculation across protocols."""

    @abstractmethod
    def compute_bmr(
        self,
        protocol: BMRProtocol,
        profile: BiometricProfile,
        lean_mass_kg: Optional[float] = None,
    ) -> Optional[float]:
        """Compute BMR with one protocol.

        Returns:
            Optional[float]: BMR in kcal/day, None when inputs are missing
        """
        pass

    @abstractmethod
    def compare_protocols(
        self,
        profile: BiometricProfile,
        lean_mass_kg: Optional[float] = None,
        protocols: Optional[Sequence[BMRProtocol]] = None,
    ) -> list[ProtocolEstimate]:
        """Evaluate every protocol of the comparison set.

        Returns:
            list[ProtocolEstimate]: One estimate per protocol, in order
        """
        pass

    @abstractmethod
    def explain_bmr(
        self,
        protocol: BMRProtocol,
        profile: BiometricProfile,
        lean_mass_kg: Optional[float] = None,
    ) -> Optional[FormulaBreakdown]:
        """Render one protocol step by step.

        Returns:
            Optional[FormulaBreakdown]: Breakdown, None when unavailable
        """
        pass


class IGoalPlanner(ABC):
    """Port for weight goal viability assessment."""

    @abstractmethod
    def plan(
        self,
        initial_weight_kg: float,
        target_weight_kg: float,
        start_date: object,
        target_date: object,
        get_kcal: Optional[float] = None,
    ) -> GoalPlan:
        """Assess a weight goal.

        Returns:
            GoalPlan: Score, warnings and deadline estimates
        """
        pass
