"""Orchestrators coordinating body metrics services."""

from .assessment_orchestrator import Assessment, AssessmentOrchestrator, WeightGoal

__all__ = ["Assessment", "AssessmentOrchestrator", "WeightGoal"]
