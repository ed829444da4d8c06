"""GraphQL context factory for dependency injection.

Resolvers access dependencies using ``info.context.get("name")``.
"""

from typing import Any, Optional

from fastapi import Request
from strawberry.fastapi import BaseContext

from application.body_metrics.orchestrators.assessment_orchestrator import (
    AssessmentOrchestrator,
)
from domain.body_metrics.core.settings import CalculationSettings


class GraphQLContext(BaseContext):
    """GraphQL context with all dependencies.

    Attributes:
        settings: Calculation settings loaded at startup
        assessment_orchestrator: Full assessment pipeline
        request: FastAPI request object
    """

    def __init__(
        self,
        settings: CalculationSettings,
        assessment_orchestrator: AssessmentOrchestrator,
        request: Optional[Request] = None,
    ) -> None:
        super().__init__()
        self.settings = settings
        self.assessment_orchestrator = assessment_orchestrator
        self.request = request

    def get(self, key: str) -> Any:
        """Get dependency by name (for resolver compatibility).

        Returns:
            Dependency instance or None if not found
        """
        return getattr(self, key, None)


def create_context(
    settings: CalculationSettings,
    request: Optional[Request] = None,
) -> GraphQLContext:
    """Create GraphQL context with all dependencies.

    Example:
        >>> from api.context import create_context
        >>> context = create_context(settings=CalculationSettings())
        >>> context.get("settings").kcal_per_kg_body_weight
        7700.0
    """
    return GraphQLContext(
        settings=settings,
        assessment_orchestrator=AssessmentOrchestrator(settings),
        request=request,
    )
