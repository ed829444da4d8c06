"""GraphQL schema factory for the body metrics backend.

Usage:
    from api.schema import create_schema
    schema = create_schema()
"""

import datetime

import strawberry

from api.queries import BodyMetricsQueries


@strawberry.type
class Query(BodyMetricsQueries):
    @strawberry.field
    def server_time(self) -> str:
        return datetime.datetime.now(datetime.timezone.utc).isoformat()

    @strawberry.field
    def health(self) -> str:
        return "ok"


def create_schema() -> strawberry.Schema:
    """Create Strawberry schema with all body metrics resolvers.

    Returns:
        Configured Strawberry Schema instance
    """
    return strawberry.Schema(query=Query)
