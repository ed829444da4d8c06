from __future__ import annotations

# Standard library
import os
import logging as _logging
from contextlib import asynccontextmanager
from typing import Final, Any

# Third-party
from dotenv import load_dotenv
from fastapi import FastAPI
from strawberry.fastapi import GraphQLRouter

load_dotenv()

# Local application imports
from api.context import create_context  # noqa: E402
from api.schema import create_schema  # noqa: E402
from infrastructure.config import get_calculation_settings, get_log_level  # noqa: E402

# --- Basic logging configuration (minimal) ---
_LOG_LEVEL = get_log_level()
_logging.basicConfig(
    level=getattr(_logging, _LOG_LEVEL, _logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

# Versione letta da env (Docker build ARG -> ENV APP_VERSION)
APP_VERSION = os.getenv("APP_VERSION", "0.0.0-dev")

schema = create_schema()

# Explicit export per mypy/tests
__all__: list[str] = ["app", "schema"]


@asynccontextmanager
async def lifespan(_: FastAPI) -> Any:
    """Application lifecycle: validate settings at startup."""
    logger = _logging.getLogger("startup")

    settings = get_calculation_settings()
    logger.info(
        "lifespan.startup",
        extra={
            "whr_sex_specific": settings.whr_sex_specific,
            "energy_protocols": [p.value for p in settings.energy_comparison_protocols],
        },
    )
    yield
    logger.info("lifespan.shutdown", extra={"status": "cleanup"})


app = FastAPI(
    title="Body Metrics Engine",
    version=APP_VERSION,
    lifespan=lifespan,
)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/version")
async def version() -> dict[str, str]:
    return {"version": APP_VERSION}


def get_graphql_context() -> Any:
    """Create GraphQL context with all dependencies.

    Settings are loaded once per process; the context itself is built per
    request.
    """
    return create_context(settings=get_calculation_settings())


graphql_app: Final[GraphQLRouter[Any, Any]] = GraphQLRouter(
    schema, context_getter=get_graphql_context
)
app.include_router(graphql_app, prefix="/graphql")


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", "8000"))
    uvicorn.run(
        "app:app",
        host="0.0.0.0",
        port=port,
        reload=os.getenv("ENVIRONMENT") == "development",
    )
