"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tcgweekly.api.players import router as players_router
from tcgweekly.api.pokemon import router as pokemon_router
from tcgweekly.api.results import router as results_router
from tcgweekly.config import Settings
from tcgweekly.core.errors import TcgWeeklyError
from tcgweekly.db.engine import create_engine, create_tables

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: create the engine and any missing tables. Shutdown: dispose it."""
    settings: Settings = app.state.settings
    engine = create_engine(settings.database_url)
    await create_tables(engine)
    app.state.engine = engine
    if not settings.submission_password:
        logger.warning("submission_password_unset all mutating requests will be refused")

    yield

    await engine.dispose()


async def _tcgweekly_error_handler(request: Request, exc: TcgWeeklyError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "request_failed path=%s error=%s", request.url.path, exc.message, exc_info=exc
        )
    return JSONResponse(exc.to_payload(), status_code=exc.status_code)


async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = [
        {
            "field": str(err["loc"][-1]) if err.get("loc") else "general",
            "message": err.get("msg", "Invalid value"),
        }
        for err in exc.errors()
    ]
    return JSONResponse({"error": "Validation failed", "details": details}, status_code=400)


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unexpected_error path=%s", request.url.path)
    return JSONResponse({"error": "Internal server error"}, status_code=500)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the tcgweekly FastAPI application."""
    settings = settings or Settings()

    logging.basicConfig(
        level=getattr(logging, settings.tcgweekly_log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="tcgweekly",
        version="0.1.0",
        description="Weekly Pokémon TCG tournament results by player and deck archetype",
        docs_url="/docs" if settings.tcgweekly_env != "production" else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_exception_handler(TcgWeeklyError, _tcgweekly_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)

    app.include_router(players_router)
    app.include_router(results_router)
    app.include_router(pokemon_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok", "env": settings.tcgweekly_env}

    return app


app = create_app()
