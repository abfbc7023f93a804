"""
FastAPI application for the activation service.

create_app() builds the application around a Settings instance: the
lifespan opens the connection pool those settings describe, brings the
schema up to date and reports the activation policy in effect. The
module-level ``app`` is what uvicorn serves.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import psycopg
from fastapi import Depends, FastAPI, Response, status
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import run_migrations
from src.api.dependencies import get_pool
from src.api.v1 import router as v1_router
from src.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

tags_metadata = [
    {
        "name": "v1",
        "description": "Account Activation API v1 - Re-send and complete account activations",
    },
]


def _log_activation_policy(settings: Settings) -> None:
    logger.info(
        "Activation codes: %d characters, valid for %d minutes, %d generation attempts",
        settings.activation_code_length,
        settings.activation_lifetime_minutes,
        settings.activation_max_code_attempts,
    )
    logger.info(
        "Activation links point to %s (access mode %r)", settings.app_url, settings.access_mode
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration for the lifespan; defaults to get_settings()
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        config = settings or get_settings()
        logging.basicConfig(level=config.log_level.upper())

        pool = ConnectionPool(
            conninfo=config.database_url,
            min_size=config.pool_min_size,
            max_size=config.pool_max_size,
            open=True,
        )
        logger.info(
            "Connection pool open (%d-%d connections)", config.pool_min_size, config.pool_max_size
        )
        try:
            run_migrations(pool)
        except RuntimeError:
            pool.close()
            raise

        app.state.pool = pool
        _log_activation_policy(config)

        yield

        pool.close()
        logger.info("Connection pool closed")

    app = FastAPI(
        title="activation-service",
        description="Account Activation API - Issue, re-send and complete activation codes",
        version="0.1.0",
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )
    app.include_router(v1_router, prefix="/v1")

    @app.get("/health")
    def health_check(
        response: Response, pool: ConnectionPool = Depends(get_pool)
    ) -> dict[str, str]:
        """
        Report whether the activation store is reachable.

        Returns 503 with status "unhealthy" when PostgreSQL cannot be queried.
        """
        try:
            with pool.connection() as conn:
                conn.execute("SELECT 1")
        except psycopg.OperationalError as e:
            logger.error("Health check failed: %s", e)
            response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
            return {"status": "unhealthy", "database": "unreachable"}

        return {"status": "healthy", "database": "ok"}

    return app


app = create_app()
