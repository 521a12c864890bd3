"""Cluster Registry runtime setup.

The registry is used as a library by the request-handling layer. That layer
enters ``lifespan()`` once at startup and opens one session per request:

    async with lifespan() as session_factory:
        async with session_factory() as session:
            service = ClusterResolutionService(session)
            cluster = await service.resolve_candidate(candidate_id, overrides, user_id)
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from shared.config import ClusterRegistrySettings
from shared.database import Base, create_engine, create_session_factory
from shared.observability import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(
    settings: ClusterRegistrySettings | None = None,
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Registry lifespan manager.

    Handles startup and shutdown of:
    - Logging configuration
    - Database engine and session factory
    - Table creation (when enabled)
    """
    settings = settings or ClusterRegistrySettings()
    setup_logging(log_level=settings.log_level, log_format=settings.log_format)

    logger.info("Starting Cluster Registry", version=settings.app_version)

    engine = create_engine(settings.database.async_url, echo=settings.debug)
    session_factory = create_session_factory(engine)

    try:
        if settings.create_tables_on_startup:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables initialized")

        yield session_factory
    finally:
        logger.info("Shutting down Cluster Registry")
        await engine.dispose()
