"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.infrastructure.database import Base, engine
from app.infrastructure.database.repositories import build_sql_repository
from app.infrastructure.database.session import async_session_factory, ensure_sqlite_directory
from app.infrastructure.logging.log_config import setup_logging
from app.infrastructure.seed import seed_empty_collections
from app.presentation.api.error_handlers import register_error_handlers
from app.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _seed_default_data() -> None:
    """Fill empty tables with the built-in dataset. Safe on every startup."""
    async with async_session_factory() as session:
        repository = build_sql_repository(session)
        await seed_empty_collections(repository)
        await session.commit()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — create tables and seed defaults."""
    settings = get_settings()
    setup_logging()

    # 1. Create all database tables
    ensure_sqlite_directory(settings.database_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # 2. Seed the default dataset into empty tables
    await _seed_default_data()
    logger.info("%s ready (env=%s)", settings.app_title, settings.app_env)

    yield

    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8030,
        reload=True,
    )
