"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from grantees.auth.router import router as auth_router
from grantees.catalog.router import router as catalog_router
from grantees.config import get_settings
from grantees.credits.router import router as credits_router
from grantees.database import close_db, init_db
from grantees.functions.router import router as functions_router
from grantees.health.router import router as health_router
from grantees.middleware import setup_middleware
from grantees.onboarding.router import router as onboarding_router
from grantees.profiles.router import router as profiles_router
from grantees.redis_client import close_redis, init_redis


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    await init_db(settings.database_url)
    if settings.redis_url:
        await init_redis(settings.redis_url)

    yield

    await close_db()
    await close_redis()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Grantees API",
        description="Backend API for Grantees, the web3 grant and builder opportunity directory",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(auth_router)
    app.include_router(profiles_router)
    app.include_router(credits_router)
    app.include_router(functions_router)
    app.include_router(onboarding_router)
    app.include_router(catalog_router)

    return app


app = create_app()
