"""
FastAPI Application Entry Point
"""

import asyncio
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException

from glossary import __version__
from glossary.api.v1.router import api_router
from glossary.core.config import settings
from glossary.core.errors import (
    AppError,
    app_exception_handler,
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from glossary.core.logging import RequestIDMiddleware, get_logger, setup_logging
from glossary.infra.redis import close_redis_pool, get_redis_client, init_redis_pool
from glossary.infra.session_storage import (
    MemoryStorageBackend,
    RedisStorageBackend,
    StorageBackend,
)
from glossary.services.glossary_runtime import GlossaryRuntime

logger = get_logger(__name__)

SESSION_SWEEP_INTERVAL_SECONDS = 60


async def build_storage_backend() -> StorageBackend:
    if settings.use_redis_history:
        await init_redis_pool()
        return RedisStorageBackend(await get_redis_client(), settings.session_ttl_seconds)
    return MemoryStorageBackend(ttl=settings.session_ttl_seconds)


async def sweep_sessions(runtime: GlossaryRuntime):
    while True:
        await asyncio.sleep(SESSION_SWEEP_INTERVAL_SECONDS)
        sessions, entries = runtime.sweep_expired()
        if sessions or entries:
            logger.info(f"Swept {sessions} expired sessions and {entries} stored entries")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging()
    runtime = GlossaryRuntime(await build_storage_backend())
    app.state.glossary = runtime

    # A failed load keeps the app up so clients can see the error and retry
    await runtime.load()
    sweeper = asyncio.create_task(sweep_sessions(runtime))

    yield

    # Shutdown
    sweeper.cancel()
    with suppress(asyncio.CancelledError):
        await sweeper
    runtime.close()
    await close_redis_pool()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Tech Glossary",
        description="Glossary browser with related-term navigation and breadcrumb history",
        version=__version__,
        openapi_url=f"{settings.api_prefix}/openapi.json",
        lifespan=lifespan,
    )

    # Middleware
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_credentials,
        allow_methods=settings.cors_methods,
        allow_headers=settings.cors_headers,
    )

    # Routes
    app.include_router(api_router, prefix=settings.api_prefix)

    # Exception Handlers
    app.add_exception_handler(AppError, app_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    return app


app = create_app()
