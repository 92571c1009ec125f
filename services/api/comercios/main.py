"""FastAPI application entry point.

Comercios Rankings API - Top-10 revenue views over the business dataset.
"""

import asyncio
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from comercios.routes import api_router
from comercios.services.generator import ensure_data_file
from comercios.services.ranking import ComputationFailed, RankingService
from comercios.settings import Settings, get_settings
from comercios.stores.cache import RankingCache
from comercios.stores.records import RecordStore, StoreError

logger = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events.
    """
    # Startup
    settings: Settings = app.state.settings

    # Seed the record store on first run
    if settings.bootstrap_on_startup:
        try:
            await asyncio.to_thread(
                ensure_data_file, app.state.record_store, settings.bootstrap_records
            )
        except StoreError:
            logger.exception("Record store bootstrap failed")

    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        settings: Explicit settings (tests); environment settings when None.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Top-10 business analytics: revenue, cities and categories",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # One store, cache and orchestrator per process
    record_store = RecordStore(settings.data_file)
    app.state.settings = settings
    app.state.record_store = record_store
    app.state.ranking_service = RankingService(
        cache=RankingCache(ttl_seconds=settings.cache_ttl_seconds),
        load_records=record_store.load,
        timeout_seconds=settings.recompute_timeout_seconds,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Ranking/store failures: 500 with the error text as body
    @app.exception_handler(ComputationFailed)
    @app.exception_handler(StoreError)
    async def computation_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
        logger.error(f"{request.url.path} failed: {exc}")
        return PlainTextResponse(str(exc), status_code=500)

    # Exception handler for structured error format
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler returning structured error format."""
        logger.exception(f"Unhandled error on {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": str(exc) if settings.debug else "Internal server error",
                    "detail": None,
                }
            },
        )

    # Health check endpoint
    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, bool]:
        """Health check endpoint."""
        return {"ok": True}

    # Include API routes
    app.include_router(api_router)

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "comercios.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
