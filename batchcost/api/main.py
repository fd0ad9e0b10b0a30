"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from batchcost import __version__
from batchcost.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from batchcost.api.middleware.error_handler import setup_exception_handlers
from batchcost.api.routes import (
    batches_router,
    costing_router,
    health_router,
    inventory_router,
    stock_router,
)
from batchcost.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Migrates the database, opens the pool and starts the batch reactor on
    startup; stops the reactor and closes the pool on shutdown.
    """
    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
    )

    # Initialize database
    try:
        from batchcost.infrastructure.storage.sqlite import get_pool
        from batchcost.infrastructure.storage.sqlite.migrations import run_migrations

        await run_migrations()
        logger.info("database_initialized")

        await get_pool()
        logger.info("connection_pool_ready")

    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    # Start the batch reactor
    app.state.reactor_runner = None
    if settings.reactor.enabled:
        from batchcost.application.reactor_runner import ReactorRunner
        from batchcost.application.services import get_batch_reactor
        from batchcost.infrastructure.events import get_change_feed

        runner = ReactorRunner(
            reactor=await get_batch_reactor(),
            change_feed=get_change_feed(),
            shutdown_timeout=settings.reactor.shutdown_timeout,
        )
        runner.start()
        app.state.reactor_runner = runner
    else:
        logger.warning("batch_reactor_disabled")

    logger.info("application_started")

    yield

    # Shutdown
    logger.info("application_stopping")

    if app.state.reactor_runner is not None:
        await app.state.reactor_runner.stop()

    try:
        from batchcost.infrastructure.storage.sqlite import close_pool

        await close_pool()

    except Exception as e:
        logger.warning("connection_pool_close_failed", error=str(e))

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title="BatchCost API",
        description="Weighted-average costing and batch-driven inventory",
        version=__version__,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(costing_router)
    app.include_router(stock_router)
    app.include_router(batches_router)
    app.include_router(inventory_router)

    # Root health endpoint (for container health checks)
    @app.get("/health")
    async def root_health() -> dict[str, str]:
        """Simple health check at root level."""
        return {
            "status": "healthy",
            "version": __version__,
        }

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "batchcost.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
