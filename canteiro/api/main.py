"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from canteiro import __version__
from canteiro.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from canteiro.api.middleware.error_handler import setup_exception_handlers
from canteiro.api.routes import (
    accommodations_router,
    alerts_router,
    bills_router,
    budgets_router,
    employees_router,
    health_router,
    projects_router,
    validation_router,
    vehicles_router,
)
from canteiro.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Migrates the database and opens the connection pool on startup,
    closes the pool on shutdown.
    """
    settings = get_settings()
    configure_logging()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
    )

    try:
        from canteiro.infrastructure.storage.sqlite import get_pool
        from canteiro.infrastructure.storage.sqlite.migrations import initialize_database

        await initialize_database()
        logger.info("database_initialized")

        await get_pool()
        logger.info("connection_pool_ready")

    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    settings.blob.root_dir.mkdir(parents=True, exist_ok=True)
    logger.info("application_started", bucket=settings.blob.bucket)

    yield

    logger.info("application_stopping")

    try:
        from canteiro.infrastructure.storage.sqlite import close_pool

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

    app = FastAPI(
        title="Canteiro API",
        description="Back office for construction projects, crews, vehicles and lodging",
        version=__version__,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

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
    app.include_router(validation_router)
    app.include_router(projects_router)
    app.include_router(employees_router)
    app.include_router(vehicles_router)
    app.include_router(accommodations_router)
    app.include_router(bills_router)
    app.include_router(budgets_router)
    app.include_router(alerts_router)

    # Uploaded files: {public_base_url}/{bucket}/{path}
    app.mount(
        "/files",
        StaticFiles(directory=str(settings.blob.root_dir), check_dir=False),
        name="files",
    )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "canteiro.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
