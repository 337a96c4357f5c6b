from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campus_housing.api.errors import register_exception_handlers
from campus_housing.api.v1.router import router as api_v1_router
from campus_housing.config.logging import setup_logging
from campus_housing.config.settings import Settings, settings
from campus_housing.core.middleware import register_middlewares
from campus_housing.db.init_db import init_db, seed_demo_data
from campus_housing.db.session import build_engine, build_session_factory
from campus_housing.services.integrations import DiningClient

logger = logging.getLogger(__name__)


def create_app(
    session_factory: Optional[Callable[[], Session]] = None,
    dining_client: Optional[DiningClient] = None,
    config: Settings = settings,
) -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures logging, title, version and debug mode from Settings.
    - Registers CORS, core middleware and exception handlers.
    - Includes the housing router under ``API_PREFIX``.
    - Creates the schema and seeds demo data outside production.

    A ``session_factory`` passed in is used as is and its schema is left
    to the caller.
    """
    setup_logging(config)

    owns_engine = session_factory is None
    engine = None
    if owns_engine:
        engine = build_engine(config.get_database_url(), lock_timeout=config.LOCK_TIMEOUT_SECONDS)
        session_factory = build_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if owns_engine and not config.is_production():
            # For dev/demo only
            init_db(engine)
            if config.SEED_DEMO_DATA:
                seed_demo_data(session_factory)
        logger.info(f"{config.APP_NAME} started", extra={"environment": config.ENVIRONMENT})
        yield
        if owns_engine:
            engine.dispose()
        logger.info(f"{config.APP_NAME} stopped")

    app = FastAPI(
        title=config.APP_NAME,
        debug=config.DEBUG,
        version=config.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.session_factory = session_factory
    app.state.dining_client = dining_client or DiningClient(
        base_urls=config.dining_base_urls(),
        timeout=config.DINING_TIMEOUT_SECONDS,
    )

    origins = config.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Student-ID", "X-Request-ID"],
    )

    # Register shared core middlewares (request ID, timing, etc.)
    register_middlewares(app)
    register_exception_handlers(app)

    app.include_router(api_v1_router, prefix=config.API_PREFIX)

    @app.get("/health", tags=["health"])
    def health() -> dict:
        """Liveness plus a trivial database round trip."""
        database = "ok"
        try:
            with app.state.session_factory() as session:
                session.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.warning(f"Health check database query failed: {exc}")
            database = "unavailable"
        return {"status": "healthy", "service": config.APP_NAME, "database": database}

    return app


app = create_app()


def run() -> None:
    """Run the development server."""
    import uvicorn

    uvicorn.run(
        "campus_housing.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development(),
    )


if __name__ == "__main__":
    run()
