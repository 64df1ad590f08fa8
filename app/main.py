from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session

from app.api.v1 import api_router as api_v1_router
from app.config.settings import Settings, get_settings
from app.core.exceptions import register_exception_handlers
from app.core.logging import get_logger, setup_logging
from app.core.middleware import register_middlewares
from app.db.init_db import init_db, seed_reference_data
from app.db.session import build_session_factory, create_engine_from_settings
from app.services.common import security

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    session_factory: Optional[Callable[[], Session]] = None,
) -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Registers CORS, core middleware, and exception handlers.
    - Includes the versioned API router under /api/v1.

    When `session_factory` is given the caller owns the database and the
    lifespan neither creates an engine nor seeds anything.
    """
    settings = settings or get_settings()
    setup_logging(settings)
    security.configure_password_hashing(settings.PASSWORD_BCRYPT_ROUNDS)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = None
        if session_factory is None:
            engine = create_engine_from_settings(settings)
            app.state.session_factory = build_session_factory(engine)
            if settings.SEED_ON_STARTUP:
                init_db(engine)
                seed_reference_data(app.state.session_factory)
        logger.info("Application started", extra={"environment": settings.ENVIRONMENT})
        try:
            yield
        finally:
            if engine is not None:
                engine.dispose()
            logger.info("Application stopped")

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    if session_factory is not None:
        app.state.session_factory = session_factory

    # Credentials cannot be combined with a wildcard origin.
    allow_all = not settings.CORS_ORIGINS or settings.CORS_ORIGINS == ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.CORS_ORIGINS,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middlewares(app)
    register_exception_handlers(app)

    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    return app


app = create_app()
