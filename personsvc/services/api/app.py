from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from personsvc.common.logging import get_logger
from personsvc.common.settings import get_settings
from personsvc.database.core.main import init_db
from personsvc.services.api.errors import register_error_handlers
from personsvc.services.api.routers import health, persons

logger = get_logger()


@asynccontextmanager
async def _lifespan(app: FastAPI):
    cfg = get_settings()
    if cfg.db.create_tables:
        init_db()
    logger.info("server has been started")
    yield
    logger.info("server is shutting down")


def create_app(*, lifespan=_lifespan) -> FastAPI:
    cfg = get_settings()
    app = FastAPI(
        title="Persons API",
        version="0.1.0",
        docs_url=f"{cfg.api.prefix}/docs",
        openapi_url=f"{cfg.api.prefix}/openapi.json",
        lifespan=lifespan,
    )

    allow_origins = ["*"] if cfg.is_development else cfg.api.cors_allow_origins
    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_methods=cfg.api.cors_allow_methods,
        allow_headers=cfg.api.cors_allow_headers,
        allow_credentials=cfg.api.cors_allow_credentials,
    )

    register_error_handlers(app)

    # Routers
    app.include_router(health.router)
    app.include_router(persons.router)
    return app

app = create_app()
