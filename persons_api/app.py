"""FastAPI application for the persons directory."""
from __future__ import annotations

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from persons_api.core.config import Settings, get_settings
from persons_api.core.logging_config import configure_logging
from persons_api.db.session import Store
from persons_api.errors import register_error_handlers
from persons_api.routers import people as people_router
from persons_api.routers import roles as roles_router
from persons_api.routers import user_roles as user_roles_router
from persons_api.services.directory_service import DirectoryService
from persons_api.services.seed_service import seed_database

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory compatible with uvicorn (``--factory``) and the test client."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # a corrupt image raises here and the server never starts serving
        store = Store(settings.database_path).load()
        if settings.seed_on_startup:
            seed_database(store)
        app.state.store = store
        app.state.directory_service = DirectoryService(store)
        logger.info("Database initialized")
        try:
            yield
        finally:
            store.close()

    app = FastAPI(title="Persons Directory API", lifespan=lifespan)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_origins),
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["*"],
        )
    register_error_handlers(app)

    @app.get("/health")
    def health():
        store = getattr(app.state, "store", None)
        return {"ok": bool(store and store.is_open)}

    app.include_router(people_router.router, prefix=settings.api_prefix)
    app.include_router(roles_router.router, prefix=settings.api_prefix)
    app.include_router(user_roles_router.router, prefix=settings.api_prefix)
    return app
