"""Users API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly, specific /users paths before /users/{user_id}
    - Global error handlers map UsersApiError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Each app owns exactly one UserStore, on app.state.user_store
    - app.state is populated in create_app, not in lifespan, so ASGI test
      transports that skip lifespan events still see a complete app
"""

import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from users_api.api.error_handlers import register_error_handlers
from users_api.api.middleware import register_request_logging
from users_api.api.routes import health, root, users
from users_api.api.routes.root import list_endpoints
from users_api.config import Settings, get_settings
from users_api.core.user_store import UserStore
from users_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    logger.info(
        f"{settings.service_name} {settings.service_version} started "
        f"({settings.environment}) with {len(app.state.user_store)} users",
    )
    for endpoint in list_endpoints(app):
        logger.info(f"  {endpoint}")
    yield
    logger.info(f"{settings.service_name} shutting down")


def create_app(
    settings: Settings | None = None, store: UserStore | None = None,
) -> FastAPI:
    """Build a fully wired app. Tests pass their own settings and store."""
    settings = settings or get_settings()
    if store is None:
        store = UserStore.with_sample_users() if settings.seed_sample_users else UserStore()

    app = FastAPI(
        title=settings.service_name,
        version=settings.service_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.user_store = store
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_request_logging(app)

    # Routes: explicit registration
    app.include_router(root.router)
    app.include_router(health.router)
    app.include_router(users.router)

    register_error_handlers(app, settings)
    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "users_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
