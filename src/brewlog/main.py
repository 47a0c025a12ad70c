"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance. The TokenService, the database engine and its session factory
are built here, once, from the settings passed in, and parked on
app.state; route dependencies read them from there.
A bad secret therefore fails at startup, not on the first login.

BrewlogError subclasses raised anywhere below a route are turned into
JSON responses by a single exception handler.
"""

from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from brewlog import __version__
from brewlog.api import api_router
from brewlog.auth.jwt import TokenService
from brewlog.config import Settings, settings
from brewlog.db.engine import build_engine, build_session_factory
from brewlog.errors import AuthenticationError, BrewlogError

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs at shutdown.
    """
    app_settings = app.state.settings
    logger.info(
        "brewlog.starting",
        version=__version__,
        environment=app_settings.environment,
        port=app_settings.port,
    )

    yield

    logger.info("brewlog.shutdown")
    await app.state.engine.dispose()


async def handle_brewlog_error(request: Request, exc: BrewlogError) -> JSONResponse:
    if exc.status >= 500:
        logger.error("brewlog.internal_error", code=exc.code, path=request.url.path)
    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=int(exc.status), content=exc.to_dict(), headers=headers
    )


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Build and return the FastAPI application."""
    app_settings = app_settings or settings

    app = FastAPI(
        title="Brewlog",
        description="Coffee drink catalogue: post drinks, keep favorites",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.engine = build_engine(app_settings.database_url, echo=app_settings.debug)
    app.state.session_factory = build_session_factory(app.state.engine)
    app.state.token_service = TokenService(
        app_settings.jwt_secret,
        algorithm=app_settings.jwt_algorithm,
        lifetime=timedelta(hours=app_settings.token_expire_hours),
    )

    app.add_exception_handler(BrewlogError, handle_brewlog_error)

    # ── Middleware stack ──────────────────────────────────────
    # Note: Starlette middleware executes in reverse order of registration.
    # Request flow: RequestId → Security → CORS → handler

    from brewlog.middleware.request_id import RequestIdMiddleware
    from brewlog.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIdMiddleware)

    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: brewlog.main:app)
app = create_app()
