"""FastAPI main application for TeamCal"""

from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Receive, Scope, Send

from teamcal.app import TeamCalApp
from teamcal.utils.config import Settings
from teamcal.utils.exceptions import (
    AuthenticationRequired,
    PermissionDenied,
    StoreError,
    TeamCalError,
)
from teamcal.utils.logger import get_logger, setup_logger

from .auth_routes import router as auth_router
from .event_routes import router as event_router
from .responses import failure
from .user_routes import router as user_router

logger = get_logger(__name__)

SERVER_ERROR_MESSAGE = "Server error"


class IdentityMiddlewareASGI:
    """Raw ASGI middleware resolving the session cookie to an active user.

    Runs for every HTTP request, cookie or not, and stores the result (or
    None) on ``request.state.identity`` for the guard dependencies.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        core: TeamCalApp = scope["app"].state.core
        session_username = HTTPConnection(scope).cookies.get(core.settings.session.cookie_name)
        try:
            identity = await core.identity.resolve(session_username)
        except StoreError as e:
            logger.exception("Identity resolution failed", error=str(e))
            response = failure(SERVER_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)
            await response(scope, receive, send)
            return

        scope.setdefault("state", {})["identity"] = identity
        await self.app(scope, receive, send)


async def _unauthenticated_handler(request: Request, exc: AuthenticationRequired) -> JSONResponse:
    return failure(exc.message, status.HTTP_401_UNAUTHORIZED)


async def _forbidden_handler(request: Request, exc: PermissionDenied) -> JSONResponse:
    return failure(exc.message, status.HTTP_403_FORBIDDEN)


async def _store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error("Store failure", path=request.url.path, error=exc.message)
    return failure(SERVER_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)


async def _validation_handler(request: Request, exc: TeamCalError) -> JSONResponse:
    return failure(exc.message)


async def _unexpected_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", path=request.url.path, error=str(exc))
    return failure(SERVER_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)


def create_app(settings: Optional[Settings] = None, core: Optional[TeamCalApp] = None) -> FastAPI:
    core = core or TeamCalApp(settings)

    app = FastAPI(
        title="TeamCal",
        description="Session auth, user approval and a shared calendar",
        version=core.settings.app.version,
    )
    app.state.core = core

    # Identity first, CORS outermost
    app.add_middleware(IdentityMiddlewareASGI)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=core.settings.cors.allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AuthenticationRequired, _unauthenticated_handler)
    app.add_exception_handler(PermissionDenied, _forbidden_handler)
    app.add_exception_handler(StoreError, _store_error_handler)
    app.add_exception_handler(TeamCalError, _validation_handler)
    app.add_exception_handler(Exception, _unexpected_handler)

    app.include_router(auth_router)
    app.include_router(user_router)
    app.include_router(event_router)

    @app.on_event("startup")
    async def startup_event():
        log_settings = core.settings.logging
        setup_logger(
            log_level=log_settings.level,
            log_format=log_settings.format,
            file_path=log_settings.file_path,
            max_bytes=log_settings.max_bytes,
            backup_count=log_settings.backup_count,
        )
        await core.initialize()

    return app


app = create_app()
