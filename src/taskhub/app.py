"""
Application Factory
===================

Builds the FastAPI application in a fixed installation order:

1. Response envelope (default response class)
2. Middleware (CORS, correlation ID, request logging)
3. Resource routers, in the order given
4. Catch-all not-found route (lowest priority)
5. Error handlers

No business logic belongs here.
"""

from typing import Sequence

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskhub.config import Settings
from taskhub.core.errors import ErrorRegistry
from taskhub.shared.api.errors import register_error_handlers
from taskhub.shared.api.middleware import CorrelationIDMiddleware, LoggingMiddleware
from taskhub.shared.api.responses import EnvelopeJSONResponse, error_response


def _install_not_found_route(app: FastAPI, registry: ErrorRegistry) -> None:
    """
    Register the lowest-priority route matching any path and method.

    Starlette returns the first full match in registration order, so this
    route only answers requests no resource router claimed. It is a plain
    Starlette route with no method list, so every method matches, including
    ones FastAPI routes never declare (TRACE, PROPFIND, ...).
    """

    async def not_found(request: Request) -> JSONResponse:
        return error_response(registry.not_found, registry.not_found_message)

    app.add_route("/{path:path}", not_found, include_in_schema=False)


def create_app(
    settings: Settings,
    registry: ErrorRegistry,
    routers: Sequence[APIRouter] = (),
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Validated settings snapshot
        registry: Error registry used by the catch-all and error handlers
        routers: Resource routers, mounted at root in this order

    Returns:
        A fully configured FastAPI application instance
    """
    app = FastAPI(
        title="TaskHub API",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        default_response_class=EnvelopeJSONResponse,
    )
    app.state.settings = settings
    app.state.error_registry = registry

    # === Middleware (last added runs first) ===
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(CorrelationIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # === Routers ===
    for router in routers:
        app.include_router(router)

    _install_not_found_route(app, registry)

    # === Error handlers ===
    register_error_handlers(app, registry)

    return app
