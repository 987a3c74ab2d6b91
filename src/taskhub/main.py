"""
TaskHub - Service Entry Point
=============================

Bootstrap sequence:

    UNCONFIGURED -> VALIDATED -> CONNECTED -> ROUTES_INSTALLED -> LISTENING

1. Validate the settings snapshot
2. Connect to the database
3. Install envelope, middleware, routers, catch-all and error handlers
4. Bind the listening socket and serve

Any failure moves the sequence to FAILED. There is no retry and no
degraded mode: the process exits with status 1 and is expected to be
restarted by its supervisor.
"""

import asyncio
import socket
import sys
from enum import Enum
from typing import Optional, Sequence

import uvicorn
from fastapi import APIRouter, FastAPI

from taskhub.app import create_app
from taskhub.config import Settings, get_settings, validate_settings
from taskhub.core.errors import ErrorRegistry, build_error_registry
from taskhub.core.exceptions import ApplicationException, ServerBindException
from taskhub.infrastructure.database import close_database, connect_database
from taskhub.shared.infrastructure.logging import get_logger, setup_logging
from taskhub.system import system_router

logger = get_logger(__name__)


class BootstrapState(str, Enum):
    """Startup states."""
    UNCONFIGURED = "unconfigured"
    VALIDATED = "validated"
    CONNECTED = "connected"
    ROUTES_INSTALLED = "routes_installed"
    LISTENING = "listening"
    FAILED = "failed"


def default_routers() -> Sequence[APIRouter]:
    """Resource routers mounted at root, in installation order."""
    return (system_router,)


def bind_socket(host: str, port: int) -> socket.socket:
    """
    Bind the listening socket before the server starts.

    Raises:
        ServerBindException: If the address cannot be bound
    """
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
    except OSError as e:
        sock.close()
        raise ServerBindException(host, port, details={"reason": str(e)}) from e
    sock.set_inheritable(True)
    return sock


class Bootstrap:
    """
    Runs the startup sequence and serves the application.

    Each step only runs once the previous one succeeded, so no request is
    accepted before the settings are complete and the database answers.
    """

    def __init__(
        self,
        settings: Settings,
        routers: Optional[Sequence[APIRouter]] = None,
        registry: Optional[ErrorRegistry] = None,
    ):
        self.settings = settings
        self.routers = default_routers() if routers is None else routers
        self.registry = registry or build_error_registry()
        self.state = BootstrapState.UNCONFIGURED
        self.app: Optional[FastAPI] = None

    def _advance(self, state: BootstrapState) -> None:
        self.state = state
        logger.info("Bootstrap state changed", extra={"state": state.value})

    async def start(self) -> socket.socket:
        """
        Run every step up to LISTENING and return the bound socket.

        Raises:
            ApplicationException: On any fatal startup condition
        """
        try:
            validate_settings(self.settings)
            self._advance(BootstrapState.VALIDATED)

            await connect_database(self.settings.db_uri)
            self._advance(BootstrapState.CONNECTED)

            self.app = create_app(self.settings, self.registry, self.routers)
            self._advance(BootstrapState.ROUTES_INSTALLED)

            sock = bind_socket(self.settings.host, self.settings.port)
            self._advance(BootstrapState.LISTENING)
            return sock
        except Exception:
            self.state = BootstrapState.FAILED
            await close_database()
            raise

    async def run(self) -> None:
        """Start up, then serve until the server is stopped."""
        sock = await self.start()
        config = uvicorn.Config(self.app, log_config=None, lifespan="off")
        server = uvicorn.Server(config)
        logger.info(
            "Server is running",
            extra={"host": self.settings.host, "port": self.settings.port},
        )
        try:
            await server.serve(sockets=[sock])
        finally:
            sock.close()
            await close_database()


def main() -> None:
    """Console entry point: exits with status 1 on any startup failure."""
    try:
        settings = get_settings()
    except ApplicationException as e:
        setup_logging()
        logger.error("Error starting the server", extra={"error_message": e.message})
        sys.exit(1)

    setup_logging(level=settings.log_level, environment=settings.environment or "unknown")
    bootstrap = Bootstrap(settings)
    try:
        asyncio.run(bootstrap.run())
    except ApplicationException as e:
        logger.error(
            "Error starting the server",
            extra={"error_type": type(e).__name__, "error_message": e.message, "details": e.details},
        )
        sys.exit(1)
    except Exception:
        if bootstrap.state is not BootstrapState.LISTENING:
            logger.exception("Error starting the server")
            sys.exit(1)
        raise


if __name__ == "__main__":
    main()
