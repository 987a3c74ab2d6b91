"""
Core Exceptions
================

Exceptions raised across the application.

Startup exceptions (configuration, database connection, socket bind) are
fatal: the entry point stops the process on them. ``BusinessLogicException``
is the only way route handlers signal a failure; it travels up the call
stack unchanged and is rendered by the error handler.
"""

from typing import Optional

from taskhub.core.errors import ServiceError


class ApplicationException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DomainException(ApplicationException):
    """Base exception for domain logic violations."""


class BusinessLogicException(DomainException):
    """
    A named, classified failure raised by business logic.

    Carries a taxonomy descriptor (symbolic name + HTTP status) and a
    human-readable message. Intermediate layers must let it propagate or
    replace it with a different ``BusinessLogicException``.
    """

    def __init__(self, error: ServiceError, message: str, details: Optional[dict] = None):
        self.error = error
        super().__init__(message, details)

    @property
    def name(self) -> str:
        return self.error.name

    @property
    def status_code(self) -> int:
        return self.error.status_code

    def __repr__(self) -> str:
        return f"BusinessLogicException({self.error.name!r}, {self.message!r})"


class ConfigurationException(ApplicationException):
    """Exception for missing or invalid configuration."""


class DatabaseConnectionException(ApplicationException):
    """Exception when the database cannot be reached at startup."""


class ServerBindException(ApplicationException):
    """Exception when the listening socket cannot be bound."""

    def __init__(self, host: str, port: int, details: Optional[dict] = None):
        self.host = host
        self.port = port
        super().__init__(f"Could not bind to {host}:{port}", details)
