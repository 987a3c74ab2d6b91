"""
Core Module
============

Error taxonomy and exceptions shared across the application.

This module is framework-agnostic: route handlers raise these exceptions
and the API layer translates them into HTTP responses.
"""

from taskhub.core.errors import (
    ServiceError,
    ErrorKind,
    ErrorCatalog,
    ErrorRegistry,
    register_catalog,
    build_error_registry,
    PRODUCT_ERRORS,
    USER_ERRORS,
    TASK_ERRORS,
    INTERNAL_SERVER_ERROR,
    VALIDATION_FAILED,
)
from taskhub.core.exceptions import (
    ApplicationException,
    DomainException,
    BusinessLogicException,
    ConfigurationException,
    DatabaseConnectionException,
    ServerBindException,
)

__all__ = [
    "ServiceError",
    "ErrorKind",
    "ErrorCatalog",
    "ErrorRegistry",
    "register_catalog",
    "build_error_registry",
    "PRODUCT_ERRORS",
    "USER_ERRORS",
    "TASK_ERRORS",
    "INTERNAL_SERVER_ERROR",
    "VALIDATION_FAILED",
    "ApplicationException",
    "DomainException",
    "BusinessLogicException",
    "ConfigurationException",
    "DatabaseConnectionException",
    "ServerBindException",
]
