"""
Request Dependencies
====================

FastAPI dependencies exposing the startup snapshots to route handlers.
"""

from fastapi import Request

from taskhub.config import Settings
from taskhub.core.errors import ErrorRegistry


def get_app_settings(request: Request) -> Settings:
    """Settings snapshot the application was built with."""
    return request.app.state.settings


def get_error_registry(request: Request) -> ErrorRegistry:
    return request.app.state.error_registry
