"""
Shared API Layer
================

Request pipeline pieces every router relies on: response envelopes, error
handlers and middleware.
"""

from taskhub.shared.api.dependencies import get_app_settings, get_error_registry
from taskhub.shared.api.errors import register_error_handlers
from taskhub.shared.api.middleware import CorrelationIDMiddleware, LoggingMiddleware
from taskhub.shared.api.responses import EnvelopeJSONResponse, error_body, error_response

__all__ = [
    "get_app_settings",
    "get_error_registry",
    "register_error_handlers",
    "CorrelationIDMiddleware",
    "LoggingMiddleware",
    "EnvelopeJSONResponse",
    "error_body",
    "error_response",
]
