"""
Response Envelopes
==================

Uniform body shapes for everything the service sends back.

- success: ``{"data": <handler result>}``
- failure: ``{"error": {"name": ..., "message": ...}, "statusCode": <int>}``

``EnvelopeJSONResponse`` is installed as the application's default response
class, so every route that completes normally is wrapped exactly once.
Error bodies are built with the plain ``JSONResponse`` and never wrapped.
"""

from typing import Any, Dict

from fastapi.responses import JSONResponse

from taskhub.core.errors import ServiceError


class EnvelopeJSONResponse(JSONResponse):
    """JSON response that wraps its content in the success envelope."""

    def render(self, content: Any) -> bytes:
        return super().render({"data": content})


def error_body(error: ServiceError, message: str) -> Dict[str, Any]:
    return {
        "error": {"name": error.name, "message": message},
        "statusCode": error.status_code,
    }


def error_response(error: ServiceError, message: str) -> JSONResponse:
    """Build the failure envelope response for a service error."""
    return JSONResponse(status_code=error.status_code, content=error_body(error, message))
