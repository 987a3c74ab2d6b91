"""
Error Handlers
==============

Terminal stage of the request pipeline: maps every failure to exactly one
HTTP response in the error envelope.

- ``BusinessLogicException``: status and name from its descriptor.
- Request validation errors: ``VALIDATION_FAILED`` (422).
- ``HTTPException`` raised by collaborators: status phrase as the name.
  Statuses that forbid a body (1xx, 204, 205, 304) are sent without one.
- Anything else: ``INTERNAL_SERVER_ERROR`` (500). The traceback is logged
  for operators; the client only sees a generic message.
"""

from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from fastapi.utils import is_body_allowed_for_status_code
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskhub.core.errors import ErrorRegistry, ServiceError
from taskhub.core.exceptions import BusinessLogicException
from taskhub.shared.api.responses import error_response
from taskhub.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def _request_context(request: Request) -> dict:
    return {
        "correlation_id": getattr(request.state, "correlation_id", "unknown"),
        "method": request.method,
        "path": request.url.path,
    }


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        parts.append(f"{location}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request"


def register_error_handlers(app: FastAPI, registry: ErrorRegistry) -> None:
    """
    Register the error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance
        registry: Error registry providing the fallback descriptors
    """

    @app.exception_handler(BusinessLogicException)
    async def handle_business_logic(
        request: Request, exc: BusinessLogicException
    ) -> JSONResponse:
        """Render a classified domain failure."""
        logger.warning(
            "Business logic error",
            extra={
                **_request_context(request),
                "error_name": exc.error.name,
                "status_code": exc.error.status_code,
                "error_message": exc.message,
            },
        )
        return error_response(exc.error, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Render a rejected request payload."""
        message = _describe_validation_errors(exc)
        logger.info(
            "Request validation failed",
            extra={**_request_context(request), "error_message": message},
        )
        return error_response(registry.validation, message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> Response:
        """Render an HTTPException raised by a route handler."""
        if not is_body_allowed_for_status_code(exc.status_code):
            return Response(status_code=exc.status_code, headers=exc.headers)
        try:
            name = HTTPStatus(exc.status_code).name
        except ValueError:
            name = "HTTP_ERROR"
        response = error_response(ServiceError(name, exc.status_code), str(exc.detail))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unclassified errors. Never exposes internals."""
        logger.exception(
            "Unhandled exception",
            extra={**_request_context(request), "error_type": type(exc).__name__},
        )
        return error_response(registry.internal, INTERNAL_ERROR_MESSAGE)
