"""
Error Taxonomy
==============

Symbolic service errors and the HTTP status each one maps to.

Every resource gets a catalog covering all ``ErrorKind`` members. Catalogs
are checked for completeness when they are registered (at import time), so
a lookup for a known kind can never miss at request time.

Usage:
    from taskhub.core.errors import ErrorKind, PRODUCT_ERRORS
    from taskhub.core.exceptions import BusinessLogicException

    raise BusinessLogicException(PRODUCT_ERRORS[ErrorKind.NOT_FOUND], "Product not found")
"""

from dataclasses import dataclass
from enum import Enum
from http import HTTPStatus
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Tuple


@dataclass(frozen=True)
class ServiceError:
    """A registered error: symbolic name plus HTTP status code."""
    name: str
    status_code: int


class ErrorKind(str, Enum):
    """Error kinds every resource catalog must define."""
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    CREATION_FAILED = "CREATION_FAILED"
    UPDATION_FAILED = "UPDATION_FAILED"


DEFAULT_STATUSES: Mapping[ErrorKind, int] = MappingProxyType({
    ErrorKind.NOT_FOUND: HTTPStatus.NOT_FOUND,
    ErrorKind.ALREADY_EXISTS: HTTPStatus.CONFLICT,
    ErrorKind.CREATION_FAILED: HTTPStatus.UNPROCESSABLE_ENTITY,
    ErrorKind.UPDATION_FAILED: HTTPStatus.UNPROCESSABLE_ENTITY,
})


class ErrorCatalog:
    """Read-only ``ErrorKind -> ServiceError`` table for one resource."""

    def __init__(self, resource: str, errors: Mapping[ErrorKind, ServiceError]):
        self.resource = resource
        self._errors = MappingProxyType(dict(errors))

    def __getitem__(self, kind: ErrorKind) -> ServiceError:
        return self._errors[kind]

    def __iter__(self) -> Iterator[ServiceError]:
        return iter(self._errors.values())

    def __len__(self) -> int:
        return len(self._errors)

    def errors(self) -> Mapping[ErrorKind, ServiceError]:
        return self._errors


def register_catalog(
    resource: str,
    statuses: Mapping[ErrorKind, int] = DEFAULT_STATUSES,
) -> ErrorCatalog:
    """
    Build the catalog for a resource.

    Descriptor names are ``<RESOURCE>_<KIND>``, e.g. ``PRODUCT_NOT_FOUND``.

    Raises:
        ValueError: If ``statuses`` does not cover every ErrorKind
    """
    missing = [kind.value for kind in ErrorKind if kind not in statuses]
    if missing:
        raise ValueError(
            f"Error catalog for {resource!r} is missing kinds: {', '.join(missing)}"
        )

    prefix = resource.upper()
    return ErrorCatalog(
        prefix,
        {
            kind: ServiceError(name=f"{prefix}_{kind.value}", status_code=int(statuses[kind]))
            for kind in ErrorKind
        },
    )


PRODUCT_ERRORS = register_catalog("product")
USER_ERRORS = register_catalog("user")
TASK_ERRORS = register_catalog("task")

INTERNAL_SERVER_ERROR = ServiceError("INTERNAL_SERVER_ERROR", int(HTTPStatus.INTERNAL_SERVER_ERROR))
VALIDATION_FAILED = ServiceError("VALIDATION_FAILED", int(HTTPStatus.UNPROCESSABLE_ENTITY))


class ErrorRegistry:
    """
    Every descriptor the service can emit, keyed by symbolic name.

    Built once at startup and injected into the error handler and the
    catch-all route. Looking up a name that was never registered raises
    ``KeyError``; that is a programming error, not a request condition.
    """

    def __init__(
        self,
        errors: Mapping[str, ServiceError],
        not_found: ServiceError,
        not_found_message: str,
        internal: ServiceError = INTERNAL_SERVER_ERROR,
        validation: ServiceError = VALIDATION_FAILED,
    ):
        self._errors = MappingProxyType(dict(errors))
        self.not_found = not_found
        self.not_found_message = not_found_message
        self.internal = internal
        self.validation = validation

    def get(self, name: str) -> ServiceError:
        return self._errors[name]

    def __contains__(self, name: object) -> bool:
        return name in self._errors

    def __len__(self) -> int:
        return len(self._errors)

    def names(self) -> List[str]:
        return list(self._errors)


def build_error_registry(
    *catalogs: ErrorCatalog,
    not_found: Tuple[ServiceError, str] = (
        PRODUCT_ERRORS[ErrorKind.NOT_FOUND],
        "Product not found",
    ),
) -> ErrorRegistry:
    """
    Collect catalogs and common descriptors into one registry.

    Defaults to the product, user and task catalogs. Unmatched routes
    resolve to ``not_found``.

    Raises:
        ValueError: On duplicate names, or if ``not_found`` is unregistered
    """
    if not catalogs:
        catalogs = (PRODUCT_ERRORS, USER_ERRORS, TASK_ERRORS)

    errors: Dict[str, ServiceError] = {}
    descriptors = [error for catalog in catalogs for error in catalog]
    descriptors += [INTERNAL_SERVER_ERROR, VALIDATION_FAILED]
    for error in descriptors:
        if error.name in errors:
            raise ValueError(f"Duplicate service error name: {error.name}")
        errors[error.name] = error

    not_found_error, not_found_message = not_found
    if errors.get(not_found_error.name) != not_found_error:
        raise ValueError(f"Not-found error {not_found_error.name} is not registered")

    return ErrorRegistry(errors, not_found=not_found_error, not_found_message=not_found_message)
