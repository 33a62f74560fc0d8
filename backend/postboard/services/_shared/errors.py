"""
Service-layer exceptions.

These are framework-agnostic contracts between models, repositories and
services. ``BaseService.translate_exceptions()`` maps them onto the
RFC 7807 ``APIError`` family in ``postboard.core.errors``.
"""

from __future__ import annotations

from dataclasses import dataclass


class ServiceError(Exception):
    """Base class for every service-level error. Never an HTTP error."""


class ValidationError(ServiceError):
    """Input was rejected: a field is malformed or violates a model rule."""


class MissingFieldError(ValidationError):
    """A required input was empty or missing."""


class AuthenticationError(ServiceError):
    """Credentials did not match. The message never reveals which part failed."""

    def __init__(self, message: str = "Invalid email or password") -> None:
        super().__init__(message)


class InvalidTokenError(ServiceError):
    """
    A refresh token was rejected.

    Covers bad signature, malformed, expired, unknown owner and absence from
    the owner's ledger. Callers get the same message for every case.
    """

    def __init__(self, message: str = "Invalid refresh token") -> None:
        super().__init__(message)


class OperationFailure(ServiceError):
    """Infrastructure failure unrelated to the caller's input."""

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message)


class AuthorizationError(ServiceError):
    """The actor does not own the resource it tries to mutate."""


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is missing.

    :param entity: Entity name (e.g., "Post").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a uniqueness rule is violated.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return self.detail
