"""Shared API helpers: bearer authentication, service wiring and responses."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Mapping
from typing import Any, TypeVar, cast

from flask import Response, current_app, g, jsonify, request

from postboard.core.errors import Unauthorized
from postboard.infra.jwt.flask_jwt_token_provider import JWTTokenProvider
from postboard.services._shared.base import BaseService, ServiceContext
from postboard.services._shared.errors import ServiceError
from postboard.services._shared.ports import TokenDecodeError, TokenExpiredError, TokenProvider
from postboard.services.auth.dto import AuthTokenConfig
from postboard.services.auth.service import AuthService

F = TypeVar("F", bound=Callable[..., Any])
S = TypeVar("S", bound=BaseService)

TOKEN_PROVIDER_EXTENSION = "postboard.token_provider"


# ------------------------------ Wiring ---------------------------------------


def get_token_provider() -> TokenProvider:
    """Return the app-registered token provider, defaulting to Flask-JWT-Extended."""
    provider = current_app.extensions.get(TOKEN_PROVIDER_EXTENSION)
    if provider is None:
        return JWTTokenProvider()
    return cast(TokenProvider, provider)


def get_auth_service() -> AuthService:
    return AuthService(
        token_provider=get_token_provider(),
        token_cfg=AuthTokenConfig.from_mapping(current_app.config),
    )


def service_context() -> ServiceContext:
    return ServiceContext(actor_id=g.get("user_id"))


def run_service(
    service: S,
    operation: Callable[[S], Any],
    *,
    status_overrides: Mapping[type[ServiceError], int] | None = None,
) -> Any:
    """
    Call ``operation(service)`` and translate service errors to API errors.

    :param service: Service instance the operation runs on.
    :param operation: Callable receiving the service.
    :param status_overrides: Per-route status replacements.
    """
    try:
        return operation(service)
    except ServiceError as exc:
        raise service.translate_exceptions(exc, status_overrides=status_overrides) from exc


# --------------------------- Authentication ----------------------------------


def authenticate_request() -> int:
    """
    Validate the ``Authorization: Bearer <token>`` header.

    Only this path tells an expired token apart from an invalid one.

    :returns: The authenticated user id.
    :raises Unauthorized: With a message naming the failure.
    """
    header = request.headers.get("Authorization")
    if not header:
        raise Unauthorized("No token provided")

    parts = header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer":
        raise Unauthorized("Invalid token format")

    try:
        claims = get_token_provider().decode(parts[1])
    except TokenExpiredError as exc:
        raise Unauthorized("Token expired") from exc
    except TokenDecodeError as exc:
        raise Unauthorized("Invalid token") from exc

    if claims.get("type") != "access":
        raise Unauthorized("Invalid token")
    try:
        return int(claims["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise Unauthorized("Invalid token") from exc


def require_auth(func: F) -> F:
    """Reject unauthenticated requests and expose the caller on ``g.user_id``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        g.user_id = authenticate_request()
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


# ----------------------------- Responses -------------------------------------


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator logging handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request.endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
