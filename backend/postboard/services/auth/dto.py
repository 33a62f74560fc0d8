from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for registration.

    :param username: Public handle.
    :type username: str | None
    :param email: Login email (normalized by the model).
    :type email: str | None
    :param password: Raw password, hashed by the model setter.
    :type password: str | None
    """

    username: str | None
    email: str | None
    password: str | None


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :type email: str | None
    :param password: Raw password to verify.
    :type password: str | None
    """

    email: str | None
    password: str | None


@dataclass(frozen=True, slots=True)
class RefreshIn:
    refresh_token: str | None


@dataclass(frozen=True, slots=True)
class LogoutIn:
    refresh_token: str | None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


# ------------------------------- Config ----------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token lifetimes injected into the auth service.

    :param access_expires: Access token lifetime.
    :type access_expires: timedelta
    :param refresh_expires: Refresh token lifetime.
    :type refresh_expires: timedelta
    """

    access_expires: timedelta = timedelta(seconds=3600)
    refresh_expires: timedelta = timedelta(seconds=86400)

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> AuthTokenConfig:
        """Build from a Flask config mapping, falling back to the defaults."""
        defaults = cls()
        return cls(
            access_expires=config.get("JWT_ACCESS_TOKEN_EXPIRES") or defaults.access_expires,
            refresh_expires=config.get("JWT_REFRESH_TOKEN_EXPIRES") or defaults.refresh_expires,
        )
