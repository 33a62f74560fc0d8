"""DTOs for UserService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Public representation of a user. Never carries the password hash or
    the refresh-token ledger.

    :param id: User identifier.
    :type id: int
    :param username: Public handle.
    :type username: str
    :param email: Normalized email.
    :type email: str
    :param created_at: Creation timestamp.
    :type created_at: datetime | None
    """

    id: int
    username: str
    email: str
    created_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class UserCreateIn:
    """
    Input DTO for direct account creation (no tokens are issued).

    :param username: Public handle.
    :type username: str | None
    :param email: Login email.
    :type email: str | None
    :param password: Raw password, hashed by the model setter.
    :type password: str | None
    """

    username: str | None
    email: str | None
    password: str | None


@dataclass(frozen=True, slots=True)
class UserUpdateIn:
    """Partial update; ``None`` leaves a field untouched."""

    username: str | None = None
    email: str | None = None
    password: str | None = None
