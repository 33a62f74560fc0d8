from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, cast

import jwt as pyjwt
from flask import current_app
from flask_jwt_extended import create_access_token as _create_access
from flask_jwt_extended import create_refresh_token as _create_refresh
from flask_jwt_extended import decode_token as _decode
from flask_jwt_extended.exceptions import JWTExtendedException

from postboard.services._shared.ports import (
    ConfigurationError,
    TokenDecodeError,
    TokenExpiredError,
    TokenProvider,
)


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    Adapter for Flask-JWT-Extended.

    Requires an active Flask app context. ``JWT_SECRET_KEY`` must be set
    explicitly: the library would otherwise fall back to ``SECRET_KEY``,
    which would let tokens be signed with a key nobody configured for them.
    """

    def _require_secret(self) -> None:
        if not current_app.config.get("JWT_SECRET_KEY"):
            raise ConfigurationError("JWT_SECRET_KEY is not configured")

    def create_access_token(
        self,
        *,
        identity: str | int,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        self._require_secret()
        return cast(
            str,
            _create_access(
                identity=str(identity),
                additional_claims=additional_claims,
                expires_delta=expires_delta,
            ),
        )

    def create_refresh_token(
        self,
        *,
        identity: str | int,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        self._require_secret()
        return cast(
            str,
            _create_refresh(
                identity=str(identity),
                additional_claims=additional_claims,
                expires_delta=expires_delta,
            ),
        )

    def decode(self, token: str) -> dict[str, Any]:
        self._require_secret()
        try:
            return cast(dict[str, Any], _decode(token))
        except pyjwt.ExpiredSignatureError as exc:
            raise TokenExpiredError(str(exc)) from exc
        except (pyjwt.InvalidTokenError, JWTExtendedException) as exc:
            raise TokenDecodeError(str(exc)) from exc

    def get_subject(self, token: str) -> int | str:
        return cast(int | str, self.decode(token)["sub"])
