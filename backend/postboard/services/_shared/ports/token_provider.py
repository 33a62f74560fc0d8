from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any, Protocol


class ConfigurationError(RuntimeError):
    """The token issuer cannot work with the current configuration."""


class TokenDecodeError(Exception):
    """Token is malformed, forged or otherwise unverifiable."""


class TokenExpiredError(TokenDecodeError):
    """Token signature is valid but its ``exp`` claim has passed."""


class TokenProvider(Protocol):
    """Port for issuing and verifying signed tokens."""

    def create_access_token(
        self,
        *,
        identity: int | str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str: ...

    def create_refresh_token(
        self,
        *,
        identity: int | str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str: ...

    def decode(self, token: str) -> dict[str, Any]:
        """
        Verify ``token`` and return its claims.

        :raises TokenExpiredError: If the token has expired.
        :raises TokenDecodeError: For any other verification failure.
        """
        ...

    def get_subject(self, token: str) -> int | str: ...


class StubTokenProvider(TokenProvider):
    """
    Deterministic token provider used in unit tests.

    Tokens are opaque strings remembered in memory; anything not minted by
    this instance fails to decode, and expiry follows the wall clock (so
    ``freezegun`` can move it).
    """

    def __init__(self) -> None:
        self._seq = 0
        self._issued: dict[str, dict[str, Any]] = {}

    def _mk(
        self,
        *,
        identity: int | str,
        ttype: str,
        exp_delta: timedelta,
        additional_claims: dict[str, Any] | None = None,
    ) -> str:
        self._seq += 1
        token = f"{ttype}.{identity}.{self._seq}"
        payload: dict[str, Any] = {
            "sub": str(identity),
            "type": ttype,
            "exp": int((datetime.now(tz=UTC) + exp_delta).timestamp()),
        }
        if additional_claims:
            payload.update(additional_claims)
        self._issued[token] = payload
        return token

    def create_access_token(
        self,
        *,
        identity: int | str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        return self._mk(
            identity=identity,
            ttype="access",
            exp_delta=expires_delta or timedelta(hours=1),
            additional_claims=additional_claims,
        )

    def create_refresh_token(
        self,
        *,
        identity: int | str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        return self._mk(
            identity=identity,
            ttype="refresh",
            exp_delta=expires_delta or timedelta(days=1),
            additional_claims=additional_claims,
        )

    def decode(self, token: str) -> dict[str, Any]:
        try:
            payload = self._issued[token]
        except KeyError as exc:
            raise TokenDecodeError("Unknown token") from exc
        if payload["exp"] <= int(datetime.now(tz=UTC).timestamp()):
            raise TokenExpiredError("Token expired")
        return dict(payload)

    def get_subject(self, token: str) -> int | str:
        return self.decode(token)["sub"]
