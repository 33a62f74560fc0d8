from __future__ import annotations

import logging
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from postboard.repositories.user import UserRepository
from postboard.services._shared.base import BaseService
from postboard.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    InvalidTokenError,
    MissingFieldError,
    NotFoundError,
    OperationFailure,
    ValidationError,
)
from postboard.services._shared.ports.token_provider import TokenDecodeError, TokenProvider
from postboard.services.auth.dto import (
    AuthTokenConfig,
    LoginIn,
    LogoutIn,
    RefreshIn,
    RegisterIn,
    TokenPairOut,
)

log = logging.getLogger(__name__)

LOGOUT_MESSAGE = "Logged out successfully"


class AuthService(BaseService):
    """
    Session lifecycle: register, login, refresh and logout.

    Every refresh token handed out is recorded in its owner's ledger
    (``User.refresh_tokens``). A refresh token is honoured only while it is
    both cryptographically valid and still in the ledger:

    * refresh consumes the presented token and records its replacement in
      the same transaction (rotation);
    * a valid token missing from the ledger is treated as replay and wipes
      the whole ledger, ending every session of that user;
    * logout removes a single token and never wipes the rest.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        token_cfg: AuthTokenConfig | None = None,
    ) -> None:
        """
        :param token_provider: Adapter for issuing/decoding JWTs.
        :param token_cfg: Access/refresh lifetimes.
        """
        super().__init__()
        self.tokens = token_provider
        self.cfg = token_cfg or AuthTokenConfig()

    # ------------------------------------------------------------------ #
    # Building blocks
    # ------------------------------------------------------------------ #

    def issue_token_pair(self, user_id: int) -> TokenPairOut:
        """
        Mint an access/refresh pair bound to ``user_id``.

        The ``ts`` markers differ by one so the two tokens can never be
        byte-identical. Raises ``ConfigurationError`` (untranslated) when no
        signing secret is configured.
        """
        ts = int(datetime.now(UTC).timestamp() * 1000)
        access = self.tokens.create_access_token(
            identity=user_id,
            additional_claims={"ts": ts},
            expires_delta=self.cfg.access_expires,
        )
        refresh = self.tokens.create_refresh_token(
            identity=user_id,
            additional_claims={"ts": ts + 1},
            expires_delta=self.cfg.refresh_expires,
        )
        return TokenPairOut(access_token=access, refresh_token=refresh)

    def verify_credentials(self, email: str, password: str) -> int:
        """
        Return the id of the user owning ``email`` when ``password`` matches.

        :raises AuthenticationError: Same message for unknown email and
            wrong password.
        """
        try:
            with self.ro_uow() as uow:
                repo: UserRepository = uow.users
                user = repo.authenticate(email, password)
                if user is None:
                    raise AuthenticationError()
                return user.id
        except SQLAlchemyError as exc:
            raise OperationFailure() from exc

    # ------------------------------------------------------------------ #
    # Register / login
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> TokenPairOut:
        if not (dto.username and dto.email and dto.password):
            raise MissingFieldError("Username, email and password are required")

        try:
            with self.rw_uow() as uow:
                repo: UserRepository = uow.users
                if repo.exists_by_email_or_username(dto.email, dto.username):
                    raise ConflictError("User", "User with this email or username already exists")
                try:
                    user = repo.add(
                        repo.model(
                            username=dto.username,
                            email=dto.email,
                            password=dto.password,
                            refresh_tokens=[],
                        )
                    )
                except ValueError as exc:
                    raise ValidationError(str(exc)) from exc
                except IntegrityError as exc:
                    raise ConflictError(
                        "User", "User with this email or username already exists"
                    ) from exc

                pair = self.issue_token_pair(user.id)
                user.add_refresh_token(pair.refresh_token)
                user_id = user.id
        except SQLAlchemyError as exc:
            raise OperationFailure() from exc

        log.info("auth.register", extra={"user_id": user_id})
        return pair

    def login(self, dto: LoginIn) -> TokenPairOut:
        if not (dto.email and dto.password):
            raise MissingFieldError("Email and password are required")

        user_id = self.verify_credentials(dto.email, dto.password)
        try:
            with self.rw_uow() as uow:
                user = uow.users.get_for_update(user_id)
                if user is None:
                    raise AuthenticationError()
                pair = self.issue_token_pair(user.id)
                user.add_refresh_token(pair.refresh_token)
        except SQLAlchemyError as exc:
            raise OperationFailure() from exc

        log.info("auth.login", extra={"user_id": user_id})
        return pair

    # ------------------------------------------------------------------ #
    # Refresh with rotation and replay detection
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> TokenPairOut:
        if not dto.refresh_token:
            raise MissingFieldError("Refresh token is required")

        token = dto.refresh_token
        user_id = self._subject_of(token)
        pair: TokenPairOut | None = None
        try:
            with self.rw_uow() as uow:
                user = uow.users.get_for_update(user_id)
                if user is None:
                    raise InvalidTokenError()
                if user.has_refresh_token(token):
                    pair = self.issue_token_pair(user.id)
                    user.rotate_refresh_token(token, pair.refresh_token)
                else:
                    # Committed on purpose: the wipe must survive the error below.
                    user.clear_refresh_tokens()
        except SQLAlchemyError as exc:
            raise OperationFailure() from exc

        if pair is None:
            log.warning("auth.breach_detected", extra={"user_id": user_id})
            raise InvalidTokenError()

        log.info("auth.refresh", extra={"user_id": user_id})
        return pair

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, dto: LogoutIn) -> str:
        """
        Revoke one refresh token.

        :returns: Confirmation message.
        :raises InvalidTokenError: Token invalid, owner gone, or not in the ledger.
        :raises OperationFailure: The ledger could not be persisted.
        """
        if not dto.refresh_token:
            raise MissingFieldError("Refresh token is required")

        token = dto.refresh_token
        user_id = self._subject_of(token)
        try:
            with self.rw_uow() as uow:
                user = uow.users.get_for_update(user_id)
                if user is None or not user.has_refresh_token(token):
                    raise InvalidTokenError()
                user.remove_refresh_token(token)
        except SQLAlchemyError as exc:
            raise OperationFailure("Logout failed") from exc

        log.info("auth.logout", extra={"user_id": user_id})
        return LOGOUT_MESSAGE

    # ------------------------------------------------------------------ #
    # Administrative
    # ------------------------------------------------------------------ #

    def revoke_all_sessions(self, email: str) -> int:
        """
        Empty the ledger of the user owning ``email``.

        :returns: Number of refresh tokens revoked.
        :raises NotFoundError: If no user owns ``email``.
        """
        try:
            with self.rw_uow() as uow:
                repo: UserRepository = uow.users
                found = repo.get_by_email(email)
                user = repo.get_for_update(found.id) if found is not None else None
                if user is None:
                    raise NotFoundError("User", email)
                revoked = len(user.refresh_tokens or [])
                user.clear_refresh_tokens()
                user_id = user.id
        except SQLAlchemyError as exc:
            raise OperationFailure() from exc

        log.warning("auth.sessions_revoked", extra={"user_id": user_id, "revoked": revoked})
        return revoked

    # ------------------------------------------------------------------ #
    # Utilities
    # ------------------------------------------------------------------ #

    def _subject_of(self, token: str) -> int:
        """Verify ``token`` and return its subject as a user id."""
        try:
            subject = self.tokens.get_subject(token)
        except TokenDecodeError as exc:
            raise InvalidTokenError() from exc
        try:
            return int(subject)
        except (TypeError, ValueError) as exc:
            raise InvalidTokenError() from exc
