from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from postboard.models.user import User
from postboard.repositories.user import UserRepository
from postboard.services._shared.base import BaseService
from postboard.services._shared.errors import (
    ConflictError,
    MissingFieldError,
    NotFoundError,
    ValidationError,
)
from postboard.services.users.dto import UserCreateIn, UserPublicOut, UserUpdateIn

log = logging.getLogger(__name__)

DUPLICATE_USER_MESSAGE = "User with this email or username already exists"


class UserService(BaseService):
    """
    Accounts outside the session protocol.

    Reads are public. Direct creation stores a user with an empty ledger and
    issues no tokens. Updates and deletion are restricted to the account
    owner.
    """

    def create(self, dto: UserCreateIn) -> UserPublicOut:
        """
        Create an account without opening a session.

        :raises MissingFieldError: If a field is empty.
        :raises ValidationError: If the model rejects a value.
        :raises ConflictError: If the email or username is taken.
        """
        if not (dto.username and dto.email and dto.password):
            raise MissingFieldError("Username, email and password are required")
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            if repo.exists_by_email_or_username(dto.email, dto.username):
                raise ConflictError("User", DUPLICATE_USER_MESSAGE)
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
                raise ConflictError("User", DUPLICATE_USER_MESSAGE) from exc
            out = self._to_out(user)
        log.info("user.created", extra={"user_id": out.id})
        return out

    def list(self, *, email: str | None = None) -> list[UserPublicOut]:
        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            if email:
                user = repo.get_by_email(email)
                return [self._to_out(user)] if user is not None else []
            return [self._to_out(u) for u in repo.list()]

    def get(self, user_id: int) -> UserPublicOut:
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return self._to_out(user)

    def get_by_username(self, username: str) -> UserPublicOut:
        with self.ro_uow() as uow:
            user = uow.users.get_by_username(username)
            if user is None:
                raise NotFoundError("User", username)
            return self._to_out(user)

    def update(self, user_id: int, dto: UserUpdateIn) -> UserPublicOut:
        """
        Apply a partial update to the caller's own account.

        A new password is hashed by the model; the refresh-token ledger is
        left as it is.

        :raises ValidationError: If a provided field is empty or malformed.
        :raises NotFoundError: If the user does not exist.
        :raises AuthorizationError: If the actor is someone else.
        :raises ConflictError: If the new email or username belongs to another user.
        """
        updates = {
            key: value
            for key, value in (
                ("username", dto.username),
                ("email", dto.email),
                ("password", dto.password),
            )
            if value is not None
        }
        if any(not v for v in updates.values()):
            raise ValidationError("Username, email and password cannot be empty")
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_for_update(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            self.ensure_owner(user.id, msg="You can only update your own account")
            if repo.exists_by_email_or_username(
                updates.get("email"), updates.get("username"), exclude_id=user.id
            ):
                raise ConflictError("User", DUPLICATE_USER_MESSAGE)
            try:
                repo.update(user, **updates)
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
            except IntegrityError as exc:
                raise ConflictError("User", DUPLICATE_USER_MESSAGE) from exc
            out = self._to_out(user)
        log.info("user.updated", extra={"user_id": user_id})
        return out

    def delete(self, user_id: int) -> None:
        """
        Delete an account together with its ledger, posts and comments.

        :raises NotFoundError: If the user does not exist.
        :raises AuthorizationError: If the actor is someone else.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_for_update(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            self.ensure_owner(user.id, msg="You can only delete your own account")
            repo.delete(user)
        log.info("user.deleted", extra={"user_id": user_id})

    @staticmethod
    def _to_out(user: User) -> UserPublicOut:
        return UserPublicOut(
            id=user.id,
            username=user.username,
            email=user.email,
            created_at=user.created_at,
        )
