"""User repository: lookups and credential checks."""

from __future__ import annotations

from typing import cast

from sqlalchemy import or_, select

from postboard.models.user import User
from postboard.repositories.base import BaseRepository


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Token minting lives in the auth service; this class only reads and
    writes rows.
    """

    model = User

    def _sortable_fields(self):
        return {
            "id": User.id,
            "email": User.email,
            "username": User.username,
            "created_at": User.created_at,
        }

    def _filterable_fields(self):
        return {"email": User.email, "username": User.username}

    def _updatable_fields(self):
        # ``password`` goes through the model's hashing setter
        return {"email", "username", "password"}

    def get_by_email(self, email: str) -> User | None:
        """
        Fetch a user by email, case-insensitively.

        :param email: Address to normalize and look up.
        :returns: Matching user or ``None``.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == normalize_email(email))
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def get_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username.strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_email_or_username(
        self,
        email: str | None,
        username: str | None,
        *,
        exclude_id: int | None = None,
    ) -> bool:
        """
        Return ``True`` when either the email or the username is taken.

        :param email: Candidate email; skipped when empty.
        :param username: Candidate username; skipped when empty.
        :param exclude_id: Ignore this user (the one being updated).
        """
        clauses = []
        if email:
            clauses.append(User.email == normalize_email(email))
        if username:
            clauses.append(User.username == username.strip())
        if not clauses:
            return False
        stmt = select(User.id).where(or_(*clauses))
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        return self.session.execute(stmt.limit(1)).first() is not None

    def authenticate(self, email: str, password: str) -> User | None:
        """
        Return the user owning ``email`` when ``password`` matches.

        Unknown email and wrong password both yield ``None``.
        """
        user = self.get_by_email(email)
        if user is None or not user.verify_password(password):
            return None
        return user
