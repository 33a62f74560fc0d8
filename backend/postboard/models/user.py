"""User account and its refresh-token ledger."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates
from werkzeug.security import check_password_hash, generate_password_hash

from postboard.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .comment import Comment
    from .post import Post


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Registered account.

    Fields
    ------
    email : str
        Login email, stored trimmed and lowercased.
    username : str
        Public handle, stored trimmed. Unique per system.
    password_hash : str
        Hashed password (write-only setter via ``password``).
    refresh_tokens : list[str]
        Ledger of currently valid refresh tokens in issuance order. Entries
        are not deduplicated.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(254), nullable=False)
    username: Mapped[str] = mapped_column(String(50), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(254), nullable=False)
    refresh_tokens: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    posts: Mapped[list["Post"]] = relationship(
        back_populates="author",
        cascade="all, delete-orphan",
    )
    comments: Mapped[list["Comment"]] = relationship(
        back_populates="author",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        UniqueConstraint("username", name="uq_users_username"),
        Index("ix_users_email", "email"),
        Index("ix_users_username", "username"),
    )

    # -------------------- Password API --------------------
    @property
    def password(self) -> Any:  # pragma: no cover - explicit write-only contract
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        self.password_hash = generate_password_hash(raw)

    def verify_password(self, raw: str) -> bool:
        """
        Verify a password against the stored hash.

        :param raw: Plain text password candidate.
        :returns: ``True`` if it matches; otherwise ``False``.
        :rtype: bool
        """
        if not self.password_hash:
            return False
        return bool(check_password_hash(self.password_hash, raw))

    # -------------------- Refresh-token ledger --------------------
    # The JSON column is not mutation-tracked, so every write assigns a new list.

    def has_refresh_token(self, token: str) -> bool:
        return token in (self.refresh_tokens or [])

    def add_refresh_token(self, token: str) -> None:
        """Append ``token`` to the end of the ledger."""
        self.refresh_tokens = [*(self.refresh_tokens or []), token]

    def remove_refresh_token(self, token: str) -> None:
        """Drop every entry equal to ``token``."""
        self.refresh_tokens = [t for t in (self.refresh_tokens or []) if t != token]

    def rotate_refresh_token(self, old: str, new: str) -> None:
        """Replace ``old`` with ``new`` in a single assignment."""
        self.refresh_tokens = [t for t in (self.refresh_tokens or []) if t != old] + [new]

    def clear_refresh_tokens(self) -> None:
        """Invalidate every session of this user."""
        self.refresh_tokens = []

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and sanity-check an email address.

        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("username")
    def _normalize_username(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Username is required.")
        return value.strip()
