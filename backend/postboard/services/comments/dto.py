"""DTOs for CommentService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class CommentCreateIn:
    """
    Input DTO for creating a comment.

    :param content: Comment body.
    :type content: str | None
    :param post_id: Target post.
    :type post_id: int | None
    """

    content: str | None
    post_id: int | None


@dataclass(frozen=True, slots=True)
class CommentUpdateIn:
    content: str | None = None


@dataclass(frozen=True, slots=True)
class CommentOut:
    id: int
    content: str
    user_id: int
    post_id: int
    created_at: datetime | None
    updated_at: datetime | None
