"""DTOs for PostService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class PostCreateIn:
    """
    Input DTO for creating a post.

    :param title: Post title.
    :type title: str | None
    :param content: Post body.
    :type content: str | None
    """

    title: str | None
    content: str | None


@dataclass(frozen=True, slots=True)
class PostUpdateIn:
    """Partial update; ``None`` leaves a field untouched."""

    title: str | None = None
    content: str | None = None


@dataclass(frozen=True, slots=True)
class PostOut:
    id: int
    title: str
    content: str
    user_id: int
    created_at: datetime | None
    updated_at: datetime | None
