"""Persistence-layer repositories for the postboard aggregates."""

from __future__ import annotations

from postboard.repositories.base import BaseRepository, apply_sorting
from postboard.repositories.comment import CommentRepository
from postboard.repositories.post import PostRepository
from postboard.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "apply_sorting",
    "CommentRepository",
    "PostRepository",
    "UserRepository",
]
