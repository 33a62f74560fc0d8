"""Service layer public API.

Re-exports the base primitives and the application services so callers can
import from :mod:`postboard.services` without knowing the internal layout.
"""

from __future__ import annotations

from ._shared.base import BaseService, ServiceContext
from .auth.service import AuthService
from .comments.service import CommentService
from .posts.service import PostService
from .users.service import UserService

__all__ = [
    "BaseService",
    "ServiceContext",
    "AuthService",
    "CommentService",
    "PostService",
    "UserService",
]
