"""Convenience exports for the Marshmallow schemas."""

from __future__ import annotations

from .auth import (
    LoginSchema,
    MessageSchema,
    RefreshTokenSchema,
    RegisterSchema,
    TokenPairSchema,
)
from .comment import (
    CommentCreateSchema,
    CommentFilterSchema,
    CommentSchema,
    CommentUpdateSchema,
)
from .post import PostCreateSchema, PostFilterSchema, PostSchema, PostUpdateSchema
from .user import UserCreateSchema, UserFilterSchema, UserSchema, UserUpdateSchema

__all__ = [
    "LoginSchema",
    "MessageSchema",
    "RefreshTokenSchema",
    "RegisterSchema",
    "TokenPairSchema",
    "CommentCreateSchema",
    "CommentFilterSchema",
    "CommentSchema",
    "CommentUpdateSchema",
    "PostCreateSchema",
    "PostFilterSchema",
    "PostSchema",
    "PostUpdateSchema",
    "UserCreateSchema",
    "UserFilterSchema",
    "UserSchema",
    "UserUpdateSchema",
]
