"""Comment resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields


class CommentCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    content = fields.String(load_default=None)
    post_id = fields.Integer(data_key="postId", load_default=None)


class CommentUpdateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    content = fields.String(load_default=None)


class CommentFilterSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    post_id = fields.Integer(data_key="postId", load_default=None)
    user_id = fields.Integer(data_key="userId", load_default=None)


class CommentSchema(Schema):
    """Public representation of a comment."""

    id = fields.Integer(required=True)
    content = fields.String(required=True)
    user_id = fields.Integer(data_key="userId", required=True)
    post_id = fields.Integer(data_key="postId", required=True)
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)
    updated_at = fields.DateTime(data_key="updatedAt", allow_none=True)
