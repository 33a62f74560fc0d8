"""Post resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class PostCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    title = fields.String(load_default=None, validate=validate.Length(max=200))
    content = fields.String(load_default=None)


class PostUpdateSchema(Schema):
    """Partial update; absent keys stay untouched."""

    class Meta:
        unknown = EXCLUDE

    title = fields.String(load_default=None, validate=validate.Length(max=200))
    content = fields.String(load_default=None)


class PostFilterSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    user_id = fields.Integer(data_key="userId", load_default=None)


class PostSchema(Schema):
    """Public representation of a post."""

    id = fields.Integer(required=True)
    title = fields.String(required=True)
    content = fields.String(required=True)
    user_id = fields.Integer(data_key="userId", required=True)
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)
    updated_at = fields.DateTime(data_key="updatedAt", allow_none=True)
