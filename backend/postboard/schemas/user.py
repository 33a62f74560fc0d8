"""User resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class UserFilterSchema(Schema):
    """Supported query parameters for listing users."""

    class Meta:
        unknown = EXCLUDE

    email = fields.String(load_default=None, validate=validate.Length(min=1, max=254))


class UserSchema(Schema):
    """Public representation of a user. The hash and the ledger never leave."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    email = fields.String(required=True)
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)


class UserCreateSchema(Schema):
    """Input payload for ``POST /user``."""

    class Meta:
        unknown = EXCLUDE

    username = fields.String(load_default=None, validate=validate.Length(max=50))
    email = fields.String(load_default=None, validate=validate.Length(max=254))
    password = fields.String(load_default=None)


class UserUpdateSchema(Schema):
    """Input payload for ``PUT /user/<id>``; absent keys stay untouched."""

    class Meta:
        unknown = EXCLUDE

    username = fields.String(load_default=None, validate=validate.Length(max=50))
    email = fields.String(load_default=None, validate=validate.Length(max=254))
    password = fields.String(load_default=None)
