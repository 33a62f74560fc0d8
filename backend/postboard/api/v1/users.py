"""User endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from postboard.api.deps import json_response, require_auth, run_service, service_context, timing
from postboard.schemas import UserCreateSchema, UserFilterSchema, UserSchema, UserUpdateSchema
from postboard.services.users.dto import UserCreateIn, UserUpdateIn
from postboard.services.users.service import UserService

bp = Blueprint("users", __name__)

user_schema = UserSchema()
user_list_schema = UserSchema(many=True)
user_filter_schema = UserFilterSchema()
user_create_schema = UserCreateSchema()
user_update_schema = UserUpdateSchema()


@bp.get("")
@timing
def list_users():
    """Return every user, or the one matching ``?email=``."""

    filters = user_filter_schema.load(request.args)
    users = run_service(UserService(), lambda svc: svc.list(email=filters["email"]))
    return json_response({"data": user_list_schema.dump(users)})


@bp.get("/id/<int:user_id>")
@timing
def get_user(user_id: int):
    user = run_service(UserService(), lambda svc: svc.get(user_id))
    return json_response({"data": user_schema.dump(user)})


@bp.get("/username/<string:username>")
@timing
def get_user_by_username(username: str):
    user = run_service(UserService(), lambda svc: svc.get_by_username(username))
    return json_response({"data": user_schema.dump(user)})


@bp.delete("/<int:user_id>")
@require_auth
@timing
def delete_user(user_id: int):
    """Delete the caller's own account with its posts, comments and sessions."""

    run_service(UserService(ctx=service_context()), lambda svc: svc.delete(user_id))
    return json_response({"message": "User deleted successfully"})


@bp.post("")
@timing
def create_user():
    """Create an account directly; no tokens are issued."""

    data = user_create_schema.load(request.get_json(silent=True) or {})
    user = run_service(UserService(), lambda svc: svc.create(UserCreateIn(**data)))
    return json_response({"data": user_schema.dump(user)}, status=201)


@bp.put("/<int:user_id>")
@require_auth
@timing
def update_user(user_id: int):
    """Update the caller's own username, email or password."""

    data = user_update_schema.load(request.get_json(silent=True) or {})
    user = run_service(
        UserService(ctx=service_context()),
        lambda svc: svc.update(user_id, UserUpdateIn(**data)),
    )
    return json_response({"data": user_schema.dump(user)})
