"""Authentication endpoints: register, login, refresh, logout and me."""

from __future__ import annotations

from flask import Blueprint, g, request

from postboard.api.deps import (
    get_auth_service,
    json_response,
    require_auth,
    run_service,
    service_context,
    timing,
)
from postboard.schemas import (
    LoginSchema,
    MessageSchema,
    RefreshTokenSchema,
    RegisterSchema,
    TokenPairSchema,
    UserSchema,
)
from postboard.services._shared.errors import MissingFieldError
from postboard.services.auth.dto import LoginIn, LogoutIn, RefreshIn, RegisterIn
from postboard.services.users.service import UserService

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_token_schema = RefreshTokenSchema()
token_pair_schema = TokenPairSchema()
message_schema = MessageSchema()
user_schema = UserSchema()


def _body() -> dict:
    return request.get_json(silent=True) or {}


@bp.post("/register")
@timing
def register():
    """Create an account and open its first session."""

    data = register_schema.load(_body())
    pair = run_service(
        get_auth_service(),
        lambda svc: svc.register(RegisterIn(**data)),
        # Missing fields have always answered 401 on this route.
        status_overrides={MissingFieldError: 401},
    )
    return json_response(token_pair_schema.dump(pair), status=201)


@bp.post("/login")
@timing
def login():
    data = login_schema.load(_body())
    pair = run_service(get_auth_service(), lambda svc: svc.login(LoginIn(**data)))
    return json_response(token_pair_schema.dump(pair))


@bp.post("/refresh")
@timing
def refresh():
    """Exchange a refresh token for a new pair; the old one stops working."""

    data = refresh_token_schema.load(_body())
    pair = run_service(
        get_auth_service(),
        lambda svc: svc.refresh(RefreshIn(**data)),
        status_overrides={MissingFieldError: 401},
    )
    return json_response(token_pair_schema.dump(pair))


@bp.post("/logout")
@timing
def logout():
    data = refresh_token_schema.load(_body())
    message = run_service(
        get_auth_service(),
        lambda svc: svc.logout(LogoutIn(**data)),
        status_overrides={MissingFieldError: 401},
    )
    return json_response(message_schema.dump({"message": message}))


@bp.get("/me")
@require_auth
@timing
def me():
    """Return the authenticated user."""

    service = UserService(ctx=service_context())
    user = run_service(service, lambda svc: svc.get(g.user_id))
    return json_response({"data": user_schema.dump(user)})
