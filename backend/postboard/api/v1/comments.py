"""Comment endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from postboard.api.deps import json_response, require_auth, run_service, service_context, timing
from postboard.schemas import (
    CommentCreateSchema,
    CommentFilterSchema,
    CommentSchema,
    CommentUpdateSchema,
)
from postboard.services.comments.dto import CommentCreateIn, CommentUpdateIn
from postboard.services.comments.service import CommentService

bp = Blueprint("comments", __name__)

comment_schema = CommentSchema()
comment_list_schema = CommentSchema(many=True)
comment_create_schema = CommentCreateSchema()
comment_update_schema = CommentUpdateSchema()
comment_filter_schema = CommentFilterSchema()


@bp.get("")
@timing
def list_comments():
    """Return comments, filtered by ``?postId=`` and/or ``?userId=``."""

    filters = comment_filter_schema.load(request.args)
    comments = run_service(
        CommentService(),
        lambda svc: svc.list(post_id=filters["post_id"], user_id=filters["user_id"]),
    )
    return json_response({"data": comment_list_schema.dump(comments)})


@bp.post("")
@require_auth
@timing
def create_comment():
    data = comment_create_schema.load(request.get_json(silent=True) or {})
    comment = run_service(
        CommentService(ctx=service_context()),
        lambda svc: svc.create(CommentCreateIn(**data)),
    )
    return json_response({"data": comment_schema.dump(comment)}, status=201)


@bp.get("/<int:comment_id>")
@timing
def get_comment(comment_id: int):
    comment = run_service(CommentService(), lambda svc: svc.get(comment_id))
    return json_response({"data": comment_schema.dump(comment)})


@bp.put("/<int:comment_id>")
@require_auth
@timing
def update_comment(comment_id: int):
    data = comment_update_schema.load(request.get_json(silent=True) or {})
    comment = run_service(
        CommentService(ctx=service_context()),
        lambda svc: svc.update(comment_id, CommentUpdateIn(**data)),
    )
    return json_response({"data": comment_schema.dump(comment)})


@bp.delete("/<int:comment_id>")
@require_auth
@timing
def delete_comment(comment_id: int):
    run_service(CommentService(ctx=service_context()), lambda svc: svc.delete(comment_id))
    return json_response({"message": "Comment deleted successfully"})
