"""Post endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from postboard.api.deps import json_response, require_auth, run_service, service_context, timing
from postboard.schemas import PostCreateSchema, PostFilterSchema, PostSchema, PostUpdateSchema
from postboard.services.posts.dto import PostCreateIn, PostUpdateIn
from postboard.services.posts.service import PostService

bp = Blueprint("posts", __name__)

post_schema = PostSchema()
post_list_schema = PostSchema(many=True)
post_create_schema = PostCreateSchema()
post_update_schema = PostUpdateSchema()
post_filter_schema = PostFilterSchema()


@bp.get("")
@timing
def list_posts():
    """Return every post, optionally only those of ``?userId=``."""

    filters = post_filter_schema.load(request.args)
    posts = run_service(PostService(), lambda svc: svc.list(user_id=filters["user_id"]))
    return json_response({"data": post_list_schema.dump(posts)})


@bp.post("")
@require_auth
@timing
def create_post():
    """Create a post owned by the caller."""

    data = post_create_schema.load(request.get_json(silent=True) or {})
    post = run_service(
        PostService(ctx=service_context()), lambda svc: svc.create(PostCreateIn(**data))
    )
    return json_response({"data": post_schema.dump(post)}, status=201)


@bp.get("/<int:post_id>")
@timing
def get_post(post_id: int):
    post = run_service(PostService(), lambda svc: svc.get(post_id))
    return json_response({"data": post_schema.dump(post)})


@bp.put("/<int:post_id>")
@require_auth
@timing
def update_post(post_id: int):
    data = post_update_schema.load(request.get_json(silent=True) or {})
    post = run_service(
        PostService(ctx=service_context()),
        lambda svc: svc.update(post_id, PostUpdateIn(**data)),
    )
    return json_response({"data": post_schema.dump(post)})


@bp.delete("/<int:post_id>")
@require_auth
@timing
def delete_post(post_id: int):
    run_service(PostService(ctx=service_context()), lambda svc: svc.delete(post_id))
    return json_response({"message": "Post deleted successfully"})
