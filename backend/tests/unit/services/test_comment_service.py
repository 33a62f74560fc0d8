from __future__ import annotations

import pytest

from postboard.models import Comment
from postboard.services._shared.base import ServiceContext
from postboard.services._shared.errors import AuthorizationError, NotFoundError, ValidationError
from postboard.services.comments.dto import CommentCreateIn, CommentUpdateIn
from postboard.services.comments.service import CommentService
from tests.factories.comment import CommentFactory
from tests.factories.post import PostFactory
from tests.factories.user import UserFactory


def _as(user) -> CommentService:
    return CommentService(ctx=ServiceContext(actor_id=user.id))


def test_create_on_existing_post(session):
    post = PostFactory()
    author = UserFactory()

    out = _as(author).create(CommentCreateIn(content="Nice", post_id=post.id))

    assert (out.post_id, out.user_id) == (post.id, author.id)


def test_create_requires_content_and_post(session):
    with pytest.raises(ValidationError, match="Content and postId are required"):
        _as(UserFactory()).create(CommentCreateIn(content="Nice", post_id=None))


def test_create_on_missing_post(session):
    with pytest.raises(NotFoundError, match="Post not found"):
        _as(UserFactory()).create(CommentCreateIn(content="Nice", post_id=999))


def test_list_by_post_and_user(session):
    post = PostFactory()
    mine = CommentFactory(post=post)
    CommentFactory(post=post)
    CommentFactory()

    assert len(CommentService().list(post_id=post.id)) == 2
    assert [c.id for c in CommentService().list(user_id=mine.user_id)] == [mine.id]


def test_update_owner_only(session):
    comment = CommentFactory(content="first")

    with pytest.raises(AuthorizationError):
        _as(UserFactory()).update(comment.id, CommentUpdateIn(content="hijack"))

    out = _as(comment.author).update(comment.id, CommentUpdateIn(content="edited"))
    assert out.content == "edited"


def test_update_requires_content(session):
    comment = CommentFactory()
    with pytest.raises(ValidationError):
        _as(comment.author).update(comment.id, CommentUpdateIn(content=""))


def test_delete(session):
    comment = CommentFactory()
    comment_id = comment.id

    _as(comment.author).delete(comment_id)

    assert session.get(Comment, comment_id) is None
    with pytest.raises(NotFoundError):
        CommentService().get(comment_id)
