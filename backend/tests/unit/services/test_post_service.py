from __future__ import annotations

import pytest

from postboard.models import Comment, Post
from postboard.services._shared.base import ServiceContext
from postboard.services._shared.errors import AuthorizationError, NotFoundError, ValidationError
from postboard.services.posts.dto import PostCreateIn, PostUpdateIn
from postboard.services.posts.service import PostService
from tests.factories.comment import CommentFactory
from tests.factories.post import PostFactory
from tests.factories.user import UserFactory


def _as(user) -> PostService:
    return PostService(ctx=ServiceContext(actor_id=user.id))


def test_create_assigns_actor_as_author(session):
    author = UserFactory()
    out = _as(author).create(PostCreateIn(title="Hi", content="Body"))

    assert out.user_id == author.id
    assert session.get(Post, out.id).title == "Hi"


@pytest.mark.parametrize("title,content", [("", "Body"), ("Title", None)])
def test_create_requires_title_and_content(session, title, content):
    with pytest.raises(ValidationError, match="Title and content are required"):
        _as(UserFactory()).create(PostCreateIn(title=title, content=content))


def test_list_filters_by_author(session):
    author = UserFactory()
    PostFactory(author=author)
    PostFactory()

    assert len(PostService().list()) == 2
    assert [p.user_id for p in PostService().list(user_id=author.id)] == [author.id]


def test_get_missing_post(session):
    with pytest.raises(NotFoundError) as err:
        PostService().get(404)
    assert str(err.value) == "Post not found"


def test_update_is_partial(session):
    post = PostFactory(title="Old", content="Kept")
    out = _as(post.author).update(post.id, PostUpdateIn(title="New", content=None))

    assert (out.title, out.content) == ("New", "Kept")


def test_update_rejects_empty_values(session):
    post = PostFactory()
    with pytest.raises(ValidationError, match="cannot be empty"):
        _as(post.author).update(post.id, PostUpdateIn(title="", content=None))


def test_update_by_stranger_is_forbidden(session):
    post = PostFactory(title="Mine")
    with pytest.raises(AuthorizationError):
        _as(UserFactory()).update(post.id, PostUpdateIn(title="Stolen", content=None))

    session.expire_all()
    assert session.get(Post, post.id).title == "Mine"


def test_delete_cascades_to_comments(session):
    post = PostFactory()
    CommentFactory(post=post)
    post_id = post.id

    _as(post.author).delete(post_id)

    assert session.get(Post, post_id) is None
    assert session.query(Comment).filter_by(post_id=post_id).count() == 0


def test_delete_by_stranger_or_anonymous_is_forbidden(session):
    post = PostFactory()
    with pytest.raises(AuthorizationError):
        _as(UserFactory()).delete(post.id)
    with pytest.raises(AuthorizationError):
        PostService().delete(post.id)
