"""Factory Boy definition for :class:`postboard.models.comment.Comment`."""

from __future__ import annotations

import factory

from postboard.models.comment import Comment
from tests.factories import BaseFactory
from tests.factories.post import PostFactory
from tests.factories.user import UserFactory


class CommentFactory(BaseFactory):
    class Meta:
        model = Comment

    id = None
    content = factory.Faker("sentence")
    post = factory.SubFactory(PostFactory)
    author = factory.SubFactory(UserFactory)
