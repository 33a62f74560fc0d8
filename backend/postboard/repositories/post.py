"""Post repository."""

from __future__ import annotations

from postboard.models.post import Post
from postboard.repositories.base import BaseRepository


class PostRepository(BaseRepository[Post]):
    model = Post

    def _sortable_fields(self):
        return {"id": Post.id, "title": Post.title, "created_at": Post.created_at}

    def _filterable_fields(self):
        return {"user_id": Post.user_id}

    def _updatable_fields(self):
        return {"title", "content"}
