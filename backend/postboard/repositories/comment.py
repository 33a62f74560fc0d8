"""Comment repository."""

from __future__ import annotations

from postboard.models.comment import Comment
from postboard.repositories.base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    model = Comment

    def _sortable_fields(self):
        return {"id": Comment.id, "created_at": Comment.created_at}

    def _filterable_fields(self):
        return {"user_id": Comment.user_id, "post_id": Comment.post_id}

    def _updatable_fields(self):
        return {"content"}
