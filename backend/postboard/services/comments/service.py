from __future__ import annotations

import logging

from postboard.models.comment import Comment
from postboard.repositories.comment import CommentRepository
from postboard.services._shared.base import BaseService
from postboard.services._shared.errors import MissingFieldError, NotFoundError
from postboard.services.comments.dto import CommentCreateIn, CommentOut, CommentUpdateIn

log = logging.getLogger(__name__)


class CommentService(BaseService):
    """CRUD over comments; mutations are restricted to the comment's author."""

    def create(self, dto: CommentCreateIn) -> CommentOut:
        if not dto.content or dto.post_id is None:
            raise MissingFieldError("Content and postId are required")
        with self.rw_uow() as uow:
            if uow.posts.get(dto.post_id) is None:
                raise NotFoundError("Post", dto.post_id)
            repo: CommentRepository = uow.comments
            comment = repo.add(
                repo.model(content=dto.content, post_id=dto.post_id, user_id=self.ctx.actor_id)
            )
            out = self._to_out(comment)
        log.info(
            "comment.created",
            extra={"user_id": self.ctx.actor_id, "post_id": out.post_id, "comment_id": out.id},
        )
        return out

    def list(self, *, post_id: int | None = None, user_id: int | None = None) -> list[CommentOut]:
        with self.ro_uow() as uow:
            comments = uow.comments.list(filters={"post_id": post_id, "user_id": user_id})
            return [self._to_out(c) for c in comments]

    def get(self, comment_id: int) -> CommentOut:
        with self.ro_uow() as uow:
            comment = uow.comments.get(comment_id)
            if comment is None:
                raise NotFoundError("Comment", comment_id)
            return self._to_out(comment)

    def update(self, comment_id: int, dto: CommentUpdateIn) -> CommentOut:
        if not dto.content:
            raise MissingFieldError("Content is required")
        with self.rw_uow() as uow:
            repo: CommentRepository = uow.comments
            comment = repo.get_for_update(comment_id)
            if comment is None:
                raise NotFoundError("Comment", comment_id)
            self.ensure_owner(comment.user_id)
            repo.update(comment, content=dto.content)
            out = self._to_out(comment)
        log.info("comment.updated", extra={"user_id": self.ctx.actor_id, "comment_id": comment_id})
        return out

    def delete(self, comment_id: int) -> None:
        with self.rw_uow() as uow:
            repo: CommentRepository = uow.comments
            comment = repo.get_for_update(comment_id)
            if comment is None:
                raise NotFoundError("Comment", comment_id)
            self.ensure_owner(comment.user_id)
            repo.delete(comment)
        log.info("comment.deleted", extra={"user_id": self.ctx.actor_id, "comment_id": comment_id})

    @staticmethod
    def _to_out(comment: Comment) -> CommentOut:
        return CommentOut(
            id=comment.id,
            content=comment.content,
            user_id=comment.user_id,
            post_id=comment.post_id,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )
