from __future__ import annotations

import logging

from postboard.models.post import Post
from postboard.repositories.post import PostRepository
from postboard.services._shared.base import BaseService
from postboard.services._shared.errors import MissingFieldError, NotFoundError, ValidationError
from postboard.services.posts.dto import PostCreateIn, PostOut, PostUpdateIn

log = logging.getLogger(__name__)


class PostService(BaseService):
    """
    CRUD over posts.

    Anyone may read; only the author (``ctx.actor_id``) may update or delete.
    Deleting a post deletes its comments.
    """

    def create(self, dto: PostCreateIn) -> PostOut:
        if not (dto.title and dto.content):
            raise MissingFieldError("Title and content are required")
        with self.rw_uow() as uow:
            repo: PostRepository = uow.posts
            post = repo.add(
                repo.model(title=dto.title, content=dto.content, user_id=self.ctx.actor_id)
            )
            out = self._to_out(post)
        log.info("post.created", extra={"user_id": self.ctx.actor_id, "post_id": out.id})
        return out

    def list(self, *, user_id: int | None = None) -> list[PostOut]:
        with self.ro_uow() as uow:
            posts = uow.posts.list(filters={"user_id": user_id})
            return [self._to_out(p) for p in posts]

    def get(self, post_id: int) -> PostOut:
        with self.ro_uow() as uow:
            post = uow.posts.get(post_id)
            if post is None:
                raise NotFoundError("Post", post_id)
            return self._to_out(post)

    def update(self, post_id: int, dto: PostUpdateIn) -> PostOut:
        """
        Apply a partial update.

        :raises NotFoundError: If the post does not exist.
        :raises AuthorizationError: If the actor is not the author.
        :raises ValidationError: If a provided field is empty.
        """
        updates = {k: v for k, v in (("title", dto.title), ("content", dto.content)) if v is not None}
        if any(not v for v in updates.values()):
            raise ValidationError("Title and content cannot be empty")
        with self.rw_uow() as uow:
            repo: PostRepository = uow.posts
            post = repo.get_for_update(post_id)
            if post is None:
                raise NotFoundError("Post", post_id)
            self.ensure_owner(post.user_id)
            repo.update(post, **updates)
            out = self._to_out(post)
        log.info("post.updated", extra={"user_id": self.ctx.actor_id, "post_id": post_id})
        return out

    def delete(self, post_id: int) -> None:
        with self.rw_uow() as uow:
            repo: PostRepository = uow.posts
            post = repo.get_for_update(post_id)
            if post is None:
                raise NotFoundError("Post", post_id)
            self.ensure_owner(post.user_id)
            repo.delete(post)
        log.info("post.deleted", extra={"user_id": self.ctx.actor_id, "post_id": post_id})

    @staticmethod
    def _to_out(post: Post) -> PostOut:
        return PostOut(
            id=post.id,
            title=post.title,
            content=post.content,
            user_id=post.user_id,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )
