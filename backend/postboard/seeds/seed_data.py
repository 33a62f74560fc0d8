"""Idempotent database seed helpers for local development environments."""

from __future__ import annotations

import logging
from typing import Any, TypeVar, cast

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.orm import Session

from postboard.models import Comment, Post, User

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

USER_FIXTURES: list[dict[str, str]] = [
    {"email": "alex.martinez@example.com", "username": "alexm", "password": "devPass123!"},
    {"email": "jamie.lee@example.com", "username": "jamielee", "password": "strongPass123"},
    {"email": "sara.kim@example.com", "username": "sarak", "password": "postMore2024"},
]

POST_FIXTURES: list[dict[str, str]] = [
    {
        "author": "alexm",
        "title": "Hello postboard",
        "content": "First post on the board. Say hi in the comments.",
    },
    {
        "author": "jamielee",
        "title": "Rotating refresh tokens",
        "content": "Every refresh hands out a new token and retires the old one.",
    },
]

COMMENT_FIXTURES: list[dict[str, str]] = [
    {"author": "jamielee", "post": "Hello postboard", "content": "Hi Alex!"},
    {"author": "sarak", "post": "Hello postboard", "content": "Welcome aboard."},
    {"author": "alexm", "post": "Rotating refresh tokens", "content": "Replays wipe the ledger."},
]


def _session(database: SQLAlchemy) -> Session:
    return cast(Session, database.session)


def _touch(summary: dict[str, dict[str, int]], table: str, created: bool) -> None:
    entry = summary.setdefault(table, {"created": 0, "existing": 0})
    entry["created" if created else "existing"] += 1


def _get_or_create(
    session: Session,
    model: type[T],
    *,
    defaults: dict[str, Any] | None = None,
    **filters: Any,
) -> tuple[T, bool]:
    """Fetch ``model`` by ``filters`` or create it using ``defaults``."""
    instance = session.execute(select(model).filter_by(**filters)).scalar_one_or_none()
    if instance is not None:
        return instance, False
    params = dict(defaults or {})
    params.update(filters)
    instance = cast(T, model(**params))
    session.add(instance)
    session.flush()
    return instance, True


def seed_users(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create the demo accounts with empty refresh-token ledgers."""
    if verbose:
        LOGGER.info("Seeding users...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}
    for fixture in USER_FIXTURES:
        _, created = _get_or_create(
            session,
            User,
            email=fixture["email"],
            defaults={
                "username": fixture["username"],
                "password": fixture["password"],
                "refresh_tokens": [],
            },
        )
        _touch(summary, "users", created)
    session.commit()
    return summary


def seed_posts_and_comments(
    database: SQLAlchemy, *, verbose: bool = False
) -> dict[str, dict[str, int]]:
    """Attach demo posts and comments to the seeded accounts."""
    if verbose:
        LOGGER.info("Seeding posts and comments...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}
    users = {u.username: u for u in session.execute(select(User)).scalars()}
    posts: dict[str, Post] = {}

    for fixture in POST_FIXTURES:
        author = users[fixture["author"]]
        post, created = _get_or_create(
            session,
            Post,
            title=fixture["title"],
            user_id=author.id,
            defaults={"content": fixture["content"]},
        )
        posts[fixture["title"]] = post
        _touch(summary, "posts", created)

    for fixture in COMMENT_FIXTURES:
        _, created = _get_or_create(
            session,
            Comment,
            content=fixture["content"],
            post_id=posts[fixture["post"]].id,
            user_id=users[fixture["author"]].id,
        )
        _touch(summary, "comments", created)

    session.commit()
    return summary


def run_all(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Run all seeders in foreign-key order."""
    combined: dict[str, dict[str, int]] = {}
    for func in (seed_users, seed_posts_and_comments):
        for table, counters in func(database, verbose=verbose).items():
            entry = combined.setdefault(table, {"created": 0, "existing": 0})
            entry["created"] += counters.get("created", 0)
            entry["existing"] += counters.get("existing", 0)
    return combined


__all__ = ["seed_users", "seed_posts_and_comments", "run_all"]
