from __future__ import annotations

import logging

import pytest

from postboard.models import Post, User
from postboard.services._shared.base import ServiceContext
from postboard.services._shared.errors import (
    AuthorizationError,
    ConflictError,
    MissingFieldError,
    NotFoundError,
    ValidationError,
)
from postboard.services.users.dto import UserCreateIn, UserUpdateIn
from postboard.services.users.service import UserService
from tests.factories.post import PostFactory
from tests.factories.user import UserFactory


def test_list_and_filter_by_email(session):
    target = UserFactory(email="find.me@example.com")
    UserFactory()

    assert len(UserService().list()) == 2
    assert [u.id for u in UserService().list(email="Find.Me@example.com")] == [target.id]
    assert UserService().list(email="missing@example.com") == []


def test_lookups(session):
    user = UserFactory(username="lookup")

    assert UserService().get(user.id).username == "lookup"
    assert UserService().get_by_username("lookup").id == user.id
    with pytest.raises(NotFoundError, match="User not found"):
        UserService().get_by_username("nobody")


def test_public_representation_has_no_secrets(session):
    out = UserService().get(UserFactory().id)
    assert not hasattr(out, "password_hash")
    assert not hasattr(out, "refresh_tokens")


def test_delete_self_removes_posts(session):
    user = UserFactory()
    PostFactory(author=user)
    user_id = user.id

    UserService(ctx=ServiceContext(actor_id=user_id)).delete(user_id)

    assert session.get(User, user_id) is None
    assert session.query(Post).count() == 0


def test_delete_someone_else_is_forbidden(session):
    victim = UserFactory()
    with pytest.raises(AuthorizationError, match="You can only delete your own account"):
        UserService(ctx=ServiceContext(actor_id=UserFactory().id)).delete(victim.id)


def _as(user) -> UserService:
    return UserService(ctx=ServiceContext(actor_id=user.id))


def test_create_stores_hashed_password_and_empty_ledger(session):
    out = UserService().create(
        UserCreateIn(username="  direct ", email="Direct@Example.com", password="s3cret!")
    )

    user = session.get(User, out.id)
    assert (out.username, out.email) == ("direct", "direct@example.com")
    assert user.password_hash != "s3cret!"
    assert user.verify_password("s3cret!")
    assert user.refresh_tokens == []


def test_create_requires_every_field(session):
    with pytest.raises(MissingFieldError):
        UserService().create(UserCreateIn(username="x", email="x@example.com", password=""))


def test_create_rejects_taken_email_or_username(session):
    UserFactory(email="taken@example.com", username="taken")

    with pytest.raises(ConflictError):
        UserService().create(UserCreateIn(username="fresh", email="TAKEN@example.com", password="p"))
    with pytest.raises(ConflictError):
        UserService().create(UserCreateIn(username="taken", email="fresh@example.com", password="p"))


def test_create_rejects_malformed_email(session):
    with pytest.raises(ValidationError) as err:
        UserService().create(UserCreateIn(username="bad", email="nope", password="p"))
    assert not isinstance(err.value, MissingFieldError)


def test_update_is_partial_and_rehashes_password(session):
    user = UserFactory(username="before", email="before@example.com", refresh_tokens=["r1"])

    out = _as(user).update(user.id, UserUpdateIn(username="after", password="n3w-pass"))

    session.expire_all()
    stored = session.get(User, user.id)
    assert (out.username, out.email) == ("after", "before@example.com")
    assert stored.verify_password("n3w-pass")
    assert stored.refresh_tokens == ["r1"]


def test_update_keeping_own_email_is_not_a_conflict(session):
    user = UserFactory(email="same@example.com")
    out = _as(user).update(user.id, UserUpdateIn(email="same@example.com"))
    assert out.email == "same@example.com"


def test_update_to_someone_elses_username_conflicts(session):
    UserFactory(username="occupied")
    user = UserFactory()

    with pytest.raises(ConflictError):
        _as(user).update(user.id, UserUpdateIn(username="occupied"))


def test_update_rejects_empty_values(session):
    user = UserFactory()
    with pytest.raises(ValidationError, match="cannot be empty"):
        _as(user).update(user.id, UserUpdateIn(email=""))


def test_update_someone_else_is_forbidden(session):
    victim = UserFactory(username="victim")

    with pytest.raises(AuthorizationError, match="You can only update your own account"):
        _as(UserFactory()).update(victim.id, UserUpdateIn(username="pwned"))

    session.expire_all()
    assert session.get(User, victim.id).username == "victim"


def test_update_missing_user(session):
    with pytest.raises(NotFoundError):
        _as(UserFactory()).update(999, UserUpdateIn(username="ghost"))


def test_mutations_are_logged_with_the_actor(session, caplog):
    user = UserFactory()

    with caplog.at_level(logging.INFO, logger="postboard.services.users.service"):
        _as(user).update(user.id, UserUpdateIn(username="renamed"))

    record = next(r for r in caplog.records if r.getMessage() == "user.updated")
    assert record.user_id == user.id
