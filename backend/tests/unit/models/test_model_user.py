from __future__ import annotations

import pytest

from postboard.models.user import User
from tests.factories.user import UserFactory


def test_email_and_username_are_normalized(session):
    user = User(email="  Alice@Example.COM ", username="  alice  ", password="secret")
    session.add(user)
    session.commit()

    assert user.email == "alice@example.com"
    assert user.username == "alice"


def test_invalid_email_is_rejected():
    with pytest.raises(ValueError):
        User(email="not-an-email", username="bob", password="secret")


def test_password_is_write_only_and_verifiable():
    user = User(email="carol@example.com", username="carol", password="s3cret")

    assert user.password_hash != "s3cret"
    assert user.verify_password("s3cret") is True
    assert user.verify_password("wrong") is False
    with pytest.raises(AttributeError):
        _ = user.password


def test_new_user_starts_with_empty_ledger(session):
    user = UserFactory()
    assert user.refresh_tokens == []


def test_ledger_appends_in_issuance_order():
    user = User(email="dan@example.com", username="dan", password="x", refresh_tokens=[])
    user.add_refresh_token("r1")
    user.add_refresh_token("r2")

    assert user.refresh_tokens == ["r1", "r2"]
    assert user.has_refresh_token("r1")
    assert not user.has_refresh_token("r3")


def test_remove_drops_every_occurrence():
    user = User(email="eve@example.com", username="eve", password="x", refresh_tokens=[])
    for token in ("r1", "r2", "r1"):
        user.add_refresh_token(token)

    user.remove_refresh_token("r1")

    assert user.refresh_tokens == ["r2"]


def test_rotate_replaces_old_with_new_at_the_end():
    user = User(email="fay@example.com", username="fay", password="x", refresh_tokens=["r1", "r2"])
    user.rotate_refresh_token("r1", "r3")
    assert user.refresh_tokens == ["r2", "r3"]


def test_clear_empties_the_ledger():
    user = User(email="gus@example.com", username="gus", password="x", refresh_tokens=["r1", "r2"])
    user.clear_refresh_tokens()
    assert user.refresh_tokens == []


def test_ledger_changes_are_persisted(session):
    user = UserFactory()
    user.add_refresh_token("r1")
    session.commit()
    session.expire_all()

    assert session.get(User, user.id).refresh_tokens == ["r1"]
