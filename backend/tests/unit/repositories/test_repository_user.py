from __future__ import annotations

import pytest

from postboard.repositories.user import UserRepository
from tests.factories.user import UserFactory


@pytest.fixture()
def repo(session) -> UserRepository:
    return UserRepository(session=session)


def test_get_by_email_is_case_insensitive(repo):
    user = UserFactory(email="mixed@example.com")
    assert repo.get_by_email("  MIXED@example.com ").id == user.id


def test_get_by_username(repo):
    user = UserFactory(username="handle")
    assert repo.get_by_username("handle").id == user.id
    assert repo.get_by_username("nobody") is None


def test_exists_by_email_or_username(repo):
    UserFactory(email="taken@example.com", username="taken")

    assert repo.exists_by_email_or_username("taken@example.com", "free")
    assert repo.exists_by_email_or_username("free@example.com", "taken")
    assert not repo.exists_by_email_or_username("free@example.com", "free")


def test_authenticate(repo):
    user = UserFactory(email="auth@example.com", password="right-pass")

    assert repo.authenticate("auth@example.com", "right-pass").id == user.id
    assert repo.authenticate("auth@example.com", "wrong-pass") is None
    assert repo.authenticate("missing@example.com", "right-pass") is None


def test_get_for_update_returns_row(repo):
    user = UserFactory()
    assert repo.get_for_update(user.id).id == user.id
    assert repo.get_for_update(999_999) is None


def test_list_sorts_and_ignores_unknown_tokens(repo):
    UserFactory(username="bravo")
    UserFactory(username="alpha")

    names = [u.username for u in repo.list(sort=["username", "password_hash"])]

    assert names == ["alpha", "bravo"]


def test_update_rejects_non_whitelisted_fields(repo):
    user = UserFactory()
    with pytest.raises(ValueError):
        repo.update(user, refresh_tokens=["forged"])
