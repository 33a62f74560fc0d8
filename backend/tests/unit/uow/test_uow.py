from __future__ import annotations

import pytest

from postboard.models.user import User
from postboard.uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork
from tests.factories.user import UserFactory


def test_writer_commits_on_success(session):
    with SQLAlchemyUnitOfWork() as uow:
        uow.users.add(User(email="w@example.com", username="writer", password="x"))

    session.expire_all()
    assert session.query(User).filter_by(username="writer").count() == 1


def test_writer_rolls_back_on_error(session):
    with pytest.raises(RuntimeError):
        with SQLAlchemyUnitOfWork() as uow:
            uow.users.add(User(email="r@example.com", username="rolled", password="x"))
            raise RuntimeError("boom")

    assert session.query(User).filter_by(username="rolled").count() == 0


def test_writer_repositories_share_the_session(session):
    uow = SQLAlchemyUnitOfWork()
    assert uow.users.session is uow.posts.session is uow.comments.session


def test_reader_blocks_flushes(session):
    user = UserFactory()
    with pytest.raises(RuntimeError):
        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            loaded = uow.users.get(user.id)
            loaded.username = "changed"
            uow.session.flush()


def test_reader_disallows_commit(session):
    with SQLAlchemyReadOnlyUnitOfWork() as uow:
        with pytest.raises(RuntimeError):
            uow.commit()


def test_reader_discards_changes_it_owns(session):
    user = UserFactory(username="stable")
    session.commit()

    with SQLAlchemyReadOnlyUnitOfWork() as uow:
        uow.users.get(user.id).username = "mutated"

    session.expire_all()
    assert session.get(User, user.id).username == "stable"
