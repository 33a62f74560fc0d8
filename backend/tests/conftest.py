"""Pytest fixtures wiring an isolated in-memory database per test.

Every test gets a fresh application whose SQLite ``:memory:`` database is
created on entry and dropped on exit, so committed data never leaks.
"""

from __future__ import annotations

import os

import pytest

from postboard.api.deps import TOKEN_PROVIDER_EXTENSION
from postboard.core.config import TestingConfig
from postboard.core.extensions import db as _db
from postboard.factory import create_app
from postboard.services._shared.ports import StubTokenProvider


@pytest.fixture()
def app():
    """Create a Flask application configured for testing with an app context pushed."""
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestingConfig)
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def db(app):
    return _db


@pytest.fixture()
def session(db):
    """The Flask-scoped session shared by services, repositories and factories."""
    return db.session


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def stub_tokens(app) -> StubTokenProvider:
    """Swap the JWT adapter for the deterministic stub on this app."""
    provider = StubTokenProvider()
    app.extensions[TOKEN_PROVIDER_EXTENSION] = provider
    return provider


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to the pytest session --------------------------------
@pytest.fixture(autouse=True)
def _factories_session(request):
    """Wire Factory Boy's session helper when the test uses the database."""
    from tests.factories import SQLAlchemySession

    if "app" in request.fixturenames or "session" in request.fixturenames:
        SQLAlchemySession.set(request.getfixturevalue("session"))
    yield
    SQLAlchemySession.set(None)
