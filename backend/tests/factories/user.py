"""Factory Boy definition for :class:`postboard.models.user.User`."""

from __future__ import annotations

import factory
from werkzeug.security import generate_password_hash

from postboard.models.user import User
from tests.factories import BaseFactory

DEFAULT_PASSWORD = "Passw0rd!"


class UserFactory(BaseFactory):
    """
    Build persisted users with an empty refresh-token ledger.

    Pass ``password="..."`` to choose the plain-text password; only its hash
    reaches the model.
    """

    class Meta:
        model = User

    class Params:
        password = DEFAULT_PASSWORD

    id = None  # let autoincrement handle it
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    username = factory.Sequence(lambda n: f"user{n}")
    password_hash = factory.LazyAttribute(lambda o: generate_password_hash(o.password))
    refresh_tokens = factory.LazyFunction(list)
