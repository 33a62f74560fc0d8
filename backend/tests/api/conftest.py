from __future__ import annotations

import pytest

from tests.helpers.http import PASSWORD, bearer


@pytest.fixture()
def register(client):
    """Register ``name`` through the API and return the token pair body."""

    def _register(name: str = "alice") -> dict[str, str]:
        resp = client.post(
            "/auth/register",
            json={"username": name, "email": f"{name}@example.com", "password": PASSWORD},
        )
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()

    return _register


@pytest.fixture()
def auth_headers(register):
    """Register ``name`` and return headers carrying its access token."""

    def _headers(name: str = "alice") -> dict[str, str]:
        return bearer(register(name)["accessToken"])

    return _headers
