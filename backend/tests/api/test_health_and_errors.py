from __future__ import annotations

from postboard.api import register_blueprint_group
from postboard.api.v1 import REGISTRY
from postboard.core.config import TestingConfig
from postboard.factory import create_app


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok", "db": "ok", "version": "dev", "commit": "unknown"}


def test_unknown_route_is_a_problem_document(client):
    resp = client.get("/nope")
    body = resp.get_json()

    assert resp.status_code == 404
    assert resp.mimetype == "application/problem+json"
    assert body["error"] == body["detail"] == "Route '/nope' not found"
    assert body["code"] == "not_found"
    assert body["status"] == 404
    assert body["request_id"]


def test_method_not_allowed(client):
    resp = client.delete("/health")
    assert resp.status_code == 405
    assert resp.get_json()["code"] == "method_not_allowed"


def test_request_id_is_echoed(client):
    generated = client.get("/health").headers.get("X-Request-ID")
    supplied = client.get("/health", headers={"X-Request-ID": "req-42"})
    fresh = client.get("/health").headers.get("X-Request-ID")

    assert generated
    assert supplied.headers["X-Request-ID"] == "req-42"
    assert fresh not in (generated, "req-42")


def test_problem_documents_carry_the_request_id(client):
    resp = client.get("/nope", headers={"X-Request-ID": "req-404"})
    assert resp.get_json()["request_id"] == "req-404"


def test_base_prefix_mounts_every_blueprint():
    class PrefixedConfig(TestingConfig):
        API_BASE_PREFIX = "/api/v1"

    app = create_app(PrefixedConfig)
    rules = {rule.rule for rule in app.url_map.iter_rules()}

    assert "/api/v1/auth/login" in rules
    assert "/api/v1/post/<int:post_id>" in rules
    assert "/api/v1/health" in rules
    assert "/auth/login" not in rules


def test_register_blueprint_group_with_empty_prefix():
    from flask import Flask

    app = Flask(__name__)
    register_blueprint_group(app, base_prefix="", entries=REGISTRY)

    assert "/comment" in {rule.rule for rule in app.url_map.iter_rules()}
