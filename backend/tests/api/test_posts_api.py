from __future__ import annotations

from postboard.models import Comment
from tests.helpers.http import bearer


def _create(client, headers, title="Hello", content="World"):
    resp = client.post("/post", json={"title": title, "content": content}, headers=headers)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()["data"]


def test_create_requires_auth(client):
    resp = client.post("/post", json={"title": "t", "content": "c"})
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "No token provided"


def test_create_and_read(client, auth_headers):
    headers = auth_headers()
    created = _create(client, headers)

    resp = client.get(f"/post/{created['id']}")

    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert (data["title"], data["content"]) == ("Hello", "World")
    assert data["userId"] == created["userId"]
    assert "createdAt" in data and "updatedAt" in data


def test_create_missing_content_is_400(client, auth_headers):
    resp = client.post("/post", json={"title": "Only title"}, headers=auth_headers())
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Title and content are required"


def test_list_filters_by_user(client, auth_headers):
    alice, bob = auth_headers("alice"), auth_headers("bob")
    mine = _create(client, alice, title="alice's")
    _create(client, bob, title="bob's")

    everything = client.get("/post").get_json()["data"]
    filtered = client.get(f"/post?userId={mine['userId']}").get_json()["data"]

    assert len(everything) == 2
    assert [p["title"] for p in filtered] == ["alice's"]


def test_get_missing_post_is_404(client):
    resp = client.get("/post/999")
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Post not found"


def test_update_owner_only(client, auth_headers):
    alice, bob = auth_headers("alice"), auth_headers("bob")
    post = _create(client, alice)

    forbidden = client.put(f"/post/{post['id']}", json={"title": "Mine now"}, headers=bob)
    allowed = client.put(f"/post/{post['id']}", json={"title": "Edited"}, headers=alice)

    assert forbidden.status_code == 403
    assert forbidden.get_json()["error"] == "You can only modify your own resources"
    assert allowed.status_code == 200
    assert allowed.get_json()["data"]["title"] == "Edited"
    assert allowed.get_json()["data"]["content"] == "World"


def test_update_missing_post_is_404(client, auth_headers):
    resp = client.put("/post/999", json={"title": "x"}, headers=auth_headers())
    assert resp.status_code == 404


def test_delete_removes_comments(client, db, auth_headers):
    alice = auth_headers("alice")
    post = _create(client, alice)
    client.post("/comment", json={"content": "hi", "postId": post["id"]}, headers=alice)

    resp = client.delete(f"/post/{post['id']}", headers=alice)

    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Post deleted successfully"}
    assert client.get(f"/post/{post['id']}").status_code == 404
    assert db.session.query(Comment).filter_by(post_id=post["id"]).count() == 0


def test_delete_by_stranger_is_403(client, auth_headers):
    post = _create(client, auth_headers("alice"))
    resp = client.delete(f"/post/{post['id']}", headers=auth_headers("bob"))
    assert resp.status_code == 403


def test_invalid_bearer_is_rejected_before_lookup(client):
    resp = client.delete("/post/1", headers=bearer("nope"))
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "Invalid token"
