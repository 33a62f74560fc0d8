from __future__ import annotations


def _post(client, headers):
    resp = client.post("/post", json={"title": "T", "content": "C"}, headers=headers)
    return resp.get_json()["data"]


def test_comment_lifecycle(client, auth_headers):
    alice = auth_headers("alice")
    post = _post(client, alice)

    created = client.post("/comment", json={"content": "First!", "postId": post["id"]}, headers=alice)
    assert created.status_code == 201
    comment = created.get_json()["data"]
    assert comment["postId"] == post["id"]

    fetched = client.get(f"/comment/{comment['id']}")
    assert fetched.get_json()["data"]["content"] == "First!"

    edited = client.put(f"/comment/{comment['id']}", json={"content": "Edited"}, headers=alice)
    assert edited.status_code == 200
    assert edited.get_json()["data"]["content"] == "Edited"

    deleted = client.delete(f"/comment/{comment['id']}", headers=alice)
    assert deleted.get_json() == {"message": "Comment deleted successfully"}
    assert client.get(f"/comment/{comment['id']}").status_code == 404


def test_comment_on_missing_post_is_404(client, auth_headers):
    resp = client.post("/comment", json={"content": "x", "postId": 42}, headers=auth_headers())
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Post not found"


def test_comment_requires_post_id(client, auth_headers):
    resp = client.post("/comment", json={"content": "x"}, headers=auth_headers())
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Content and postId are required"


def test_list_filters(client, auth_headers):
    alice, bob = auth_headers("alice"), auth_headers("bob")
    first, second = _post(client, alice), _post(client, alice)
    client.post("/comment", json={"content": "a1", "postId": first["id"]}, headers=alice)
    client.post("/comment", json={"content": "b1", "postId": first["id"]}, headers=bob)
    client.post("/comment", json={"content": "b2", "postId": second["id"]}, headers=bob)

    on_first = client.get(f"/comment?postId={first['id']}").get_json()["data"]
    bob_id = on_first[1]["userId"]
    by_bob = client.get(f"/comment?userId={bob_id}").get_json()["data"]

    assert [c["content"] for c in on_first] == ["a1", "b1"]
    assert [c["content"] for c in by_bob] == ["b1", "b2"]


def test_only_author_may_edit_or_delete(client, auth_headers):
    alice, bob = auth_headers("alice"), auth_headers("bob")
    post = _post(client, alice)
    comment = client.post(
        "/comment", json={"content": "bob says", "postId": post["id"]}, headers=bob
    ).get_json()["data"]

    assert client.put(f"/comment/{comment['id']}", json={"content": "x"}, headers=alice).status_code == 403
    assert client.delete(f"/comment/{comment['id']}", headers=alice).status_code == 403
