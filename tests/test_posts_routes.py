"""
HTTP tests for the posts CRUD surface: ownership, pagination, 404/403.
"""

import pytest

from database.store import InMemoryStore


@pytest.fixture
def alice(signup):
    return signup("alice@example.com")


@pytest.fixture
def bob(signup):
    return signup("bob@example.com")


def _create(client, headers, **fields):
    resp = client.post("/posts", json=fields, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestCreatePost:
    def test_creates_post_owned_by_caller(self, client, alice, store):
        post = _create(client, alice, title="Hello", body="World")

        alice_id = store.load().users[0].id
        assert post["authorId"] == alice_id
        assert post["title"] == "Hello"
        assert post["id"].isdigit()
        assert store.load().posts[post["id"]].to_json() == post

    def test_caller_cannot_spoof_id_or_author(self, client, alice, store):
        post = _create(client, alice, id="custom", authorId=1, title="x")

        assert post["id"] != "custom"
        assert post["authorId"] == store.load().users[0].id

    def test_requires_auth(self, client, store):
        resp = client.post("/posts", json={"title": "x"})

        assert resp.status_code == 401
        assert store.load().posts == {}

    def test_rapid_creates_get_distinct_ids(self, client, alice, store):
        ids = {_create(client, alice, n=i)["id"] for i in range(5)}
        assert len(ids) == 5
        assert len(store.load().posts) == 5

    def test_non_object_body_is_unprocessable(self, client, alice):
        resp = client.post("/posts", json=["not", "an", "object"], headers=alice)
        assert resp.status_code == 422


class TestListPosts:
    def test_empty(self, client):
        resp = client.get("/posts")
        assert resp.json() == {"page": 1, "limit": 10, "total": 0, "data": []}

    def test_pagination(self, client, alice):
        created = [_create(client, alice, n=i) for i in range(15)]

        first = client.get("/posts", params={"limit": 10}).json()
        second = client.get("/posts", params={"page": 2, "limit": 10}).json()
        third = client.get("/posts", params={"page": 3, "limit": 10}).json()

        assert [p["id"] for p in first["data"]] == [p["id"] for p in created[:10]]
        assert [p["id"] for p in second["data"]] == [p["id"] for p in created[10:]]
        assert third == {"page": 3, "limit": 10, "total": 15, "data": []}

    def test_defaults_apply(self, client, alice):
        for i in range(12):
            _create(client, alice, n=i)

        body = client.get("/posts").json()
        assert body["page"] == 1
        assert body["limit"] == 10
        assert len(body["data"]) == 10

    def test_no_auth_needed(self, client, alice):
        _create(client, alice, title="public")
        assert client.get("/posts").status_code == 200

    @pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"page": "x"}])
    def test_invalid_paging(self, client, params):
        assert client.get("/posts", params=params).status_code == 422


class TestUpdatePost:
    def test_owner_patch_merges(self, client, alice, store):
        post = _create(client, alice, title="old", body="kept")
        resp = client.patch(f"/posts/{post['id']}", json={"title": "new"}, headers=alice)

        assert resp.status_code == 200
        assert resp.json() == {**post, "title": "new"}
        assert store.load().posts[post["id"]].to_json()["body"] == "kept"

    def test_owner_put_replaces_fields(self, client, alice):
        post = _create(client, alice, title="old", body="dropped")
        resp = client.put(f"/posts/{post['id']}", json={"title": "new"}, headers=alice)

        assert resp.status_code == 200
        assert resp.json() == {"id": post["id"], "authorId": post["authorId"], "title": "new"}

    def test_author_is_immutable(self, client, alice):
        post = _create(client, alice, title="x")
        resp = client.patch(f"/posts/{post['id']}", json={"authorId": 1, "id": "9"}, headers=alice)

        assert resp.json()["authorId"] == post["authorId"]
        assert resp.json()["id"] == post["id"]

    @pytest.mark.parametrize("method", ["patch", "put"])
    def test_non_owner_forbidden(self, client, alice, bob, store, method):
        post = _create(client, alice, title="mine")
        before = store.dump()

        resp = getattr(client, method)(f"/posts/{post['id']}", json={"title": "theirs"}, headers=bob)

        assert resp.status_code == 403
        assert resp.json() == {"message": "Access denied."}
        assert store.dump() == before

    @pytest.mark.parametrize("method", ["patch", "put"])
    def test_missing_post(self, client, alice, method):
        resp = getattr(client, method)("/posts/123", json={"title": "x"}, headers=alice)
        assert resp.status_code == 404
        assert resp.json() == {"message": "Post not found"}


class TestDeletePost:
    def test_owner_deletes(self, client, alice, store):
        post = _create(client, alice, title="bye")
        resp = client.delete(f"/posts/{post['id']}", headers=alice)

        assert resp.status_code == 200
        assert resp.json() == {"message": "Post deleted successfully", "deletedPost": post}
        assert post["id"] not in store.load().posts

    def test_non_owner_forbidden(self, client, alice, bob, store):
        post = _create(client, alice, title="mine")
        resp = client.delete(f"/posts/{post['id']}", headers=bob)

        assert resp.status_code == 403
        assert post["id"] in store.load().posts

    def test_missing_post_leaves_document_unchanged(self, client, alice, store):
        _create(client, alice, title="stay")
        before = store.dump()

        resp = client.delete("/posts/does-not-exist", headers=alice)

        assert resp.status_code == 404
        assert store.dump() == before

    def test_requires_auth(self, client, alice):
        post = _create(client, alice, title="x")
        assert client.delete(f"/posts/{post['id']}").status_code == 401


class TestPostIdAllocation:
    @pytest.fixture
    def store(self):
        return InMemoryStore({
            "users": [],
            "posts": {"²": {"id": "²", "authorId": 1, "title": "hand-edited"}},
        })

    def test_ignores_non_decimal_keys(self, client, alice, store):
        post = _create(client, alice, title="new")

        assert post["id"].isdecimal()
        assert list(store.load().posts) == ["²", post["id"]]
