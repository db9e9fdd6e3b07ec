"""
End-to-end tests for the /posts endpoints.
"""
import uuid

import pytest
from fastapi.testclient import TestClient

from src.main import create_app
from tests.conftest import create_post, register


class TestScenario:
    """Anonymous, author and non-author requests against public and private posts."""

    def test_full_flow(self, client, alice, bob):
        p1 = create_post(client, alice, title="Public", content="hello")
        p2 = create_post(client, alice, title="Private", content="diary", visibility="private")

        # Anonymous reads the public post.
        response = client.get(f"/posts/{p1['id']}")
        assert response.status_code == 200
        assert response.json()["data"]["content"] == "hello"

        # Anonymous cannot read the private one.
        response = client.get(f"/posts/{p2['id']}")
        assert response.status_code == 403
        assert response.json()["error_code"] == "FORBIDDEN"

        # The author deletes it, after which nobody finds it.
        response = client.delete(f"/posts/{p2['id']}", headers=alice["headers"])
        assert response.status_code == 200
        for headers in (alice["headers"], bob["headers"], {}):
            assert client.get(f"/posts/{p2['id']}", headers=headers).status_code == 404

        # A non-author cannot update the public post, and it stays as it was.
        response = client.put(
            f"/posts/{p1['id']}", json={"content": "defaced"}, headers=bob["headers"]
        )
        assert response.status_code == 403
        assert client.get(f"/posts/{p1['id']}").json()["data"]["content"] == "hello"


class TestReadPost:
    def test_round_trip_private(self, client, alice, bob):
        created = create_post(client, alice, title="T", content="C", visibility="private")

        data = client.get(f"/posts/{created['id']}", headers=alice["headers"]).json()["data"]
        assert (data["title"], data["content"], data["visibility"]) == ("T", "C", "private")
        assert data["author"] == {"id": alice["id"], "username": "alice"}

        assert client.get(f"/posts/{created['id']}", headers=bob["headers"]).status_code == 403

    def test_stale_token_still_reads_public(self, client, alice):
        created = create_post(client, alice)
        headers = {"Authorization": "Bearer not.a.valid-token"}
        assert client.get(f"/posts/{created['id']}", headers=headers).status_code == 200

    def test_unknown_post(self, client):
        assert client.get(f"/posts/{uuid.uuid4()}").status_code == 404

    def test_malformed_id(self, client):
        response = client.get("/posts/not-a-uuid")
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"


class TestConcealPrivatePosts:
    def test_private_read_reports_not_found(self, test_settings):
        test_settings.CONCEAL_PRIVATE_POSTS = True
        with TestClient(create_app(test_settings)) as client:
            alice = register(client, "alice")
            created = create_post(client, alice, visibility="private")

            response = client.get(f"/posts/{created['id']}")
            assert response.status_code == 404
            assert client.get(f"/posts/{created['id']}", headers=alice["headers"]).status_code == 200

    def test_private_write_by_non_author_reports_not_found(self, test_settings):
        test_settings.CONCEAL_PRIVATE_POSTS = True
        with TestClient(create_app(test_settings)) as client:
            alice = register(client, "alice")
            bob = register(client, "bob")
            created = create_post(client, alice, content="diary", visibility="private")
            url = f"/posts/{created['id']}"

            update = client.put(url, json={"content": "defaced"}, headers=bob["headers"])
            delete = client.delete(url, headers=bob["headers"])
            missing = client.put(
                f"/posts/{uuid.uuid4()}", json={"content": "x"}, headers=bob["headers"]
            )
            assert update.status_code == delete.status_code == missing.status_code == 404
            assert update.json() == missing.json()

            # The post survives untouched for its author.
            response = client.get(url, headers=alice["headers"])
            assert response.status_code == 200
            assert response.json()["data"]["content"] == "diary"

    def test_public_write_by_non_author_stays_forbidden(self, test_settings):
        test_settings.CONCEAL_PRIVATE_POSTS = True
        with TestClient(create_app(test_settings)) as client:
            alice = register(client, "alice")
            bob = register(client, "bob")
            created = create_post(client, alice)

            response = client.delete(f"/posts/{created['id']}", headers=bob["headers"])
            assert response.status_code == 403


class TestCreatePost:
    def test_requires_token(self, client):
        response = client.post("/posts/", json={"title": "T", "content": "C"})
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"

    def test_expired_or_invalid_token(self, client):
        headers = {"Authorization": "Bearer garbage"}
        response = client.post("/posts/", json={"title": "T", "content": "C"}, headers=headers)
        assert response.status_code == 401

    def test_token_for_unknown_user(self, client):
        resolver = client.app.state.identity_resolver
        headers = {"Authorization": f"Bearer {resolver.issue_token(uuid.uuid4())}"}
        response = client.post("/posts/", json={"title": "T", "content": "C"}, headers=headers)
        assert response.status_code == 401

    def test_defaults(self, client, alice):
        created = create_post(client, alice, visibility="public")
        assert created["visibility"] == "public"
        assert created["image_url"] is None
        assert created["author"]["id"] == alice["id"]
        assert created["created_at"] is not None

    def test_with_image(self, client, alice):
        created = create_post(client, alice, image_url="/uploads/1-cat.png")
        assert created["image_url"] == "/uploads/1-cat.png"

    @pytest.mark.parametrize(
        "payload",
        [
            {"content": "C"},
            {"title": "T"},
            {"title": "   ", "content": "C"},
            {"title": "T", "content": ""},
            {"title": "T", "content": "C", "visibility": "friends"},
            {"title": "T", "content": "C", "author_id": str(uuid.uuid4())},
        ],
    )
    def test_validation(self, client, alice, payload):
        response = client.post("/posts/", json=payload, headers=alice["headers"])
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_validation_error_details(self, client, alice):
        response = client.post("/posts/", json={"title": "T"}, headers=alice["headers"])
        details = response.json()["error_details"]
        assert details
        for detail in details:
            assert set(detail) == {"field", "code", "message"}
        assert "content" in [d["field"] for d in details]


class TestUpdatePost:
    def test_author_updates_fields(self, client, alice):
        created = create_post(client, alice)
        response = client.put(
            f"/posts/{created['id']}",
            json={"title": "Edited", "visibility": "private"},
            headers=alice["headers"],
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["title"] == "Edited"
        assert data["content"] == "C"
        assert data["visibility"] == "private"

    def test_remove_image(self, client, alice):
        created = create_post(client, alice, image_url="/uploads/x.png")
        response = client.put(
            f"/posts/{created['id']}", json={"image_url": None}, headers=alice["headers"]
        )
        assert response.json()["data"]["image_url"] is None

    def test_requires_token(self, client, alice):
        created = create_post(client, alice)
        response = client.put(f"/posts/{created['id']}", json={"title": "x"})
        assert response.status_code == 401

    def test_unknown_post(self, client, alice):
        response = client.put(
            f"/posts/{uuid.uuid4()}", json={"title": "x"}, headers=alice["headers"]
        )
        assert response.status_code == 404

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"title": ""},
            {"title": None},
            {"visibility": "secret"},
            {"author_id": str(uuid.uuid4())},
        ],
    )
    def test_validation(self, client, alice, payload):
        created = create_post(client, alice)
        response = client.put(f"/posts/{created['id']}", json=payload, headers=alice["headers"])
        assert response.status_code == 400

    def test_bad_body_rejected_before_lookup(self, client, alice, bob):
        created = create_post(client, alice)
        bad = {"visibility": "bogus"}

        by_non_author = client.put(f"/posts/{created['id']}", json=bad, headers=bob["headers"])
        on_missing = client.put(f"/posts/{uuid.uuid4()}", json=bad, headers=alice["headers"])
        assert by_non_author.status_code == 400
        assert on_missing.status_code == 400

    def test_identity_checked_before_body(self, client, alice):
        created = create_post(client, alice)
        response = client.put(f"/posts/{created['id']}", json={"visibility": "bogus"})
        assert response.status_code == 401


class TestDeletePost:
    def test_requires_token(self, client, alice):
        created = create_post(client, alice)
        assert client.delete(f"/posts/{created['id']}").status_code == 401

    def test_non_author(self, client, alice, bob):
        created = create_post(client, alice)
        assert client.delete(f"/posts/{created['id']}", headers=bob["headers"]).status_code == 403
        assert client.get(f"/posts/{created['id']}").status_code == 200

    def test_delete_twice(self, client, alice):
        created = create_post(client, alice)
        assert client.delete(f"/posts/{created['id']}", headers=alice["headers"]).status_code == 200
        assert client.delete(f"/posts/{created['id']}", headers=alice["headers"]).status_code == 404


class TestListPosts:
    def test_public_feed(self, client, alice, bob):
        create_post(client, alice, title="first")
        create_post(client, alice, title="hidden", visibility="private")
        create_post(client, bob, title="second")

        body = client.get("/posts/").json()
        assert [p["title"] for p in body["data"]] == ["second", "first"]
        assert body["total"] == 2
        assert body["data"][0]["author"]["username"] == "bob"

    def test_public_feed_ignores_identity(self, client, alice):
        create_post(client, alice, title="hidden", visibility="private")
        assert client.get("/posts/", headers=alice["headers"]).json()["data"] == []

    def test_pagination(self, client, alice):
        for i in range(3):
            create_post(client, alice, title=f"post {i}")
        body = client.get("/posts/", params={"page": 2, "per_page": 2}).json()
        assert body["page"] == 2
        assert body["pages"] == 2
        assert [p["title"] for p in body["data"]] == ["post 0"]

    def test_my_posts(self, client, alice, bob):
        create_post(client, alice, title="open")
        create_post(client, alice, title="secret", visibility="private")
        create_post(client, bob, title="bob's")

        body = client.get("/posts/my-posts", headers=alice["headers"]).json()
        assert [p["title"] for p in body["data"]] == ["secret", "open"]

    def test_my_posts_requires_token(self, client):
        assert client.get("/posts/my-posts").status_code == 401
