"""
Shared fixtures: every API test gets a fresh app on its own SQLite file.
"""
import uuid

import pytest
from fastapi.testclient import TestClient

from src.core.bases.base_repository import RepositoryError
from src.core.config import Settings
from src.core.response.schemas import PaginatedResponse
from src.core.security.tokens import IdentityResolver
from src.apps.blog.models.post import Post, Visibility
from src.main import create_app

TEST_SECRET = "test-secret-key-not-for-production-0123456789"


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing at a throwaway database and upload folder."""
    return Settings(
        ASYNC_DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        SECRET_KEY=TEST_SECRET,
        UPLOAD_FOLDER=str(tmp_path / "uploads"),
        CONCEAL_PRIVATE_POSTS=False,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def client(test_settings):
    """TestClient with the lifespan (table creation) running."""
    app = create_app(test_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def resolver():
    return IdentityResolver(secret=TEST_SECRET, algorithm="HS256", expire_minutes=60)


def register(client, username, password="secret123"):
    """Sign up and log in; returns the user id, token and auth headers."""
    email = f"{username}@example.com"
    response = client.post(
        "/auth/signup",
        json={"username": username, "email": email, "password": password},
    )
    assert response.status_code == 201, response.text
    login = client.post("/auth/login", json={"email": email, "password": password})
    assert login.status_code == 200, login.text
    data = login.json()["data"]
    return {
        "id": data["user"]["id"],
        "token": data["token"],
        "headers": {"Authorization": f"Bearer {data['token']}"},
    }


@pytest.fixture
def alice(client):
    return register(client, "alice")


@pytest.fixture
def bob(client):
    return register(client, "bob")


def create_post(client, user, **fields):
    payload = {"title": "T", "content": "C", "visibility": "public"}
    payload.update(fields)
    response = client.post("/posts/", json=payload, headers=user["headers"])
    assert response.status_code == 201, response.text
    return response.json()["data"]


# ---------------------------------------------------------------------------
# In-memory store used by the service tests
# ---------------------------------------------------------------------------


class FakePostRepository:
    """Dict-backed stand-in for PostRepository."""

    def __init__(self):
        self.posts = {}
        self.vanish_on_write = False

    async def get(self, item_id, **filters):
        return self.posts.get(item_id)

    async def create(self, obj_in):
        post = Post(**obj_in)
        self.posts[post.id] = post
        return post

    async def update(self, item_id, obj_in, exclude_unset=True):
        if self.vanish_on_write:
            self.posts.pop(item_id, None)
        post = self.posts.get(item_id)
        if post is None:
            return None
        if not obj_in:
            raise RepositoryError("No data provided for update")
        for key, value in obj_in.items():
            setattr(post, key, value)
        return post

    async def delete(self, item_id):
        if self.vanish_on_write:
            self.posts.pop(item_id, None)
        return self.posts.pop(item_id, None) is not None

    def _page(self, posts, page, per_page):
        posts = sorted(posts, key=lambda p: p.created_at, reverse=True)
        start = (page - 1) * per_page
        return PaginatedResponse(
            data=posts[start:start + per_page],
            total=len(posts),
            page=page,
            per_page=per_page,
            pages=(len(posts) + per_page - 1) // per_page,
            message="Items retrieved successfully",
        )

    async def list_public(self, page=1, per_page=10):
        posts = [p for p in self.posts.values() if p.visibility == Visibility.PUBLIC]
        return self._page(posts, page, per_page)

    async def list_by_author(self, author_id, page=1, per_page=10):
        posts = [p for p in self.posts.values() if p.author_id == author_id]
        return self._page(posts, page, per_page)


class FakeUserRepository:
    def __init__(self, users=None):
        self.users = dict(users or {})

    async def exists(self, item_id):
        return item_id in self.users

    async def get_usernames(self, user_ids):
        return {uid: self.users[uid] for uid in set(user_ids) if uid in self.users}


@pytest.fixture
def user_ids():
    return {"alice": uuid.uuid4(), "bob": uuid.uuid4()}


@pytest.fixture
def post_repository():
    return FakePostRepository()


@pytest.fixture
def user_repository(user_ids):
    return FakeUserRepository({uid: name for name, uid in user_ids.items()})
