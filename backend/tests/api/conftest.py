"""API test fixtures: FastAPI test client over a real or fake storage backend.

Invariants:
    - client: get_db overridden to use the in-memory test DB
    - fake_client: get_post_store overridden with an in-memory FakePostStore
    - db_manager patched so readiness checks hit the test engine
    - dependency overrides cleared after every test

Design Decisions:
    - httpx ASGITransport does not run the lifespan, so no real database is opened
"""

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from posts_api.core.errors import DatabaseError
from posts_api.infrastructure.database import get_db, DatabaseSessionManager
from posts_api.infrastructure.post_store import get_post_store
from posts_api.models.post import Post
from posts_api.models.comment import Comment
import posts_api.infrastructure.database as db_module
from posts_api.main import app


class FakePostStore:
    """In-memory PostStore with per-operation failure injection.

    fail_on: operation names whose next call raises DatabaseError
    update_result: forces the row count update() reports
    remove_result: forces the row count remove() reports
    calls: ordered list of operation names invoked
    """

    def __init__(self):
        self.posts: dict[int, dict] = {}
        self.comments: dict[int, dict] = {}
        self.fail_on: set[str] = set()
        self.remove_result: int | None = None
        self.update_result: int | None = None
        self.calls: list[str] = []
        self._next_post_id = 1
        self._next_comment_id = 1

    def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.fail_on:
            raise DatabaseError("simulated failure", operation)

    def add_post(self, title: str = "Title", contents: str = "Contents") -> dict:
        now = datetime.now(timezone.utc)
        post = {
            "id": self._next_post_id, "title": title, "contents": contents,
            "created_at": now, "updated_at": now,
        }
        self.posts[post["id"]] = post
        self._next_post_id += 1
        return post

    async def insert(self, post: dict) -> int:
        self._enter("insert")
        return self.add_post(post["title"], post["contents"])["id"]

    async def find(self) -> list[dict]:
        self._enter("find")
        return list(self.posts.values())

    async def find_by_id(self, post_id: int) -> dict | None:
        self._enter("find_by_id")
        return self.posts.get(post_id)

    async def update(self, post_id: int, fields: dict) -> int:
        self._enter("update")
        if self.update_result is not None:
            return self.update_result
        if post_id not in self.posts:
            return 0
        self.posts[post_id].update(fields)
        return 1

    async def remove(self, post_id: int) -> int:
        self._enter("remove")
        if self.remove_result is not None:
            return self.remove_result
        return 1 if self.posts.pop(post_id, None) else 0

    async def insert_comment(self, comment: dict) -> int:
        self._enter("insert_comment")
        now = datetime.now(timezone.utc)
        row = {
            "id": self._next_comment_id, "text": comment["text"],
            "post_id": comment["post_id"],
            "created_at": now, "updated_at": now,
        }
        self.comments[row["id"]] = row
        self._next_comment_id += 1
        return row["id"]

    async def find_comment_by_id(self, comment_id: int) -> dict | None:
        self._enter("find_comment_by_id")
        return self.comments.get(comment_id)

    async def find_post_comments(self, post_id: int) -> list[dict]:
        self._enter("find_post_comments")
        title = self.posts[post_id]["title"]
        return [
            {**c, "post": title}
            for c in self.comments.values() if c["post_id"] == post_id
        ]


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def fake_store():
    return FakePostStore()


@pytest.fixture
async def fake_client(fake_store):
    """FastAPI test client whose storage backend is a FakePostStore."""
    app.dependency_overrides[get_post_store] = lambda: fake_store
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def seed_post(test_db):
    """Insert a post directly into the test DB."""
    post = Post(title="First post", contents="Hello there")
    test_db.add(post)
    await test_db.commit()
    await test_db.refresh(post)
    return post


@pytest.fixture
async def seed_comment(test_db, seed_post):
    comment = Comment(text="Nice post", post_id=seed_post.id)
    test_db.add(comment)
    await test_db.commit()
    await test_db.refresh(comment)
    return comment
