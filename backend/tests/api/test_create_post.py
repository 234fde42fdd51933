"""Create Post: POST /api/posts.

Invariants:
    - Valid {title, contents} → 201 with {newPost: <post>}
    - Missing, empty, blank or non-string title/contents → 400 with the post errorMessage
    - Invalid payload never reaches storage
"""

import pytest
from sqlalchemy import select

from posts_api.models.post import Post

POST_FIELDS_REQUIRED = {"errorMessage": "Please provide title and contents for the post."}


async def test_create_returns_201_with_new_post(client):
    res = await client.post("/api/posts", json={"title": "A", "contents": "B"})
    assert res.status_code == 201
    new_post = res.json()["newPost"]
    assert new_post["title"] == "A"
    assert new_post["contents"] == "B"
    assert isinstance(new_post["id"], int)
    assert "created_at" in new_post and "updated_at" in new_post


async def test_create_persists_post(client, test_db):
    res = await client.post("/api/posts", json={"title": "A", "contents": "B"})
    post_id = res.json()["newPost"]["id"]

    result = await test_db.execute(select(Post).where(Post.id == post_id))
    stored = result.scalar_one()
    assert (stored.title, stored.contents) == ("A", "B")


async def test_create_ignores_unknown_fields(client):
    res = await client.post(
        "/api/posts", json={"title": "A", "contents": "B", "author": "x"},
    )
    assert res.status_code == 201
    assert "author" not in res.json()["newPost"]


@pytest.mark.parametrize("body", [
    {"contents": "B"},
    {"title": "A"},
    {},
    {"title": "", "contents": "B"},
    {"title": "A", "contents": ""},
    {"title": "   ", "contents": "B"},
    {"title": None, "contents": "B"},
    {"title": 5, "contents": "B"},
    ["A", "B"],
])
async def test_create_invalid_body_returns_400(client, body):
    res = await client.post("/api/posts", json=body)
    assert res.status_code == 400
    assert res.json() == POST_FIELDS_REQUIRED


async def test_create_without_body_returns_400(client):
    res = await client.post("/api/posts")
    assert res.status_code == 400
    assert res.json() == POST_FIELDS_REQUIRED


async def test_create_invalid_body_does_not_write(client, test_db):
    await client.post("/api/posts", json={"title": "A"})

    result = await test_db.execute(select(Post))
    assert result.scalars().all() == []


async def test_malformed_json_returns_400(client):
    res = await client.post(
        "/api/posts", content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["errorMessage"] == "Invalid request data"


async def test_create_with_trailing_slash_returns_201(client):
    res = await client.post("/api/posts/", json={"title": "A", "contents": "B"})
    assert res.status_code == 201
    assert res.json()["newPost"]["title"] == "A"
