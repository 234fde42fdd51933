"""Posts & Comments: CRUD routes under /api/posts.

Invariants:
    - Order within every handler: post existence → payload shape → storage write → response
    - Payloads are validated before any write reaches storage
    - Any storage failure short-circuits to the endpoint's 500 message
    - Each request produces exactly one response (errors are raised, never returned half-way)

Design Decisions:
    - Request bodies accepted as raw JSON (Body(None)) and parsed in the handler,
      so a missing post wins over a malformed body
    - Storage reached through the PostStore dependency; tests override get_post_store
    - Collection routes answer both /api/posts and /api/posts/ (no redirect)
    - Create Comment looks the post up before inserting, so a comment can never
      reference a missing post
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, status

from posts_api.api.routes.post_helpers import (
    get_post_or_404, parse_post_id, storage_errors,
)
from posts_api.core import messages
from posts_api.core.errors import PostNotFoundError, StorageError
from posts_api.core.repository_protocols import PostStore
from posts_api.infrastructure.post_store import get_post_store
from posts_api.schemas.post import (
    CommentResponse, PostResponse, parse_comment_payload, parse_post_payload,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/posts", tags=["posts"])


@router.post("", status_code=status.HTTP_201_CREATED)
@router.post("/", status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def create_post(
    body: Any = Body(None), store: PostStore = Depends(get_post_store),
):
    """Create a post from {title, contents}."""
    payload = parse_post_payload(body)
    with storage_errors(messages.POST_SAVE_FAILED):
        post_id = await store.insert(payload.model_dump())
        post = await store.find_by_id(post_id)
    if post is None:
        raise StorageError(messages.POST_SAVE_FAILED)
    logger.info(f"Post {post_id} created", extra={"post_id": post_id})
    return {"newPost": PostResponse.model_validate(post)}


@router.get("")
@router.get("/", include_in_schema=False)
async def list_posts(store: PostStore = Depends(get_post_store)):
    """List every post."""
    with storage_errors(messages.POSTS_RETRIEVE_FAILED):
        posts = await store.find()
    return {
        "message": messages.POSTS_LISTED,
        "posts": [PostResponse.model_validate(p) for p in posts],
    }


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: str, store: PostStore = Depends(get_post_store)):
    """Get a single post."""
    return await get_post_or_404(store, post_id, messages.POST_RETRIEVE_FAILED)


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: str,
    body: Any = Body(None),
    store: PostStore = Depends(get_post_store),
):
    """Replace a post's title and contents."""
    post = await get_post_or_404(store, post_id, messages.POST_MODIFY_FAILED)
    payload = parse_post_payload(body)
    with storage_errors(messages.POST_MODIFY_FAILED, post_id):
        changed = await store.update(post["id"], payload.model_dump())
        updated = await store.find_by_id(post["id"]) if changed else None
    # Deleted between lookup and update
    if updated is None:
        raise PostNotFoundError(post_id)
    logger.info(f"Post {post_id} updated", extra={"post_id": post_id})
    return updated


@router.delete("/{post_id}")
async def delete_post(post_id: str, store: PostStore = Depends(get_post_store)):
    """Delete a post and its comments. Zero rows removed means 404."""
    key = parse_post_id(post_id)
    if key is None:
        raise PostNotFoundError(post_id)
    with storage_errors(messages.POST_REMOVE_FAILED, post_id):
        deleted = await store.remove(key)
    if not deleted:
        raise PostNotFoundError(post_id)
    logger.info(f"Post {post_id} deleted", extra={"post_id": post_id})
    return {"message": messages.POST_DELETED}


@router.post(
    "/{post_id}/comments",
    response_model=CommentResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: str,
    body: Any = Body(None),
    store: PostStore = Depends(get_post_store),
):
    """Attach a comment {text} to an existing post."""
    post = await get_post_or_404(store, post_id, messages.COMMENT_SAVE_FAILED)
    payload = parse_comment_payload(body)
    with storage_errors(messages.COMMENT_SAVE_FAILED, post_id):
        comment_id = await store.insert_comment(
            {"text": payload.text, "post_id": post["id"]},
        )
        comment = await store.find_comment_by_id(comment_id)
    if comment is None:
        raise StorageError(messages.COMMENT_SAVE_FAILED)
    return comment


@router.get("/{post_id}/comments")
async def list_post_comments(
    post_id: str, store: PostStore = Depends(get_post_store),
):
    """List a post's comments, each tagged with the post title."""
    post = await get_post_or_404(
        store, post_id, messages.COMMENTS_RETRIEVE_FAILED,
    )
    with storage_errors(messages.COMMENTS_RETRIEVE_FAILED, post_id):
        comments = await store.find_post_comments(post["id"])
    return {
        "commentsWithPost": [
            CommentResponse.model_validate(c) for c in comments
        ],
    }
