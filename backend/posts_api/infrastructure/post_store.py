"""SQL Post Store: PostStore implementation over an async SQLAlchemy session.

Invariants:
    - Every write commits before returning; a failed call rolls back first
    - Every SQLAlchemy failure surfaces as DatabaseError tagged with the operation name
    - Records are returned as plain dicts (no ORM objects leak past this module)
    - remove() deletes the post's comments in the same transaction

Design Decisions:
    - One store per request, bound to the request's session via get_post_store
    - Comments deleted explicitly on remove(): SQLite ignores ON DELETE CASCADE
      unless foreign_keys is enabled per connection
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from posts_api.core.repository_protocols import PostStore
from posts_api.infrastructure.database import get_db, to_database_error
from posts_api.models.comment import Comment
from posts_api.models.post import Post

logger = logging.getLogger(__name__)


def _post_dict(post: Post) -> dict:
    return {
        "id": post.id,
        "title": post.title,
        "contents": post.contents,
        "created_at": post.created_at,
        "updated_at": post.updated_at,
    }


def _comment_dict(comment: Comment, post_title: str | None = None) -> dict:
    row = {
        "id": comment.id,
        "text": comment.text,
        "post_id": comment.post_id,
        "created_at": comment.created_at,
        "updated_at": comment.updated_at,
    }
    if post_title is not None:
        row["post"] = post_title
    return row


class SqlPostStore:
    """Posts and comments persisted through SQLAlchemy."""

    def __init__(self, db: AsyncSession):
        self._db = db

    @asynccontextmanager
    async def _guard(self, operation: str) -> AsyncGenerator[None, None]:
        try:
            yield
        except SQLAlchemyError as e:
            await self._db.rollback()
            raise to_database_error(e, operation) from e

    async def insert(self, post: dict) -> int:
        async with self._guard("insert"):
            row = Post(title=post["title"], contents=post["contents"])
            self._db.add(row)
            await self._db.flush()
            post_id = row.id
            await self._db.commit()
        logger.info(f"Post {post_id} inserted", extra={"post_id": post_id})
        return post_id

    async def find(self) -> list[dict]:
        async with self._guard("find"):
            result = await self._db.execute(select(Post).order_by(Post.id))
            return [_post_dict(p) for p in result.scalars().all()]

    async def find_by_id(self, post_id: int) -> dict | None:
        async with self._guard("find_by_id"):
            result = await self._db.execute(
                select(Post).where(Post.id == post_id),
            )
            post = result.scalar_one_or_none()
            return _post_dict(post) if post else None

    async def update(self, post_id: int, fields: dict) -> int:
        """Replace title/contents. Returns the number of rows changed."""
        async with self._guard("update"):
            result = await self._db.execute(
                update(Post)
                .where(Post.id == post_id)
                .values(title=fields["title"], contents=fields["contents"])
                .execution_options(synchronize_session=False),
            )
            await self._db.commit()
            return result.rowcount

    async def remove(self, post_id: int) -> int:
        """Delete a post and its comments. Returns the number of posts deleted."""
        async with self._guard("remove"):
            await self._db.execute(
                delete(Comment).where(Comment.post_id == post_id),
            )
            result = await self._db.execute(
                delete(Post).where(Post.id == post_id),
            )
            await self._db.commit()
            return result.rowcount

    async def insert_comment(self, comment: dict) -> int:
        async with self._guard("insert_comment"):
            row = Comment(text=comment["text"], post_id=comment["post_id"])
            self._db.add(row)
            await self._db.flush()
            comment_id = row.id
            await self._db.commit()
        logger.info(
            f"Comment {comment_id} inserted on post {comment['post_id']}",
            extra={"comment_id": comment_id, "post_id": comment["post_id"]},
        )
        return comment_id

    async def find_comment_by_id(self, comment_id: int) -> dict | None:
        async with self._guard("find_comment_by_id"):
            result = await self._db.execute(
                select(Comment).where(Comment.id == comment_id),
            )
            comment = result.scalar_one_or_none()
            return _comment_dict(comment) if comment else None

    async def find_post_comments(self, post_id: int) -> list[dict]:
        """Comments of a post, each tagged with the post's title."""
        async with self._guard("find_post_comments"):
            result = await self._db.execute(
                select(Comment, Post.title)
                .join(Post, Comment.post_id == Post.id)
                .where(Comment.post_id == post_id)
                .order_by(Comment.id),
            )
            return [_comment_dict(c, title) for c, title in result.all()]


async def get_post_store(db: AsyncSession = Depends(get_db)) -> PostStore:
    """FastAPI dependency: a PostStore bound to the request's session."""
    return SqlPostStore(db)
