"""Boundary Protocols: contract between the route handlers and persistence.

Invariants:
    - Routes depend on PostStore, never on SQLAlchemy directly
    - Every method either returns a value or raises; "not found" is a value
      (None or a zero row count), never an exception
    - Records cross the boundary as plain dicts

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
      (ADR: swap storage in tests via dependency override)
"""

from typing import Protocol


class PostStore(Protocol):
    """Contract for post and comment persistence, implemented by infrastructure."""
    async def insert(self, post: dict) -> int: ...
    async def find(self) -> list[dict]: ...
    async def find_by_id(self, post_id: int) -> dict | None: ...
    async def update(self, post_id: int, fields: dict) -> int: ...
    async def remove(self, post_id: int) -> int: ...
    async def insert_comment(self, comment: dict) -> int: ...
    async def find_comment_by_id(self, comment_id: int) -> dict | None: ...
    async def find_post_comments(self, post_id: int) -> list[dict]: ...
