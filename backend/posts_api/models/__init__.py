"""ORM Models: SQLAlchemy declarative models for posts and comments.

Invariants:
    - All models inherit from Base (db/base.py)
    - Post is the aggregate root; comments are scoped by post_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (ADR: standard SQLAlchemy pattern)
"""

from posts_api.models.post import Post  # noqa: F401
from posts_api.models.comment import Comment  # noqa: F401
