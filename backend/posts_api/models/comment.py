"""Comment ORM: text annotation attached to exactly one post.

Invariants:
    - Always belongs to a Post (post_id FK, ON DELETE CASCADE)
    - text is non-nullable
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from posts_api.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Comment(Base):
    """Comment entity, scoped to a post."""
    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    post_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )

    # Relationships
    post: Mapped["Post"] = relationship("Post", back_populates="comments")
