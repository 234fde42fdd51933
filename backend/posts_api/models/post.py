"""Post ORM: persists the aggregate root that comments hang off.

Invariants:
    - id is an auto-increment integer primary key assigned by the database
    - title and contents are non-nullable text
    - updated_at refreshed on every UPDATE

Design Decisions:
    - cascade delete for comments at both ORM and FK level
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from posts_api.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Post(Base):
    """Post aggregate root: a title with its contents."""
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    contents: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )

    # Relationships
    comments: Mapped[list["Comment"]] = relationship(
        "Comment", back_populates="post",
        cascade="all, delete-orphan", passive_deletes=True,
    )
