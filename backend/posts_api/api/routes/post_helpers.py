"""Post Route Helpers: id parsing, existence lookup, storage failure mapping.

Invariants:
    - A path id that is not a positive integer never matches a post (404, not 422)
    - storage_errors() turns any failure of the wrapped storage calls into the
      endpoint's StorageError; client errors are raised outside it
    - get_post_or_404 shared by every /{post_id} route
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from posts_api.core.errors import ErrorContext, PostNotFoundError, StorageError
from posts_api.core.repository_protocols import PostStore

logger = logging.getLogger(__name__)


# Upper bound of the posts.id Integer column (int32 on PostgreSQL)
MAX_POST_ID = 2**31 - 1
_MAX_ID_DIGITS = 19


def parse_post_id(raw: str) -> int | None:
    """Path id → integer key, or None when it cannot name a stored post."""
    if not raw.isascii() or not raw.isdigit() or len(raw) > _MAX_ID_DIGITS:
        return None
    value = int(raw)
    return value if 0 < value <= MAX_POST_ID else None


@contextmanager
def storage_errors(message: str, post_id: str | None = None) -> Iterator[None]:
    """Map a failed storage call to the 500 response for this endpoint."""
    try:
        yield
    except Exception as e:
        logger.error(
            f"Storage call failed: {e}",
            exc_info=True,
            extra={"post_id": post_id},
        )
        raise StorageError(message, ErrorContext(post_id=post_id)) from e


async def get_post_or_404(
    store: PostStore, raw_id: str, failure_message: str,
) -> dict:
    """Fetch a post by path id or raise PostNotFoundError.

    A storage failure during the lookup raises StorageError with the
    calling endpoint's message.
    """
    post_id = parse_post_id(raw_id)
    if post_id is None:
        raise PostNotFoundError(raw_id)
    with storage_errors(failure_message, raw_id):
        post = await store.find_by_id(post_id)
    if post is None:
        raise PostNotFoundError(raw_id)
    return post
