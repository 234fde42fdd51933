"""Post & Comment Schemas: Pydantic models for request bodies and responses.

Invariants:
    - PostPayload.title / contents: strings, non-empty after stripping whitespace
    - CommentPayload.text: string, non-empty after stripping whitespace
    - Non-string values are rejected, never coerced
    - Unknown body fields are ignored

Design Decisions:
    - Bodies validated inside the handler (parse_*_payload), not as FastAPI body
      parameters: the post existence check must run before payload validation,
      and FastAPI validates declared bodies before the handler is entered
    - Submitted text is stored as sent; stripping is only used to detect blanks
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator

from posts_api.core import messages
from posts_api.core.errors import PayloadValidationError


def _reject_blank(v: str) -> str:
    if not v.strip():
        raise ValueError("must not be empty or whitespace")
    return v


class PostPayload(BaseModel):
    """Create/update body for a post (full replace of both fields)."""
    title: str
    contents: str

    @field_validator("title", "contents")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _reject_blank(v)


class CommentPayload(BaseModel):
    """Create body for a comment."""
    text: str

    @field_validator("text")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _reject_blank(v)


class PostResponse(BaseModel):
    """Post response: public-facing post data."""
    id: int
    title: str
    contents: str
    created_at: datetime
    updated_at: datetime


class CommentResponse(BaseModel):
    """Comment response. `post` is the owning post's title when listed per post."""
    id: int
    text: str
    post_id: int
    created_at: datetime
    updated_at: datetime
    post: str | None = None


# --- Parsing helpers ----------------------------------------------------------


def parse_post_payload(body: Any) -> PostPayload:
    """Validate a raw JSON body as a post, or raise PayloadValidationError."""
    return _parse(PostPayload, body, messages.POST_FIELDS_REQUIRED)


def parse_comment_payload(body: Any) -> CommentPayload:
    """Validate a raw JSON body as a comment, or raise PayloadValidationError."""
    return _parse(CommentPayload, body, messages.COMMENT_TEXT_REQUIRED)


def _parse(model: type[BaseModel], body: Any, message: str):
    if not isinstance(body, dict):
        raise PayloadValidationError(message, fields=list(model.model_fields))
    try:
        return model.model_validate(body)
    except ValidationError as e:
        fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
        raise PayloadValidationError(message, fields=fields) from e
