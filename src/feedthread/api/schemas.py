"""Pydantic request models for the feedback API."""

from __future__ import annotations

from pydantic import BaseModel, Field

MIN_COMMENT_LENGTH = 2
MAX_COMMENT_LENGTH = 2000


class CreateCommentBody(BaseModel):
    model_config = {"populate_by_name": True, "str_strip_whitespace": True}

    session_id: str = Field(..., min_length=1, alias="sessionId")
    content: str = Field(..., min_length=MIN_COMMENT_LENGTH, max_length=MAX_COMMENT_LENGTH)
    parent_id: str | None = Field(default=None, alias="parentId")

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
