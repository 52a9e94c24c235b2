"""Types for discussion threads."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class SortMode(str, Enum):
    BEST = "best"
    NEWEST = "newest"
    OLDEST = "oldest"

    @classmethod
    def parse(cls, value: SortMode | str) -> SortMode:
        """Accept enum members and the short names used by the feed UI."""
        if isinstance(value, SortMode):
            return value
        key = value.strip().lower()
        key = {"new": "newest", "old": "oldest"}.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown sort mode: {value}") from None


class ThreadKind(str, Enum):
    """What a discussion hangs off: a feedback item or an admin question."""

    FEEDBACK = "feedback"
    QUESTION = "question"

    @property
    def collection_path(self) -> str:
        if self is ThreadKind.QUESTION:
            return "questions/{id}/responses"
        return "feedback/{id}/comments"


def parse_timestamp(value: datetime | str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        value = datetime.fromisoformat(text)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _pick(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return default


@dataclass
class Comment:
    """A flat comment or question response as returned by the feedback API."""

    id: str
    created_at: datetime
    content: str = ""
    parent_id: str | None = None
    author_label: str = ""
    is_original_poster: bool = False
    thread_id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Comment:
        parent_id = _pick(data, "parentId", "parent_id")
        thread_id = _pick(data, "feedbackId", "questionId", "threadId", "thread_id")
        return cls(
            id=str(data["id"]),
            created_at=parse_timestamp(_pick(data, "createdAt", "created_at")),
            content=data.get("content") or "",
            parent_id=str(parent_id) if parent_id else None,
            author_label=_pick(data, "authorLabel", "author_label") or "",
            is_original_poster=bool(
                _pick(data, "isOriginalPoster", "is_original_poster", default=False)
            ),
            thread_id=str(thread_id) if thread_id else None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "parentId": self.parent_id,
            "content": self.content,
            "createdAt": self.created_at.isoformat(),
            "authorLabel": self.author_label,
            "isOriginalPoster": self.is_original_poster,
            "threadId": self.thread_id,
        }


@dataclass
class ThreadNode:
    """One comment plus its direct replies, in ranked order."""

    comment: Comment
    replies: list[ThreadNode] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.comment.id

    @property
    def reply_count(self) -> int:
        return len(self.replies)

    def walk(self) -> Iterator[ThreadNode]:
        """Yield this node and every descendant, depth-first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.replies))
