"""Async client for the feedback API's comment and response endpoints."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from feedthread.api.schemas import CreateCommentBody
from feedthread.core.http import make_api_client
from feedthread.core.session import AnonymousSession
from feedthread.thread.types import Comment, ThreadKind

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    """Pull the ``{"error": ...}`` message out of a failed response."""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return f"Request failed with status {response.status_code}"


class FeedbackApiClient:
    """Lists and posts discussion comments on behalf of one anonymous session."""

    def __init__(
        self,
        base_url: str,
        session: AnonymousSession,
        *,
        kind: ThreadKind = ThreadKind.FEEDBACK,
        timeout: float = 15.0,
    ) -> None:
        self._base_url = base_url
        self._session = session
        self._kind = kind
        self._timeout = timeout

    @property
    def session(self) -> AnonymousSession:
        return self._session

    @property
    def kind(self) -> ThreadKind:
        return self._kind

    def _path(self, thread_id: str) -> str:
        return "/api/" + self._kind.collection_path.format(id=thread_id)

    async def _request(self, method: str, path: str, json: dict | None = None) -> Any:
        try:
            async with make_api_client(self._base_url, self._timeout) as client:
                response = await client.request(method, path, json=json)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response)
            logger.warning("%s %s failed (%s): %s", method, path, e.response.status_code, message)
            raise ValueError(message) from e

    async def list_comments(self, thread_id: str) -> list[Comment]:
        """Return the flat comment list for a feedback item or question."""
        data = await self._request("GET", self._path(thread_id))
        if not isinstance(data, list):
            logger.warning("Unexpected comment payload for %s: %r", thread_id, type(data))
            return []
        comments = [Comment.from_dict(item) for item in data]
        logger.debug("Loaded %d comments for %s %s", len(comments), self._kind.value, thread_id)
        return comments

    async def post_comment(
        self, thread_id: str, content: str, parent_id: str | None = None
    ) -> Comment:
        """Create a comment (or reply) and return the stored record."""
        body = CreateCommentBody(session_id=self._session.id, content=content, parent_id=parent_id)
        data = await self._request("POST", self._path(thread_id), json=body.to_wire())
        comment = Comment.from_dict(data)
        if not comment.author_label:
            comment.author_label = self._session.label
        if comment.parent_id is None and parent_id:
            comment.parent_id = parent_id
        return comment
