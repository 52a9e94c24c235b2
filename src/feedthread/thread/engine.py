"""Discussion thread engine consumed by a feed view.

Holds the flat comment list for one feedback item or question, the active
sort mode and the session's disclosure state. The ranked tree is rebuilt
from scratch whenever the list or the sort mode changes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from feedthread.api.schemas import MAX_COMMENT_LENGTH, MIN_COMMENT_LENGTH
from feedthread.core.session import AnonymousSession
from feedthread.thread.disclosure import DisclosureController, DisclosureState
from feedthread.thread.ranker import get_ranked_tree
from feedthread.thread.types import Comment, SortMode, ThreadNode

if TYPE_CHECKING:
    from feedthread.api.client import FeedbackApiClient
    from feedthread.core.logging import ActivityLogger

logger = logging.getLogger(__name__)


@dataclass
class ThreadSummary:
    direct_replies: int
    total_comments: int
    participants: int

    def describe(self) -> str:
        return (
            f"{self.direct_replies} direct replies · {self.total_comments} total comments"
            f" · {self.participants} participants"
        )


class ThreadEngine:
    def __init__(
        self,
        thread_id: str,
        session: AnonymousSession,
        *,
        client: FeedbackApiClient | None = None,
        sort_mode: SortMode | str = SortMode.BEST,
        disclosure: DisclosureController | None = None,
        activity_log: ActivityLogger | None = None,
    ) -> None:
        self.thread_id = thread_id
        self.session = session
        self._client = client
        self._sort_mode = SortMode.parse(sort_mode)
        self.disclosure = disclosure or DisclosureController()
        self._activity_log = activity_log
        self._comments: list[Comment] = []
        self._tree: list[ThreadNode] = []
        self._nodes: dict[str, ThreadNode] = {}
        self._depths: dict[str, int] = {}
        self._reactions: dict[str, dict[str, int]] = {}
        self.reaction_picker_for: str | None = None
        self.replying_to: str | None = None

    # ------------------------------------------------------------------
    # Flat list and tree
    # ------------------------------------------------------------------

    @property
    def comments(self) -> list[Comment]:
        return list(self._comments)

    @property
    def sort_mode(self) -> SortMode:
        return self._sort_mode

    @property
    def tree(self) -> list[ThreadNode]:
        return self._tree

    def get_ranked_tree(self) -> list[ThreadNode]:
        return self._tree

    def set_comments(self, comments: Iterable[Comment]) -> list[ThreadNode]:
        self._comments = list(comments)
        return self._rebuild()

    def append(self, comment: Comment) -> list[ThreadNode]:
        """Add a newly created comment and rebuild the tree."""
        self._comments.append(comment)
        return self._rebuild()

    def set_sort(self, sort_mode: SortMode | str) -> list[ThreadNode]:
        mode = SortMode.parse(sort_mode)
        if mode is not self._sort_mode:
            self._sort_mode = mode
            if self._activity_log:
                self._activity_log.log(
                    "SORT_CHANGED", thread_id=self.thread_id, details={"sort": mode.value}
                )
        return self._rebuild()

    def _rebuild(self) -> list[ThreadNode]:
        self._tree = get_ranked_tree(self._comments, self._sort_mode)
        self._nodes.clear()
        self._depths.clear()
        stack = [(root, 0) for root in reversed(self._tree)]
        while stack:
            node, depth = stack.pop()
            self._nodes[node.id] = node
            self._depths[node.id] = depth
            stack.extend((reply, depth + 1) for reply in reversed(node.replies))
        return self._tree

    def node(self, node_id: str) -> ThreadNode | None:
        return self._nodes.get(node_id)

    def depth_of(self, node_id: str) -> int | None:
        return self._depths.get(node_id)

    def summary(self) -> ThreadSummary:
        return ThreadSummary(
            direct_replies=len(self._tree),
            total_comments=len(self._nodes),
            participants=len({c.author_label for c in self._comments}),
        )

    # ------------------------------------------------------------------
    # Disclosure
    # ------------------------------------------------------------------

    def can_reply_at(self, depth: int) -> bool:
        return self.disclosure.can_reply_at(depth)

    def can_reply_to(self, node_id: str) -> bool:
        depth = self.depth_of(node_id)
        return depth is not None and self.can_reply_at(depth)

    def toggle_replies(self, node_id: str) -> DisclosureState:
        return self.disclosure.toggle_replies(node_id)

    def show_more_replies(self, node_id: str) -> DisclosureState:
        node = self._nodes.get(node_id)
        total = node.reply_count if node else 0
        return self.disclosure.show_more_replies(node_id, total)

    def show_more_roots(self) -> DisclosureState:
        return self.disclosure.show_more_roots(len(self._tree))

    def has_more_roots(self) -> bool:
        return self.disclosure.has_more_roots(len(self._tree))

    def visible_roots(self) -> list[ThreadNode]:
        return self.disclosure.visible_roots(self._tree)

    def visible_replies(self, node_id: str) -> list[ThreadNode]:
        node = self._nodes.get(node_id)
        if node is None:
            return []
        return self.disclosure.visible_replies(node)

    def close(self) -> None:
        """Hide the discussion: back to the first page of roots, no open pickers."""
        self.disclosure.reset_roots()
        self.reaction_picker_for = None
        self.replying_to = None

    # ------------------------------------------------------------------
    # Reactions (session-local, never sent to the API)
    # ------------------------------------------------------------------

    def toggle_reaction_picker(self, comment_id: str) -> str | None:
        self.reaction_picker_for = None if self.reaction_picker_for == comment_id else comment_id
        return self.reaction_picker_for

    def add_reaction(self, comment_id: str, emoji: str) -> dict[str, int]:
        counts = self._reactions.setdefault(comment_id, {})
        counts[emoji] = counts.get(emoji, 0) + 1
        self.reaction_picker_for = None
        return dict(counts)

    def reactions(self, comment_id: str) -> dict[str, int]:
        return dict(self._reactions.get(comment_id, {}))

    # ------------------------------------------------------------------
    # API round trips
    # ------------------------------------------------------------------

    def _require_client(self) -> FeedbackApiClient:
        if self._client is None:
            raise ValueError("No feedback API client configured for this thread.")
        return self._client

    async def load(self) -> list[ThreadNode]:
        comments = await self._require_client().list_comments(self.thread_id)
        return self.set_comments(comments)

    def start_reply(self, node_id: str | None) -> str | None:
        """Open the reply box under ``node_id`` (or close it with None)."""
        if node_id is not None and not self.can_reply_to(node_id):
            raise ValueError("Reply depth limit reached.")
        self.replying_to = node_id
        return self.replying_to

    async def submit(self, content: str, parent_id: str | None = None) -> Comment:
        """Validate, post through the API client, then append the stored comment."""
        text = content.strip()
        if len(text) < MIN_COMMENT_LENGTH:
            raise ValueError(f"Comments need at least {MIN_COMMENT_LENGTH} characters.")
        if len(text) > MAX_COMMENT_LENGTH:
            raise ValueError(f"Comments must be {MAX_COMMENT_LENGTH} characters or fewer.")
        if parent_id is not None:
            if parent_id not in self._nodes:
                raise ValueError("Parent comment not found for this thread.")
            if not self.can_reply_to(parent_id):
                raise ValueError("Reply depth limit reached.")

        client = self._require_client()
        try:
            comment = await client.post_comment(self.thread_id, text, parent_id=parent_id)
        except Exception:
            logger.exception("Failed to post comment to %s", self.thread_id)
            raise

        self.append(comment)
        if parent_id is not None and self.replying_to == parent_id:
            self.replying_to = None
        if self._activity_log:
            self._activity_log.log(
                "COMMENTED",
                thread_id=self.thread_id,
                comment_id=comment.id,
                parent_id=comment.parent_id,
                session_label=self.session.label,
                details={"excerpt": comment.content},
            )
        return comment
