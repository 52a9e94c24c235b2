"""Progressive reveal of a ranked thread.

Root comments are paged in fixed steps. Each node's replies start hidden;
the first reveal shows one page, later "show more" actions add a page at a
time, and hiding replies keeps the count so re-expanding resumes where the
reader left off.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from feedthread.thread.types import ThreadNode

ROOT_PAGE_SIZE = 3
REPLY_PAGE_SIZE = 2
MAX_REPLY_DEPTH = 6


def can_reply_at(depth: int, max_depth: int = MAX_REPLY_DEPTH) -> bool:
    """Whether a comment at ``depth`` (roots are 0) may receive replies."""
    return 0 <= depth < max_depth


@dataclass
class NodeDisclosure:
    expanded: bool = False
    # 0 until the replies are revealed for the first time
    visible_reply_count: int = 0


@dataclass
class DisclosureState:
    visible_root_count: int = ROOT_PAGE_SIZE
    nodes: dict[str, NodeDisclosure] = field(default_factory=dict)


class DisclosureController:
    """Session-local disclosure bookkeeping, keyed by comment id."""

    def __init__(
        self,
        root_page_size: int = ROOT_PAGE_SIZE,
        reply_page_size: int = REPLY_PAGE_SIZE,
        max_depth: int = MAX_REPLY_DEPTH,
    ) -> None:
        if root_page_size < 1 or reply_page_size < 1:
            raise ValueError("Page sizes must be at least 1.")
        self.root_page_size = root_page_size
        self.reply_page_size = reply_page_size
        self.max_depth = max_depth
        self.state = DisclosureState(visible_root_count=root_page_size)

    def can_reply_at(self, depth: int) -> bool:
        return can_reply_at(depth, self.max_depth)

    def _node(self, node_id: str) -> NodeDisclosure:
        return self.state.nodes.setdefault(node_id, NodeDisclosure())

    # ------------------------------------------------------------------
    # Roots
    # ------------------------------------------------------------------

    def show_more_roots(self, total_roots: int) -> DisclosureState:
        self.state.visible_root_count = min(
            max(total_roots, self.root_page_size),
            self.state.visible_root_count + self.root_page_size,
        )
        return self.state

    def has_more_roots(self, total_roots: int) -> bool:
        return self.state.visible_root_count < total_roots

    def hidden_root_count(self, total_roots: int) -> int:
        return max(0, total_roots - self.state.visible_root_count)

    def visible_roots(self, roots: Sequence[ThreadNode]) -> list[ThreadNode]:
        return list(roots[: self.state.visible_root_count])

    def reset_roots(self) -> DisclosureState:
        self.state.visible_root_count = self.root_page_size
        return self.state

    # ------------------------------------------------------------------
    # Replies
    # ------------------------------------------------------------------

    def is_expanded(self, node_id: str) -> bool:
        entry = self.state.nodes.get(node_id)
        return bool(entry and entry.expanded)

    def visible_reply_count(self, node_id: str) -> int:
        """Replies shown when expanded; a page by default."""
        entry = self.state.nodes.get(node_id)
        if entry is None or not entry.visible_reply_count:
            return self.reply_page_size
        return entry.visible_reply_count

    def toggle_replies(self, node_id: str) -> DisclosureState:
        entry = self._node(node_id)
        entry.expanded = not entry.expanded
        if not entry.visible_reply_count:
            entry.visible_reply_count = self.reply_page_size
        return self.state

    def show_more_replies(self, node_id: str, total_replies: int) -> DisclosureState:
        entry = self._node(node_id)
        current = entry.visible_reply_count or self.reply_page_size
        entry.visible_reply_count = min(total_replies, current + self.reply_page_size)
        return self.state

    def visible_replies(self, node: ThreadNode) -> list[ThreadNode]:
        if not self.is_expanded(node.id):
            return []
        return node.replies[: self.visible_reply_count(node.id)]

    def remaining_replies(self, node: ThreadNode) -> int:
        if not self.is_expanded(node.id):
            return 0
        return max(0, len(node.replies) - self.visible_reply_count(node.id))
