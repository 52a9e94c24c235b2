"""Sibling ordering for discussion threads.

``BEST`` surfaces the most active discussions first without a persisted vote
tally: comments by the original poster lead, then comments whose subtree has
drawn the most replies, then the most recent. ``NEWEST`` and ``OLDEST`` are
plain chronological orders. All modes are stable, so siblings that compare
equal keep their relative input order.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from feedthread.thread.builder import build_tree
from feedthread.thread.types import Comment, SortMode, ThreadNode


def thread_score(node: ThreadNode) -> int:
    """Engagement weight of a subtree: direct replies plus their own scores.

    Unrolled, that is the number of descendants below ``node``.
    """
    return sum(len(descendant.replies) for descendant in node.walk())


def rank_tree(nodes: Sequence[ThreadNode], sort_mode: SortMode | str = SortMode.BEST) -> list[ThreadNode]:
    """Return a new tree with siblings sorted at every depth.

    The input nodes are left untouched; the returned nodes share the
    underlying ``Comment`` records. Nodes are processed children-first with
    an explicit stack, so reply chains of any length are handled.
    """
    mode = SortMode.parse(sort_mode)

    # Pre-order; reversed, every reply comes before its parent
    order: list[ThreadNode] = []
    stack = list(nodes)
    while stack:
        node = stack.pop()
        order.append(node)
        stack.extend(node.replies)

    ranked: dict[int, tuple[ThreadNode, int]] = {}
    for node in reversed(order):
        replies = [ranked[id(reply)] for reply in node.replies]
        score = len(replies) + sum(reply_score for _, reply_score in replies)
        ranked[id(node)] = (ThreadNode(comment=node.comment, replies=_sort_siblings(replies, mode)), score)

    return _sort_siblings([ranked[id(node)] for node in nodes], mode)


def _sort_siblings(scored: list[tuple[ThreadNode, int]], mode: SortMode) -> list[ThreadNode]:
    if mode is SortMode.NEWEST:
        scored.sort(key=lambda item: item[0].comment.created_at, reverse=True)
    elif mode is SortMode.OLDEST:
        scored.sort(key=lambda item: item[0].comment.created_at)
    else:
        scored.sort(
            key=lambda item: (
                item[0].comment.is_original_poster,
                item[1],
                item[0].comment.created_at,
            ),
            reverse=True,
        )
    return [node for node, _ in scored]


def get_ranked_tree(
    comments: Iterable[Comment], sort_mode: SortMode | str = SortMode.BEST
) -> list[ThreadNode]:
    """Build and rank a thread from the flat comment list."""
    return rank_tree(build_tree(comments), sort_mode)
