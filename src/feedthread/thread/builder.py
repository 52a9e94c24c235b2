"""Build a reply tree from the flat comment list."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from feedthread.thread.types import Comment, ThreadNode

logger = logging.getLogger(__name__)


def index_nodes(comments: Iterable[Comment]) -> dict[str, ThreadNode]:
    """Wrap each comment in an empty node, keyed by id. Later duplicates win."""
    index: dict[str, ThreadNode] = {}
    for comment in comments:
        index[comment.id] = ThreadNode(comment=comment)
    return index


def build_tree(comments: Iterable[Comment]) -> list[ThreadNode]:
    """Return the root nodes with replies attached, in input order.

    A comment whose parent is unknown is placed at the root rather than
    dropped. Every distinct comment id is reachable exactly once.
    """
    index = index_nodes(comments)

    roots: list[ThreadNode] = []
    for node in index.values():
        parent_id = node.comment.parent_id
        parent = index.get(parent_id) if parent_id else None
        if parent is None:
            roots.append(node)
        else:
            parent.replies.append(node)

    reachable: set[str] = set()
    for root in roots:
        _mark(root, reachable)

    # Parent chains that loop back on themselves never reach a root
    for node in index.values():
        if node.id in reachable:
            continue
        parent = index[node.comment.parent_id]
        parent.replies = [r for r in parent.replies if r is not node]
        roots.append(node)
        _mark(node, reachable)
        logger.warning("Comment %s is part of a reply cycle; treating it as a root", node.id)

    return roots


def _mark(node: ThreadNode, reachable: set[str]) -> None:
    stack = [node]
    while stack:
        current = stack.pop()
        if current.id in reachable:
            continue
        reachable.add(current.id)
        stack.extend(current.replies)
