"""Rich renderables for discussion threads."""

from __future__ import annotations

from datetime import datetime

from rich.console import Console
from rich.text import Text
from rich.tree import Tree

from feedthread.core.session import author_initial
from feedthread.thread.engine import ThreadEngine
from feedthread.thread.types import ThreadNode

console = Console()


def format_date(value: datetime) -> str:
    """Short date like ``Mar 4, 3:07 PM``."""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{value:%b} {value.day}, {hour}:{value:%M} {suffix}"


def plural_replies(count: int) -> str:
    return f"{count} more repl{'y' if count == 1 else 'ies'}"


def render_comment(engine: ThreadEngine, node: ThreadNode) -> Text:
    comment = node.comment
    text = Text()
    label = comment.author_label or "Anon"
    text.append(f"[{author_initial(label)}] ", style="bold cyan")
    text.append(label, style="bold")
    if comment.is_original_poster:
        text.append(" OP", style="bold magenta")
    text.append(f"  {format_date(comment.created_at)}", style="dim")
    text.append(f"  #{comment.id}", style="dim")
    text.append("\n")
    text.append(comment.content)

    reactions = engine.reactions(comment.id)
    if reactions:
        text.append("\n")
        text.append("  ".join(f"{emoji} {count}" for emoji, count in reactions.items()), style="yellow")

    depth = engine.depth_of(comment.id)
    if depth is not None and not engine.can_reply_at(depth):
        text.append("\nReply depth limit reached", style="dim italic")
    return text


def _add_nodes(engine: ThreadEngine, branch: Tree, nodes: list[ThreadNode]) -> None:
    """Attach ``nodes`` and their disclosed replies under ``branch``."""
    pending = [(branch.add(render_comment(engine, node)), node) for node in nodes]
    while pending:
        child, node = pending.pop()
        if not node.replies:
            continue
        if not engine.disclosure.is_expanded(node.id):
            child.add(Text(f"+ {plural_replies(node.reply_count)}", style="blue"))
            continue
        for reply in engine.visible_replies(node.id):
            pending.append((child.add(render_comment(engine, reply)), reply))
        remaining = engine.disclosure.remaining_replies(node)
        if remaining:
            child.add(Text(f"+ Show more replies ({remaining})", style="blue"))


def render_thread(engine: ThreadEngine, title: str = "Discussion") -> Tree:
    """Render the currently disclosed part of the thread."""
    root = Tree(
        Text.assemble(
            (title, "bold"),
            (f"  sorted by {engine.sort_mode.value}\n", "dim"),
            (engine.summary().describe(), "dim"),
        )
    )
    if not engine.tree:
        root.add(Text("No comments yet. Start the discussion.", style="dim italic"))
        return root

    _add_nodes(engine, root, engine.visible_roots())

    hidden = engine.disclosure.hidden_root_count(len(engine.tree))
    if hidden:
        root.add(Text(f"+ Show more comments ({hidden})", style="blue"))
    return root
