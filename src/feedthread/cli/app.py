"""Click CLI group with show, reply, and whoami commands."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import click
import httpx

from feedthread.core.config import Settings, get_settings
from feedthread.core.logging import ActivityLogger, setup_logging
from feedthread.core.session import AnonymousSession
from feedthread.thread.disclosure import DisclosureController
from feedthread.thread.engine import ThreadEngine
from feedthread.thread.types import Comment, ThreadKind


def _build_engine(
    settings: Settings,
    thread_id: str,
    *,
    question: bool,
    sort: str | None = None,
) -> ThreadEngine:
    from feedthread.api.client import FeedbackApiClient

    session = AnonymousSession.from_id(settings.session_id)
    kind = ThreadKind.QUESTION if question else ThreadKind.FEEDBACK
    client = FeedbackApiClient(
        settings.api_base_url, session, kind=kind, timeout=settings.request_timeout
    )
    disclosure = DisclosureController(
        root_page_size=settings.root_page_size,
        reply_page_size=settings.reply_page_size,
        max_depth=settings.max_reply_depth,
    )
    return ThreadEngine(
        thread_id,
        session,
        client=client,
        sort_mode=sort or settings.default_sort,
        disclosure=disclosure,
        activity_log=ActivityLogger(settings.activity_log_path),
    )


def _load_file(path: Path) -> list[Comment]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("comments", [])
    return [Comment.from_dict(item) for item in data]


def _expand_all(engine: ThreadEngine) -> None:
    for comment in engine.comments:
        node = engine.node(comment.id)
        if node is None or not node.replies:
            continue
        if not engine.disclosure.is_expanded(node.id):
            engine.toggle_replies(node.id)
        while engine.disclosure.remaining_replies(node):
            engine.show_more_replies(node.id)
    while engine.has_more_roots():
        engine.show_more_roots()


@click.group()
def cli() -> None:
    """Anonymous feedback discussion threads."""


@cli.command()
@click.argument("thread_id")
@click.option("--question", is_flag=True, help="Thread is a question's responses, not feedback comments")
@click.option(
    "--sort",
    type=click.Choice(["best", "newest", "oldest", "new", "old"], case_sensitive=False),
    default=None,
    help="Sibling order (default from FEEDTHREAD_DEFAULT_SORT)",
)
@click.option("--more", "more_pages", default=0, type=int, help="Extra pages of root comments to reveal")
@click.option("--expand-all", is_flag=True, help="Reveal every reply")
@click.option(
    "--file",
    "file_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read comments from a JSON export instead of the API",
)
def show(
    thread_id: str,
    question: bool,
    sort: str | None,
    more_pages: int,
    expand_all: bool,
    file_path: Path | None,
) -> None:
    """Show the ranked discussion for a feedback item or question."""
    from feedthread.cli.rendering import console, render_thread

    settings = get_settings()
    setup_logging(settings.log_level, settings.app_log_path)

    engine = _build_engine(settings, thread_id, question=question, sort=sort)
    try:
        if file_path is not None:
            engine.set_comments(_load_file(file_path))
        else:
            asyncio.run(engine.load())
    except (ValueError, OSError, httpx.HTTPError) as e:
        click.echo(f"Error: {e}")
        raise SystemExit(1)

    for _ in range(max(0, more_pages)):
        engine.show_more_roots()
    if expand_all:
        _expand_all(engine)

    title = f"Question {thread_id}" if question else f"Feedback {thread_id}"
    console.print(render_thread(engine, title=title))


@cli.command()
@click.argument("thread_id")
@click.argument("content", nargs=-1, required=True)
@click.option("--parent", "parent_id", default=None, help="Comment id to reply to")
@click.option("--question", is_flag=True, help="Respond to a question instead of feedback")
def reply(thread_id: str, content: tuple[str, ...], parent_id: str | None, question: bool) -> None:
    """Post a comment, or a reply with --parent."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.app_log_path)

    engine = _build_engine(settings, thread_id, question=question)
    text = " ".join(content)

    async def _post() -> Comment:
        if parent_id is not None:
            await engine.load()
        return await engine.submit(text, parent_id=parent_id)

    try:
        comment = asyncio.run(_post())
    except (ValueError, httpx.HTTPError) as e:
        click.echo(f"Error: {e}")
        raise SystemExit(1)

    click.echo(f"Posted {comment.id} as {comment.author_label or engine.session.label}")


@cli.command()
def whoami() -> None:
    """Show the anonymous label comments are posted under."""
    settings = get_settings()
    session = AnonymousSession.from_id(settings.session_id)
    if not settings.session_id:
        click.echo("No FEEDTHREAD_SESSION_ID set; a new identity is generated on each run.")
    click.echo(session.label)


if __name__ == "__main__":
    cli()
