"""Shared test fixtures."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from feedthread.core.config import Settings
from feedthread.thread.types import Comment

BASE_TIME = datetime(2026, 3, 4, 15, 0, tzinfo=timezone.utc)


def make_comment(
    comment_id: str,
    parent_id: str | None = None,
    *,
    minutes: int = 0,
    op: bool = False,
    author: str | None = None,
    content: str = "",
) -> Comment:
    return Comment(
        id=comment_id,
        parent_id=parent_id,
        created_at=BASE_TIME + timedelta(minutes=minutes),
        content=content or f"comment {comment_id}",
        author_label=author or f"Anon-{comment_id.upper()[-4:]}",
        is_original_poster=op,
        thread_id="fb1",
    )


@pytest.fixture
def tmp_data_dir(tmp_path: Path) -> Path:
    """Create a temporary data directory structure."""
    (tmp_path / "logs").mkdir()
    return tmp_path


@pytest.fixture
def settings(tmp_data_dir: Path) -> Settings:
    """Create Settings pointing at temp directories."""
    return Settings(
        api_base_url="http://feedback.test",
        session_id="5b1c7e2a-0000-4000-8000-00000000ab12",
        data_dir=tmp_data_dir,
        log_level="DEBUG",
        _env_file=None,
    )
