"""Application logging and append-only JSONL activity trail."""

from __future__ import annotations

import json
import logging
import re
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")
_MAX_VALUE_LEN = 280


def _sanitize(value: Any) -> Any:
    """Strip ANSI escapes and clip strings to a short excerpt."""
    if isinstance(value, str):
        cleaned = _ANSI_RE.sub("", value)
        if len(cleaned) > _MAX_VALUE_LEN:
            cleaned = cleaned[:_MAX_VALUE_LEN] + f"... (truncated, {len(cleaned)} total)"
        return cleaned
    if isinstance(value, dict):
        return {k: _sanitize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_sanitize(v) for v in value]
    return value


class ActivityLogger:
    """Append-only JSONL log of discussion activity (comments posted, sort changes)."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    def log(
        self,
        action: str,
        *,
        thread_id: str = "",
        comment_id: str = "",
        parent_id: str | None = None,
        session_label: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "action": action,
        }
        if thread_id:
            entry["thread_id"] = thread_id
        if comment_id:
            entry["comment_id"] = comment_id
        if parent_id:
            entry["parent_id"] = parent_id
        if session_label:
            entry["author"] = session_label
        if details:
            entry["details"] = _sanitize(details)

        with open(self._path, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry, default=str) + "\n")


_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_QUIET_LOGGERS = ("httpx", "httpcore", "asyncio")


def setup_logging(log_level: str = "INFO", app_log_path: Path | None = None) -> None:
    """Route feedthread logs to stderr and, when given, the app log file.

    HTTP transport and event-loop chatter is capped at WARNING so that
    ``--log-level debug`` shows thread building and API errors only.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    formatter = logging.Formatter(_LOG_FORMAT)
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    stderr = logging.StreamHandler(sys.stderr)
    stderr.setFormatter(formatter)
    root.addHandler(stderr)
    if app_log_path is not None:
        app_log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(app_log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
    root.setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
