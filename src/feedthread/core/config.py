"""Application configuration via environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "FEEDTHREAD_", "env_file": ".env", "extra": "ignore"}

    # Feedback API
    api_base_url: str = "http://127.0.0.1:3000"
    request_timeout: float = 15.0

    # Anonymous identity; empty means a fresh one is generated per run
    session_id: str = ""

    # Disclosure paging
    root_page_size: int = 3
    reply_page_size: int = 2
    max_reply_depth: int = 6

    # Ranking
    default_sort: str = "best"

    # Paths
    data_dir: Path = Path("./data")

    # Logging
    log_level: str = "INFO"

    @property
    def app_log_path(self) -> Path:
        return self.data_dir / "logs" / "app.log"

    @property
    def activity_log_path(self) -> Path:
        return self.data_dir / "logs" / "activity.jsonl"


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
