"""httpx client factory for the feedback API."""

from __future__ import annotations

import ssl
from typing import Any

import httpx

USER_AGENT = "feedthread/0.1"


def make_api_client(base_url: str, timeout: float, **kwargs: Any) -> httpx.AsyncClient:
    """Create an ``httpx.AsyncClient`` rooted at the feedback API.

    Requests made through it use paths relative to ``base_url``, and every
    response is expected to be JSON.
    """
    headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
    headers.update(kwargs.pop("headers", None) or {})
    kwargs.setdefault("verify", ssl.create_default_context())
    return httpx.AsyncClient(
        base_url=base_url.rstrip("/"),
        timeout=timeout,
        headers=headers,
        **kwargs,
    )
