"""Anonymous session identity.

The session id is the only thing that ties an employee to their comments.
It is passed explicitly to the API client and the engine rather than read
from ambient storage.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

AUTHOR_PREFIX = "Anon-"


def author_label(session_id: str) -> str:
    """Display label for an anonymous author, e.g. ``Anon-3F9A``."""
    return f"{AUTHOR_PREFIX}{session_id[-4:].upper()}"


def author_initial(label: str) -> str:
    """Single avatar letter for an author label."""
    return label.replace(AUTHOR_PREFIX, "")[:1].upper() or "A"


@dataclass(frozen=True)
class AnonymousSession:
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self) -> None:
        if not self.id.strip():
            raise ValueError("Session ID is required.")

    @property
    def label(self) -> str:
        return author_label(self.id)

    @classmethod
    def from_id(cls, session_id: str | None) -> AnonymousSession:
        """Use the given id, or generate a fresh session when it is empty."""
        if session_id and session_id.strip():
            return cls(id=session_id.strip())
        return cls()
