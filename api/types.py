from __future__ import annotations

from typing import Protocol


class QueueProtocol(Protocol):
    """Minimal interface for a background job queue."""

    def enqueue(self, func: str, *args: object, **kwargs: object) -> object: ...
