from __future__ import annotations

from typing import Protocol


class SweepLease(Protocol):
    """Short-lived mutual exclusion between sweeper processes for one tick."""

    async def acquire(self, ttl_seconds: float) -> str | None:
        """Return an ownership token, or None if another holder has the lease."""
        ...

    async def release(self, token: str) -> None: ...
