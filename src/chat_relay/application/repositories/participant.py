from __future__ import annotations

from datetime import datetime
from typing import Protocol

from chat_relay.domain.entities.participant import Participant


class ParticipantReader(Protocol):
    async def get(self, name: str) -> Participant | None: ...

    async def list_all(self) -> list[Participant]: ...

    async def list_stale(self, cutoff: datetime) -> list[Participant]:
        """Participants whose last_seen is strictly before *cutoff*."""
        ...


class ParticipantWriter(Protocol):
    async def create_if_absent(self, participant: Participant) -> bool:
        """Insert participant. Return False if the name is already taken."""
        ...

    async def touch(self, name: str, seen_at: datetime) -> bool:
        """Set last_seen. Return False if no such participant."""
        ...

    async def delete_if_unchanged(self, name: str, last_seen: datetime) -> bool:
        """Delete only if last_seen still equals the observed value.

        Returns True when a row was removed.
        """
        ...
