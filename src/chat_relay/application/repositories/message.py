from __future__ import annotations

from typing import Protocol
from uuid import UUID

from chat_relay.domain.entities.message import Message


class MessageReader(Protocol):
    async def get(self, message_id: UUID) -> Message | None: ...

    async def list_visible(
        self,
        viewer: str,
        broadcast: str,
        *,
        limit: int | None = None,
    ) -> list[Message]:
        """Messages visible to viewer, oldest first.

        With *limit*, only the trailing *limit* messages are returned.
        """
        ...


class MessageWriter(Protocol):
    async def add(self, message: Message) -> Message: ...

    async def update(self, message_id: UUID, to: str, text: str, kind: str) -> bool: ...

    async def delete(self, message_id: UUID) -> bool: ...
