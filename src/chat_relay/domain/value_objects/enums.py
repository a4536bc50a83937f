from __future__ import annotations

from enum import StrEnum

BROADCAST = "Todos"


class MessageKind(StrEnum):
    MESSAGE = "message"
    PRIVATE_MESSAGE = "private_message"
    STATUS = "status"


CLIENT_KINDS: frozenset[MessageKind] = frozenset(
    {MessageKind.MESSAGE, MessageKind.PRIVATE_MESSAGE}
)
