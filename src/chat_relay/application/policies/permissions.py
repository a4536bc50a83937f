from __future__ import annotations

from chat_relay.application.exceptions import ForbiddenError, NotFoundError
from chat_relay.domain.entities.message import Message
from chat_relay.domain.value_objects.enums import MessageKind


def assert_message_owner(message: Message | None, requester: str | None) -> Message:
    """Raise if the message doesn't exist or the requester may not change it."""
    if message is None:
        raise NotFoundError("Message not found")

    if not requester or requester != message.sender:
        raise ForbiddenError("Only the sender can change this message")

    # Join/leave notices belong to the system, not to the named participant
    if message.kind == MessageKind.STATUS:
        raise ForbiddenError("Status messages cannot be changed")

    return message
