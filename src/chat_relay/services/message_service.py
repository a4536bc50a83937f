from __future__ import annotations

import logging
import uuid

from chat_relay.application.dto.commands import EditMessageCommand, PostMessageCommand
from chat_relay.application.exceptions import (
    NotFoundError,
    UnknownSenderError,
    ValidationError,
)
from chat_relay.application.policies.permissions import assert_message_owner
from chat_relay.application.ports.clock import Clock
from chat_relay.application.ports.sanitizer import TextSanitizer
from chat_relay.application.uow import UnitOfWork
from chat_relay.application.validation import Invalid, validate_limit, validate_message
from chat_relay.domain.entities.message import Message
from chat_relay.domain.value_objects.enums import BROADCAST, MessageKind

logger = logging.getLogger(__name__)


async def post_message(
    cmd: PostMessageCommand,
    uow: UnitOfWork,
    *,
    sanitizer: TextSanitizer,
    clock: Clock,
) -> Message:
    """Store a client-authored message from an active participant."""
    result = validate_message(cmd.to, cmd.text, cmd.kind, sanitizer)
    if isinstance(result, Invalid):
        raise ValidationError(result.detail)
    draft = result.value

    from chat_relay.services.presence_service import is_active

    if not cmd.sender or not await is_active(cmd.sender, uow):
        raise UnknownSenderError("Sender is not an active participant")

    msg = Message(
        id=uuid.uuid4(),
        sender=cmd.sender,
        to=draft.to,
        text=draft.text,
        kind=draft.kind.value,
        created_at=clock.now(),
    )
    msg = await uow.messages_w.add(msg)
    await uow.commit()
    return msg


async def list_visible(
    viewer: str,
    raw_limit: object,
    uow: UnitOfWork,
) -> list[Message]:
    result = validate_limit(raw_limit)
    if isinstance(result, Invalid):
        raise ValidationError(result.detail)
    return await uow.messages.list_visible(viewer, BROADCAST, limit=result.value)


async def edit_message(
    cmd: EditMessageCommand,
    uow: UnitOfWork,
    *,
    sanitizer: TextSanitizer,
) -> Message:
    """Overwrite to/text/kind of a message owned by the requester.

    ``id`` and ``created_at`` never change.
    """
    message = await _get_message(cmd.message_id, uow)
    message = assert_message_owner(message, cmd.requester)

    result = validate_message(cmd.to, cmd.text, cmd.kind, sanitizer)
    if isinstance(result, Invalid):
        raise ValidationError(result.detail)
    draft = result.value

    updated = await uow.messages_w.update(message.id, draft.to, draft.text, draft.kind.value)
    if not updated:
        # Deleted between the read and the write
        raise NotFoundError("Message not found")
    await uow.commit()

    return Message(
        id=message.id,
        sender=message.sender,
        to=draft.to,
        text=draft.text,
        kind=draft.kind.value,
        created_at=message.created_at,
    )


async def delete_message(
    message_id: str,
    requester: str | None,
    uow: UnitOfWork,
) -> None:
    message = await _get_message(message_id, uow)
    message = assert_message_owner(message, requester)

    if not await uow.messages_w.delete(message.id):
        raise NotFoundError("Message not found")
    await uow.commit()


async def record_system_event(
    participant_name: str,
    text: str,
    uow: UnitOfWork,
    *,
    clock: Clock,
) -> Message:
    """Write a status notice about *participant_name* to everyone.

    Skips the active-sender check: a departure notice is written after the
    participant is already gone.
    """
    msg = Message(
        id=uuid.uuid4(),
        sender=participant_name,
        to=BROADCAST,
        text=text,
        kind=MessageKind.STATUS.value,
        created_at=clock.now(),
    )
    msg = await uow.messages_w.add(msg)
    await uow.commit()
    logger.info("Status notice for %s: %s", participant_name, text)
    return msg


async def _get_message(raw_id: str, uow: UnitOfWork) -> Message | None:
    try:
        message_id = uuid.UUID(raw_id)
    except ValueError:
        return None
    return await uow.messages.get(message_id)
