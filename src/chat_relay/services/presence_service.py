from __future__ import annotations

import logging

from chat_relay.application.dto.commands import JoinCommand
from chat_relay.application.exceptions import ConflictError, NotFoundError, ValidationError
from chat_relay.application.ports.clock import Clock
from chat_relay.application.ports.sanitizer import TextSanitizer
from chat_relay.application.uow import UnitOfWork
from chat_relay.application.validation import Invalid, validate_join
from chat_relay.domain.entities.participant import Participant
from chat_relay.services import message_service

logger = logging.getLogger(__name__)

JOIN_NOTICE = "entered the room"
LEAVE_NOTICE = "left the room"


async def join(
    cmd: JoinCommand,
    uow: UnitOfWork,
    *,
    sanitizer: TextSanitizer,
    clock: Clock,
) -> Participant:
    """Register a participant and announce it to the room.

    The participant and the join notice are committed separately. If the
    notice write fails the error propagates and the participant stays
    registered; the notice is never written without the participant.
    """
    result = validate_join(cmd, sanitizer)
    if isinstance(result, Invalid):
        raise ValidationError(result.detail)
    name = result.value

    if await uow.participants.get(name) is not None:
        raise ConflictError("Name already in use")

    participant = Participant(name=name, last_seen=clock.now())
    if not await uow.participants_w.create_if_absent(participant):
        # Lost the race against a concurrent join with the same name
        raise ConflictError("Name already in use")
    await uow.commit()
    logger.info("Participant %s joined", name)

    await message_service.record_system_event(name, JOIN_NOTICE, uow, clock=clock)
    return participant


async def list_participants(uow: UnitOfWork) -> list[Participant]:
    return await uow.participants.list_all()


async def heartbeat(
    name: str | None,
    uow: UnitOfWork,
    *,
    clock: Clock,
) -> None:
    """Renew the participant's last_seen. Safe to call at any rate."""
    if not name:
        raise NotFoundError("Participant not found")

    if not await uow.participants_w.touch(name, clock.now()):
        raise NotFoundError("Participant not found")
    await uow.commit()


async def is_active(name: str, uow: UnitOfWork) -> bool:
    return await uow.participants.get(name) is not None
