from __future__ import annotations

from fastapi import APIRouter

from chat_relay.api.deps import ClockDep, SanitizerDep, UoWDep
from chat_relay.api.v1.schemas.participant import JoinRequest, ParticipantResponse
from chat_relay.application.dto.commands import JoinCommand
from chat_relay.services import presence_service

router = APIRouter(prefix="/participants", tags=["participants"])


@router.post("", response_model=ParticipantResponse, status_code=201)
async def join(
    body: JoinRequest,
    uow: UoWDep,
    clock: ClockDep,
    sanitizer: SanitizerDep,
) -> ParticipantResponse:
    participant = await presence_service.join(
        JoinCommand(name=body.name), uow, sanitizer=sanitizer, clock=clock,
    )
    return ParticipantResponse.from_entity(participant)


@router.get("", response_model=list[ParticipantResponse])
async def list_participants(uow: UoWDep) -> list[ParticipantResponse]:
    participants = await presence_service.list_participants(uow)
    return [ParticipantResponse.from_entity(p) for p in participants]
