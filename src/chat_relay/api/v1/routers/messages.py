from __future__ import annotations

from fastapi import APIRouter, Query

from chat_relay.api.deps import ClockDep, SanitizerDep, UoWDep, UserName
from chat_relay.api.v1.schemas.message import MessageBody, MessageResponse
from chat_relay.application.dto.commands import EditMessageCommand, PostMessageCommand
from chat_relay.application.exceptions import ValidationError
from chat_relay.services import message_service

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("", response_model=list[MessageResponse])
async def list_messages(
    user: UserName,
    uow: UoWDep,
    limit: str | None = Query(None),
) -> list[MessageResponse]:
    if user is None:
        raise ValidationError("User header is required")
    messages = await message_service.list_visible(user, limit, uow)
    return [MessageResponse.from_entity(m) for m in messages]


@router.post("", response_model=MessageResponse, status_code=201)
async def post_message(
    body: MessageBody,
    user: UserName,
    uow: UoWDep,
    clock: ClockDep,
    sanitizer: SanitizerDep,
) -> MessageResponse:
    msg = await message_service.post_message(
        PostMessageCommand(sender=user, to=body.to, text=body.text, kind=body.type),
        uow,
        sanitizer=sanitizer,
        clock=clock,
    )
    return MessageResponse.from_entity(msg)


@router.put("/{message_id}", response_model=MessageResponse)
async def edit_message(
    message_id: str,
    body: MessageBody,
    user: UserName,
    uow: UoWDep,
    sanitizer: SanitizerDep,
) -> MessageResponse:
    msg = await message_service.edit_message(
        EditMessageCommand(
            message_id=message_id,
            requester=user,
            to=body.to,
            text=body.text,
            kind=body.type,
        ),
        uow,
        sanitizer=sanitizer,
    )
    return MessageResponse.from_entity(msg)


@router.delete("/{message_id}")
async def delete_message(message_id: str, user: UserName, uow: UoWDep) -> dict[str, str]:
    await message_service.delete_message(message_id, user, uow)
    return {"status": "deleted"}
