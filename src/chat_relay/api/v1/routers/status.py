from __future__ import annotations

from fastapi import APIRouter

from chat_relay.api.deps import ClockDep, UoWDep, UserName
from chat_relay.services import presence_service

router = APIRouter(prefix="/status", tags=["presence"])


@router.post("")
async def heartbeat(user: UserName, uow: UoWDep, clock: ClockDep) -> dict[str, str]:
    await presence_service.heartbeat(user, uow, clock=clock)
    return {"status": "ok"}
