from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from chat_relay.domain.entities.participant import Participant


class JoinRequest(BaseModel):
    name: str | None = None


class ParticipantResponse(BaseModel):
    name: str
    last_status: datetime

    @classmethod
    def from_entity(cls, participant: Participant) -> ParticipantResponse:
        return cls(name=participant.name, last_status=participant.last_seen)
