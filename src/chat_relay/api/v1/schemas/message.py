from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from chat_relay.domain.entities.message import Message


class MessageBody(BaseModel):
    """Body of post and edit requests.

    Fields are optional here; the service layer reports missing or blank
    values as validation errors.
    """

    to: str | None = None
    text: str | None = None
    type: str | None = None


class MessageResponse(BaseModel):
    id: UUID
    from_: str = Field(alias="from")
    to: str
    text: str
    type: str
    time: str

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_entity(cls, message: Message) -> MessageResponse:
        return cls(
            id=message.id,
            from_=message.sender,
            to=message.to,
            text=message.text,
            type=message.kind,
            time=message.created_at.astimezone().strftime("%H:%M:%S"),
        )
