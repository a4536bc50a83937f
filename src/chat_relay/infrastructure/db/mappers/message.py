from __future__ import annotations

from chat_relay.domain.entities.message import Message
from chat_relay.infrastructure.db.models.message import MessageModel


def model_to_entity(model: MessageModel) -> Message:
    return Message(
        id=model.id,
        sender=model.sender,
        to=model.to,
        text=model.text,
        kind=model.type,
        created_at=model.time,
    )


def entity_to_model(entity: Message) -> MessageModel:
    return MessageModel(
        id=entity.id,
        sender=entity.sender,
        to=entity.to,
        text=entity.text,
        type=entity.kind,
        time=entity.created_at,
    )
