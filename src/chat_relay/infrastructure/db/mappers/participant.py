from __future__ import annotations

from chat_relay.domain.entities.participant import Participant
from chat_relay.infrastructure.db.models.participant import ParticipantModel


def model_to_entity(model: ParticipantModel) -> Participant:
    return Participant(
        name=model.name,
        last_seen=model.last_status,
    )


def entity_to_model(entity: Participant) -> ParticipantModel:
    return ParticipantModel(
        name=entity.name,
        last_status=entity.last_seen,
    )
