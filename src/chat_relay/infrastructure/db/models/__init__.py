"""Import all models so Base.metadata knows every table (see scripts/create_tables.py)."""
from chat_relay.infrastructure.db.models.message import MessageModel
from chat_relay.infrastructure.db.models.participant import ParticipantModel

__all__ = [
    "MessageModel",
    "ParticipantModel",
]
