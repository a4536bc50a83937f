from __future__ import annotations

from dataclasses import dataclass

from chat_relay.domain.value_objects.enums import MessageKind


@dataclass(frozen=True, slots=True)
class MessageDraft:
    """Sanitized, validated message fields ready to be stored."""

    to: str
    text: str
    kind: MessageKind
