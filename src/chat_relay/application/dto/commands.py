from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class JoinCommand:
    name: str | None


@dataclass(frozen=True, slots=True)
class PostMessageCommand:
    sender: str | None
    to: str | None
    text: str | None
    kind: str | None


@dataclass(frozen=True, slots=True)
class EditMessageCommand:
    message_id: str
    requester: str | None
    to: str | None
    text: str | None
    kind: str | None
