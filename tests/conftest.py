"""Shared test fixtures."""
from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import AsyncIterator
from uuid import UUID

import pytest

from chat_relay.domain.entities.message import Message
from chat_relay.domain.entities.participant import Participant
from chat_relay.domain.value_objects.enums import MessageKind
from chat_relay.infrastructure.text.html_sanitizer import HtmlSanitizer

T0 = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@dataclass
class FakeClock:
    current: datetime = T0

    def now(self) -> datetime:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sanitizer() -> HtmlSanitizer:
    return HtmlSanitizer()



@dataclass
class FakeParticipantReader:
    _store: dict[str, Participant] = field(default_factory=dict)

    async def get(self, name: str) -> Participant | None:
        return self._store.get(name)

    async def list_all(self) -> list[Participant]:
        return list(self._store.values())

    async def list_stale(self, cutoff: datetime) -> list[Participant]:
        return [p for p in self._store.values() if p.last_seen < cutoff]


@dataclass
class FakeParticipantWriter:
    _reader: FakeParticipantReader
    fail_delete_for: set[str] = field(default_factory=set)

    async def create_if_absent(self, participant: Participant) -> bool:
        if participant.name in self._reader._store:
            return False
        self._reader._store[participant.name] = participant
        return True

    async def touch(self, name: str, seen_at: datetime) -> bool:
        current = self._reader._store.get(name)
        if current is None:
            return False
        self._reader._store[name] = Participant(name=name, last_seen=seen_at)
        return True

    async def delete_if_unchanged(self, name: str, last_seen: datetime) -> bool:
        if name in self.fail_delete_for:
            raise RuntimeError(f"store unavailable for {name}")
        current = self._reader._store.get(name)
        if current is None or current.last_seen != last_seen:
            return False
        del self._reader._store[name]
        return True


@dataclass
class FakeMessageReader:
    _messages: list[Message] = field(default_factory=list)

    async def get(self, message_id: UUID) -> Message | None:
        for m in self._messages:
            if m.id == message_id:
                return m
        return None

    async def list_visible(
        self,
        viewer: str,
        broadcast: str,
        *,
        limit: int | None = None,
    ) -> list[Message]:
        visible = [m for m in self._messages if m.is_visible_to(viewer, broadcast)]
        if limit is not None:
            return visible[-limit:]
        return visible


@dataclass
class FakeMessageWriter:
    _reader: FakeMessageReader

    async def add(self, message: Message) -> Message:
        self._reader._messages.append(message)
        return message

    async def update(self, message_id: UUID, to: str, text: str, kind: str) -> bool:
        for i, m in enumerate(self._reader._messages):
            if m.id == message_id:
                self._reader._messages[i] = Message(
                    id=m.id, sender=m.sender, to=to, text=text, kind=kind, created_at=m.created_at,
                )
                return True
        return False

    async def delete(self, message_id: UUID) -> bool:
        before = len(self._reader._messages)
        self._reader._messages = [m for m in self._reader._messages if m.id != message_id]
        return len(self._reader._messages) < before


@dataclass
class FakeUoW:
    """In-memory UoW for unit tests."""
    participants: FakeParticipantReader = field(default_factory=FakeParticipantReader)
    participants_w: FakeParticipantWriter | None = None
    messages: FakeMessageReader = field(default_factory=FakeMessageReader)
    messages_w: FakeMessageWriter | None = None
    commits: int = 0

    def __post_init__(self) -> None:
        if self.participants_w is None:
            self.participants_w = FakeParticipantWriter(self.participants)
        if self.messages_w is None:
            self.messages_w = FakeMessageWriter(self.messages)

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        pass

    def status_messages(self, text: str | None = None) -> list[Message]:
        return [
            m for m in self.messages._messages
            if m.kind == MessageKind.STATUS and (text is None or m.text == text)
        ]


def uow_factory_for(uow: FakeUoW):
    """Unit-of-work factory that always hands out the same in-memory store."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUoW]:
        yield uow

    return _factory


@pytest.fixture
def uow() -> FakeUoW:
    return FakeUoW()
