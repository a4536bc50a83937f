from __future__ import annotations

from contextlib import asynccontextmanager
from types import TracebackType
from typing import AsyncIterator, Self

from sqlalchemy.ext.asyncio import AsyncSession

from chat_relay.infrastructure.db.errors import store_errors
from chat_relay.infrastructure.db.repositories.message import (
    MessageReaderRepo,
    MessageWriterRepo,
)
from chat_relay.infrastructure.db.repositories.participant import (
    ParticipantReaderRepo,
    ParticipantWriterRepo,
)
from chat_relay.infrastructure.db.session import AsyncSessionLocal


class SqlAlchemyUoW:
    """Concrete Unit-of-Work backed by a single AsyncSession.

    Each commit covers the single row the preceding call touched; services
    never batch writes to different documents into one commit.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self.participants = ParticipantReaderRepo(session)
        self.participants_w = ParticipantWriterRepo(session)
        self.messages = MessageReaderRepo(session)
        self.messages_w = MessageWriterRepo(session)

    async def commit(self) -> None:
        with store_errors():
            await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            await self.rollback()


@asynccontextmanager
async def open_uow() -> AsyncIterator[SqlAlchemyUoW]:
    """Fresh session per unit of work, for code running outside a request."""
    async with AsyncSessionLocal() as session:
        async with SqlAlchemyUoW(session) as uow:
            yield uow
