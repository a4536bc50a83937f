from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from chat_relay.domain.entities.message import Message
from chat_relay.infrastructure.db.errors import store_errors
from chat_relay.infrastructure.db.mappers import message as mapper
from chat_relay.infrastructure.db.models.message import MessageModel


class MessageReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, message_id: UUID) -> Message | None:
        stmt = select(MessageModel).where(MessageModel.id == message_id)
        with store_errors():
            result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    async def list_visible(
        self,
        viewer: str,
        broadcast: str,
        *,
        limit: int | None = None,
    ) -> list[Message]:
        stmt = select(MessageModel).where(
            or_(
                MessageModel.to == viewer,
                MessageModel.sender == viewer,
                MessageModel.to == broadcast,
            )
        )
        if limit is None:
            stmt = stmt.order_by(MessageModel.seq.asc())
        else:
            # Newest N, flipped back to creation order below
            stmt = stmt.order_by(MessageModel.seq.desc()).limit(limit)

        with store_errors():
            result = await self._session.execute(stmt)
        models = list(result.scalars().all())
        if limit is not None:
            models.reverse()
        return [mapper.model_to_entity(m) for m in models]


class MessageWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, message: Message) -> Message:
        model = mapper.entity_to_model(message)
        self._session.add(model)
        with store_errors():
            await self._session.flush()
        return mapper.model_to_entity(model)

    async def update(self, message_id: UUID, to: str, text: str, kind: str) -> bool:
        stmt = (
            update(MessageModel)
            .where(MessageModel.id == message_id)
            .values(to=to, text=text, type=kind)
        )
        with store_errors():
            result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def delete(self, message_id: UUID) -> bool:
        stmt = delete(MessageModel).where(MessageModel.id == message_id)
        with store_errors():
            result = await self._session.execute(stmt)
        return result.rowcount == 1
