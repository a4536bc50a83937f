from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from chat_relay.domain.entities.participant import Participant
from chat_relay.infrastructure.db.errors import store_errors
from chat_relay.infrastructure.db.mappers import participant as mapper
from chat_relay.infrastructure.db.models.participant import ParticipantModel


class ParticipantReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, name: str) -> Participant | None:
        stmt = select(ParticipantModel).where(ParticipantModel.name == name)
        with store_errors():
            result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return mapper.model_to_entity(model) if model else None

    async def list_all(self) -> list[Participant]:
        stmt = select(ParticipantModel).order_by(ParticipantModel.name.asc())
        with store_errors():
            result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]

    async def list_stale(self, cutoff: datetime) -> list[Participant]:
        stmt = select(ParticipantModel).where(ParticipantModel.last_status < cutoff)
        with store_errors():
            result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]


class ParticipantWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create_if_absent(self, participant: Participant) -> bool:
        """Insert participant. Returns False when the name is already taken."""
        stmt = (
            pg_insert(ParticipantModel)
            .values(name=participant.name, last_status=participant.last_seen)
            .on_conflict_do_nothing(index_elements=[ParticipantModel.name])
            .returning(ParticipantModel.id)
        )
        with store_errors():
            result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def touch(self, name: str, seen_at: datetime) -> bool:
        stmt = (
            update(ParticipantModel)
            .where(ParticipantModel.name == name)
            .values(last_status=seen_at)
        )
        with store_errors():
            result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def delete_if_unchanged(self, name: str, last_seen: datetime) -> bool:
        stmt = delete(ParticipantModel).where(
            ParticipantModel.name == name,
            ParticipantModel.last_status == last_seen,
        )
        with store_errors():
            result = await self._session.execute(stmt)
        return result.rowcount == 1
