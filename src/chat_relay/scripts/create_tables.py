"""Create the participants and messages tables if they don't exist."""
from __future__ import annotations

import asyncio
import logging

from chat_relay.infrastructure.db.base import Base
from chat_relay.infrastructure.db.models import MessageModel, ParticipantModel
from chat_relay.infrastructure.db.session import engine

logger = logging.getLogger(__name__)


async def create_tables() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(
        "Tables ready: %s, %s",
        ParticipantModel.__tablename__,
        MessageModel.__tablename__,
    )
    await engine.dispose()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    asyncio.run(create_tables())


if __name__ == "__main__":
    main()
