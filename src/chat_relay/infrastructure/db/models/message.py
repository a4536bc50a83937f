from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import BigInteger, Identity, Index, String, Text
from sqlalchemy import text as sql_text
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID
from sqlalchemy.orm import Mapped, mapped_column

from chat_relay.infrastructure.db.base import Base


class MessageModel(Base):
    __tablename__ = "messages"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        server_default=sql_text("gen_random_uuid()"),
    )
    # Insertion order; breaks ties between equal timestamps
    seq: Mapped[int] = mapped_column(BigInteger, Identity(), nullable=False, unique=True)
    sender: Mapped[str] = mapped_column("from", String(100), nullable=False)
    to: Mapped[str] = mapped_column(String(100), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False, default="message")
    time: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sql_text("now()"),
    )

    __table_args__ = (
        Index("ix_messages_to", "to", "seq"),
        Index("ix_messages_from", "from", "seq"),
    )
