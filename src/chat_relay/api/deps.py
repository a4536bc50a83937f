"""FastAPI dependency injection helpers."""
from __future__ import annotations

from typing import Annotated, AsyncIterator

from fastapi import Depends, Header

from chat_relay.application.ports.clock import Clock, SystemClock
from chat_relay.application.ports.sanitizer import TextSanitizer
from chat_relay.infrastructure.db.session import AsyncSessionLocal
from chat_relay.infrastructure.db.uow import SqlAlchemyUoW
from chat_relay.infrastructure.text.html_sanitizer import HtmlSanitizer


async def get_uow() -> AsyncIterator[SqlAlchemyUoW]:
    async with AsyncSessionLocal() as session:
        uow = SqlAlchemyUoW(session)
        try:
            yield uow
        finally:
            await session.close()


UoWDep = Annotated[SqlAlchemyUoW, Depends(get_uow)]


def get_clock() -> Clock:
    return SystemClock()


ClockDep = Annotated[Clock, Depends(get_clock)]


def get_sanitizer() -> TextSanitizer:
    return HtmlSanitizer()


SanitizerDep = Annotated[TextSanitizer, Depends(get_sanitizer)]


async def get_user_name(user: Annotated[str | None, Header()] = None) -> str | None:
    """Caller identity: the bare participant name from the ``User`` header."""
    if user is None:
        return None
    return user.strip() or None


UserName = Annotated[str | None, Depends(get_user_name)]
