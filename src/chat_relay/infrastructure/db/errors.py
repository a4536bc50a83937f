from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError

from chat_relay.application.exceptions import StoreFaultError


@contextmanager
def store_errors() -> Iterator[None]:
    """Re-raise SQLAlchemy failures as StoreFaultError."""
    try:
        yield
    except SQLAlchemyError as exc:
        raise StoreFaultError(str(exc)) from exc
