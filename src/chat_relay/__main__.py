"""Entrypoint: python -m chat_relay"""
from __future__ import annotations

import logging

import uvicorn

from chat_relay.api.middleware.correlation_id import CorrelationIdFilter
from chat_relay.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(correlation_id)s]: %(message)s"


def _configure_logging() -> None:
    handler = logging.StreamHandler()
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.basicConfig(level=logging.INFO, handlers=[handler])


def main() -> None:
    _configure_logging()
    uvicorn.run(
        "chat_relay.app:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level="info",
    )


if __name__ == "__main__":
    main()
