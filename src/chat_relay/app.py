from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import redis.asyncio as aioredis
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from chat_relay.api.middleware.correlation_id import CorrelationIdMiddleware
from chat_relay.api.middleware.metrics import RequestTimingMiddleware
from chat_relay.api.v1.routers import health, messages, participants, status
from chat_relay.application.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    StoreFaultError,
    UnknownSenderError,
    ValidationError,
)
from chat_relay.application.ports.clock import SystemClock
from chat_relay.config import settings
from chat_relay.infrastructure.db.uow import open_uow
from chat_relay.infrastructure.redis.lease import RedisSweepLease
from chat_relay.workers.eviction_sweeper import EvictionSweeper

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    app.state.redis = aioredis.from_url(
        settings.REDIS_URL,
        decode_responses=True,
    )
    logger.info("Redis connection pool created")

    app.state.sweeper = None
    if settings.SWEEPER_ENABLED:
        sweeper = EvictionSweeper(
            open_uow,
            clock=SystemClock(),
            timeout=settings.PRESENCE_TIMEOUT_SECONDS,
            interval=settings.SWEEP_INTERVAL_SECONDS,
            lease=RedisSweepLease(app.state.redis, settings.SWEEP_LEASE_KEY),
        )
        await sweeper.start()
        app.state.sweeper = sweeper

    yield

    if app.state.sweeper is not None:
        await app.state.sweeper.stop()
    await app.state.redis.aclose()
    logger.info("Redis connection pool closed")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Chat Relay",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(CorrelationIdMiddleware)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(participants.router)
    app.include_router(messages.router)
    app.include_router(status.router)

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFoundError)
    async def _not_found(_req: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": exc.detail})

    @app.exception_handler(ForbiddenError)
    async def _forbidden(_req: Request, exc: ForbiddenError) -> JSONResponse:
        return JSONResponse(status_code=401, content={"detail": exc.detail})

    @app.exception_handler(ConflictError)
    async def _conflict(_req: Request, exc: ConflictError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": exc.detail})

    @app.exception_handler(ValidationError)
    async def _validation(_req: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": exc.detail})

    @app.exception_handler(UnknownSenderError)
    async def _unknown_sender(_req: Request, exc: UnknownSenderError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": exc.detail})

    @app.exception_handler(StoreFaultError)
    async def _store_fault(_req: Request, exc: StoreFaultError) -> JSONResponse:
        logger.error("Store fault: %s", exc.detail)
        return JSONResponse(status_code=500, content={"detail": "Storage failure"})
