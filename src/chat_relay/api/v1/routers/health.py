from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from chat_relay.infrastructure.db.session import AsyncSessionLocal

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(request: Request) -> JSONResponse:
    errors: list[str] = []

    try:
        async with AsyncSessionLocal() as session:
            await session.execute(text("SELECT 1"))
    except Exception as exc:  # noqa: BLE001
        errors.append(f"postgres: {exc}")

    try:
        redis = request.app.state.redis
        await redis.ping()
    except Exception as exc:  # noqa: BLE001
        errors.append(f"redis: {exc}")

    sweeper = getattr(request.app.state, "sweeper", None)
    sweeper_state = "running" if sweeper is not None and sweeper.running else "disabled"

    if errors:
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "errors": errors, "sweeper": sweeper_state},
        )
    return JSONResponse(content={"status": "ready", "sweeper": sweeper_state})
