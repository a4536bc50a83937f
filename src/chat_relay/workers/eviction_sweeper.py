"""Eviction sweeper: removes idle participants and announces their departure."""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta

import redis.asyncio as aioredis

from chat_relay.application.ports.clock import Clock, SystemClock
from chat_relay.application.ports.lease import SweepLease
from chat_relay.application.uow import UnitOfWorkFactory
from chat_relay.config import settings
from chat_relay.infrastructure.db.uow import open_uow
from chat_relay.infrastructure.redis.lease import RedisSweepLease
from chat_relay.services import message_service
from chat_relay.services.presence_service import LEAVE_NOTICE

logger = logging.getLogger(__name__)


class EvictionSweeper:
    """Background task that evicts participants idle for longer than *timeout*.

    Each candidate is removed with a delete conditioned on the ``last_seen``
    value read during the scan. A heartbeat committed in between changes that
    value, so the delete matches nothing and no departure notice is written.
    Two overlapping ticks cannot both remove the same row, so a departure is
    announced at most once.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        *,
        clock: Clock,
        timeout: float,
        interval: float,
        lease: SweepLease | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._clock = clock
        self._timeout = timedelta(seconds=timeout)
        self._interval = interval
        self._lease = lease
        self._task: asyncio.Task[None] | None = None
        self._evictions: set[asyncio.Task[bool]] = set()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        self._task = asyncio.create_task(self._loop(), name="eviction-sweeper")
        logger.info(
            "Eviction sweeper started (interval=%.1fs, timeout=%.1fs)",
            self._interval,
            self._timeout.total_seconds(),
        )

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
            logger.info("Eviction sweeper stopped")

        if self._evictions:
            # Let in-flight evictions write their departure notices
            await asyncio.gather(*self._evictions)

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                await asyncio.wait_for(self.run_tick(), timeout=self._interval)
            except TimeoutError:
                logger.warning("Sweep tick exceeded %.1fs, abandoned", self._interval)
            except Exception:
                logger.exception("Eviction sweeper loop error")

    async def run_tick(self) -> list[str]:
        """Run one sweep, guarded by the lease when one is configured."""
        if self._lease is None:
            return await self.sweep_once()

        try:
            token = await self._lease.acquire(self._interval)
        except Exception:
            # Conditional deletes keep eviction correct without the lease
            logger.exception("Sweep lease unavailable, sweeping without it")
            return await self.sweep_once()

        if token is None:
            logger.debug("Sweep lease held elsewhere, skipping tick")
            return []
        try:
            return await self.sweep_once()
        finally:
            try:
                await self._lease.release(token)
            except Exception:
                logger.exception("Failed to release sweep lease")

    async def sweep_once(self) -> list[str]:
        """Evict every participant whose last_seen is older than the cutoff.

        Returns the names that were actually evicted in this tick.
        """
        cutoff = self._clock.now() - self._timeout
        async with self._uow_factory() as uow:
            candidates = await uow.participants.list_stale(cutoff)

        evicted: list[str] = []
        for participant in candidates:
            # Delete and notice run as one task; abandoning the tick must not
            # leave a deleted participant without its notice
            task = asyncio.create_task(
                self._evict(participant.name, participant.last_seen),
                name=f"evict-{participant.name}",
            )
            self._evictions.add(task)
            task.add_done_callback(self._evictions.discard)
            if await asyncio.shield(task):
                evicted.append(participant.name)

        if evicted:
            logger.info("Evicted %d idle participants", len(evicted))
        return evicted

    async def _evict(self, name: str, observed_last_seen: datetime) -> bool:
        """Remove one participant and announce it. Never raises."""
        try:
            async with self._uow_factory() as uow:
                removed = await uow.participants_w.delete_if_unchanged(name, observed_last_seen)
                if not removed:
                    logger.debug("Participant %s renewed or already gone, kept", name)
                    return False
                await uow.commit()

                await message_service.record_system_event(
                    name, LEAVE_NOTICE, uow, clock=self._clock,
                )
        except Exception:
            logger.exception("Failed to evict participant %s", name)
            return False
        return True


async def run_sweeper() -> None:
    redis = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
    sweeper = EvictionSweeper(
        open_uow,
        clock=SystemClock(),
        timeout=settings.PRESENCE_TIMEOUT_SECONDS,
        interval=settings.SWEEP_INTERVAL_SECONDS,
        lease=RedisSweepLease(redis, settings.SWEEP_LEASE_KEY),
    )
    await sweeper.start()

    try:
        while True:
            await asyncio.sleep(3600)
    except asyncio.CancelledError:
        pass
    finally:
        await sweeper.stop()
        await redis.aclose()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    asyncio.run(run_sweeper())


if __name__ == "__main__":
    main()
