"""
Sync loop - periodically pulls hub state into the accessory.

A poll runs immediately on start and then once per interval. Each poll is
scheduled on its own rather than chained to the previous one, so a slow hub can
leave several polls in flight at once. A failed poll is logged and skipped:
there is no retry, no backoff and no limit on consecutive failures.
"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Set

from climate_bridge.devices.hub_client import HubClient
from climate_bridge.homekit.accessory import ClimateAccessory
from climate_bridge.services.translator import translate_snapshot
from climate_bridge.utils.logging import get_logger

logger = get_logger(__name__)


class SyncLoop:
    """
    Timer-driven coordinator: HubClient -> translator -> ClimateAccessory.
    """

    def __init__(
        self,
        hub: HubClient,
        accessory: ClimateAccessory,
        interval_seconds: float
    ):
        """
        Initialize sync loop.

        Args:
            hub: Client used to read the climate entity
            accessory: Accessory receiving translated state
            interval_seconds: Delay between poll starts
        """
        self.hub = hub
        self.accessory = accessory
        self.interval_seconds = interval_seconds

        self.polls = 0
        self.failures = 0
        self.consecutive_failures = 0
        self.last_success_at: Optional[datetime] = None

        self._ticker: Optional[asyncio.Task] = None
        self._in_flight: Set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._ticker is not None and not self._ticker.done()

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    async def poll_once(self) -> bool:
        """
        Run one poll. Never raises.

        Returns:
            True if hub state was applied to the accessory
        """
        self.polls += 1
        try:
            snapshot = await self.hub.fetch_snapshot()
            if snapshot is None:
                self._record_failure()
                return False

            update = translate_snapshot(snapshot)
            self.accessory.apply_update(update)

        except Exception:
            logger.exception("poll_failed")
            self._record_failure()
            return False

        self.consecutive_failures = 0
        self.last_success_at = datetime.now(timezone.utc)
        logger.debug("poll_applied", state=snapshot.state, update=str(update))
        return True

    def _record_failure(self) -> None:
        self.failures += 1
        self.consecutive_failures += 1
        logger.warning(
            "poll_skipped",
            entity_id=self.hub.entity_id,
            consecutive_failures=self.consecutive_failures,
        )

    def _spawn_poll(self) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(self.poll_once())
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        return task

    async def _run(self) -> None:
        while True:
            self._spawn_poll()
            await asyncio.sleep(self.interval_seconds)

    def start(self) -> asyncio.Task:
        """
        Start polling: one poll now, then one every interval.

        Returns:
            The ticker task
        """
        if self.running:
            return self._ticker

        logger.info(
            "sync_loop_started",
            entity_id=self.hub.entity_id,
            interval_seconds=self.interval_seconds,
        )
        self._ticker = asyncio.get_running_loop().create_task(self._run())
        return self._ticker

    async def stop(self) -> None:
        """
        Stop scheduling new polls. Polls already in flight run to completion.
        """
        if self._ticker is not None:
            self._ticker.cancel()
            try:
                await self._ticker
            except asyncio.CancelledError:
                pass
            self._ticker = None

        if self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)

        logger.info("sync_loop_stopped", polls=self.polls, failures=self.failures)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to API response format."""
        return {
            "running": self.running,
            "interval_seconds": self.interval_seconds,
            "polls": self.polls,
            "failures": self.failures,
            "consecutive_failures": self.consecutive_failures,
            "in_flight": self.in_flight,
            "last_success_at": (
                self.last_success_at.isoformat() if self.last_success_at else None
            ),
        }
