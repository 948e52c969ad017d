"""
Geospatial Placement - Placement Session
Cooperative asyncio tick loop driving a placement coordinator
"""

import time
import asyncio
import logging
from typing import Callable, Optional

from .placement_coordinator import PlacementCoordinator
from .placement_models import PlacementOutcome

logger = logging.getLogger(__name__)


class PlacementSession:
    """
    Steps a PlacementCoordinator once per tick until it reaches a terminal state.

    Only one tick loop may run per session; start() hands back the running
    task instead of spawning a second one. Stopping mid-wait cancels the
    loop and leaves the outcome unattempted.
    """

    def __init__(self, coordinator: PlacementCoordinator,
                 tick_interval: float = 1.0 / 60.0,
                 clock: Callable[[], float] = time.monotonic,
                 diagnostics=None):
        if tick_interval < 0:
            raise ValueError("tick_interval must be non-negative")

        self.coordinator = coordinator
        self.tick_interval = tick_interval
        self.clock = clock
        self.diagnostics = diagnostics

        self.placement_task: Optional[asyncio.Task] = None
        self.tick_count = 0
        self.was_cancelled = False

    @property
    def is_running(self) -> bool:
        return self.placement_task is not None and not self.placement_task.done()

    @property
    def outcome(self) -> PlacementOutcome:
        return self.coordinator.outcome

    def start(self) -> asyncio.Task:
        """Start the tick loop unless one is already running"""
        if self.is_running:
            logger.debug("Placement loop already running")
            return self.placement_task

        if self.coordinator.is_terminal:
            raise RuntimeError(
                f"Placement already finished as {self.coordinator.state.value}; create a new coordinator"
            )

        self.coordinator.check_configuration()

        self.was_cancelled = False
        self.placement_task = asyncio.create_task(self._tick_loop())
        return self.placement_task

    async def run(self) -> PlacementOutcome:
        """Run (or join) the tick loop until the coordinator is terminal"""
        if self.coordinator.is_terminal:
            return self.coordinator.outcome

        await self.start()
        return self.coordinator.outcome

    async def stop(self):
        """Cancel the in-flight tick loop and restart the stabilization window"""
        if not self.is_running:
            return

        self.was_cancelled = True
        self.placement_task.cancel()
        try:
            await self.placement_task
        except asyncio.CancelledError:
            pass

        # Credit from before the stop does not carry over a restart
        self.coordinator.gate.reset()

        logger.info(f"Placement session stopped after {self.tick_count} ticks")

    async def _tick_loop(self):
        """Advance the coordinator once per tick"""
        last_tick = self.clock()

        try:
            while not self.coordinator.is_terminal:
                await asyncio.sleep(self.tick_interval)

                now = self.clock()
                delta_time = max(0.0, now - last_tick)
                last_tick = now

                self.tick_count += 1
                try:
                    self.coordinator.tick(delta_time)
                finally:
                    if self.diagnostics is not None:
                        self.diagnostics.log_tick(self.coordinator, delta_time)

        except asyncio.CancelledError:
            self.was_cancelled = True
            logger.info("Placement loop cancelled before commit")
            raise
        except Exception as e:
            logger.error(f"❌ Placement loop failed: {e}")
            raise

        logger.info(
            f"Placement finished as {self.coordinator.state.value} after {self.tick_count} ticks"
        )
