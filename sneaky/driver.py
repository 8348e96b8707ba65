"""Periodic driver that ticks a GameState on a fixed cadence."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Optional

from .engine import TickOutcome
from .enums import Phase
from .state import GameSnapshot, GameState

logger = logging.getLogger(__name__)

TickCallback = Callable[[TickOutcome, GameSnapshot], Awaitable[None]]


class TickDriver:
    """Calls GameState.tick() every ``interval_ms`` while the round runs.

    The loop ends on its own once the phase leaves RUNNING. start() and
    stop() can be called any number of times.
    """

    def __init__(
        self,
        state: GameState,
        interval_ms: int = 150,
        on_tick: Optional[TickCallback] = None,
    ):
        """Initialize the driver.

        Args:
            state: Game state to advance
            interval_ms: Delay between ticks in milliseconds
            on_tick: Async callback receiving each outcome and fresh snapshot
        """
        self.state = state
        self.interval_ms = interval_ms
        self.on_tick = on_tick
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the tick loop on the running event loop if it is not active."""
        if self.running:
            return
        if self.state.phase is not Phase.RUNNING:
            logger.debug("Not starting driver in phase %s", self.state.phase.value)
            return
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Cancel the tick loop and wait for it to finish."""
        task = self._task
        self._task = None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self) -> None:
        interval = self.interval_ms / 1000
        try:
            while self.state.phase is Phase.RUNNING:
                await asyncio.sleep(interval)
                outcome = self.state.tick()
                if outcome is None:
                    break
                if self.on_tick is not None:
                    await self.on_tick(outcome, self.state.snapshot())
        except Exception:
            logger.exception("Tick loop failed")
