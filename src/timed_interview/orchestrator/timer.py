"""
Countdown timer for the active question.

The timer counts whole time units down to zero and reports expiry exactly
once per ``start``. It can drive itself on the running asyncio loop, or be
ticked by an external loop when no tick interval is configured.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from timed_interview.orchestrator.schemas import TimerState

logger = logging.getLogger(__name__)

TickCallback = Callable[[TimerState], None]
ExpiredCallback = Callable[[], None]


class CountdownTimer:
    """
    Restartable countdown over integer time units.

    Callbacks are plain functions invoked synchronously from ``tick``; a
    listener that needs to do async work must schedule it itself. An
    exception from ``on_tick`` is logged and does not stop the countdown.
    """

    def __init__(
        self,
        tick_interval: float | None = 1.0,
        on_tick: TickCallback | None = None,
        on_expired: ExpiredCallback | None = None,
    ) -> None:
        """
        Initialize the timer.

        Args:
            tick_interval: Seconds per time unit. ``None`` disables the
                internal ticking task; ``tick()`` must then be called by the owner.
            on_tick: Called with the new state after every decrement.
            on_expired: Called once when the remaining time reaches zero.
        """
        if tick_interval is not None and tick_interval <= 0:
            raise ValueError("tick_interval must be positive")
        self._tick_interval = tick_interval
        self._on_tick = on_tick
        self._on_expired = on_expired
        self._remaining = 0
        self._total = 0
        self._running = False
        self._generation = 0
        self._task: asyncio.Task[None] | None = None

    @property
    def state(self) -> TimerState:
        """Current remaining/total snapshot."""
        return TimerState(remaining=self._remaining, total=self._total)

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def total(self) -> int:
        return self._total

    @property
    def is_running(self) -> bool:
        """Check if ticks are currently being counted."""
        return self._running

    def start(self, duration: int) -> None:
        """
        Reset to ``duration`` and begin counting down.

        Args:
            duration: Number of time units, must be positive.
        """
        if duration <= 0:
            raise ValueError("duration must be positive")
        self.stop()
        self._remaining = duration
        self._total = duration
        self._running = True
        if self._tick_interval is not None:
            self._task = asyncio.get_running_loop().create_task(self._run(self._generation))
        logger.debug(f"Timer started: {duration} units")

    def stop(self) -> None:
        """Halt ticking without reporting expiry. Remaining time is kept."""
        self._running = False
        self._generation += 1
        task, self._task = self._task, None
        if task is not None and task is not asyncio.current_task() and not task.done():
            task.cancel()

    def reset(self) -> None:
        """Stop and zero the timer state."""
        self.stop()
        self._remaining = 0
        self._total = 0

    def tick(self) -> None:
        """
        Count one elapsed time unit.

        Ignored while stopped, so no tick follows an expiry until the
        next ``start``.
        """
        if not self._running:
            return
        self._remaining -= 1
        if self._on_tick is not None:
            try:
                self._on_tick(self.state)
            except Exception:
                logger.exception("Tick callback failed")
        if self._remaining <= 0:
            self._remaining = 0
            self._running = False
            self._generation += 1
            self._task = None
            logger.debug("Timer expired")
            if self._on_expired is not None:
                self._on_expired()

    async def _run(self, generation: int) -> None:
        assert self._tick_interval is not None
        while self._running and generation == self._generation:
            await asyncio.sleep(self._tick_interval)
            if generation != self._generation:
                return
            self.tick()
