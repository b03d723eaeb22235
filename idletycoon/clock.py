from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass
class PeriodicTrigger:
    """A callback fired once every *period* seconds, forever."""

    name: str
    period: float
    callback: Callable[[], object]
    _period_ms: int = field(default=0, init=False, repr=False)
    _next_due_ms: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.period <= 0:
            raise ValueError(f"Trigger {self.name!r} needs a positive period, got {self.period}")
        self._period_ms = round(self.period * 1000)
        self._next_due_ms = self._period_ms


class GameClock:
    """Drives independent periodic triggers.

    ``advance`` steps simulated time and fires every trigger that comes due,
    in chronological order (ties go to the trigger registered first). ``run``
    drives the same triggers in real time on the asyncio loop; a trigger that
    is late because the loop was busy fires once and does not catch up.
    """

    def __init__(self, triggers: list[PeriodicTrigger]) -> None:
        self.triggers = list(triggers)
        self.elapsed_ms: int = 0
        self._tasks: list[asyncio.Task] = []
        self._stopping = False

    # ── Simulated time ───────────────────────────────────────────────

    def advance(self, seconds: float) -> int:
        """Advance simulated time. Returns the number of trigger firings."""
        if seconds < 0:
            raise ValueError("Cannot advance the clock backwards")
        target = self.elapsed_ms + round(seconds * 1000)
        fired = 0
        while True:
            due = [
                (t._next_due_ms, i)
                for i, t in enumerate(self.triggers)
                if t._next_due_ms <= target
            ]
            if not due:
                break
            when, index = min(due)
            trigger = self.triggers[index]
            self.elapsed_ms = when
            trigger._next_due_ms += trigger._period_ms
            trigger.callback()
            fired += 1
        self.elapsed_ms = target
        return fired

    # ── Real time ────────────────────────────────────────────────────

    async def _loop(self, trigger: PeriodicTrigger) -> None:
        while True:
            await asyncio.sleep(trigger.period)
            try:
                trigger.callback()
            except Exception:
                logger.exception("Trigger %r failed", trigger.name)

    async def run(self) -> None:
        """Fire triggers in real time until ``stop`` is called."""
        if self._tasks:
            raise RuntimeError("Clock is already running")
        self._stopping = False
        self._tasks = [asyncio.create_task(self._loop(t)) for t in self.triggers]
        try:
            await asyncio.gather(*self._tasks)
        except asyncio.CancelledError:
            if not self._stopping:
                raise
        finally:
            self._tasks = []

    async def run_for(self, seconds: float) -> None:
        task = asyncio.create_task(self.run())
        await asyncio.sleep(seconds)
        self.stop()
        await task

    def stop(self) -> None:
        self._stopping = True
        for task in self._tasks:
            task.cancel()

    @property
    def running(self) -> bool:
        return bool(self._tasks)
