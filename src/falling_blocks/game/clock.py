from __future__ import annotations

import itertools
import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


class TimerHandle:
    """A periodic callback registered with a :class:`Scheduler`."""

    def __init__(self, name: str, period_ms: int, callback: Callable[[], None], due_ms: int, order: int) -> None:
        self.name = name
        self.period_ms = period_ms
        self.callback = callback
        self.due_ms = due_ms
        self.order = order
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else f"due@{self.due_ms}"
        return f"TimerHandle({self.name!r}, every {self.period_ms}ms, {state})"


class Scheduler:
    """Single-threaded periodic scheduler driven by the host's clock.

    The host pumps it with :meth:`advance` (elapsed milliseconds) or
    :meth:`advance_to` (an absolute timestamp such as
    ``pygame.time.get_ticks()``). Due callbacks run one at a time in time
    order, ties broken by arming order. A handle cancelled before its turn,
    including by an earlier callback in the same pump, never fires.
    """

    def __init__(self, start_ms: int = 0) -> None:
        self._now_ms = start_ms
        self._handles: List[TimerHandle] = []
        self._order = itertools.count()

    def now_ms(self) -> int:
        return self._now_ms

    def call_every(self, name: str, period_ms: int, callback: Callable[[], None]) -> TimerHandle:
        if period_ms <= 0:
            raise ValueError(f"period_ms must be positive, got {period_ms}")
        handle = TimerHandle(name, period_ms, callback, self._now_ms + period_ms, next(self._order))
        self._handles.append(handle)
        return handle

    def pending(self) -> List[TimerHandle]:
        return [h for h in self._handles if not h.cancelled]

    def advance(self, delta_ms: int) -> None:
        if delta_ms < 0:
            raise ValueError(f"cannot advance time backwards (delta {delta_ms}ms)")
        self.advance_to(self._now_ms + delta_ms)

    def advance_to(self, target_ms: int) -> None:
        if target_ms < self._now_ms:
            raise ValueError(f"cannot advance time backwards ({target_ms} < {self._now_ms})")
        while True:
            handle = self._next_due(target_ms)
            if handle is None:
                break
            self._now_ms = handle.due_ms
            handle.due_ms += handle.period_ms
            handle.callback()
        self._now_ms = target_ms

    def _next_due(self, target_ms: int) -> Optional[TimerHandle]:
        self._handles = [h for h in self._handles if not h.cancelled]
        due = [h for h in self._handles if h.due_ms <= target_ms]
        if not due:
            return None
        return min(due, key=lambda h: (h.due_ms, h.order))


class GameClock:
    """Owns the engine's two periodic schedules: gravity and elapsed time.

    Arming always cancels the previous handle of the same role first, so at
    most one gravity and one elapsed-time schedule are ever live.
    """

    GRAVITY = "gravity"
    ELAPSED = "elapsed"

    def __init__(self, scheduler: Scheduler) -> None:
        self.scheduler = scheduler
        self._gravity: Optional[TimerHandle] = None
        self._elapsed: Optional[TimerHandle] = None

    @property
    def gravity_period_ms(self) -> Optional[int]:
        return self._gravity.period_ms if self.gravity_armed else None

    @property
    def gravity_armed(self) -> bool:
        return self._gravity is not None and not self._gravity.cancelled

    @property
    def elapsed_armed(self) -> bool:
        return self._elapsed is not None and not self._elapsed.cancelled

    def arm_gravity(self, period_ms: int, callback: Callable[[], None]) -> None:
        self.cancel_gravity()
        self._gravity = self.scheduler.call_every(self.GRAVITY, period_ms, callback)
        logger.debug("Gravity armed every %dms", period_ms)

    def arm_elapsed(self, period_ms: int, callback: Callable[[], None]) -> None:
        self.cancel_elapsed()
        self._elapsed = self.scheduler.call_every(self.ELAPSED, period_ms, callback)

    def cancel_gravity(self) -> None:
        if self._gravity is not None:
            self._gravity.cancel()
            self._gravity = None

    def cancel_elapsed(self) -> None:
        if self._elapsed is not None:
            self._elapsed.cancel()
            self._elapsed = None

    def cancel_all(self) -> None:
        self.cancel_gravity()
        self.cancel_elapsed()
