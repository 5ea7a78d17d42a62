"""
Timer abstraction for the playback engine.

The engine never chains callbacks itself; it asks a Scheduler for a
single cancellable delayed call. Production runs on the asyncio loop,
tests step a virtual clock.
"""

import asyncio
import heapq
import itertools
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple

from kolam.core.logging import get_logger

logger = get_logger(__name__)


class TimerHandle(ABC):
    """Handle to one pending delayed call."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running. Idempotent."""
        pass

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        pass


class Scheduler(ABC):
    """Schedules delayed callbacks on the host event loop."""

    @abstractmethod
    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        """
        Run ``callback`` once after ``delay_ms`` milliseconds.

        Returns:
            Handle that can cancel the call before it runs
        """
        pass

    @abstractmethod
    def now_ms(self) -> float:
        """Current scheduler time in milliseconds."""
        pass


class _AsyncioTimerHandle(TimerHandle):

    def __init__(self, handle: asyncio.TimerHandle) -> None:
        self._handle = handle

    def cancel(self) -> None:
        self._handle.cancel()

    @property
    def cancelled(self) -> bool:
        return self._handle.cancelled()


class AsyncioScheduler(Scheduler):
    """Scheduler backed by ``loop.call_later``."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        return _AsyncioTimerHandle(self.loop.call_later(delay_ms / 1000.0, callback))

    def now_ms(self) -> float:
        return self.loop.time() * 1000.0


class ManualTimerHandle(TimerHandle):

    def __init__(self, due_ms: float, callback: Callable[[], None]) -> None:
        self.due_ms = due_ms
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler(Scheduler):
    """
    Virtual-clock scheduler for stepping the engine synchronously.

    Nothing runs until ``advance``, ``run_next`` or ``run_until_idle``
    is called. ``fired`` records the virtual time of each callback run.
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._queue: List[Tuple[float, int, ManualTimerHandle]] = []
        self._counter = itertools.count()
        self.fired: List[float] = []

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        handle = ManualTimerHandle(self._now + delay_ms, callback)
        heapq.heappush(self._queue, (handle.due_ms, next(self._counter), handle))
        return handle

    def now_ms(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        """Number of scheduled, not-yet-cancelled calls."""
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)

    def _pop_live(self) -> Optional[ManualTimerHandle]:
        while self._queue:
            _, _, handle = heapq.heappop(self._queue)
            if not handle.cancelled:
                return handle
        return None

    def run_next(self) -> bool:
        """
        Jump the clock to the next live call and run it.

        Returns:
            False if nothing was pending
        """
        handle = self._pop_live()
        if handle is None:
            return False
        self._now = max(self._now, handle.due_ms)
        self.fired.append(self._now)
        handle.callback()
        return True

    def advance(self, ms: float) -> int:
        """Move the clock forward, running every call that falls due."""
        target = self._now + ms
        ran = 0
        while self._queue:
            due, _, handle = self._queue[0]
            if due > target:
                break
            heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = due
            self.fired.append(due)
            handle.callback()
            ran += 1
        self._now = target
        return ran

    def run_until_idle(self, max_calls: int = 100_000) -> int:
        """Run calls until none are pending; returns how many ran."""
        ran = 0
        while ran < max_calls and self.run_next():
            ran += 1
        if ran >= max_calls:
            logger.warning("manual_scheduler_call_limit_reached", max_calls=max_calls)
        return ran
