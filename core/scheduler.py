# core/scheduler.py

"""
Deferred transition scheduling.

A scheduler arms a callback to run after a delay, keyed by an arbitrary hashable key
(the ledger uses `(student_id, assignment_name)`). It guarantees:

- At most one pending callback per key. Scheduling for a key cancels whatever was pending.
- Cancellation is synchronous: once `cancel()` returns, the cancelled callback never runs.
- A firing callback is unregistered before it is invoked, so it may schedule again under
  its own key without cancelling itself.
- Callbacks with equal due times fire in the order they were scheduled.

Two implementations are provided:
    - `VirtualClockScheduler`: a deterministic clock that only moves when `advance()` is
      called. Used in tests and anywhere wall-clock time is not wanted.
    - `AsyncioScheduler`: real delays on a single-threaded asyncio event loop.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from collections.abc import Callable, Hashable

logger = logging.getLogger(__name__)


class DeferredTransition:
    """
    Handle for one scheduled callback.

    Handles are created by a `TransitionScheduler` and should not be instantiated directly.
    """

    def __init__(
        self,
        key: Hashable,
        delay: float,
        callback: Callable[[], None],
        due_at: float,
    ):
        self._key = key
        self._delay = delay
        self._callback = callback
        self._due_at = due_at
        self._cancelled = False
        self._fired = False
        # backend-specific timer (e.g. an asyncio.TimerHandle)
        self.timer = None

    # === properties ===

    @property
    def key(self) -> Hashable:
        return self._key

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def due_at(self) -> float:
        return self._due_at

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def fired(self) -> bool:
        return self._fired

    @property
    def active(self) -> bool:
        return not (self._cancelled or self._fired)

    # === dunder methods ===

    def __repr__(self) -> str:
        state = (
            "cancelled" if self._cancelled else "fired" if self._fired else "pending"
        )
        return f"DeferredTransition({self._key!r}, {self._delay}, {state})"


class TransitionScheduler:
    """
    Base scheduler holding the per-key registry.

    Subclasses implement the clock: `now()`, `_arm()` and `_disarm()`.
    """

    def __init__(self):
        self._pending: dict[Hashable, DeferredTransition] = {}

    # === clock hooks ===

    def now(self) -> float:
        raise NotImplementedError("Need to subclass TransitionScheduler")

    def _arm(self, transition: DeferredTransition) -> None:
        raise NotImplementedError("Need to subclass TransitionScheduler")

    def _disarm(self, transition: DeferredTransition) -> None:
        raise NotImplementedError("Need to subclass TransitionScheduler")

    # === data accessors ===

    def is_pending(self, key: Hashable) -> bool:
        return key in self._pending

    def pending_keys(self) -> list[Hashable]:
        return list(self._pending)

    def get(self, key: Hashable) -> DeferredTransition | None:
        return self._pending.get(key)

    def can_schedule(self) -> bool:
        return True

    # === data manipulators ===

    def schedule(
        self, key: Hashable, delay: float, callback: Callable[[], None]
    ) -> DeferredTransition:
        """
        Arms `callback` to run after `delay` seconds, replacing anything pending for `key`.

        Args:
            key (Hashable): Identifies the slot; at most one callback is pending per key.
            delay (float): Seconds to wait, must be non-negative.
            callback (Callable[[], None]): Invoked with no arguments when the delay elapses.

        Returns:
            DeferredTransition: A handle describing the armed callback.

        Raises:
            ValueError: If `delay` is negative.
        """
        if delay < 0:
            raise ValueError("Invalid input. Delay cannot be less than zero.")

        self.cancel(key)

        transition = DeferredTransition(key, delay, callback, self.now() + delay)
        self._pending[key] = transition
        self._arm(transition)

        logger.debug("scheduled %r in %.3fs", key, delay)

        return transition

    def cancel(self, key: Hashable) -> bool:
        """
        Cancels the callback pending for `key`.

        Returns:
            bool: True if a pending callback was cancelled, False if nothing was pending.
        """
        transition = self._pending.pop(key, None)

        if transition is None:
            return False

        transition._cancelled = True
        self._disarm(transition)

        logger.debug("cancelled %r", key)

        return True

    def cancel_all(self) -> int:
        keys = list(self._pending)

        for key in keys:
            self.cancel(key)

        return len(keys)

    def _fire(self, transition: DeferredTransition) -> None:
        if not transition.active:
            return

        # unregister first so the callback may schedule again under the same key
        if self._pending.get(transition.key) is transition:
            del self._pending[transition.key]

        transition._fired = True

        logger.debug("firing %r", transition.key)

        transition._callback()


class VirtualClockScheduler(TransitionScheduler):
    """
    Deterministic scheduler driven by an explicit clock.

    Time starts at `start` and moves only through `advance()` or `run_until_idle()`.
    Callbacks scheduled while advancing are honored in the same call if they fall due
    before the target time.
    """

    def __init__(self, start: float = 0.0):
        super().__init__()
        self._now = start
        self._queue: list[tuple[float, int, DeferredTransition]] = []
        self._sequence = itertools.count()

    def now(self) -> float:
        return self._now

    def _arm(self, transition: DeferredTransition) -> None:
        heapq.heappush(
            self._queue, (transition.due_at, next(self._sequence), transition)
        )

    def _disarm(self, transition: DeferredTransition) -> None:
        # cancelled entries are skipped lazily when popped
        pass

    def advance(self, seconds: float) -> int:
        """
        Moves the clock forward, firing every callback that falls due on the way.

        Args:
            seconds (float): How far to move the clock, must be non-negative.

        Returns:
            int: The number of callbacks fired.

        Raises:
            ValueError: If `seconds` is negative.
        """
        if seconds < 0:
            raise ValueError("Invalid input. The clock cannot move backwards.")

        target = self._now + seconds
        fired = 0

        while self._queue and self._queue[0][0] <= target:
            due_at, _, transition = heapq.heappop(self._queue)

            if not transition.active:
                continue

            self._now = due_at
            self._fire(transition)
            fired += 1

        self._now = target

        return fired

    def run_until_idle(self, max_callbacks: int = 10_000) -> int:
        """
        Fires pending callbacks in due order until none remain.

        Raises:
            RuntimeError: If more than `max_callbacks` fire, which indicates a callback
                that keeps rescheduling itself.
        """
        fired = 0

        while self._pending:
            next_due = min(t.due_at for t in self._pending.values())
            fired += self.advance(next_due - self._now)

            if fired > max_callbacks:
                raise RuntimeError(
                    f"Scheduler did not go idle after {max_callbacks} callbacks."
                )

        return fired


class AsyncioScheduler(TransitionScheduler):
    """
    Scheduler backed by `loop.call_later` on a single-threaded asyncio event loop.

    If no loop is given, the running loop is looked up at scheduling time, so `schedule()`
    must then be called from inside a coroutine or callback running on that loop.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        super().__init__()
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def can_schedule(self) -> bool:
        """
        Reports whether `schedule()` would find a usable event loop right now.

        With an explicit loop, that loop must not be closed. Without one, the caller has to
        be running inside a loop.
        """
        if self._loop is not None:
            return not self._loop.is_closed()

        try:
            asyncio.get_running_loop()

        except RuntimeError:
            return False

        return True

    def now(self) -> float:
        return self.loop.time()

    def _arm(self, transition: DeferredTransition) -> None:
        transition.timer = self.loop.call_later(transition.delay, self._fire, transition)

    def _disarm(self, transition: DeferredTransition) -> None:
        if transition.timer is not None:
            transition.timer.cancel()
