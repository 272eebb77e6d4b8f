from __future__ import annotations

import heapq
import itertools
import logging
import threading
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_REVEAL_DELAY_MS = 1000

Callback = Callable[[], None]


class ScheduledReveal:
    """Handle for one pending callback. Cancelling it guarantees the callback never runs."""

    def __init__(self, callback: Callback, due_ms: float, on_cancel: Optional[Callable[["ScheduledReveal"], None]] = None):
        self._callback = callback
        self._on_cancel = on_cancel
        self.due_ms = due_ms
        self.cancelled = False
        self.fired = False
        self._timer: Optional[threading.Timer] = None

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self) -> bool:
        """Returns True if this call stopped a callback that had not run yet."""
        if not self.pending:
            return False
        self.cancelled = True
        if self._timer is not None:
            self._timer.cancel()
        if self._on_cancel is not None:
            self._on_cancel(self)
        return True

    def fire(self) -> None:
        if not self.pending:
            return
        self.fired = True
        self._callback()


class RevealScheduler:
    """Runs a callback once after a delay. Subclasses decide what the clock is."""

    def schedule(self, callback: Callback, delay_ms: float = DEFAULT_REVEAL_DELAY_MS) -> ScheduledReveal:
        raise NotImplementedError

    def shutdown(self) -> None:
        """Cancels everything still outstanding."""


class ManualScheduler(RevealScheduler):
    """
    Fake clock. Nothing fires until `advance` moves time past a callback's due time.
    Callbacks run on the caller's thread, in due order (ties in scheduling order).
    """

    def __init__(self) -> None:
        self.now_ms: float = 0
        self._queue: List[Tuple[float, int, ScheduledReveal]] = []
        self._seq = itertools.count()

    def schedule(self, callback: Callback, delay_ms: float = DEFAULT_REVEAL_DELAY_MS) -> ScheduledReveal:
        if delay_ms < 0:
            raise ValueError('delay must be non-negative')
        handle = ScheduledReveal(callback, self.now_ms + delay_ms)
        heapq.heappush(self._queue, (handle.due_ms, next(self._seq), handle))
        return handle

    @property
    def pending(self) -> List[ScheduledReveal]:
        return [h for (_, _, h) in sorted(self._queue) if h.pending]

    def advance(self, ms: float) -> int:
        """Moves the clock forward and fires every due callback. Returns how many ran."""
        if ms < 0:
            raise ValueError('cannot move the clock backwards')
        target = self.now_ms + ms
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            self.now_ms = due
            if handle.pending:
                handle.fire()
                fired += 1
        self.now_ms = target
        return fired

    def run_pending(self) -> int:
        """Advances exactly as far as the last outstanding callback."""
        live = self.pending
        if not live:
            return 0
        return self.advance(max(h.due_ms for h in live) - self.now_ms)

    def shutdown(self) -> None:
        for _, _, handle in self._queue:
            handle.cancel()
        self._queue.clear()


class ThreadingScheduler(RevealScheduler):
    """Wall clock backed by daemon threading.Timer objects."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._live: List[ScheduledReveal] = []

    def schedule(self, callback: Callback, delay_ms: float = DEFAULT_REVEAL_DELAY_MS) -> ScheduledReveal:
        if delay_ms < 0:
            raise ValueError('delay must be non-negative')
        handle = ScheduledReveal(callback, delay_ms, on_cancel=self._discard)

        def _run() -> None:
            self._discard(handle)
            try:
                handle.fire()
            except Exception:
                logger.exception("reveal callback failed")

        timer = threading.Timer(delay_ms / 1000.0, _run)
        timer.daemon = True
        handle._timer = timer
        with self._lock:
            self._live.append(handle)
        timer.start()
        return handle

    def _discard(self, handle: ScheduledReveal) -> None:
        with self._lock:
            if handle in self._live:
                self._live.remove(handle)

    @property
    def live(self) -> List[ScheduledReveal]:
        with self._lock:
            return list(self._live)

    def shutdown(self) -> None:
        with self._lock:
            live, self._live = self._live, []
        for handle in live:
            handle.cancel()
