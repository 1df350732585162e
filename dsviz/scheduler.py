# scheduler.py
#
# Cooperative single-threaded timer loop. Callbacks run one at a time, in due
# order, and only between two callbacks can time pass.

import heapq
import itertools
import time


class TimerHandle:
    """Handle of one scheduled callback; cancel() keeps it from ever running."""

    def __init__(self, due_ms, callback):
        self.due_ms = due_ms
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """
    Virtual-clock scheduler. Nothing happens until advance() or run_until_idle()
    is called, which makes animations fully deterministic under test.
    """

    def __init__(self):
        self.now_ms = 0
        self._queue = []
        self._counter = itertools.count()

    def schedule_after(self, delay_ms, callback) -> TimerHandle:
        handle = TimerHandle(self.now_ms + max(0, delay_ms), callback)
        # The counter keeps equal due times in scheduling order
        heapq.heappush(self._queue, (handle.due_ms, next(self._counter), handle))
        return handle

    def pending(self):
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)

    def _pop_due(self, limit_ms):
        while self._queue and self._queue[0][0] <= limit_ms:
            _, _, handle = heapq.heappop(self._queue)
            if not handle.cancelled:
                return handle
        return None

    def _run(self, handle):
        self.now_ms = max(self.now_ms, handle.due_ms)
        handle.callback()

    def advance(self, delta_ms):
        """Move the clock forward by delta_ms, running every callback that falls due."""
        target = self.now_ms + delta_ms
        ran = 0
        handle = self._pop_due(target)
        while handle is not None:
            self._run(handle)
            ran += 1
            handle = self._pop_due(target)
        self.now_ms = target
        return ran

    def run_until_idle(self, limit=100000):
        """Run callbacks in due order until none remain."""
        ran = 0
        while ran < limit:
            handle = self._pop_due(float("inf"))
            if handle is None:
                return ran
            self._run(handle)
            ran += 1
        raise RuntimeError(f"Scheduler still busy after {limit} callbacks")


class RealtimeScheduler(ManualScheduler):
    """Same queue, but run_until_idle() sleeps on the wall clock between callbacks."""

    def __init__(self, sleep=time.sleep, clock=time.monotonic):
        super().__init__()
        self._sleep = sleep
        self._clock = clock
        self._origin = clock()

    def _elapsed_ms(self):
        return (self._clock() - self._origin) * 1000

    def schedule_after(self, delay_ms, callback) -> TimerHandle:
        self.now_ms = max(self.now_ms, self._elapsed_ms())
        return super().schedule_after(delay_ms, callback)

    def run_until_idle(self, limit=100000):
        ran = 0
        while ran < limit:
            handle = self._pop_due(float("inf"))
            if handle is None:
                return ran
            wait_ms = handle.due_ms - self._elapsed_ms()
            if wait_ms > 0:
                self._sleep(wait_ms / 1000)
            self._run(handle)
            ran += 1
        raise RuntimeError(f"Scheduler still busy after {limit} callbacks")
