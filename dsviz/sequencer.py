# sequencer.py
#
# Step Sequencer: replays the step list of one operation, one record per tick,
# with a fixed delay between ticks.
#
#   Idle --start()--> Running --(cursor exhausted)--> Idle
#
# stop() and a failing step callback also return to Idle, without the
# completion notification.

import logging
from enum import Enum

from .steps import FinalResult

logger = logging.getLogger(__name__)


class SequencerState(Enum):
    IDLE = "idle"
    RUNNING = "running"


class StepSequencer:
    def __init__(self, scheduler, delay_ms, on_step, on_complete=None):
        self.scheduler = scheduler
        self.delay_ms = delay_ms
        self.on_step = on_step
        self.on_complete = on_complete
        self.state = SequencerState.IDLE
        self.steps = ()
        self.cursor = 0
        self.final_snapshot = None
        # Number of records applied during the current (or last) run
        self.ticks = 0
        self.last_applied = None
        self._handle = None

    @property
    def is_running(self):
        return self.state is SequencerState.RUNNING

    def start(self, steps, final_snapshot=None) -> bool:
        """
        Begin replaying steps. Returns False, changing nothing, when a replay is
        already running. The first record is applied immediately; an empty list
        completes immediately.
        """
        if self.is_running:
            logger.debug("Sequencer busy; start rejected")
            return False
        self.steps = tuple(steps)
        self.final_snapshot = final_snapshot
        self.cursor = 0
        self.ticks = 0
        self.last_applied = None
        self.state = SequencerState.RUNNING
        self._tick()
        return True

    def _tick(self):
        self._handle = None
        if self.state is not SequencerState.RUNNING:
            return
        if self.cursor >= len(self.steps):
            self._finish()
            return

        record = self.steps[self.cursor]
        self.cursor += 1
        self.ticks += 1
        self.last_applied = record
        try:
            self.on_step(record)
        except Exception:
            # Nothing further is scheduled for this run
            logger.exception(f"Step {self.cursor} ({record.action}) failed; replay abandoned")
            self.state = SequencerState.IDLE
            raise
        if isinstance(record, FinalResult):
            # Terminal record: nothing after it is applied
            self.cursor = len(self.steps)
        self._handle = self.scheduler.schedule_after(self.delay_ms, self._tick)

    def _finish(self):
        self.state = SequencerState.IDLE
        logger.debug(f"Sequencer finished after {self.ticks} steps")
        if self.on_complete is not None:
            self.on_complete(self.final_snapshot)

    def stop(self) -> bool:
        """Cancel the pending tick and go back to Idle without completing."""
        if not self.is_running:
            return False
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self.state = SequencerState.IDLE
        return True
