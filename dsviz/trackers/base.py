# base.py
#
# Visual State Tracker: the mutable, display-only state layered over the
# current snapshot of one structure. One tracker per structure kind.

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Set, Tuple

from ..snapshots import empty_snapshot

logger = logging.getLogger(__name__)


class EntityStatus(Enum):
    DEFAULT = "default"
    PENDING = "pending"
    FINALIZED = "finalized"


@dataclass
class VisualState:
    statuses: Dict[Any, EntityStatus] = field(default_factory=dict)
    focus: Any = None
    operation: Optional[str] = None
    caption: str = ""
    # Single-line rendering of the active queue / stack / priority queue
    aux_line: str = ""
    metric_name: Optional[str] = None
    metrics: Optional[Tuple[float, ...]] = None
    finalized_edges: Set[Tuple[int, int]] = field(default_factory=set)
    cost: Optional[int] = None
    # Tree: rebalancing case being shown
    rotation: Optional[str] = None
    # Heap: array contents while a sift is replayed
    values: Optional[Tuple[int, ...]] = None
    # Hash: bucket row being highlighted
    focus_bucket: Optional[int] = None


class VisualStateTracker:
    kind = None

    def __init__(self):
        self.snapshot = empty_snapshot(self.kind)
        self.state = VisualState()
        self._handlers = {"note": self._apply_note, "final_result": self.apply_final}
        self._handlers.update(self.step_handlers())

    def step_handlers(self):
        """Map of step action -> handler, extended by each structure."""
        return {}

    def entity_ids(self, snapshot=None):
        raise NotImplementedError

    def _resolve(self, snapshot):
        return self.snapshot if snapshot is None else snapshot

    # --- Snapshot ---

    def set_snapshot(self, snapshot):
        """Install a new snapshot and drop any status or focus no longer valid in it."""
        self.snapshot = snapshot
        valid = self.entity_ids(snapshot)
        stale = [entity for entity in self.state.statuses if entity not in valid]
        for entity in stale:
            del self.state.statuses[entity]
        if stale:
            logger.debug(f"Purged {len(stale)} stale statuses from {self.kind.value} state")

    def replay_snapshot(self, before, after):
        """Snapshot shown while the steps of an operation are replayed."""
        return after

    # --- Lifecycle ---

    def reset(self):
        self.state = VisualState()

    def begin(self, operation, focus=None):
        self.reset()
        self.state.operation = operation
        self.state.focus = focus

    def complete(self):
        self.state.focus = None
        self.state.caption = ""

    # --- Steps ---

    def apply_step(self, record) -> bool:
        handler = self._handlers.get(record.action)
        if handler is None:
            # Forward-compatible: unknown actions change nothing
            logger.debug(f"Ignoring step '{record.action}' on {self.kind.value} state")
            return False
        self.state.caption = record.describe()
        handler(record)
        return True

    def apply_final(self, record):
        self.state.metric_name = record.metric_name
        self.state.metrics = tuple(record.values)
        if record.edges:
            self.state.finalized_edges = {(f, t) for f, t, _ in record.edges}
        self.state.cost = record.cost
        self.state.caption = record.describe()
        self.finalize_pending()

    def _apply_note(self, record):
        if record.focus is not None:
            self.state.focus = record.focus

    # --- Queries ---

    def finalize_pending(self):
        for entity, status in self.state.statuses.items():
            if status is EntityStatus.PENDING:
                self.state.statuses[entity] = EntityStatus.FINALIZED

    def status_of(self, entity) -> EntityStatus:
        return self.state.statuses.get(entity, EntityStatus.DEFAULT)

    def mark(self, entity, status):
        # Status keys stay valid entity ids of the current snapshot
        if entity in self.entity_ids(self.snapshot):
            self.state.statuses[entity] = status
