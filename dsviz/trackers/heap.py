# heap.py
from ..snapshots import StructureKind
from .base import EntityStatus, VisualStateTracker


class HeapStateTracker(VisualStateTracker):
    """
    Entities are array indices. Every heap step carries the array as it is
    after the step, so the display follows the sift while the shape (size)
    stays that of the final snapshot.
    """

    kind = StructureKind.HEAP

    def step_handlers(self):
        return {
            "heap_place": self._apply_place,
            "heap_swap": self._apply_swap,
        }

    def entity_ids(self, snapshot=None):
        return set(range(len(self._resolve(snapshot))))

    def display_values(self):
        if self.state.values is not None:
            return self.state.values
        return self.snapshot.values

    def _apply_place(self, record):
        self.state.values = record.heap
        self.state.focus = record.index
        self.mark(record.index, EntityStatus.PENDING)

    def _apply_swap(self, record):
        self.state.values = record.heap
        # The moving value now sits at other_index
        self.state.focus = record.other_index
        self.state.statuses.clear()
        self.mark(record.index, EntityStatus.PENDING)
        self.mark(record.other_index, EntityStatus.PENDING)

    def complete(self):
        super().complete()
        self.state.values = None
        self.state.statuses.clear()
