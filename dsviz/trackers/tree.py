# tree.py
from ..snapshots import StructureKind
from .base import EntityStatus, VisualStateTracker


class TreeStateTracker(VisualStateTracker):
    """Entities are node keys. Focus follows the key operated on, then each rotation pivot."""

    kind = StructureKind.TREE

    def step_handlers(self):
        return {"rotation": self._apply_rotation}

    def entity_ids(self, snapshot=None):
        return set(self._resolve(snapshot).keys())

    def _apply_rotation(self, record):
        self.state.focus = record.pivot
        self.state.rotation = record.case
        self.mark(record.pivot, EntityStatus.PENDING)

    def complete(self):
        super().complete()
        self.state.rotation = None
        self.state.statuses.clear()
