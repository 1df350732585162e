# hashing.py
from ..snapshots import StructureKind
from .base import EntityStatus, VisualStateTracker


def calculate_index(value, bucket_count):
    """
    Bucket of a key: Euclidean modulo, so negative keys land in [0, bucket_count).
    Must agree with the engine's placement.
    """
    return ((value % bucket_count) + bucket_count) % bucket_count


class HashStateTracker(VisualStateTracker):
    """
    Entities are (bucket, position) pairs. A probed entry turns pending, the
    entry matched by a search (only the first equal key in chain order) turns
    finalized.
    """

    kind = StructureKind.HASH

    def step_handlers(self):
        return {
            "probe": self._apply_probe,
            "place": self._apply_place,
            "unlink": self._apply_unlink,
        }

    def entity_ids(self, snapshot=None):
        return set(self._resolve(snapshot).entities())

    def replay_snapshot(self, before, after):
        # A deletion is replayed over the table that still holds the entry
        if len(before.entities()) > len(after.entities()):
            return before
        return after

    def target_bucket(self, value):
        if self.snapshot.bucket_count == 0:
            return None
        return calculate_index(value, self.snapshot.bucket_count)

    def begin(self, operation, focus=None):
        super().begin(operation)
        # focus is the key operated on; the highlight goes to its bucket row
        if focus is not None:
            self.state.focus_bucket = self.target_bucket(focus)

    def _apply_probe(self, record):
        entity = (record.bucket, record.position)
        self.state.focus = entity
        self.state.focus_bucket = record.bucket
        self.mark(entity, EntityStatus.FINALIZED if record.matched else EntityStatus.PENDING)

    def _apply_place(self, record):
        entity = (record.bucket, record.position)
        self.state.focus = entity
        self.state.focus_bucket = record.bucket
        self.mark(entity, EntityStatus.FINALIZED)

    def _apply_unlink(self, record):
        self.state.focus = (record.bucket, record.position)
        self.state.focus_bucket = record.bucket

    def complete(self):
        super().complete()
        self.state.focus_bucket = None
        self.state.statuses.clear()
