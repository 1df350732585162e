from .base import EntityStatus, VisualState, VisualStateTracker
from .graph import GraphAlgorithm, GraphStateTracker
from .hashing import HashStateTracker, calculate_index
from .heap import HeapStateTracker
from .tree import TreeStateTracker
from ..snapshots import StructureKind

TRACKER_CLASSES = {
    StructureKind.TREE: TreeStateTracker,
    StructureKind.GRAPH: GraphStateTracker,
    StructureKind.HASH: HashStateTracker,
    StructureKind.HEAP: HeapStateTracker,
}
