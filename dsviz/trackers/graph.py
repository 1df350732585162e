# graph.py
from enum import Enum

from ..snapshots import StructureKind
from ..steps import format_list, format_pq
from .base import EntityStatus, VisualStateTracker


class GraphAlgorithm(Enum):
    BFS = "bfs"
    DFS = "dfs"
    DIJKSTRA = "dijkstra"
    PRIMS = "prims"


AUX_LABELS = {
    GraphAlgorithm.BFS: "BFS Queue",
    GraphAlgorithm.DFS: "DFS Stack",
    GraphAlgorithm.DIJKSTRA: "DIJKSTRA PQ",
    GraphAlgorithm.PRIMS: "PRIMS PQ",
}

# Label prefix of the per-vertex metric shown under the vertex id
METRIC_LABELS = {
    GraphAlgorithm.DIJKSTRA: "D",
    GraphAlgorithm.PRIMS: "K",
}


class GraphStateTracker(VisualStateTracker):
    """
    Entities are vertex indices. Vertices turn pending when discovered
    (enqueued, pushed, tentatively relaxed) and finalized when processed
    (dequeued, visited, extracted).
    """

    kind = StructureKind.GRAPH

    def __init__(self):
        super().__init__()
        self.algorithm = None

    def step_handlers(self):
        return {
            "enqueue": self._apply_enqueue,
            "dequeue": self._apply_dequeue,
            "push": self._apply_push,
            "visit": self._apply_visit,
            "pop": self._apply_pop,
            "extract_min": self._apply_extract_min,
            "relax": self._apply_priority_update,
            "key_update": self._apply_priority_update,
        }

    def entity_ids(self, snapshot=None):
        return set(self._resolve(snapshot).vertices())

    def reset(self):
        super().reset()
        self.algorithm = None

    def begin(self, operation, focus=None):
        super().begin(operation, focus)
        try:
            self.algorithm = GraphAlgorithm(operation)
        except ValueError:
            self.algorithm = None
        if self.algorithm is not None:
            self.state.aux_line = f"{AUX_LABELS[self.algorithm]}: []"

    def _set_aux(self, text):
        label = AUX_LABELS.get(self.algorithm, "Queue/Stack/PQ")
        self.state.aux_line = f"{label}: {text}"

    def _discover(self, vertex):
        if self.status_of(vertex) is not EntityStatus.FINALIZED:
            self.mark(vertex, EntityStatus.PENDING)

    # --- Traversal family ---

    def _apply_enqueue(self, record):
        self.state.focus = record.vertex
        self._discover(record.vertex)
        self._set_aux(format_list(record.queue))

    def _apply_dequeue(self, record):
        self.state.focus = record.vertex
        self.mark(record.vertex, EntityStatus.FINALIZED)
        self._set_aux(format_list(record.queue))

    def _apply_push(self, record):
        self.state.focus = record.vertex
        self._discover(record.vertex)
        self._set_aux(format_list(record.stack))

    def _apply_visit(self, record):
        self.state.focus = record.vertex
        self.mark(record.vertex, EntityStatus.FINALIZED)
        self._set_aux(format_list(record.stack))

    def _apply_pop(self, record):
        self.state.focus = record.vertex
        self._set_aux(format_list(record.stack))

    # --- Priority family ---

    def _apply_extract_min(self, record):
        self.state.focus = record.vertex
        self.mark(record.vertex, EntityStatus.FINALIZED)
        self.state.metric_name = record.metric_name
        self.state.metrics = record.metric
        self._set_aux(format_pq(record.pq))

    def _apply_priority_update(self, record):
        self.state.focus = record.vertex
        self._discover(record.vertex)
        self.state.metric_name = "key" if record.action == "key_update" else "dist"
        self.state.metrics = record.metric
        self._set_aux(format_pq(record.pq))

    # --- Queries ---

    @property
    def metric_label(self):
        return METRIC_LABELS.get(self.algorithm)

    def is_edge_finalized(self, source, target) -> bool:
        """
        Whether an edge belongs to the final result. Minimum spanning trees are
        undirected, so either orientation counts; shortest-path trees are
        directed, so only the exact orientation does.
        """
        edges = self.state.finalized_edges
        if (source, target) in edges:
            return True
        if self.algorithm is GraphAlgorithm.PRIMS:
            return (target, source) in edges
        return False

    def complete(self):
        super().complete()
        self.finalize_pending()
