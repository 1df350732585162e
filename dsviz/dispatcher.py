# dispatcher.py
#
# Maps (structure, operation) onto an engine call: which engine method to
# call and how to pull its arguments out of the user's input mapping.
# Every argument is checked here, before the engine is called.

import logging

from .errors import InvalidInputError
from .settings import DEFAULT_SETTINGS
from .snapshots import StructureKind

logger = logging.getLogger(__name__)

# --- 1. Operation -> engine method ---
OPERATION_DISPATCH_TABLE = {
    StructureKind.TREE: {
        "init": "init",
        "state": "state",
        "insert": "insert",
        "delete": "delete",
    },
    StructureKind.GRAPH: {
        "init": "init",
        "state": "state",
        "add_edge": "add_edge",
        "remove_edge": "remove_edge",
        "remove_vertex": "remove_vertex",
        "bfs": "run_bfs",
        "dfs": "run_dfs",
        "dijkstra": "run_dijkstra",
        "prims": "run_prims",
    },
    StructureKind.HASH: {
        "init": "init",
        "state": "state",
        "insert": "insert",
        "search": "search",
        "delete": "delete",
    },
    StructureKind.HEAP: {
        "init": "init",
        "state": "state",
        "insert": "insert",
        "extract": "extract",
    },
}

GRAPH_ALGORITHMS = ("bfs", "dfs", "dijkstra", "prims")


def _to_int(field, raw):
    if isinstance(raw, bool):
        raise InvalidInputError(field, f"Please enter a valid number for '{field}'.")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            pass
    raise InvalidInputError(field, f"Please enter a valid number for '{field}' (got {raw!r}).")


class InputReader:
    """
    Typed access to one operation's input mapping. Missing optional fields
    fall back to a shared field or a configured default; the fallback is
    reported through warn().
    """

    def __init__(self, operation, inputs, snapshot=None, defaults=None, warn=None):
        self.operation = operation
        self.inputs = inputs or {}
        self.snapshot = snapshot
        self.defaults = defaults or DEFAULT_SETTINGS["engine"]
        self.warn = warn or (lambda message: logger.warning(message))

    def integer(self, field, fallback=None, default=None):
        if field in self.inputs:
            return _to_int(field, self.inputs[field])
        if fallback is not None and fallback in self.inputs:
            self.warn(f"Input field '{field}' not found for {self.operation}. Assuming shared input field '{fallback}'.")
            return _to_int(fallback, self.inputs[fallback])
        if default is not None:
            return default
        raise InvalidInputError(field, f"Please enter a value for '{field}' ({self.operation}).")

    def positive(self, field, default_key):
        value = self.integer(field, default=self.defaults[default_key])
        if value <= 0:
            raise InvalidInputError(field, f"'{field}' must be positive (got {value}).")
        return value

    def vertex(self, field):
        value = self.integer(field)
        count = self.snapshot.vertex_count if self.snapshot is not None else 0
        if not 0 <= value < count:
            raise InvalidInputError(field, f"Invalid vertex {value} for '{field}': graph has {count} vertices.")
        return value

    def next_slot(self):
        """Heap index a newly inserted value is first placed at."""
        return len(self.snapshot) if self.snapshot is not None else 0


# --- 2. Argument extractors ---
# Each returns (engine args, focus), focus being what the animation starts on
param_extractors = {
    (StructureKind.TREE, "init"): lambda r: ((), None),
    (StructureKind.TREE, "state"): lambda r: ((), None),
    (StructureKind.TREE, "insert"): lambda r: _single(r.integer("value")),
    (StructureKind.TREE, "delete"): lambda r: _single(r.integer("value")),

    (StructureKind.GRAPH, "init"): lambda r: ((r.positive("vertices", "graph_vertices"),), None),
    (StructureKind.GRAPH, "state"): lambda r: ((), None),
    (StructureKind.GRAPH, "add_edge"): lambda r: ((r.vertex("from"), r.vertex("to"), r.integer("weight")), None),
    (StructureKind.GRAPH, "remove_edge"): lambda r: ((r.vertex("from"), r.vertex("to")), None),
    (StructureKind.GRAPH, "remove_vertex"): lambda r: _single(r.vertex("vertex")),
    (StructureKind.GRAPH, "bfs"): lambda r: _single(r.vertex("start")),
    (StructureKind.GRAPH, "dfs"): lambda r: _single(r.vertex("start")),
    (StructureKind.GRAPH, "dijkstra"): lambda r: _single(r.vertex("start")),
    (StructureKind.GRAPH, "prims"): lambda r: _single(r.vertex("start")),

    (StructureKind.HASH, "init"): lambda r: ((r.positive("buckets", "hash_buckets"),), None),
    (StructureKind.HASH, "state"): lambda r: ((), None),
    (StructureKind.HASH, "insert"): lambda r: _single(r.integer("value")),
    (StructureKind.HASH, "search"): lambda r: _single(r.integer("search_value", fallback="value")),
    (StructureKind.HASH, "delete"): lambda r: _single(r.integer("delete_value", fallback="value")),

    (StructureKind.HEAP, "init"): lambda r: ((r.positive("capacity", "heap_capacity"),), None),
    (StructureKind.HEAP, "state"): lambda r: ((), None),
    (StructureKind.HEAP, "insert"): lambda r: ((r.integer("value"),), r.next_slot()),
    (StructureKind.HEAP, "extract"): lambda r: ((), 0),
}


def _single(value):
    return (value,), value


def prepare_call(kind, operation, inputs, snapshot=None, defaults=None, warn=None):
    """
    Resolve an operation into (engine method name, args, focus).
    Raises InvalidInputError for an unknown operation or a bad argument.
    """
    method = OPERATION_DISPATCH_TABLE.get(kind, {}).get(operation)
    if method is None:
        logger.warning(f"Warning: Unknown operation type '{operation}' for {kind.value}")
        raise InvalidInputError("op", f"Unknown operation '{operation}' for {kind.value}.")
    reader = InputReader(operation, inputs, snapshot, defaults, warn)
    args, focus = param_extractors[(kind, operation)](reader)
    return method, args, focus


def dispatch(bridge, kind, operation, inputs, snapshot=None, defaults=None, warn=None):
    """Validate inputs, then make the engine call; returns (EngineResponse, focus)."""
    method, args, focus = prepare_call(kind, operation, inputs, snapshot, defaults, warn)
    logger.info(f"Dispatcher: calling {kind.value}.{method} with {args}")
    return bridge.call(method, *args), focus
