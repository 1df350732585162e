# steps.py
#
# Step records emitted by the computation engine, one closed set of variants.
# Traversal family: enqueue / dequeue / push / visit / pop
# Priority family:  extract_min / relax / key_update
# Terminal:         final_result
# Structural:       rotation (tree), heap_place / heap_swap (heap),
#                   probe / place / unlink (hash), note (any structure)

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

INF_TOKEN = "INF"


def _edge(raw) -> Optional[Tuple[int, int]]:
    if raw is None:
        return None
    return int(raw[0]), int(raw[1])


def _metric(raw) -> Optional[Tuple[float, ...]]:
    if raw is None:
        return None
    return tuple(math.inf if v == INF_TOKEN else v for v in raw)


def _pq(raw) -> Tuple[Tuple[int, int], ...]:
    return tuple((int(item["v"]), int(item["d"])) for item in raw or [])


def format_metric(value):
    return INF_TOKEN if value == math.inf else str(value)


def format_pq(entries):
    return "[" + ", ".join(f"({v}, {d})" for v, d in entries) + "]"


def format_list(values):
    return "[" + ", ".join(str(v) for v in values) + "]"


@dataclass(frozen=True)
class Note:
    text: str
    focus: Optional[int] = None
    action = "note"

    def describe(self):
        return self.text


# --- Traversal family ---

@dataclass(frozen=True)
class Enqueue:
    vertex: int
    queue: Tuple[int, ...]
    edge: Optional[Tuple[int, int]] = None
    action = "enqueue"

    def describe(self):
        if self.edge is None:
            return f"BFS: Enqueued start node {self.vertex}."
        return f"BFS: Enqueued neighbor {self.vertex}."


@dataclass(frozen=True)
class Dequeue:
    vertex: int
    queue: Tuple[int, ...]
    action = "dequeue"

    def describe(self):
        return f"BFS: Dequeued node {self.vertex}. Visiting neighbors."


@dataclass(frozen=True)
class Push:
    vertex: int
    stack: Tuple[int, ...]
    edge: Optional[Tuple[int, int]] = None
    action = "push"

    def describe(self):
        return f"DFS: Pushed node {self.vertex}."


@dataclass(frozen=True)
class Visit:
    vertex: int
    stack: Tuple[int, ...]
    action = "visit"

    def describe(self):
        return f"DFS: Visiting node {self.vertex}."


@dataclass(frozen=True)
class Pop:
    vertex: int
    stack: Tuple[int, ...]
    backtrack: bool = False
    action = "pop"

    def describe(self):
        if self.backtrack:
            return f"DFS: Backtracking from node {self.vertex}."
        return f"DFS: Popped finished node {self.vertex}."


# --- Priority family ---

@dataclass(frozen=True)
class ExtractMin:
    vertex: int
    pq: Tuple[Tuple[int, int], ...]
    metric: Tuple[float, ...]
    metric_name: str = "dist"
    action = "extract_min"

    def describe(self):
        return f"Extracted minimum {self.metric_name} node {self.vertex}."


@dataclass(frozen=True)
class Relax:
    vertex: int
    pq: Tuple[Tuple[int, int], ...]
    metric: Tuple[float, ...]
    edge: Optional[Tuple[int, int]] = None
    action = "relax"

    def describe(self):
        if self.edge is None:
            return f"Source {self.vertex} set to dist 0."
        value = format_metric(self.metric[self.vertex])
        return f"Relaxed edge {self.edge[0]} -> {self.edge[1]}. New dist: {value}"


@dataclass(frozen=True)
class KeyUpdate:
    vertex: int
    pq: Tuple[Tuple[int, int], ...]
    metric: Tuple[float, ...]
    edge: Optional[Tuple[int, int]] = None
    action = "key_update"

    def describe(self):
        if self.edge is None:
            return f"Start {self.vertex} set to key 0."
        value = format_metric(self.metric[self.vertex])
        return f"Updated Key edge {self.edge[0]} -> {self.edge[1]}. New key: {value}"


# --- Terminal ---

@dataclass(frozen=True)
class FinalResult:
    metric_name: str
    values: Tuple[float, ...]
    edges: Tuple[Tuple[int, int, int], ...] = field(default_factory=tuple)
    cost: Optional[int] = None
    action = "final_result"

    def describe(self):
        if self.cost is not None:
            return f"FINAL MST COST: {self.cost}"
        return "FINAL: Shortest paths calculated. Distances: " + format_list(format_metric(v) for v in self.values)


# --- Tree ---

ROTATION_NAMES = {
    "LL": "Right Rotation",
    "RR": "Left Rotation",
    "LR": "Double Rotation",
    "RL": "Double Rotation",
}


@dataclass(frozen=True)
class Rotation:
    pivot: int
    case: str
    after_delete: bool = False
    action = "rotation"

    def describe(self):
        where = "after deletion at" if self.after_delete else "at"
        return f"Unbalance {where} {self.pivot}. {self.case} Case: {ROTATION_NAMES.get(self.case, 'Rotation')}."


# --- Heap ---

@dataclass(frozen=True)
class HeapPlace:
    index: int
    value: int
    heap: Tuple[int, ...]
    action = "heap_place"

    def describe(self):
        return f"Placed value {self.value} at index {self.index}."


@dataclass(frozen=True)
class HeapSwap:
    index: int
    other_index: int
    value: int
    other: int
    heap: Tuple[int, ...]
    action = "heap_swap"

    def describe(self):
        relation = "Parent" if self.other_index < self.index else "Child"
        return f"Swapping {self.value} with {relation} {self.other}."


# --- Hash ---

@dataclass(frozen=True)
class BucketProbe:
    bucket: int
    position: int
    key: int
    matched: bool = False
    action = "probe"

    def describe(self):
        verdict = "match" if self.matched else "no match"
        return f"Checked {self.key} at bucket {self.bucket}, position {self.position}: {verdict}."


@dataclass(frozen=True)
class BucketPlace:
    bucket: int
    position: int
    key: int
    action = "place"

    def describe(self):
        return f"Inserted value {self.key} at bucket {self.bucket} (Chain length: {self.position + 1})."


@dataclass(frozen=True)
class BucketUnlink:
    bucket: int
    position: int
    key: int
    action = "unlink"

    def describe(self):
        return f"Deleted value {self.key} from bucket {self.bucket}."


@dataclass(frozen=True)
class UnknownStep:
    action: str
    payload: Dict[str, Any] = field(default_factory=dict)

    def describe(self):
        return f"Unknown step '{self.action}'."


# =================================================================
# Parsing
# =================================================================

def _parse_extract_min(d):
    name = "key" if "key" in d else "dist"
    return ExtractMin(int(d["v"]), _pq(d.get("pq")), _metric(d[name]), metric_name=name)


def _parse_final(d):
    name = "key" if "final_key" in d else "dist"
    edges_field = "final_mst_edges" if name == "key" else "final_sp_edges"
    edges = tuple((int(e["f"]), int(e["t"]), int(e.get("w", 0))) for e in d.get(edges_field, []))
    return FinalResult(name, _metric(d[f"final_{name}"]), edges, d.get("final_cost"))


STEP_PARSERS = {
    "note": lambda d: Note(d["text"], d.get("focus")),
    "enqueue": lambda d: Enqueue(int(d["v"]), tuple(d.get("q", [])), _edge(d.get("edge"))),
    "dequeue": lambda d: Dequeue(int(d["v"]), tuple(d.get("q", []))),
    "push": lambda d: Push(int(d["v"]), tuple(d.get("s", [])), _edge(d.get("edge"))),
    "visit": lambda d: Visit(int(d["v"]), tuple(d.get("s", []))),
    "pop": lambda d: Pop(int(d["v"]), tuple(d.get("s", [])), bool(d.get("backtrack", False))),
    "extract_min": _parse_extract_min,
    "relax": lambda d: Relax(int(d["v"]), _pq(d.get("pq")), _metric(d["dist"]), _edge(d.get("edge"))),
    "key_update": lambda d: KeyUpdate(int(d["v"]), _pq(d.get("pq")), _metric(d["key"]), _edge(d.get("edge"))),
    "final_result": _parse_final,
    "rotation": lambda d: Rotation(int(d["pivot"]), d["case"], bool(d.get("after_delete", False))),
    "heap_place": lambda d: HeapPlace(int(d["index"]), int(d["value"]), tuple(d["heap"])),
    "heap_swap": lambda d: HeapSwap(int(d["index"]), int(d["other_index"]), int(d["value"]), int(d["other"]), tuple(d["heap"])),
    "probe": lambda d: BucketProbe(int(d["bucket"]), int(d["position"]), int(d["key"]), bool(d.get("matched", False))),
    "place": lambda d: BucketPlace(int(d["bucket"]), int(d["position"]), int(d["key"])),
    "unlink": lambda d: BucketUnlink(int(d["bucket"]), int(d["position"]), int(d["key"])),
}


def parse_step(raw: dict):
    """Turn one engine step object into its record; unknown actions survive as UnknownStep."""
    action = raw.get("action")
    parser = STEP_PARSERS.get(action)
    if parser is None:
        logger.warning(f"Warning: Unknown step action '{action}'")
        return UnknownStep(str(action), dict(raw))
    return parser(raw)


def parse_steps(raw_steps) -> Tuple:
    return tuple(parse_step(raw) for raw in raw_steps or [])
