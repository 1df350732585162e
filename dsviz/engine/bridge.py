# bridge.py
#
# Calls into an engine and turns its response text into typed records.
# Every response buffer is released exactly once: acquire -> parse -> release,
# whatever happens while parsing.

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from ..errors import EngineError, MalformedResponseError
from ..snapshots import ENGINE_TYPES, StructureKind, parse_snapshot
from ..steps import parse_steps
from ..validate import parse_response

logger = logging.getLogger(__name__)


class ResponseBuffer:
    """Engine-owned response text; must be released by the caller once read."""

    def __init__(self, text, on_release=None):
        self._text = text
        self._on_release = on_release
        self.released = False

    def read(self):
        if self.released:
            raise RuntimeError("Response buffer read after release")
        return self._text

    def release(self):
        if self.released:
            raise RuntimeError("Response buffer released twice")
        self.released = True
        self._text = None
        if self._on_release is not None:
            self._on_release(self)


@dataclass(frozen=True)
class EngineResponse:
    kind: StructureKind
    action: str
    value: Any = None
    outcome: Optional[str] = None
    snapshot: Any = None
    steps: Tuple = field(default_factory=tuple)


def _require(condition, message):
    if not condition:
        raise ValueError(message)


def _check_vertices(snapshot, vertices, record):
    for vertex in vertices:
        _require(0 <= vertex < snapshot.vertex_count,
                 f"step '{record.action}' names vertex {vertex} outside 0..{snapshot.vertex_count - 1}")


def _check_graph_step(snapshot, record):
    vertices = []
    for name in ("vertex", "queue", "stack", "edge", "pq", "focus", "edges"):
        value = getattr(record, name, None)
        if value is None:
            continue
        if name in ("vertex", "focus"):
            vertices.append(value)
        elif name == "pq":
            vertices.extend(v for v, _ in value)
        elif name == "edges":
            vertices.extend(v for edge in value for v in edge[:2])
        else:
            vertices.extend(value)
    _check_vertices(snapshot, vertices, record)
    metric = getattr(record, "metric", None)
    if metric is None:
        metric = getattr(record, "values", None)
    if metric is not None:
        _require(len(metric) == snapshot.vertex_count,
                 f"step '{record.action}' carries {len(metric)} metrics for {snapshot.vertex_count} vertices")


def _check_hash_step(snapshot, record):
    bucket = getattr(record, "bucket", None)
    if bucket is not None:
        _require(0 <= bucket < snapshot.bucket_count and record.position >= 0,
                 f"step '{record.action}' names slot ({bucket}, {record.position}) outside the table")


def _check_heap_step(snapshot, record):
    for name in ("index", "other_index"):
        index = getattr(record, name, None)
        if index is not None:
            _require(0 <= index < len(record.heap),
                     f"step '{record.action}' names index {index} outside a heap of {len(record.heap)}")


# Per structure: raises ValueError when a step refers to something the response does not hold
STEP_CHECKS = {
    StructureKind.TREE: lambda snapshot, record: None,
    StructureKind.GRAPH: _check_graph_step,
    StructureKind.HASH: _check_hash_step,
    StructureKind.HEAP: _check_heap_step,
}


def decode_response(data, expected: Optional[StructureKind] = None) -> EngineResponse:
    """
    Build typed records from a validated response dict. Every step is checked
    against the response snapshot here, so a response that decodes can be
    replayed without failing halfway.
    """
    kind = ENGINE_TYPES[data["type"]]
    if expected is not None and kind is not expected:
        raise MalformedResponseError(f"Expected a {expected.value} response, got engine type '{data['type']}'")
    if data["action"] == "error":
        raise EngineError(data.get("message", "Unknown engine error"), data)
    try:
        snapshot = parse_snapshot(kind, data["snapshot"])
        steps = parse_steps(data.get("steps"))
        for record in steps:
            STEP_CHECKS[kind](snapshot, record)
            record.describe()
    except (KeyError, TypeError, ValueError, IndexError) as e:
        raise MalformedResponseError(f"Response content does not match the {kind.value} format: {e!r}", cause=e) from e
    return EngineResponse(kind, data["action"], data.get("value"), data.get("outcome"), snapshot, steps)


class EngineBridge:
    """
    Synchronous, atomic engine calls: one call returns the whole step list of
    the operation. With a kind set, responses of any other structure are rejected.
    """

    def __init__(self, engine, kind: Optional[StructureKind] = None):
        self.engine = engine
        self.kind = kind
        self.acquired = 0
        self.released = 0

    def _on_release(self, buffer):
        self.released += 1

    def acquire(self, operation, *args) -> ResponseBuffer:
        method = getattr(self.engine, operation)
        buffer = ResponseBuffer(method(*args), on_release=self._on_release)
        self.acquired += 1
        return buffer

    def call(self, operation, *args) -> EngineResponse:
        buffer = self.acquire(operation, *args)
        try:
            text = buffer.read()
            if not text:
                raise MalformedResponseError(f"Engine returned no response for '{operation}'")
            logger.debug(f"{self.engine.engine_type}.{operation}{args} -> {len(text)} bytes")
            return decode_response(parse_response(text), self.kind)
        finally:
            buffer.release()
