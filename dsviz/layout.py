# layout.py
#
# Layout Engine: pure functions from a snapshot shape and a canvas size to 2D
# positions. Nothing here depends on a previous layout, so any layout can be
# recomputed at any time with the same result.

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .settings import DEFAULT_SETTINGS
from .snapshots import GraphSnapshot, HashSnapshot, HeapSnapshot, TreeSnapshot


@dataclass(frozen=True)
class Position:
    x: float
    y: float
    metrics: Optional[Dict[str, int]] = None


@dataclass
class Layout:
    positions: Dict[Any, Position] = field(default_factory=dict)
    empty: bool = False
    node_radius: float = 0
    # Graph only: distance from a vertex centre to the centre of its self-loop
    loop_offset: float = 0
    # Hash only: bucket index -> label position
    labels: Dict[int, Position] = field(default_factory=dict)

    def __getitem__(self, entity_id):
        return self.positions[entity_id]

    def __contains__(self, entity_id):
        return entity_id in self.positions

    def __len__(self):
        return len(self.positions)


def layout_tree(snapshot: TreeSnapshot, width, height, params=None):
    """
    In-order layout: every node takes the next horizontal unit, so keys read
    left to right and no two nodes on one level overlap. The whole tree is then
    centred on the canvas.
    """
    params = params or DEFAULT_SETTINGS["tree_layout"]
    h_unit, v_unit = params["h_spacing"], params["v_spacing"]
    if snapshot.root is None:
        return Layout(empty=True, node_radius=params["node_radius"])

    raw = {}
    unit = 0
    for node, depth in snapshot.in_order():
        raw[node.key] = (unit * h_unit + h_unit / 2, depth * v_unit + params["top_offset"], node)
        unit += 1

    offset_x = (width - unit * h_unit) / 2
    positions = {
        key: Position(x + offset_x, y, {"height": node.height, "balance": node.balance})
        for key, (x, y, node) in raw.items()
    }
    return Layout(positions=positions, node_radius=params["node_radius"])


def layout_graph(snapshot: GraphSnapshot, width, height, params=None):
    """Vertices evenly spaced on a circle, vertex 0 at 12 o'clock, clockwise."""
    params = params or DEFAULT_SETTINGS["graph_layout"]
    count = snapshot.vertex_count
    radius = params["node_radius"]
    loop_offset = radius + params["loop_gap"]
    if count <= 0:
        return Layout(empty=True, node_radius=radius, loop_offset=loop_offset)

    ring = min(width, height) / params["radius_divisor"]
    center_x, center_y = width / 2, height / 2
    positions = {}
    for i in range(count):
        angle = (i / count) * 2 * math.pi - math.pi / 2
        positions[i] = Position(center_x + ring * math.cos(angle), center_y + ring * math.sin(angle))
    return Layout(positions=positions, node_radius=radius, loop_offset=loop_offset)


def heap_depth(index):
    # floor(log2(index + 1)) without floating point
    return (index + 1).bit_length() - 1


def layout_heap(snapshot: HeapSnapshot, width, height, params=None):
    """
    Complete-binary-tree layout by array index: each level splits the canvas
    width into 2^depth equal slots and a node sits in the middle of its slot.
    """
    params = params or DEFAULT_SETTINGS["heap_layout"]
    count = len(snapshot)
    if count == 0:
        return Layout(empty=True, node_radius=params["node_radius"])

    # ceil(log2(count + 1))
    max_depth = count.bit_length()
    v_unit = height / (max_depth + 1)
    positions = {}
    for i in range(count):
        depth = heap_depth(i)
        nodes_at_depth = 2 ** depth
        index_at_depth = i - (nodes_at_depth - 1)
        x = (width / nodes_at_depth) * (index_at_depth + 0.5)
        positions[i] = Position(x, v_unit * (depth + 1))
    return Layout(positions=positions, node_radius=params["node_radius"])


def layout_hash(snapshot: HashSnapshot, width, height, params=None):
    """One row per bucket, chain entries left to right after the bucket label."""
    params = params or DEFAULT_SETTINGS["hash_layout"]
    if snapshot.bucket_count == 0:
        return Layout(empty=True)

    positions, labels = {}, {}
    for bucket in snapshot.buckets:
        y = params["top"] + bucket.index * params["row_height"]
        labels[bucket.index] = Position(params["left"], y)
        for position in range(len(bucket.chain)):
            x = params["left"] + params["label_width"] + position * params["cell_width"]
            positions[(bucket.index, position)] = Position(x, y)
    return Layout(positions=positions, labels=labels)


LAYOUT_FUNCTIONS = {
    TreeSnapshot: (layout_tree, "tree_layout"),
    GraphSnapshot: (layout_graph, "graph_layout"),
    HeapSnapshot: (layout_heap, "heap_layout"),
    HashSnapshot: (layout_hash, "hash_layout"),
}


def compute_layout(snapshot, width, height, settings=None):
    func, section = LAYOUT_FUNCTIONS[type(snapshot)]
    params = (settings or DEFAULT_SETTINGS).get(section) or DEFAULT_SETTINGS[section]
    return func(snapshot, width, height, params)


class LayoutEngine:
    """
    Per-structure layout cache. A layout is reused while the snapshot shape and
    the canvas stay the same, and recomputed as soon as either changes.
    """

    def __init__(self, settings=None):
        self.settings = settings or DEFAULT_SETTINGS
        self._key = None
        self._layout = None
        self.computations = 0

    def layout_for(self, snapshot, width, height):
        key = (type(snapshot), snapshot.shape_key(), width, height)
        if key != self._key or self._layout is None:
            self._layout = compute_layout(snapshot, width, height, self.settings)
            self._key = key
            self.computations += 1
        return self._layout

    def invalidate(self):
        self._key = None
        self._layout = None
