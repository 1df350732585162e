# snapshots.py
#
# Structural snapshots of the four visualized data structures.
# Pure data: parsed once from an engine response and never mutated afterwards.

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class StructureKind(Enum):
    TREE = "tree"
    GRAPH = "graph"
    HASH = "hash"
    HEAP = "heap"


# Engine "type" tags mapped onto the structure they describe
ENGINE_TYPES = {
    "avl": StructureKind.TREE,
    "graph": StructureKind.GRAPH,
    "hash": StructureKind.HASH,
    "minheap": StructureKind.HEAP,
}


@dataclass(frozen=True)
class TreeNode:
    key: int
    height: int
    balance: int
    left: Optional["TreeNode"] = None
    right: Optional["TreeNode"] = None


@dataclass(frozen=True)
class TreeSnapshot:
    root: Optional[TreeNode] = None

    def in_order(self):
        """Yield (node, depth) pairs in left, self, right order."""
        stack, node, depth = [], self.root, 0
        while stack or node is not None:
            while node is not None:
                stack.append((node, depth))
                node, depth = node.left, depth + 1
            node, depth = stack.pop()
            yield node, depth
            node, depth = node.right, depth + 1

    def keys(self):
        return [node.key for node, _ in self.in_order()]

    def shape_key(self):
        def walk(node):
            if node is None:
                return None
            return (node.key, walk(node.left), walk(node.right))
        return walk(self.root)


@dataclass(frozen=True)
class GraphEdge:
    source: int
    target: int
    weight: int

    @property
    def is_loop(self):
        return self.source == self.target


@dataclass(frozen=True)
class GraphSnapshot:
    vertex_count: int = 0
    edges: Tuple[GraphEdge, ...] = field(default_factory=tuple)

    def vertices(self):
        return list(range(self.vertex_count))

    def shape_key(self):
        # Only a vertex-count change moves vertices around
        return self.vertex_count


@dataclass(frozen=True)
class HashBucket:
    index: int
    chain: Tuple[int, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class HashSnapshot:
    buckets: Tuple[HashBucket, ...] = field(default_factory=tuple)

    @property
    def bucket_count(self):
        return len(self.buckets)

    def entities(self):
        return [(bucket.index, position) for bucket in self.buckets for position in range(len(bucket.chain))]

    def shape_key(self):
        return tuple(len(bucket.chain) for bucket in self.buckets)


@dataclass(frozen=True)
class HeapSnapshot:
    values: Tuple[int, ...] = field(default_factory=tuple)

    def __len__(self):
        return len(self.values)

    @staticmethod
    def parent(index):
        return (index - 1) // 2

    def shape_key(self):
        return len(self.values)


# =================================================================
# Parsing from engine JSON
# =================================================================

def parse_tree_node(data) -> Optional[TreeNode]:
    if data is None or data == "null":
        return None
    return TreeNode(
        key=int(data["data"]),
        height=int(data["h"]),
        balance=int(data["b"]),
        left=parse_tree_node(data.get("l")),
        right=parse_tree_node(data.get("r")),
    )


def parse_tree(data) -> TreeSnapshot:
    return TreeSnapshot(root=parse_tree_node(data))


def parse_graph(data) -> GraphSnapshot:
    edges = tuple(GraphEdge(int(e["f"]), int(e["t"]), int(e["w"])) for e in data.get("edges", []))
    return GraphSnapshot(vertex_count=int(data.get("vertices", 0)), edges=edges)


def parse_hash(data) -> HashSnapshot:
    buckets = tuple(HashBucket(int(b["bucket"]), tuple(int(v) for v in b.get("chain", []))) for b in data or [])
    return HashSnapshot(buckets=buckets)


def parse_heap(data) -> HeapSnapshot:
    return HeapSnapshot(values=tuple(int(v) for v in data or []))


SNAPSHOT_PARSERS = {
    StructureKind.TREE: parse_tree,
    StructureKind.GRAPH: parse_graph,
    StructureKind.HASH: parse_hash,
    StructureKind.HEAP: parse_heap,
}


def parse_snapshot(kind: StructureKind, data):
    return SNAPSHOT_PARSERS[kind](data)


def empty_snapshot(kind: StructureKind):
    return {
        StructureKind.TREE: TreeSnapshot,
        StructureKind.GRAPH: GraphSnapshot,
        StructureKind.HASH: HashSnapshot,
        StructureKind.HEAP: HeapSnapshot,
    }[kind]()
