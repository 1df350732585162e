import math

import pytest
from hypothesis import given, strategies as st

from conftest import avl_snapshot
from dsviz.layout import LayoutEngine, compute_layout, heap_depth, layout_graph, layout_hash, layout_heap, layout_tree
from dsviz.snapshots import GraphEdge, GraphSnapshot, HashBucket, HashSnapshot, HeapSnapshot, TreeSnapshot

WIDTH, HEIGHT = 800, 450


# =============================================================================
# Tree
# =============================================================================

def test_single_node_is_centred():
    layout = layout_tree(avl_snapshot([42]), WIDTH, HEIGHT)
    assert layout[42].x == pytest.approx(400)
    assert layout[42].y == pytest.approx(30)


def test_three_node_tree_positions():
    layout = layout_tree(avl_snapshot([10, 20, 30]), WIDTH, HEIGHT)
    # Units 0..2 of 65px, centred: offset (800 - 195) / 2
    assert [layout[k].x for k in (10, 20, 30)] == pytest.approx([335, 400, 465])
    assert layout[20].y == pytest.approx(30)
    assert layout[10].y == layout[30].y == pytest.approx(100)
    assert layout[20].metrics == {"height": 2, "balance": 0}


def test_empty_tree_signals_empty():
    layout = layout_tree(TreeSnapshot(), WIDTH, HEIGHT)
    assert layout.empty
    assert len(layout) == 0


@given(st.lists(st.integers(min_value=-1000, max_value=1000), unique=True, max_size=40))
def test_in_order_x_strictly_increasing(keys):
    snapshot = avl_snapshot(keys)
    layout = layout_tree(snapshot, WIDTH, HEIGHT)
    if not keys:
        assert layout.empty
        return
    xs = [layout[key].x for key in snapshot.keys()]
    assert all(a < b for a, b in zip(xs, xs[1:]))
    assert snapshot.keys() == sorted(keys)


@given(st.lists(st.integers(min_value=-100, max_value=100), unique=True, max_size=30))
def test_tree_layout_is_deterministic(keys):
    snapshot = avl_snapshot(keys)
    assert layout_tree(snapshot, WIDTH, HEIGHT) == layout_tree(snapshot, WIDTH, HEIGHT)


# =============================================================================
# Graph
# =============================================================================

def test_graph_vertices_on_circle_clockwise_from_top():
    layout = layout_graph(GraphSnapshot(vertex_count=4), 800, 500)
    # R = min(800, 500) / 2.5 = 200 around (400, 250)
    assert (layout[0].x, layout[0].y) == pytest.approx((400, 50))
    assert (layout[1].x, layout[1].y) == pytest.approx((600, 250))
    assert (layout[2].x, layout[2].y) == pytest.approx((400, 450))
    assert (layout[3].x, layout[3].y) == pytest.approx((200, 250))
    assert layout.loop_offset == 25 + 12


@given(st.integers(min_value=1, max_value=30))
def test_graph_vertices_equidistant_from_centre(count):
    layout = layout_graph(GraphSnapshot(vertex_count=count), 800, 500)
    for v in range(count):
        assert math.hypot(layout[v].x - 400, layout[v].y - 250) == pytest.approx(200)


def test_empty_graph_signals_empty():
    assert layout_graph(GraphSnapshot(), 800, 500).empty


# =============================================================================
# Heap
# =============================================================================

def test_heap_depth():
    assert [heap_depth(i) for i in range(8)] == [0, 1, 1, 2, 2, 2, 2, 3]


def test_heap_root_and_children():
    layout = layout_heap(HeapSnapshot((1, 2, 3)), WIDTH, HEIGHT)
    # maxDepth = ceil(log2(4)) = 2, so levels are HEIGHT / 3 apart
    assert (layout[0].x, layout[0].y) == pytest.approx((400, 150))
    assert (layout[1].x, layout[1].y) == pytest.approx((200, 300))
    assert (layout[2].x, layout[2].y) == pytest.approx((600, 300))


@given(st.integers(min_value=1, max_value=127))
def test_heap_levels_never_overlap(size):
    layout = layout_heap(HeapSnapshot(tuple(range(size))), WIDTH, HEIGHT)
    by_depth = {}
    for i in range(size):
        by_depth.setdefault(heap_depth(i), []).append(layout[i].x)
        assert 0 < layout[i].x < WIDTH
        assert 0 < layout[i].y < HEIGHT
    for xs in by_depth.values():
        assert len(set(xs)) == len(xs)


@given(st.integers(min_value=3, max_value=127))
def test_heap_siblings_symmetric_around_parent(size):
    layout = layout_heap(HeapSnapshot(tuple(range(size))), WIDTH, HEIGHT)
    for parent in range(size):
        left, right = 2 * parent + 1, 2 * parent + 2
        if right < size:
            assert (layout[left].x + layout[right].x) / 2 == pytest.approx(layout[parent].x)


def test_empty_heap_signals_empty():
    assert layout_heap(HeapSnapshot(), WIDTH, HEIGHT).empty


# =============================================================================
# Hash
# =============================================================================

def test_hash_rows_and_chain_positions():
    snapshot = HashSnapshot((HashBucket(0, (5,)), HashBucket(1, ()), HashBucket(2, (2, 8))))
    layout = layout_hash(snapshot, WIDTH, HEIGHT)
    assert (layout[(0, 0)].x, layout[(0, 0)].y) == (80, 30)
    assert (layout[(2, 1)].x, layout[(2, 1)].y) == (150, 130)
    assert (layout.labels[1].x, layout.labels[1].y) == (20, 80)
    assert len(layout) == 3


def test_hash_without_buckets_signals_empty():
    assert layout_hash(HashSnapshot(), WIDTH, HEIGHT).empty


# =============================================================================
# Layout cache
# =============================================================================

def test_layout_engine_reuses_layout_for_same_shape():
    engine = LayoutEngine()
    snapshot = GraphSnapshot(vertex_count=3)
    first = engine.layout_for(snapshot, 800, 500)
    # An edge change alone does not move vertices
    with_edge = GraphSnapshot(vertex_count=3, edges=(GraphEdge(0, 1, 4),))
    assert engine.layout_for(with_edge, 800, 500) is first
    assert engine.computations == 1


def test_layout_engine_recomputes_on_shape_or_canvas_change():
    engine = LayoutEngine()
    engine.layout_for(GraphSnapshot(vertex_count=3), 800, 500)
    engine.layout_for(GraphSnapshot(vertex_count=4), 800, 500)
    engine.layout_for(GraphSnapshot(vertex_count=4), 600, 500)
    assert engine.computations == 3
    engine.invalidate()
    engine.layout_for(GraphSnapshot(vertex_count=4), 600, 500)
    assert engine.computations == 4


def test_compute_layout_dispatches_on_snapshot_type():
    layout = compute_layout(HeapSnapshot((7,)), WIDTH, HEIGHT)
    assert list(layout.positions) == [0]
