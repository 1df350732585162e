import json

import pytest

from conftest import avl_snapshot
from dsviz.engine import HashEngine
from dsviz.snapshots import GraphSnapshot, HashBucket, HashSnapshot, HeapSnapshot
from dsviz.steps import (BucketProbe, Dequeue, Enqueue, FinalResult, HeapPlace, HeapSwap, KeyUpdate, Note, Rotation,
                         UnknownStep)
from dsviz.trackers import (EntityStatus, GraphStateTracker, HashStateTracker, HeapStateTracker, TreeStateTracker,
                            calculate_index)


# =============================================================================
# Hash index
# =============================================================================

@pytest.mark.parametrize("value, expected", [(7, 2), (-3, 2), (0, 0)])
def test_calculate_index_known_values(value, expected):
    assert calculate_index(value, 5) == expected


def test_calculate_index_matches_engine_placement():
    engine = HashEngine()
    engine.init(5)
    for value in range(-50, 51):
        place = json.loads(engine.insert(value))["steps"][0]
        assert place["action"] == "place"
        assert calculate_index(value, 5) == place["bucket"]


def test_hash_begin_highlights_target_bucket():
    tracker = HashStateTracker()
    tracker.set_snapshot(HashSnapshot(tuple(HashBucket(i) for i in range(5))))
    tracker.begin("search", -3)
    assert tracker.state.focus_bucket == 2


def test_hash_probe_statuses():
    tracker = HashStateTracker()
    tracker.set_snapshot(HashSnapshot((HashBucket(0, (5, 10, 10)), HashBucket(1))))
    tracker.begin("search", 10)
    tracker.apply_step(BucketProbe(0, 0, 5, matched=False))
    tracker.apply_step(BucketProbe(0, 1, 10, matched=True))
    assert tracker.status_of((0, 0)) is EntityStatus.PENDING
    assert tracker.status_of((0, 1)) is EntityStatus.FINALIZED
    # Only the first equal key is highlighted
    assert tracker.status_of((0, 2)) is EntityStatus.DEFAULT
    assert tracker.state.focus == (0, 1)
    tracker.complete()
    assert tracker.state.statuses == {}
    assert tracker.state.focus_bucket is None


def test_hash_delete_replays_over_previous_table():
    tracker = HashStateTracker()
    before = HashSnapshot((HashBucket(0, (5, 10)),))
    after = HashSnapshot((HashBucket(0, (5,)),))
    assert tracker.replay_snapshot(before, after) is before
    assert tracker.replay_snapshot(after, before) is before


# =============================================================================
# Graph
# =============================================================================

def test_finalized_edge_either_orientation_for_mst():
    tracker = GraphStateTracker()
    tracker.set_snapshot(GraphSnapshot(vertex_count=4))
    tracker.begin("prims", 0)
    tracker.apply_step(FinalResult("key", (0, 1, 1, 2), edges=((1, 3, 2),), cost=3))
    assert tracker.is_edge_finalized(3, 1)
    assert tracker.is_edge_finalized(1, 3)
    assert not tracker.is_edge_finalized(0, 1)


def test_finalized_edge_exact_orientation_for_shortest_paths():
    tracker = GraphStateTracker()
    tracker.set_snapshot(GraphSnapshot(vertex_count=4))
    tracker.begin("dijkstra", 0)
    tracker.apply_step(FinalResult("dist", (0, 1, 1, 2), edges=((1, 3, 2),)))
    assert tracker.is_edge_finalized(1, 3)
    assert not tracker.is_edge_finalized(3, 1)


def test_bfs_statuses_and_queue_line():
    tracker = GraphStateTracker()
    tracker.set_snapshot(GraphSnapshot(vertex_count=3))
    tracker.begin("bfs", 0)
    assert tracker.state.aux_line == "BFS Queue: []"

    tracker.apply_step(Enqueue(0, (0,)))
    assert tracker.status_of(0) is EntityStatus.PENDING
    assert tracker.state.aux_line == "BFS Queue: [0]"

    tracker.apply_step(Dequeue(0, ()))
    tracker.apply_step(Enqueue(1, (1,), edge=(0, 1)))
    assert tracker.status_of(0) is EntityStatus.FINALIZED
    assert tracker.status_of(1) is EntityStatus.PENDING
    assert tracker.state.focus == 1
    assert tracker.state.caption == "BFS: Enqueued neighbor 1."

    # Rediscovery never downgrades a finalized vertex
    tracker.apply_step(Enqueue(0, (1, 0), edge=(1, 0)))
    assert tracker.status_of(0) is EntityStatus.FINALIZED

    tracker.complete()
    assert tracker.status_of(1) is EntityStatus.FINALIZED
    assert tracker.state.focus is None


def test_priority_steps_update_metrics():
    tracker = GraphStateTracker()
    tracker.set_snapshot(GraphSnapshot(vertex_count=2))
    tracker.begin("prims", 0)
    tracker.apply_step(KeyUpdate(1, ((1, 4),), (0, 4), edge=(0, 1)))
    assert tracker.state.metrics == (0, 4)
    assert tracker.metric_label == "K"
    assert tracker.state.aux_line == "PRIMS PQ: [(1, 4)]"


def test_final_result_finalizes_pending():
    tracker = GraphStateTracker()
    tracker.set_snapshot(GraphSnapshot(vertex_count=2))
    tracker.begin("dijkstra", 0)
    tracker.apply_step(Enqueue(1, (1,)))
    tracker.apply_step(FinalResult("dist", (0, 5), edges=((0, 1, 5),)))
    assert tracker.status_of(1) is EntityStatus.FINALIZED
    assert tracker.state.metrics == (0, 5)


def test_marks_outside_snapshot_are_ignored():
    tracker = GraphStateTracker()
    tracker.set_snapshot(GraphSnapshot(vertex_count=2))
    tracker.begin("bfs", 0)
    tracker.apply_step(Enqueue(7, (7,)))
    assert 7 not in tracker.state.statuses


def test_unknown_step_changes_nothing():
    tracker = GraphStateTracker()
    tracker.set_snapshot(GraphSnapshot(vertex_count=2))
    tracker.begin("bfs", 0)
    tracker.apply_step(Enqueue(0, (0,)))
    caption, statuses = tracker.state.caption, dict(tracker.state.statuses)
    assert not tracker.apply_step(UnknownStep("teleport", {"v": 1}))
    assert tracker.state.caption == caption
    assert tracker.state.statuses == statuses


# =============================================================================
# Tree
# =============================================================================

def test_set_snapshot_purges_stale_statuses():
    tracker = TreeStateTracker()
    tracker.set_snapshot(avl_snapshot([10, 20]))
    tracker.mark(10, EntityStatus.PENDING)
    tracker.set_snapshot(avl_snapshot([20]))
    assert 10 not in tracker.state.statuses


def test_rotation_focuses_pivot():
    tracker = TreeStateTracker()
    tracker.set_snapshot(avl_snapshot([10, 20, 30]))
    tracker.begin("insert", 30)
    assert tracker.state.focus == 30
    tracker.apply_step(Rotation(10, "RR"))
    assert tracker.state.focus == 10
    assert tracker.state.rotation == "RR"
    assert tracker.status_of(10) is EntityStatus.PENDING
    tracker.complete()
    assert tracker.state.focus is None
    assert tracker.state.rotation is None
    assert tracker.state.statuses == {}


def test_note_moves_focus():
    tracker = TreeStateTracker()
    tracker.set_snapshot(avl_snapshot([10, 20]))
    tracker.begin("delete", 10)
    tracker.apply_step(Note("Deleting node 10, replacing with single child 20.", 20))
    assert tracker.state.focus == 20


# =============================================================================
# Heap
# =============================================================================

def test_heap_values_follow_the_sift():
    tracker = HeapStateTracker()
    tracker.set_snapshot(HeapSnapshot((1, 3, 8, 5)))
    tracker.begin("insert")
    tracker.apply_step(HeapPlace(3, 1, (3, 5, 8, 1)))
    assert tracker.display_values() == (3, 5, 8, 1)
    assert tracker.state.focus == 3

    tracker.apply_step(HeapSwap(3, 1, 1, 5, (3, 1, 8, 5)))
    assert tracker.display_values() == (3, 1, 8, 5)
    assert tracker.state.focus == 1
    assert tracker.status_of(3) is EntityStatus.PENDING

    tracker.complete()
    assert tracker.display_values() == (1, 3, 8, 5)
    assert tracker.state.statuses == {}


def test_empty_heap_has_no_entities():
    tracker = HeapStateTracker()
    assert tracker.entity_ids() == set()
    tracker.mark(0, EntityStatus.PENDING)
    assert tracker.state.statuses == {}
