import logging
import math

from dsviz.steps import (ExtractMin, FinalResult, HeapSwap, Pop, Relax, Rotation, UnknownStep, format_pq, parse_step,
                         parse_steps)


def test_unknown_action_survives_as_unknown_step(caplog):
    with caplog.at_level(logging.WARNING, logger="dsviz.steps"):
        record = parse_step({"action": "teleport", "v": 3})
    assert isinstance(record, UnknownStep)
    assert record.action == "teleport"
    assert record.payload["v"] == 3
    assert "Unknown step action 'teleport'" in caplog.text


def test_relax_parses_infinity():
    record = parse_step({"action": "relax", "v": 1, "pq": [{"v": 1, "d": 4}], "dist": [0, 4, "INF"], "edge": [0, 1]})
    assert isinstance(record, Relax)
    assert record.metric == (0, 4, math.inf)
    assert record.pq == ((1, 4),)
    assert record.describe() == "Relaxed edge 0 -> 1. New dist: 4"


def test_source_relax_has_no_edge():
    record = parse_step({"action": "relax", "v": 0, "pq": [], "dist": [0, "INF"]})
    assert record.edge is None
    assert record.describe() == "Source 0 set to dist 0."


def test_extract_min_metric_name_follows_payload():
    record = parse_step({"action": "extract_min", "v": 2, "pq": [], "key": [0, 1, 2]})
    assert isinstance(record, ExtractMin)
    assert record.metric_name == "key"
    assert parse_step({"action": "extract_min", "v": 2, "pq": [], "dist": [0]}).metric_name == "dist"


def test_final_result_variants():
    mst = parse_step({"action": "final_result", "final_cost": 3, "final_key": [0, 1, 2],
                      "final_mst_edges": [{"f": 0, "t": 1, "w": 1}]})
    assert mst == FinalResult("key", (0, 1, 2), ((0, 1, 1),), 3)
    assert mst.describe() == "FINAL MST COST: 3"

    sp = parse_step({"action": "final_result", "final_dist": [0, "INF"], "final_sp_edges": []})
    assert sp.cost is None
    assert sp.describe() == "FINAL: Shortest paths calculated. Distances: [0, INF]"


def test_pop_backtrack_flag():
    assert parse_step({"action": "pop", "v": 1, "s": []}) == Pop(1, ())
    assert Pop(1, (), backtrack=True).describe() == "DFS: Backtracking from node 1."
    assert Pop(1, ()).describe() == "DFS: Popped finished node 1."


def test_rotation_and_heap_descriptions():
    assert Rotation(10, "RR").describe() == "Unbalance at 10. RR Case: Left Rotation."
    assert Rotation(7, "LR", after_delete=True).describe() == "Unbalance after deletion at 7. LR Case: Double Rotation."
    assert HeapSwap(3, 1, 1, 5, (3, 1, 8, 5)).describe() == "Swapping 1 with Parent 5."
    assert HeapSwap(0, 1, 5, 3, (3, 5)).describe() == "Swapping 5 with Child 3."


def test_parse_steps_tolerates_missing_list():
    assert parse_steps(None) == ()
    assert format_pq(((1, 4), (2, 7))) == "[(1, 4), (2, 7)]"
