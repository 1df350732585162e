import json

from dsviz.cli import load_script, main


def write_script(path, operations):
    path.write_text(json.dumps({"operations": operations}), encoding="utf-8")
    return path


def test_script_replay_writes_frames(tmp_path):
    script = write_script(tmp_path / "demo.json", [
        {"structure": "tree", "op": "init"},
        {"structure": "tree", "op": "insert", "inputs": {"value": 10}},
        {"structure": "tree", "op": "insert", "inputs": {"value": 20}},
        {"structure": "heap", "op": "init", "inputs": {"capacity": 4}},
        {"structure": "heap", "op": "insert", "inputs": {"value": 2}},
    ])
    out = tmp_path / "frames"
    assert main([str(script), "--output-dir", str(out)]) == 0
    assert (out / "tree" / "frame_0000.tex").exists()
    assert (out / "heap" / "frame_0000.tex").exists()
    assert (out / "tree" / "frame_0000.tex").read_text(encoding="utf-8").startswith("\\documentclass")


def test_default_output_dir_next_to_script(tmp_path):
    script = write_script(tmp_path / "demo.json", [{"structure": "hash", "op": "init", "inputs": {"buckets": 3}}])
    assert main([str(script)]) == 0
    assert (tmp_path / "demo_frames" / "hash").is_dir()


def test_failed_operations_give_exit_code_2(tmp_path):
    script = write_script(tmp_path / "bad.json", [
        {"structure": "trie", "op": "init"},
        {"structure": "tree", "op": "insert", "inputs": {"value": 1}},
    ])
    assert main([str(script), "-o", str(tmp_path / "out")]) == 2


def test_missing_or_invalid_script(tmp_path):
    assert main([str(tmp_path / "nope.json")]) == 1
    broken = tmp_path / "broken.json"
    broken.write_text("{\"steps\": []}", encoding="utf-8")
    assert main([str(broken)]) == 1


def test_load_script_returns_operations(tmp_path):
    script = write_script(tmp_path / "s.json", [{"structure": "heap", "op": "extract"}])
    assert load_script(script) == [{"structure": "heap", "op": "extract"}]
