import json
import logging

from dsviz.default_styles import DEFAULT_STYLES
from dsviz.settings import DEFAULT_SETTINGS, canvas_for, load_settings
from dsviz.status_log import Severity, StatusLog
from dsviz.style_merger import merge_styles


def test_load_settings_merges_file_and_overrides(tmp_path):
    config = tmp_path / "settings.json"
    config.write_text(json.dumps({"canvas": {"tree": {"width": 1000}}, "timing": {"heap": 50}}), encoding="utf-8")
    settings = load_settings(config, overrides={"engine": {"hash_buckets": 3}})
    assert settings["canvas"]["tree"] == {"width": 1000, "height": 450}
    assert settings["timing"] == {"tree": 1000, "graph": 1000, "hash": 1000, "heap": 50}
    assert settings["engine"]["hash_buckets"] == 3
    assert DEFAULT_SETTINGS["canvas"]["tree"]["width"] == 800


def test_canvas_falls_back_to_tree_canvas():
    settings = {"canvas": {"tree": {"width": 640, "height": 480}}}
    assert canvas_for(settings, "graph") == (640, 480)
    assert canvas_for(DEFAULT_SETTINGS, "graph") == (800, 500)


def test_merge_styles_leaves_base_untouched():
    merged = merge_styles(DEFAULT_STYLES, {"edgeStyles": {"normal_edge": {"color": "#000000"}}})
    assert merged["edgeStyles"]["normal_edge"] == {"color": "#000000", "strokeWidth": 2}
    assert DEFAULT_STYLES["edgeStyles"]["normal_edge"]["color"] == "#95A5A6"


def test_status_log_newest_first_and_mirrored(caplog):
    status = StatusLog(limit=2)
    with caplog.at_level(logging.DEBUG, logger="dsviz.status"):
        status.info("one")
        status.warn("two")
        status.detail("three")
    assert status.messages() == ["three", "two"]
    assert status.messages(Severity.WARN) == ["two"]
    assert str(status.latest()) == "[DETAIL] three"
    assert "[WARN] two" in caplog.text
    assert caplog.records[1].levelno == logging.WARNING


def test_status_log_clear():
    status = StatusLog()
    status.error("boom")
    status.set_aux_line("DFS Stack: [1, 0]")
    status.clear()
    assert len(status) == 0
    assert status.latest() is None
    assert status.aux_line == ""
