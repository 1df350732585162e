import subprocess

from dsviz import tex_to_png
from dsviz.snapshots import StructureKind


def write_frames(frame_dir, count):
    frame_dir.mkdir(parents=True)
    for i in range(count):
        (frame_dir / f"frame_{i:04d}.tex").write_text("\\documentclass{standalone}", encoding="utf-8")


def fake_toolchain(monkeypatch, fail_on=None):
    """Stand-in for xelatex / pdftoppm that writes the files they would produce."""
    calls = []

    def run(cmd, **kwargs):
        calls.append(cmd[0])
        if cmd[0] == "xelatex":
            build_dir, tex_file = cmd[3], cmd[4]
            if fail_on and fail_on in tex_file:
                raise subprocess.CalledProcessError(1, cmd)
            stem = tex_file.rsplit("/", 1)[-1][:-len(".tex")]
            open(f"{build_dir}/{stem}.pdf", "w").close()
        else:
            open(f"{cmd[-1]}.png", "w").close()

    monkeypatch.setattr(tex_to_png.shutil, "which", lambda tool: f"/usr/bin/{tool}")
    monkeypatch.setattr(tex_to_png.subprocess, "run", run)
    return calls


def test_frames_compiled_into_png_dir(tmp_path, monkeypatch):
    frame_dir = tmp_path / "tree"
    write_frames(frame_dir, 2)
    (frame_dir / "notes.tex").write_text("", encoding="utf-8")
    calls = fake_toolchain(monkeypatch)

    assert tex_to_png.compile_frames(frame_dir) == []
    assert sorted(p.name for p in (frame_dir / "png").iterdir()) == ["frame_0000.png", "frame_0001.png"]
    assert calls == ["xelatex", "pdftoppm"] * 2


def test_failed_frame_reported_and_others_compiled(tmp_path, monkeypatch):
    frame_dir = tmp_path / "graph"
    write_frames(frame_dir, 3)
    fake_toolchain(monkeypatch, fail_on="frame_0001")

    errors = tex_to_png.compile_frames(frame_dir)
    assert len(errors) == 1
    assert "frame_0001.tex" in errors[0]
    assert (frame_dir / "png" / "frame_0002.png").exists()


def test_missing_tools_stop_before_compiling(tmp_path, monkeypatch):
    frame_dir = tmp_path / "heap"
    write_frames(frame_dir, 1)
    monkeypatch.setattr(tex_to_png.shutil, "which", lambda tool: None if tool == "pdftoppm" else "/usr/bin/xelatex")

    errors = tex_to_png.compile_frames(frame_dir)
    assert errors == [f"Cannot compile {frame_dir}: pdftoppm not found on PATH"]
    assert not (frame_dir / "png").exists()


def test_recording_compiled_per_structure(tmp_path, monkeypatch):
    write_frames(tmp_path / "tree", 1)
    write_frames(tmp_path / "hash", 1)
    fake_toolchain(monkeypatch)

    results = tex_to_png.compile_recording(tmp_path, [StructureKind.TREE, StructureKind.HASH])
    assert results == {StructureKind.TREE: [], StructureKind.HASH: []}
    assert (tmp_path / "hash" / "png" / "frame_0000.png").exists()
