# cli.py
#
# Replay an operation script and write every redraw as a TikZ frame.
#
#   dsviz script.json --output-dir frames --png
#
# Script format:
#   {"operations": [{"structure": "tree", "op": "insert", "inputs": {"value": 10}}, ...]}

import argparse
import json
import logging
import sys
from pathlib import Path

from .controller import Visualizer
from .renderer import FrameRecorder
from .scheduler import ManualScheduler, RealtimeScheduler
from .settings import load_settings
from .snapshots import StructureKind


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Data structure visualizer: replay an operation script as TikZ frames")
    parser.add_argument("script", help="Operation script (JSON)")
    parser.add_argument("--output-dir", "-o", default=None, help="Frame output directory (default: <script>_frames)")
    parser.add_argument("--config", "-c", default=None, help="JSON file overriding the default settings")
    parser.add_argument("--realtime", action="store_true", help="Pace animations on the wall clock")
    parser.add_argument("--png", action="store_true", help="Compile frames to PNG (needs xelatex and pdftoppm)")
    parser.add_argument("--log-file", default=None, help="Also write the log to this file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log step details")
    return parser.parse_args(argv)


def load_script(path):
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    operations = data.get("operations") if isinstance(data, dict) else None
    if not isinstance(operations, list):
        raise ValueError(f"Script {path} has no 'operations' list")
    return operations


def run_script(visualizer, operations):
    """Perform each operation and drain the scheduler before the next one."""
    performed = 0
    for i, entry in enumerate(operations):
        try:
            kind = StructureKind(entry.get("structure"))
        except ValueError:
            visualizer.status.warn(f"Operation {i}: unknown structure '{entry.get('structure')}'")
            continue
        if visualizer.perform(kind, entry.get("op"), entry.get("inputs") or {}):
            performed += 1
        visualizer.scheduler.run_until_idle()
    return performed


def main(argv=None):
    args = parse_args(argv)

    handlers = [logging.StreamHandler()]
    if args.log_file:
        handlers.insert(0, logging.FileHandler(args.log_file, encoding='utf-8'))
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s: %(message)s',
        handlers=handlers,
    )

    script_path = Path(args.script)
    if not script_path.exists():
        logging.error(f"File not found '{script_path}'")
        return 1
    try:
        operations = load_script(script_path)
    except (json.JSONDecodeError, ValueError) as e:
        logging.error(f"Cannot read script: {e}")
        return 1

    settings = load_settings(args.config)
    output_dir = Path(args.output_dir) if args.output_dir else script_path.parent / (script_path.stem + "_frames")
    recorder = FrameRecorder(output_dir)
    scheduler = RealtimeScheduler() if args.realtime else ManualScheduler()
    visualizer = Visualizer(settings=settings, scheduler=scheduler, on_frame=recorder)

    logging.info(f"Replaying {len(operations)} operations from {script_path}")
    performed = run_script(visualizer, operations)
    logging.info(f"{performed}/{len(operations)} operations performed, {recorder.total} frames saved to {output_dir}")

    if args.png:
        from .tex_to_png import compile_recording

        results = compile_recording(output_dir, recorder.counts)
        if any(results.values()):
            return 1
    return 0 if performed == len(operations) else 2


if __name__ == "__main__":
    sys.exit(main())
