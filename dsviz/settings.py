# settings.py
#
# Default canvas, spacing, timing and engine sizes for every structure view.
# Override any subset with a JSON file passed to load_settings().

import copy
import json
from pathlib import Path

from .style_merger import merge_styles

DEFAULT_SETTINGS = {

  "canvas": {
    "tree":  {"width": 800, "height": 450},
    "graph": {"width": 800, "height": 500},
    "hash":  {"width": 800, "height": 450},
    "heap":  {"width": 800, "height": 450}
  },

  "tree_layout": {
    "h_spacing": 65,
    "v_spacing": 70,
    "top_offset": 30,
    "node_radius": 15
  },

  "graph_layout": {
    "node_radius": 25,
    "loop_gap": 12,
    "radius_divisor": 2.5
  },

  "hash_layout": {
    "top": 30,
    "left": 20,
    "label_width": 60,
    "cell_width": 70,
    "row_height": 50
  },

  "heap_layout": {
    "node_radius": 20
  },

  # Delay between two animation ticks, in milliseconds
  "timing": {
    "tree": 1000,
    "graph": 1000,
    "hash": 1000,
    "heap": 500
  },

  "engine": {
    "graph_vertices": 5,
    "hash_buckets": 7,
    "heap_capacity": 15
  }
}


def load_settings(path=None, overrides=None):
    """Return DEFAULT_SETTINGS merged with a JSON override file and/or an override dict."""
    settings = copy.deepcopy(DEFAULT_SETTINGS)
    if path:
        file_overrides = json.loads(Path(path).read_text(encoding="utf-8"))
        settings = merge_styles(settings, file_overrides)
    if overrides:
        settings = merge_styles(settings, overrides)
    return settings


def canvas_for(settings, kind_name):
    """Canvas size of one view; a missing entry degrades to the tree canvas."""
    canvas = settings.get("canvas", {})
    size = canvas.get(kind_name) or canvas.get("tree") or DEFAULT_SETTINGS["canvas"]["tree"]
    return size["width"], size["height"]
