# renderer.py
#
# Turns (snapshot, layout, visual state) into a standalone TikZ document.
# Pure: the same inputs always give the same text, so redrawing twice
# without a state change produces identical frames.

import logging
from pathlib import Path

from .default_styles import DEFAULT_STYLES
from .snapshots import HeapSnapshot, StructureKind
from .steps import format_metric
from .style_merger import merge_styles
from .trackers.base import EntityStatus

logger = logging.getLogger(__name__)

# Canvas pixels per TikZ centimetre
PX_PER_CM = 50.0

EMPTY_CAPTIONS = {
    StructureKind.TREE: "AVL Tree is Empty",
    StructureKind.GRAPH: "Graph is empty",
    StructureKind.HASH: "Hash Table not initialized.",
    StructureKind.HEAP: "Heap is Empty",
}

TITLES = {
    StructureKind.TREE: "AVL Tree",
    StructureKind.GRAPH: "Graph",
    StructureKind.HASH: "Hash Table",
    StructureKind.HEAP: "Min Heap",
}

NODE_STATUS_STYLES = {
    EntityStatus.DEFAULT: "default_node",
    EntityStatus.PENDING: "pending_node",
    EntityStatus.FINALIZED: "finalized_node",
}

CELL_STATUS_STYLES = {
    EntityStatus.DEFAULT: "default_cell",
    EntityStatus.PENDING: "pending_cell",
    EntityStatus.FINALIZED: "finalized_cell",
}


def _num(value):
    return f"{value:.3f}"


def _pt(x, y):
    """Canvas pixel position -> TikZ coordinate (y axis flipped)."""
    return f"({_num(x / PX_PER_CM)}, {_num(-y / PX_PER_CM)})"


def escape_latex(text):
    """Escape LaTeX special characters to avoid compilation errors."""
    mapping = {
        '&': r'\&', '%': r'\%', '$': r'\$', '#': r'\#', '_': r'\_',
        '{': r'\{', '}': r'\}', '~': r'\textasciitilde{}', '^': r'\textasciicircum{}',
        '\\': r'\textbackslash{}',
    }
    return ''.join(mapping.get(ch, ch) for ch in str(text))


class FrameRenderer:
    def __init__(self, styles=None):
        self.styles = merge_styles(DEFAULT_STYLES, styles or {})
        self._preamble = self._generate_tex_preamble()

    # =================================================================
    # Style resolution
    # =================================================================

    def tree_node_style(self, tracker, node):
        if node.key == tracker.state.focus:
            return "focus_node"
        if abs(node.balance) > 1:
            return "unbalanced_node"
        return NODE_STATUS_STYLES[tracker.status_of(node.key)]

    def graph_node_style(self, tracker, vertex):
        status = tracker.status_of(vertex)
        # Focus overrides pending, never finalized
        if status is not EntityStatus.FINALIZED and vertex == tracker.state.focus:
            return "focus_node"
        return NODE_STATUS_STYLES[status]

    def heap_node_style(self, tracker, index):
        if index == tracker.state.focus:
            return "focus_node"
        return NODE_STATUS_STYLES[tracker.status_of(index)]

    def hash_cell_style(self, tracker, entity):
        status = tracker.status_of(entity)
        if status is EntityStatus.FINALIZED:
            return "finalized_cell"
        if entity == tracker.state.focus:
            return "focus_cell"
        return CELL_STATUS_STYLES[status]

    # =================================================================
    # Frame
    # =================================================================

    def render(self, tracker, layout, width, height):
        """Render one frame of the structure tracked by tracker."""
        kind = tracker.kind
        pic = [f"\\useasboundingbox {_pt(0, -50)} rectangle {_pt(width, height + 60)};"]

        # 1. Title and current step caption
        pic.append(f"\\node[font=\\large\\bfseries, anchor=north west] at {_pt(5, -40)} {{{TITLES[kind]}}};")
        if tracker.state.caption:
            pic.append(
                f"\\node[font=\\small\\itshape, text=txtcaption, anchor=north west] at {_pt(5, -15)} "
                f"{{{escape_latex(tracker.state.caption)}}};"
            )

        # 2. Structure view
        if layout.empty:
            pic.append(
                f"\\node[font=\\Large, text=txtcaption] at {_pt(width / 2, height / 2)} "
                f"{{{EMPTY_CAPTIONS[kind]}}};"
            )
        else:
            view_map = {
                StructureKind.TREE: self._render_tree_view,
                StructureKind.GRAPH: self._render_graph_view,
                StructureKind.HASH: self._render_hash_view,
                StructureKind.HEAP: self._render_heap_view,
            }
            pic.extend(view_map[kind](tracker, layout, width, height))

        # 3. Auxiliary container line
        if tracker.state.aux_line:
            pic.append(
                f"\\node[font=\\ttfamily\\small, text=txtauxline, fill=fillauxline, anchor=south west, "
                f"rounded corners=2pt] at {_pt(5, height + 55)} {{{escape_latex(tracker.state.aux_line)}}};"
            )

        body = (
            "\\begin{tikzpicture}[x=1cm, y=1cm]\n"
            + "\n".join(pic)
            + "\n\\end{tikzpicture}"
        )
        return f"{self._preamble}\n\\begin{{document}}\n{body}\n\\end{{document}}\n"

    # --- Tree ---

    def _render_tree_view(self, tracker, layout, width, height):
        pic = []
        size = _num(2 * layout.node_radius / PX_PER_CM)
        nodes = [node for node, _ in tracker.snapshot.in_order()]
        for node in nodes:
            pos = layout[node.key]
            style = self.tree_node_style(tracker, node)
            pic.append(
                f"\\node[element_{style}, minimum size={size}cm, font=\\scriptsize] (t{self._id(node.key)}) "
                f"at {_pt(pos.x, pos.y)} {{{node.key}}};"
            )
            pic.append(f"\\node[font=\\tiny, anchor=east] at {_pt(pos.x - layout.node_radius - 2, pos.y)} {{H: {node.height}}};")
            pic.append(f"\\node[font=\\tiny, anchor=west] at {_pt(pos.x + layout.node_radius + 2, pos.y)} {{BF: {node.balance}}};")
        for node in nodes:
            for child in (node.left, node.right):
                if child is not None:
                    pic.append(f"\\draw[edge_tree_edge] (t{self._id(node.key)}) -- (t{self._id(child.key)});")
        if tracker.state.rotation:
            pic.append(
                f"\\node[font=\\small\\bfseries, text=svlaccent, anchor=south east] at {_pt(width - 5, height)} "
                f"{{Rotation: {tracker.state.rotation}}};"
            )
        return pic

    @staticmethod
    def _id(key):
        # TikZ node names cannot start with '-'
        return f"m{-key}" if key < 0 else str(key)

    # --- Graph ---

    def _render_graph_view(self, tracker, layout, width, height):
        pic = []
        snapshot = tracker.snapshot
        size = _num(2 * layout.node_radius / PX_PER_CM)
        metric_label = tracker.metric_label
        metrics = tracker.state.metrics

        for v in snapshot.vertices():
            pos = layout[v]
            style = self.graph_node_style(tracker, v)
            label = f"V: {v}"
            if metric_label and metrics is not None and v < len(metrics):
                label += f"\\\\{metric_label}: {format_metric(metrics[v])}"
            pic.append(
                f"\\node[element_{style}, minimum size={size}cm, font=\\scriptsize\\bfseries] (v{v}) "
                f"at {_pt(pos.x, pos.y)} {{{label}}};"
            )

        pairs = {(e.source, e.target) for e in snapshot.edges}
        for edge in snapshot.edges:
            finalized = tracker.is_edge_finalized(edge.source, edge.target)
            edge_style = "edge_finalized_edge" if finalized else "edge_normal_edge"
            text_style = "txtfinalweightlabel" if finalized else "txtweightlabel"
            if edge.is_loop:
                pos = layout[edge.source]
                loop = layout.loop_offset
                pic.append(
                    f"\\draw[{edge_style}] {_pt(pos.x, pos.y - loop)} circle ({_num(loop / PX_PER_CM)});"
                )
                pic.append(
                    f"\\node[font=\\small\\bfseries, text={text_style}] at {_pt(pos.x, pos.y - 2 * loop - 8)} {{{edge.weight}}};"
                )
                continue
            # Opposite edges bend apart so both stay visible
            bend = "bend left=12" if (edge.target, edge.source) in pairs else "bend left=0"
            pic.append(
                f"\\draw[{edge_style}, -{{Stealth}}] (v{edge.source}) to[{bend}] "
                f"node[midway, fill=white, inner sep=1pt, font=\\small\\bfseries, text={text_style}] {{{edge.weight}}} "
                f"(v{edge.target});"
            )
        return pic

    # --- Heap ---

    def _render_heap_view(self, tracker, layout, width, height):
        pic = []
        values = tracker.display_values()
        size = _num(2 * layout.node_radius / PX_PER_CM)
        for i, value in enumerate(values):
            if i not in layout:
                continue
            pos = layout[i]
            style = self.heap_node_style(tracker, i)
            pic.append(
                f"\\node[element_{style}, minimum size={size}cm, font=\\scriptsize] (h{i}) at {_pt(pos.x, pos.y)} {{{value}}};"
            )
        for i in range(1, len(values)):
            if i in layout:
                pic.append(f"\\draw[edge_tree_edge] (h{HeapSnapshot.parent(i)}) -- (h{i});")

        # Array row under the tree
        cell = width / max(len(values), 1)
        cell = min(cell, 60)
        for i, value in enumerate(values):
            x = 5 + i * cell
            style = "focus_cell" if i == tracker.state.focus else CELL_STATUS_STYLES[tracker.status_of(i)]
            pic.append(
                f"\\node[cell_{style}, minimum width={_num(cell / PX_PER_CM)}cm, anchor=north west, font=\\tiny] "
                f"at {_pt(x, height + 5)} {{[{i + 1}] {value}}};"
            )
        return pic

    # --- Hash ---

    def _render_hash_view(self, tracker, layout, width, height):
        pic = []
        for bucket in tracker.snapshot.buckets:
            label = layout.labels[bucket.index]
            style = "focus_bucket" if bucket.index == tracker.state.focus_bucket else "bucket_label"
            pic.append(
                f"\\node[cell_{style}, anchor=west, minimum width=1cm, font=\\small] (b{bucket.index}) "
                f"at {_pt(label.x, label.y)} {{[{bucket.index}]}};"
            )
            previous = f"b{bucket.index}"
            for position, key in enumerate(bucket.chain):
                pos = layout[(bucket.index, position)]
                name = f"c{bucket.index}x{position}"
                style = self.hash_cell_style(tracker, (bucket.index, position))
                pic.append(
                    f"\\node[cell_{style}, anchor=west, minimum width=1cm, font=\\small] ({name}) "
                    f"at {_pt(pos.x, pos.y)} {{{key}}};"
                )
                pic.append(f"\\draw[edge_chain_link, -{{Stealth}}] ({previous}) -- ({name});")
                previous = name
        return pic

    # =================================================================
    # Preamble
    # =================================================================

    def _generate_tex_preamble(self):
        header = "\\documentclass[tikz, border=10pt]{standalone}\n\\usepackage{xcolor}\n\\usepackage{tikz}\n\\usetikzlibrary{arrows.meta, positioning, shapes.misc}\n"
        color_map = {}

        def map_color(raw):
            if not raw:
                return "black"

            # Hex colors #RRGGBB
            if isinstance(raw, str) and raw.startswith("#"):
                hex_code = raw[1:].upper()
                if hex_code not in color_map:
                    color_map[hex_code] = f"svlcolor{len(color_map)}"
                return color_map[hex_code]

            # rgba(r,g,b,a) colors
            if isinstance(raw, str) and raw.startswith("rgba("):
                try:
                    rgba = raw.replace("rgba(", "").replace(")", "").split(",")
                    r, g, b = int(rgba[0].strip()), int(rgba[1].strip()), int(rgba[2].strip())
                    opacity = float(rgba[3].strip())
                    hex_code = f"{r:02X}{g:02X}{b:02X}"
                    if hex_code not in color_map:
                        color_map[hex_code] = f"svlcolor{len(color_map)}"
                    return f"{color_map[hex_code]}!{int(opacity * 100)}"
                except (IndexError, ValueError):
                    logger.warning(f"Warning: Cannot parse RGBA color '{raw}', using black instead")
                    return "black"

            return "black"

        styles_def = []
        for key, st in self.styles.get("elementStyles", {}).items():
            fill, stroke, lw = map_color(st.get("fill", "white")), map_color(st.get("stroke", "black")), st.get("strokeWidth", 1)
            if "node" in key:
                styles_def.append(f"element_{key}/.style={{circle, draw={stroke}, fill={fill}, line width={lw}pt, align=center, inner sep=1pt}}")
            else:
                styles_def.append(f"cell_{key}/.style={{draw={stroke}, fill={fill}, line width={lw}pt, rounded corners=1pt, minimum height=0.6cm}}")

        for key, st in self.styles.get("edgeStyles", {}).items():
            color, lw = map_color(st.get("color", "black")), st.get("strokeWidth", 1.5)
            styles_def.append(f"edge_{key}/.style={{line width={lw}pt, color={color}}}")

        text_colors = []
        # Color names without '_' (txtcaption, fillauxline, ...)
        for key, st in self.styles.get("textStyles", {}).items():
            name = key.replace("_", "")
            text_colors.append(f"\\colorlet{{txt{name}}}{{{map_color(st.get('color', '#000000'))}}}")
            if "fill" in st:
                text_colors.append(f"\\colorlet{{fill{name}}}{{{map_color(st['fill'])}}}")
        text_colors.append(f"\\colorlet{{svlaccent}}{{{map_color('#D32F2F')}}}")

        color_defs = "\n".join([f"\\definecolor{{{name}}}{{HTML}}{{{hex_code}}}" for hex_code, name in color_map.items()])
        tikz_set = "\\tikzset{\n  " + ",\n  ".join(styles_def) + "\n}"
        return f"{header}\n{color_defs}\n" + "\n".join(text_colors) + f"\n{tikz_set}"


class FrameRecorder:
    """Writes every rendered frame as output_dir/<structure>/frame_NNNN.tex."""

    def __init__(self, output_dir):
        self.output_dir = Path(output_dir)
        self.counts = {}

    def __call__(self, kind, frame):
        index = self.counts.get(kind, 0)
        self.counts[kind] = index + 1
        target_dir = self.output_dir / kind.value
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / f"frame_{index:04d}.tex"
        path.write_text(frame, encoding="utf-8")
        return path

    @property
    def total(self):
        return sum(self.counts.values())
