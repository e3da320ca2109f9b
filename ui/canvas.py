"""
canvas.py — SVG Visualizer Renderer
====================================
Pure rendering: controller state → SVG string.

One renderer per StructureKind:
  • array        – row of cells with [index] labels underneath
  • stack        – open-topped bucket, top of stack drawn first
  • queue        – row between "Front" and "Rear" markers
  • linked list  – value/NEXT nodes joined by arrows, ending in NULL
  • tree         – laid-out hierarchy, vertical curved links
  • graph        – force-laid-out vertices and straight edges

Design decisions:
  - NO mutation.  Each renderer reads what the controller exposes and
    returns a string.
  - Dispatch is a dict keyed on StructureKind, one entry per kind.
  - Linear canvases grow horizontally with the element count so a long
    array never clips.
"""

import math
from typing import Callable, Dict, Sequence

from graph import Graph, Node, Edge, CANVAS_W, CANVAS_H
from structures import StructureKind


# ---------------------------------------------------------------------------
# Visual Config
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = CANVAS_W
    height: int = CANVAS_H
    bg:     str = "#ffffff"

    ink:        str = "#000000"
    paper:      str = "#ffffff"
    muted:      str = "#9ca3af"
    faint:      str = "#e5e7eb"
    font:       str = "'Inter', -apple-system, sans-serif"
    mono:       str = "'JetBrains Mono', monospace"

    # linear cells
    cell:       int = 64
    cell_gap:   int = 8
    cell_radius: int = 8
    margin:     int = 40

    # stack
    stack_item_w: int = 96
    stack_item_h: int = 48

    # linked list
    ll_node_w:  int = 72
    ll_node_h:  int = 60
    ll_link:    int = 48

    # fixture nodes
    node_radius: int = 20
    stroke_width: int = 2


CONFIG = CanvasConfig()


def _svg_open(width: float, height: float, config: CanvasConfig) -> str:
    return (
        f'<svg width="{width}" height="{height}" viewBox="0 0 {width} {height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">'
    )


def _text(x: float, y: float, label, config: CanvasConfig, size: int = 16,
          weight: str = "700", fill: str = None, family: str = None) -> str:
    return (
        f'<text x="{x}" y="{y}" text-anchor="middle" dominant-baseline="central" '
        f'font-size="{size}" font-family="{family or config.font}" font-weight="{weight}" '
        f'fill="{fill or config.ink}">{label}</text>'
    )


# ---------------------------------------------------------------------------
# Array
# ---------------------------------------------------------------------------
def render_array(values: Sequence[int], config: CanvasConfig = CONFIG) -> str:
    step = config.cell + config.cell_gap
    width = max(config.width, len(values) * step + 2 * config.margin)
    height = config.height
    x0 = (width - (len(values) * step - config.cell_gap)) / 2
    y0 = height / 2 - config.cell / 2

    parts = [_svg_open(width, height, config), '<g class="array">']
    for i, val in enumerate(values):
        x = x0 + i * step
        parts.append(
            f'<g class="cell" data-index="{i}">'
            f'<rect x="{x}" y="{y0}" width="{config.cell}" height="{config.cell}" rx="{config.cell_radius}" '
            f'fill="{config.paper}" stroke="{config.ink}" stroke-width="{config.stroke_width}"/>'
            + _text(x + config.cell / 2, y0 + config.cell / 2, val, config, size=20)
            + _text(x + config.cell / 2, y0 + config.cell + 18, f"[{i}]", config,
                    size=12, weight="400", fill=config.muted, family=config.mono)
            + '</g>'
        )
    parts.append('</g></svg>')
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Stack
# ---------------------------------------------------------------------------
def render_stack(top_first: Sequence[int], config: CanvasConfig = CONFIG) -> str:
    """`top_first` is already in display order: index 0 is the top."""
    gap = 8
    pad = 8
    n = len(top_first)
    bucket_w = config.stack_item_w + 2 * pad
    bucket_h = max(n * (config.stack_item_h + gap) + pad + 24, 120)
    width = config.width
    height = max(config.height, bucket_h + 2 * config.margin)
    bx = (width - bucket_w) / 2
    by = height - config.margin - bucket_h

    parts = [_svg_open(width, height, config), '<g class="stack">']
    # open-topped bucket: left, bottom, right
    parts.append(
        f'<path d="M{bx},{by} L{bx},{by + bucket_h} L{bx + bucket_w},{by + bucket_h} L{bx + bucket_w},{by}" '
        f'fill="none" stroke="{config.ink}" stroke-width="4"/>'
    )
    bottom = by + bucket_h - pad
    for i, val in enumerate(top_first):
        # draw from the bottom up: the last display item sits on the floor
        slot = n - 1 - i
        y = bottom - (slot + 1) * config.stack_item_h - slot * gap
        x = bx + pad
        cls = "item top" if i == 0 else "item"
        parts.append(
            f'<g class="{cls}">'
            f'<rect x="{x}" y="{y}" width="{config.stack_item_w}" height="{config.stack_item_h}" rx="6" '
            f'fill="{config.ink}"/>'
            + _text(x + config.stack_item_w / 2, y + config.stack_item_h / 2, val, config, fill=config.paper)
            + '</g>'
        )
    parts.append('</g></svg>')
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Queue
# ---------------------------------------------------------------------------
def render_queue(values: Sequence[int], config: CanvasConfig = CONFIG) -> str:
    label_w = 70
    step = config.cell + config.cell_gap
    row_w = max(len(values) * step - config.cell_gap, 0)
    width = max(config.width, row_w + 2 * label_w + 2 * config.margin)
    height = config.height
    x0 = (width - row_w) / 2
    y0 = height / 2 - config.cell / 2

    parts = [_svg_open(width, height, config), '<g class="queue">']
    parts.append(_text(x0 - label_w / 2 - 8, height / 2, "FRONT", config, size=11, fill=config.muted))
    parts.append(_text(x0 + row_w + label_w / 2 + 8, height / 2, "REAR", config, size=11, fill=config.muted))
    # lane rails
    for y in (y0 - 16, y0 + config.cell + 16):
        parts.append(
            f'<line x1="{x0 - 16}" y1="{y}" x2="{x0 + row_w + 16}" y2="{y}" '
            f'stroke="{config.faint}" stroke-width="2"/>'
        )
    for i, val in enumerate(values):
        x = x0 + i * step
        parts.append(
            f'<g class="cell" data-position="{i}">'
            f'<rect x="{x}" y="{y0}" width="{config.cell}" height="{config.cell}" rx="{config.cell_radius}" '
            f'fill="{config.paper}" stroke="{config.ink}" stroke-width="{config.stroke_width}"/>'
            + _text(x + config.cell / 2, y0 + config.cell / 2, val, config)
            + '</g>'
        )
    parts.append('</g></svg>')
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Linked List
# ---------------------------------------------------------------------------
def render_linked_list(values: Sequence[int], config: CanvasConfig = CONFIG) -> str:
    step = config.ll_node_w + config.ll_link
    row_w = len(values) * step
    width = max(config.width, row_w + 2 * config.margin)
    height = config.height
    x0 = (width - row_w) / 2
    y0 = height / 2 - config.ll_node_h / 2
    head_h = config.ll_node_h * 0.6
    mid_y = y0 + config.ll_node_h / 2

    parts = [_svg_open(width, height, config), '<g class="linked-list">']
    for i, val in enumerate(values):
        x = x0 + i * step
        parts.append(
            f'<g class="node" data-position="{i}">'
            f'<rect x="{x}" y="{y0}" width="{config.ll_node_w}" height="{config.ll_node_h}" rx="8" '
            f'fill="{config.paper}" stroke="{config.ink}" stroke-width="{config.stroke_width}"/>'
            f'<rect x="{x}" y="{y0}" width="{config.ll_node_w}" height="{head_h}" rx="8" fill="{config.ink}"/>'
            + _text(x + config.ll_node_w / 2, y0 + head_h / 2, val, config, fill=config.paper)
            + _text(x + config.ll_node_w / 2, y0 + head_h + (config.ll_node_h - head_h) / 2, "NEXT",
                    config, size=10, weight="400", fill=config.muted, family=config.mono)
            + '</g>'
        )
        lx1 = x + config.ll_node_w
        lx2 = lx1 + config.ll_link
        if i < len(values) - 1:
            parts.append(
                f'<line class="link" x1="{lx1}" y1="{mid_y}" x2="{lx2 - 6}" y2="{mid_y}" '
                f'stroke="{config.ink}" stroke-width="2"/>'
                f'<polygon points="{lx2},{mid_y} {lx2 - 8},{mid_y - 5} {lx2 - 8},{mid_y + 5}" fill="{config.ink}"/>'
            )
        else:
            parts.append(
                f'<line class="null" x1="{lx1}" y1="{mid_y}" x2="{lx2}" y2="{mid_y}" '
                f'stroke="{config.faint}" stroke-width="2"/>'
                + _text((lx1 + lx2) / 2, mid_y - 10, "NULL", config, size=10, fill=config.muted)
            )
    parts.append('</g></svg>')
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Tree & Graph fixtures
# ---------------------------------------------------------------------------
def _render_node(node: Node, config: CanvasConfig, size: int = 10) -> str:
    return "\n".join([
        f'<g class="node" data-id="{node.id}" transform="translate({node.x:.2f},{node.y:.2f})">',
        f'  <circle r="{config.node_radius}" fill="{config.paper}" stroke="{config.ink}" '
        f'stroke-width="{config.stroke_width}"/>',
        "  " + _text(0, 0, node.label, config, size=size),
        '</g>',
    ])


def _render_tree_link(graph: Graph, edge: Edge, config: CanvasConfig) -> str:
    s, t = graph.nodes[edge.source], graph.nodes[edge.target]
    my = (s.y + t.y) / 2
    return (
        f'<path class="link" d="M{s.x:.2f},{s.y:.2f}C{s.x:.2f},{my:.2f} {t.x:.2f},{my:.2f} {t.x:.2f},{t.y:.2f}" '
        f'fill="none" stroke="{config.ink}" stroke-width="{config.stroke_width}"/>'
    )


def _render_graph_edge(graph: Graph, edge: Edge, config: CanvasConfig) -> str:
    s, t = graph.nodes[edge.source], graph.nodes[edge.target]
    if math.hypot(t.x - s.x, t.y - s.y) < 0.001:
        return ""  # degenerate edge
    return (
        f'<line class="edge" data-id="{edge.id}" x1="{s.x:.2f}" y1="{s.y:.2f}" x2="{t.x:.2f}" y2="{t.y:.2f}" '
        f'stroke="{config.ink}" stroke-width="{config.stroke_width}"/>'
    )


def render_tree(graph: Graph, config: CanvasConfig = CONFIG) -> str:
    parts = [_svg_open(config.width, config.height, config), '<g class="tree">']
    # links first so nodes sit on top
    parts.extend(_render_tree_link(graph, e, config) for e in graph.edges.values())
    parts.extend(_render_node(n, config) for n in graph.nodes.values())
    parts.append('</g></svg>')
    return "\n".join(parts)


def render_graph(graph: Graph, config: CanvasConfig = CONFIG) -> str:
    parts = [_svg_open(config.width, config.height, config), '<g class="graph">']
    parts.extend(_render_graph_edge(graph, e, config) for e in graph.edges.values())
    parts.extend(_render_node(n, config, size=14) for n in graph.nodes.values())
    parts.append('</g></svg>')
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------
RENDERERS: Dict[StructureKind, Callable] = {
    StructureKind.ARRAY:       lambda c, cfg: render_array(c.display(), cfg),
    StructureKind.STACK:       lambda c, cfg: render_stack(c.display(), cfg),
    StructureKind.QUEUE:       lambda c, cfg: render_queue(c.display(), cfg),
    StructureKind.LINKED_LIST: lambda c, cfg: render_linked_list(c.display(), cfg),
    StructureKind.TREE:        lambda c, cfg: render_tree(c.snapshot(), cfg),
    StructureKind.GRAPH:       lambda c, cfg: render_graph(c.snapshot(), cfg),
}

def render_visualizer(controller, config: CanvasConfig = CONFIG) -> str:
    """SVG for whatever controller the shell currently holds."""
    return RENDERERS[controller.kind](controller, config)
