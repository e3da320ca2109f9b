"""
layout.py — Fixture Layouts
============================
Two position assigners for the non-linear visualizers.

tree_layout
    Hierarchical: parent above children, depth → y.  Leaves are placed
    left to right one unit apart (two units between cousins), every
    parent is centred over its first and last child, then the whole
    thing is scaled to the canvas box.

force_layout
    Iterative force-directed placement.  A generator, like the
    algorithm runners it sits next to: each tick applies

        • link springs      – pull linked nodes toward `link_distance`
        • many-body charge  – pairwise repulsion (negative strength)
        • centring          – shift the centroid onto the canvas centre

    then integrates velocities with decay and yields a LayoutTick.
    Alpha cools geometrically; the run stops once alpha < alpha_min
    or the tick budget is spent.  Output is approximate by nature.
"""

import math
import random
from dataclasses import dataclass, field
from typing import Dict, Generator, List, Optional, Tuple

from graph.graph import Graph

# canvas box shared by both layouts
CANVAS_W = 600
CANVAS_H = 300
TREE_MARGIN = 50

INITIAL_RADIUS = 10.0
INITIAL_ANGLE = math.pi * (3 - math.sqrt(5))


# ---------------------------------------------------------------------------
# Tree layout
# ---------------------------------------------------------------------------
def tree_layout(
    graph: Graph,
    root: Optional[str] = None,
    width: float = CANVAS_W - 2 * TREE_MARGIN,
    height: float = CANVAS_H - 2 * TREE_MARGIN,
    offset: Tuple[float, float] = (TREE_MARGIN, TREE_MARGIN),
) -> None:
    """Assign x/y to every node reachable from `root` (first root by default)."""
    if not graph.nodes:
        return
    if root is None:
        roots = graph.roots()
        if not roots:
            raise ValueError("tree layout needs a graph with a root")
        root = roots[0]

    raw_x: Dict[str, float] = {}
    depth: Dict[str, int] = {}
    last_leaf: List[Optional[Tuple[str, float]]] = [None]   # (parent, x) of previous leaf

    def place(nid: str, parent: Optional[str], d: int) -> float:
        depth[nid] = d
        kids = graph.children(nid)
        if not kids:
            prev = last_leaf[0]
            if prev is None:
                x = 0.0
            else:
                gap = 1.0 if prev[0] == parent else 2.0
                x = prev[1] + gap
            last_leaf[0] = (parent, x)
        else:
            xs = [place(k, nid, d + 1) for k in kids]
            x = (xs[0] + xs[-1]) / 2
        raw_x[nid] = x
        return x

    place(root, None, 0)

    lo, hi = min(raw_x.values()), max(raw_x.values())
    span = hi - lo
    max_depth = max(depth.values())
    ox, oy = offset
    for nid, x in raw_x.items():
        node = graph.nodes[nid]
        nx = width / 2 if span == 0 else (x - lo) / span * width
        ny = 0.0 if max_depth == 0 else depth[nid] / max_depth * height
        node.depth = depth[nid]
        node.move_to(ox + nx, oy + ny)


# ---------------------------------------------------------------------------
# Force layout
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class LayoutTick:
    tick:      int
    alpha:     float
    positions: Dict[str, Tuple[float, float]] = field(default_factory=dict)


@dataclass
class ForceConfig:
    link_distance:   float = 100.0
    charge_strength: float = -300.0
    center:          Tuple[float, float] = (CANVAS_W / 2, CANVAS_H / 2)
    alpha:           float = 1.0
    alpha_min:       float = 0.001
    alpha_decay:     float = 1 - 0.001 ** (1 / 300)
    velocity_decay:  float = 0.4
    max_ticks:       int   = 300


def _jiggle(rng: random.Random) -> float:
    return (rng.random() - 0.5) * 1e-6


def _seed_positions(graph: Graph) -> None:
    """Phyllotaxis spiral around the origin; the centring force moves it."""
    for i, node in enumerate(graph.nodes.values()):
        r = INITIAL_RADIUS * math.sqrt(0.5 + i)
        a = i * INITIAL_ANGLE
        node.move_to(r * math.cos(a), r * math.sin(a))
        node.stop()


def _apply_links(graph: Graph, alpha: float, cfg: ForceConfig, rng: random.Random) -> None:
    for edge in graph.edges.values():
        s, t = graph.nodes[edge.source], graph.nodes[edge.target]
        ds, dt = graph.degree(s.id), graph.degree(t.id)
        strength = 1.0 / min(ds, dt)
        bias = ds / (ds + dt)
        x = (t.x + t.vx) - (s.x + s.vx) or _jiggle(rng)
        y = (t.y + t.vy) - (s.y + s.vy) or _jiggle(rng)
        dist = math.sqrt(x * x + y * y)
        k = (dist - cfg.link_distance) / dist * alpha * strength
        x, y = x * k, y * k
        t.vx -= x * bias
        t.vy -= y * bias
        s.vx += x * (1 - bias)
        s.vy += y * (1 - bias)


def _apply_charge(graph: Graph, alpha: float, cfg: ForceConfig, rng: random.Random) -> None:
    nodes = list(graph.nodes.values())
    for node in nodes:
        for other in nodes:
            if other is node:
                continue
            x = other.x - node.x or _jiggle(rng)
            y = other.y - node.y or _jiggle(rng)
            l2 = max(x * x + y * y, 1.0)
            w = cfg.charge_strength * alpha / l2
            node.vx += x * w
            node.vy += y * w


def _apply_center(graph: Graph, cfg: ForceConfig) -> None:
    n = graph.node_count()
    sx = sum(node.x for node in graph.nodes.values()) / n - cfg.center[0]
    sy = sum(node.y for node in graph.nodes.values()) / n - cfg.center[1]
    for node in graph.nodes.values():
        node.move_to(node.x - sx, node.y - sy)


def force_layout(
    graph: Graph,
    config: Optional[ForceConfig] = None,
    rng: Optional[random.Random] = None,
) -> Generator[LayoutTick, None, None]:
    """Yield one LayoutTick per simulation step until cooled or out of budget."""
    cfg = config or ForceConfig()
    rng = rng or random.Random()
    if not graph.nodes:
        return

    _seed_positions(graph)
    alpha = cfg.alpha
    tick = 0
    while alpha >= cfg.alpha_min and tick < cfg.max_ticks:
        alpha += (0.0 - alpha) * cfg.alpha_decay
        _apply_links(graph, alpha, cfg, rng)
        _apply_charge(graph, alpha, cfg, rng)
        for node in graph.nodes.values():
            node.vx *= 1 - cfg.velocity_decay
            node.vy *= 1 - cfg.velocity_decay
            node.move_to(node.x + node.vx, node.y + node.vy)
        _apply_center(graph, cfg)
        tick += 1
        yield LayoutTick(tick=tick, alpha=alpha, positions=graph.positions())


def run_force_layout(
    graph: Graph,
    config: Optional[ForceConfig] = None,
    rng: Optional[random.Random] = None,
) -> int:
    """Exhaust force_layout; returns the number of ticks taken."""
    ticks = 0
    for ticks, _ in enumerate(force_layout(graph, config, rng), start=1):
        pass
    return ticks
