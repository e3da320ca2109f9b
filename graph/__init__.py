"""
graph/
-----
Fixture data layer for the non-linear visualizers.  Public API:

    from graph import Graph, Node, Edge
    from graph import tree_layout, force_layout, run_force_layout
"""

from graph.node   import Node
from graph.edge   import Edge
from graph.graph  import Graph
from graph.layout import (
    tree_layout,
    force_layout,
    run_force_layout,
    ForceConfig,
    LayoutTick,
    CANVAS_W,
    CANVAS_H,
)

__all__ = [
    "Node",
    "Edge",
    "Graph",
    "tree_layout",
    "force_layout",
    "run_force_layout",
    "ForceConfig",
    "LayoutTick",
    "CANVAS_W",
    "CANVAS_H",
]
