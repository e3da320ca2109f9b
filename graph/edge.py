"""
edge.py — Fixture Edge
======================
Connects two nodes.  `source` and `target` are node-id strings, not Node
references, so edges stay serialisable.

For the tree fixture edges are directed parent → child; the graph fixture
is undirected.
"""

from typing import Optional
import uuid


class Edge:
    """
    Attributes:
        id       : Unique identifier.
        source   : ID of the tail node (parent, for trees).
        target   : ID of the head node.
        directed : If False, traversal works in both directions.
    """

    __slots__ = ("id", "source", "target", "directed")

    def __init__(
        self,
        source: str,
        target: str,
        directed: bool = False,
        edge_id: Optional[str] = None,
    ):
        self.id:       str  = edge_id or str(uuid.uuid4())[:8]
        self.source:   str  = source
        self.target:   str  = target
        self.directed: bool = directed

    def to_dict(self) -> dict:
        return {
            "id":       self.id,
            "source":   self.source,
            "target":   self.target,
            "directed": self.directed,
        }

    def __repr__(self) -> str:
        arrow = "→" if self.directed else "—"
        return f"Edge({self.source} {arrow} {self.target})"
