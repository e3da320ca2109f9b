"""
graph.py — Fixture Graph Container
===================================
The node/edge container behind the two non-linear visualizers.
Layouts write positions into it; the renderer reads them.

Responsibilities:
  1. Building nodes & edges                 (add / create)
  2. Adjacency queries                      (neighbours, children, roots)
  3. Factory methods                        (from_hierarchy, from_links)
  4. Serialisation                          (to_dict)

Design decisions:
  - Nodes & edges stored in plain dicts keyed by id, insertion-ordered,
    so render order is stable.
  - A separate adjacency dict `_adj[node_id] → [(neighbour_id, edge_id)]`
    is maintained incrementally so neighbour queries are O(degree).
"""

from typing import Dict, List, Tuple, Optional, Any, Iterable

from graph.node import Node
from graph.edge import Edge


class Graph:
    """
    Attributes:
        nodes      : {node_id: Node}
        edges      : {edge_id: Edge}
        directed   : bool – graph-level directedness
        _adj       : {node_id: [(neighbour_id, edge_id), …]}
    """

    def __init__(self, directed: bool = False):
        self.nodes:    Dict[str, Node] = {}
        self.edges:    Dict[str, Edge] = {}
        self.directed: bool           = directed
        self._adj:     Dict[str, List[Tuple[str, str]]] = {}

    # ==================================================================
    # NODE CRUD
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        self.nodes[node.id] = node
        self._adj.setdefault(node.id, [])
        return node

    def create_node(self, x: float = 0.0, y: float = 0.0,
                    label: Optional[str] = None, node_id: Optional[str] = None) -> Node:
        """Convenience: create + add in one call."""
        return self.add_node(Node(x=x, y=y, label=label, node_id=node_id))

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        if edge.source not in self.nodes or edge.target not in self.nodes:
            raise KeyError(f"edge {edge!r} references an unknown node")
        self.edges[edge.id] = edge
        self._adj[edge.source].append((edge.target, edge.id))
        if not edge.directed:
            self._adj[edge.target].append((edge.source, edge.id))
        return edge

    def create_edge(self, source: str, target: str, edge_id: Optional[str] = None) -> Edge:
        return self.add_edge(Edge(source=source, target=target, directed=self.directed, edge_id=edge_id))

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: str) -> List[str]:
        return [nbr for nbr, _ in self._adj.get(node_id, [])]

    def children(self, node_id: str) -> List[str]:
        """Outgoing neighbours in insertion order (a tree's child list)."""
        return [e.target for e in self.edges.values() if e.source == node_id]

    def roots(self) -> List[str]:
        """Nodes with no incoming edge (directed graphs only)."""
        targets = {e.target for e in self.edges.values()}
        return [nid for nid in self.nodes if nid not in targets]

    def degree(self, node_id: str) -> int:
        return len(self._adj.get(node_id, []))

    def positions(self) -> Dict[str, Tuple[float, float]]:
        return {nid: (n.x, n.y) for nid, n in self.nodes.items()}

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "directed": self.directed,
            "nodes":    [n.to_dict() for n in self.nodes.values()],
            "edges":    [e.to_dict() for e in self.edges.values()],
        }

    # ==================================================================
    # FACTORIES
    # ==================================================================
    @classmethod
    def from_hierarchy(cls, data: Dict[str, Any]) -> "Graph":
        """
        Build a directed tree from nested {"name": …, "children": […]} dicts.
        Node ids are the names, so names must be unique.  Depth is recorded
        on each node for the hierarchical layout.
        """
        g = cls(directed=True)

        def walk(item: Dict[str, Any], parent: Optional[str], depth: int) -> None:
            name = item["name"]
            if name in g.nodes:
                raise ValueError(f"duplicate tree node name: {name!r}")
            node = g.create_node(label=name, node_id=name)
            node.depth = depth
            if parent is not None:
                g.create_edge(parent, name, edge_id=f"{parent}->{name}")
            for child in item.get("children", []):
                walk(child, name, depth + 1)

        walk(data, None, 0)
        return g

    @classmethod
    def from_links(cls, node_ids: Iterable[str], links: Iterable[Tuple[str, str]]) -> "Graph":
        """Undirected graph from a vertex list and (source, target) pairs."""
        g = cls(directed=False)
        for nid in node_ids:
            g.create_node(label=nid, node_id=nid)
        for src, tgt in links:
            g.create_edge(src, tgt, edge_id=f"{src}-{tgt}")
        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    def __repr__(self) -> str:
        kind = "directed" if self.directed else "undirected"
        return f"Graph({kind}, nodes={self.node_count()}, edges={self.edge_count()})"
