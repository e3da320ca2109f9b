from typing import Optional, Dict, Any
import uuid


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
class Node:
    """
    Immutable identity (id, label), mutable position and velocity.

    Attributes:
        id       : Unique identifier (uuid string by default, or user-supplied).
        label    : Human-readable name shown on the canvas.
        x, y     : Canvas coordinates in pixels.
        vx, vy   : Velocity, used by the force layout only.
        depth    : Distance from the root for hierarchical fixtures (0 otherwise).
    """

    __slots__ = ("id", "label", "x", "y", "vx", "vy", "depth")

    def __init__(
        self,
        x: float = 0.0,
        y: float = 0.0,
        label: Optional[str] = None,
        node_id: Optional[str] = None,
    ):
        self.id: str        = node_id or str(uuid.uuid4())[:8]
        self.label: str     = label or self.id
        self.x: float       = x
        self.y: float       = y
        self.vx: float      = 0.0
        self.vy: float      = 0.0
        self.depth: int     = 0

    def move_to(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def stop(self) -> None:
        """Zero velocity before a fresh layout run."""
        self.vx = 0.0
        self.vy = 0.0

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id":    self.id,
            "label": self.label,
            "x":     self.x,
            "y":     self.y,
            "depth": self.depth,
        }

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self.id}, label={self.label}, pos=({self.x:.2f},{self.y:.2f}))"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
