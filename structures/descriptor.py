"""
descriptor.py — Structure Descriptor
=====================================
Immutable metadata card for one data-structure kind.  The registry owns
every instance; the shell and the UI panels are pure readers.

    • StructureKind   – tagged variant used for controller / renderer dispatch
    • Category        – linear vs non-linear (drives the sidebar sections)
    • Complexity      – authored asymptotic strings, never computed
    • StructureDescriptor
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple


# ---------------------------------------------------------------------------
# Kind & Category enums
# ---------------------------------------------------------------------------
class StructureKind(Enum):
    ARRAY       = "array"
    STACK       = "stack"
    QUEUE       = "queue"
    LINKED_LIST = "linked-list"
    TREE        = "tree"
    GRAPH       = "graph"


class Category(Enum):
    LINEAR     = "linear"
    NON_LINEAR = "non-linear"

    @property
    def heading(self) -> str:
        return "Linear Structures" if self is Category.LINEAR else "Non-Linear Structures"


# ---------------------------------------------------------------------------
# Complexity table
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Complexity:
    access:    str
    search:    str
    insertion: str
    deletion:  str

    def as_rows(self) -> List[Tuple[str, str]]:
        """(label, value) pairs in the order the complexity card shows them."""
        return [
            ("Access",    self.access),
            ("Search",    self.search),
            ("Insertion", self.insertion),
            ("Deletion",  self.deletion),
        ]

    def to_dict(self) -> dict:
        return {
            "access":    self.access,
            "search":    self.search,
            "insertion": self.insertion,
            "deletion":  self.deletion,
        }


# ---------------------------------------------------------------------------
# StructureDescriptor
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class StructureDescriptor:
    """
    Attributes:
        id          : Stable slug, e.g. "linked-list".  Equals kind.value.
        name        : Display label, e.g. "Linked List".
        category    : Category.LINEAR or Category.NON_LINEAR.
        description : Prose shown in the Definition card.
        properties  : Ordered short facts for the Key Properties card.
        complexity  : Complexity table.
        kind        : StructureKind tag.
    """

    id:          str
    name:        str
    category:    Category
    description: str
    properties:  Tuple[str, ...]
    complexity:  Complexity
    kind:        StructureKind = field(compare=False)

    def to_dict(self) -> dict:
        return {
            "id":          self.id,
            "name":        self.name,
            "type":        self.category.value,
            "description": self.description,
            "properties":  list(self.properties),
            "complexity":  self.complexity.to_dict(),
        }
