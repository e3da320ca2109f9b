"""
structures/__init__.py — Structure Registry
============================================
Single source of truth for every data structure the explorer knows about.

    from structures import REGISTRY, get_structure, list_structures

REGISTRY is an ordered dict:
    {
        "array": StructureDescriptor(id, name, category, description, …),
        …
    }

The set of ids is fixed here at import time.  There is no runtime
registration: the shell only ever receives ids that came out of
list_structures(), so a lookup miss is a programming error and raises
NotFound.
"""

from typing import Dict, List, Tuple

from structures.descriptor import (
    StructureDescriptor,
    StructureKind,
    Category,
    Complexity,
)


class NotFound(LookupError):
    """Registry lookup miss."""

    def __init__(self, structure_id: str):
        super().__init__(f"Unknown data structure: {structure_id!r}")
        self.structure_id = structure_id


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
_DESCRIPTORS = [
    StructureDescriptor(
        id="array", name="Array", category=Category.LINEAR, kind=StructureKind.ARRAY,
        description="A collection of elements identified by index or key. "
                    "Elements are stored in contiguous memory locations.",
        properties=("Fixed size (usually)", "Fast access by index", "Contiguous memory"),
        complexity=Complexity(access="O(1)", search="O(n)", insertion="O(n)", deletion="O(n)"),
    ),
    StructureDescriptor(
        id="stack", name="Stack", category=Category.LINEAR, kind=StructureKind.STACK,
        description="A collection of elements that follows the LIFO (Last-In-First-Out) principle.",
        properties=("Push/Pop operations", "Top element access", "LIFO"),
        complexity=Complexity(access="O(n)", search="O(n)", insertion="O(1)", deletion="O(1)"),
    ),
    StructureDescriptor(
        id="queue", name="Queue", category=Category.LINEAR, kind=StructureKind.QUEUE,
        description="A collection of elements that follows the FIFO (First-In-First-Out) principle.",
        properties=("Enqueue/Dequeue operations", "Front/Rear access", "FIFO"),
        complexity=Complexity(access="O(n)", search="O(n)", insertion="O(1)", deletion="O(1)"),
    ),
    StructureDescriptor(
        id="linked-list", name="Linked List", category=Category.LINEAR, kind=StructureKind.LINKED_LIST,
        description="A linear collection of data elements called nodes, "
                    "where each node points to the next.",
        properties=("Dynamic size", "Efficient insertion/deletion", "Non-contiguous memory"),
        complexity=Complexity(access="O(n)", search="O(n)", insertion="O(1)", deletion="O(1)"),
    ),
    StructureDescriptor(
        id="tree", name="Tree", category=Category.NON_LINEAR, kind=StructureKind.TREE,
        description="A hierarchical structure with a root value and subtrees "
                    "of children with a parent node.",
        properties=("Hierarchical", "Root node", "Parent-Child relationship"),
        complexity=Complexity(access="O(log n)", search="O(log n)",
                              insertion="O(log n)", deletion="O(log n)"),
    ),
    StructureDescriptor(
        id="graph", name="Graph", category=Category.NON_LINEAR, kind=StructureKind.GRAPH,
        description="A set of vertices (nodes) and edges that connect pairs of vertices.",
        properties=("Vertices and Edges", "Directed or Undirected", "Weighted or Unweighted"),
        complexity=Complexity(access="N/A", search="O(V + E)", insertion="O(1)", deletion="O(1)"),
    ),
]

REGISTRY: Dict[str, StructureDescriptor] = {d.id: d for d in _DESCRIPTORS}

DEFAULT_STRUCTURE_ID = "array"

LEARNING_TIPS: Dict[Category, str] = {
    Category.LINEAR: (
        "Linear structures store data sequentially. "
        "Each element has a unique predecessor and successor."
    ),
    Category.NON_LINEAR: (
        "Non-linear structures represent complex relationships "
        "where one element can connect to many others."
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_structure(structure_id: str) -> StructureDescriptor:
    """Return the descriptor for `structure_id`, or raise NotFound."""
    try:
        return REGISTRY[structure_id]
    except KeyError:
        raise NotFound(structure_id) from None


def list_structures() -> List[StructureDescriptor]:
    """Return all registered structures in registry order."""
    return list(REGISTRY.values())


def structures_by_category(category: Category) -> List[StructureDescriptor]:
    """Filter registry by category, keeping registry order."""
    return [d for d in REGISTRY.values() if d.category is category]


def categories() -> List[Tuple[Category, List[StructureDescriptor]]]:
    """Sidebar sections: every category with its descriptors."""
    return [(c, structures_by_category(c)) for c in Category]


def learning_tip(category: Category) -> str:
    return LEARNING_TIPS[category]


__all__ = [
    "StructureDescriptor",
    "StructureKind",
    "Category",
    "Complexity",
    "NotFound",
    "REGISTRY",
    "DEFAULT_STRUCTURE_ID",
    "get_structure",
    "list_structures",
    "structures_by_category",
    "categories",
    "learning_tip",
]
