"""
controllers.py — Visualization State Controllers
=================================================
One controller per StructureKind.  A controller owns the *current* state
of one visualizer and the transitions the UI buttons trigger.

Linear kinds (array, stack, queue, linked list):
    state      : tuple of ints, replaced (never mutated) on every action
    push(v)    : append at the end (the rear, for a queue)
    pop()      : drop the last element (the front element, for a queue)
                 popping an empty sequence is a no-op

Non-linear kinds (tree, graph):
    read-only fixtures; snapshot() returns a laid-out Graph.

Randomness:
    push() without a value draws from `rng.randrange(0, 100)`.  Anything
    with that method works, so tests pass a seeded random.Random or a stub.
"""

import random
from typing import Callable, Dict, Optional, Protocol, Sequence, Tuple

from graph import Graph, tree_layout, run_force_layout, ForceConfig
from structures import StructureKind

DEMO_VALUE_RANGE = (0, 100)


class ValueSource(Protocol):
    def randrange(self, start: int, stop: int) -> int: ...


class NotInteractive(Exception):
    """Push / pop requested on a read-only fixture."""

    def __init__(self, kind: StructureKind):
        super().__init__(f"{kind.value} has no interactive operations")
        self.kind = kind


# ---------------------------------------------------------------------------
# Linear controllers
# ---------------------------------------------------------------------------
class LinearController:
    """
    Attributes:
        kind        : StructureKind this controller serves.
        seed        : Default values a fresh visualizer starts with.
        push_label  : Button text for push.
        pop_label   : Button text for pop.
        values      : Current sequence (tuple, logical order).
    """

    kind:        StructureKind  = StructureKind.ARRAY
    seed:        Tuple[int, ...] = (10, 20, 30)
    push_label:  str             = "Push"
    pop_label:   str             = "Pop"
    interactive: bool            = True

    def __init__(self, values: Optional[Sequence[int]] = None, rng: Optional[ValueSource] = None):
        self.rng: ValueSource = rng or random.Random()
        self.values: Tuple[int, ...] = tuple(self.seed if values is None else values)

    # -- transitions --
    def push(self, value: Optional[int] = None) -> Tuple[int, ...]:
        if value is None:
            value = self.rng.randrange(*DEMO_VALUE_RANGE)
        self.values = self.values + (int(value),)
        return self.values

    def pop(self) -> Tuple[int, ...]:
        self.values = self._remove(self.values)
        return self.values

    def _remove(self, values: Tuple[int, ...]) -> Tuple[int, ...]:
        return values[:-1]

    def reset(self) -> Tuple[int, ...]:
        self.values = tuple(self.seed)
        return self.values

    # -- reads --
    def display(self) -> Tuple[int, ...]:
        """Values in on-screen order (first drawn first)."""
        return self.values

    def __len__(self) -> int:
        return len(self.values)

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "values": list(self.values)}

    @classmethod
    def from_dict(cls, data: dict, rng: Optional[ValueSource] = None) -> "LinearController":
        """Inverse of to_dict; a missing "values" key means the seed."""
        values = data.get("values")
        return cls(values=None if values is None else [int(v) for v in values], rng=rng)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self.values)})"


class ArrayController(LinearController):
    kind = StructureKind.ARRAY
    seed = (10, 20, 30, 40, 50)


class StackController(LinearController):
    kind = StructureKind.STACK

    def display(self) -> Tuple[int, ...]:
        # top of stack first
        return tuple(reversed(self.values))

    @property
    def top(self) -> Optional[int]:
        return self.values[-1] if self.values else None


class QueueController(LinearController):
    kind = StructureKind.QUEUE
    push_label = "Enqueue"
    pop_label = "Dequeue"

    def _remove(self, values: Tuple[int, ...]) -> Tuple[int, ...]:
        return values[1:]

    # aliases matching the buttons
    def enqueue(self, value: Optional[int] = None) -> Tuple[int, ...]:
        return self.push(value)

    def dequeue(self) -> Tuple[int, ...]:
        return self.pop()

    @property
    def front(self) -> Optional[int]:
        return self.values[0] if self.values else None

    @property
    def rear(self) -> Optional[int]:
        return self.values[-1] if self.values else None


class LinkedListController(LinearController):
    kind = StructureKind.LINKED_LIST
    push_label = "Add Node"
    pop_label = "Remove Node"


# ---------------------------------------------------------------------------
# Non-linear fixtures
# ---------------------------------------------------------------------------
TREE_FIXTURE = {
    "name": "Root",
    "children": [
        {"name": "L1", "children": [{"name": "L1.1"}, {"name": "L1.2"}]},
        {"name": "R1", "children": [{"name": "R1.1"}, {"name": "R1.2"}]},
    ],
}

GRAPH_FIXTURE_NODES = ("A", "B", "C", "D", "E")
GRAPH_FIXTURE_LINKS = (("A", "B"), ("B", "C"), ("C", "D"), ("D", "E"), ("E", "A"), ("A", "C"))


class FixtureController:
    kind:        StructureKind = StructureKind.TREE
    interactive: bool          = False
    caption:     str           = ""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def snapshot(self) -> Graph:
        raise NotImplementedError

    def push(self, value: Optional[int] = None):
        raise NotInteractive(self.kind)

    def pop(self):
        raise NotInteractive(self.kind)

    def reset(self) -> None:
        """Fixtures carry no state to reset."""

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "graph": self.snapshot().to_dict()}


class TreeFixture(FixtureController):
    kind = StructureKind.TREE
    caption = "Static representation of a Binary Tree"

    def snapshot(self) -> Graph:
        g = Graph.from_hierarchy(TREE_FIXTURE)
        tree_layout(g)
        return g


class GraphFixture(FixtureController):
    kind = StructureKind.GRAPH
    caption = "Interactive Force-Directed Graph"

    def __init__(self, rng: Optional[random.Random] = None, config: Optional[ForceConfig] = None):
        super().__init__(rng)
        self.config = config or ForceConfig()

    def snapshot(self) -> Graph:
        g = Graph.from_links(GRAPH_FIXTURE_NODES, GRAPH_FIXTURE_LINKS)
        run_force_layout(g, self.config, self.rng)
        return g


# ---------------------------------------------------------------------------
# Dispatch: exactly one factory per kind
# ---------------------------------------------------------------------------
CONTROLLER_FACTORIES: Dict[StructureKind, Callable] = {
    StructureKind.ARRAY:       ArrayController,
    StructureKind.STACK:       StackController,
    StructureKind.QUEUE:       QueueController,
    StructureKind.LINKED_LIST: LinkedListController,
    StructureKind.TREE:        TreeFixture,
    StructureKind.GRAPH:       GraphFixture,
}


def create_controller(kind: StructureKind, rng=None):
    """
    Fresh controller for `kind`, starting from its seed.
    The value source only feeds linear pushes; fixtures keep their own
    random.Random for layout jiggle.
    """
    factory = CONTROLLER_FACTORIES[kind]
    if issubclass(factory, LinearController):
        return factory(rng=rng)
    return factory()
