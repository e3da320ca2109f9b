"""
shell.py — Selection / Navigation Shell
========================================
The Shell is the ONLY object the web layer talks to for visualizer state.
It owns the active structure id, resolves it to a descriptor, and pairs
it with a freshly created controller.

State machine:
    one state per registered structure id
    initial           →  "array"
    any  →  select(id) →  id        (fresh controller unless id is already active)
    no terminal state

Invariants:
  - active_id always resolves in the registry.  select() resolves the new
    descriptor BEFORE touching state, so a NotFound leaves the shell as it was.
  - Switching to a different structure discards the old controller; the new
    one starts from its seed values.

Thread safety:
  Not thread-safe.  One Shell per browser session; the web layer loads it
  from the session, applies one action, and stores it back.
"""

import logging
from typing import Optional

from structures import (
    DEFAULT_STRUCTURE_ID,
    StructureDescriptor,
    NotFound,
    get_structure,
)
from engine.controllers import (
    LinearController,
    NotInteractive,
    ValueSource,
    create_controller,
)

logger = logging.getLogger(__name__)


class Shell:
    """
    Attributes:
        descriptor  : StructureDescriptor of the active structure.
        controller  : Controller instance for the active structure.
        rng         : Value source handed to every linear controller.
    """

    def __init__(self, active_id: str = DEFAULT_STRUCTURE_ID, rng: Optional[ValueSource] = None):
        self.rng = rng
        self.descriptor: StructureDescriptor = get_structure(active_id)
        self.controller = create_controller(self.descriptor.kind, rng=self.rng)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    @property
    def active_id(self) -> str:
        return self.descriptor.id

    @property
    def interactive(self) -> bool:
        return self.controller.interactive

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def select(self, structure_id: str) -> StructureDescriptor:
        """Switch to `structure_id`.  Raises NotFound for an unknown id."""
        descriptor = get_structure(structure_id)
        if descriptor.id == self.active_id:
            return descriptor
        logger.debug("shell: %s -> %s", self.active_id, descriptor.id)
        self.descriptor = descriptor
        self.controller = create_controller(descriptor.kind, rng=self.rng)
        return descriptor

    def push(self, value: Optional[int] = None):
        return self.controller.push(value)

    def pop(self):
        return self.controller.pop()

    def reset(self) -> None:
        self.controller.reset()

    # ------------------------------------------------------------------
    # Session round-trip
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        d = {"active_id": self.active_id}
        if isinstance(self.controller, LinearController):
            d["values"] = list(self.controller.values)
        return d

    @classmethod
    def from_dict(cls, data: Optional[dict], rng: Optional[ValueSource] = None) -> "Shell":
        """
        Rebuild from session data.  Stale or tampered ids fall back to the
        default structure rather than breaking the page.
        """
        data = data or {}
        active_id = data.get("active_id", DEFAULT_STRUCTURE_ID)
        try:
            shell = cls(active_id, rng=rng)
        except NotFound:
            logger.warning("session held unknown structure id %r; using default", active_id)
            return cls(DEFAULT_STRUCTURE_ID, rng=rng)

        if "values" in data and isinstance(shell.controller, LinearController):
            shell.controller = type(shell.controller).from_dict(data, rng=rng)
        return shell

    def __repr__(self) -> str:
        return f"Shell(active={self.active_id}, controller={self.controller!r})"


__all__ = ["Shell", "NotFound", "NotInteractive"]
