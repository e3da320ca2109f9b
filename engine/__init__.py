"""
engine/
-------
Visualization state layer.

    from engine import Shell, create_controller
"""

from engine.controllers import (
    LinearController,
    ArrayController,
    StackController,
    QueueController,
    LinkedListController,
    FixtureController,
    TreeFixture,
    GraphFixture,
    NotInteractive,
    CONTROLLER_FACTORIES,
    create_controller,
)
from engine.shell import Shell

__all__ = [
    "Shell",
    "LinearController",
    "ArrayController",
    "StackController",
    "QueueController",
    "LinkedListController",
    "FixtureController",
    "TreeFixture",
    "GraphFixture",
    "NotInteractive",
    "CONTROLLER_FACTORIES",
    "create_controller",
]
