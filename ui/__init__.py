"""
ui/
---
Presentation layer.

    from ui import render_visualizer
    from ui import sidebar, complexity_card, …
"""

from ui.canvas import render_visualizer, CanvasConfig

from ui.controls import (
    sidebar,
    learning_tip,
    header,
    operation_buttons,
    visualizer_card,
    definition_card,
    complexity_card,
    properties_card,
    quiz_card,
    quiz_panel,
)

__all__ = [
    "render_visualizer",
    "CanvasConfig",
    "sidebar",
    "learning_tip",
    "header",
    "operation_buttons",
    "visualizer_card",
    "definition_card",
    "complexity_card",
    "properties_card",
    "quiz_card",
    "quiz_panel",
]
