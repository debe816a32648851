"""
ui/
---
Presentation layer.

    from ui import render_array
    from ui import playback_controls, algorithm_panel, …
"""

from ui.canvas import render_array, CanvasConfig

from ui.controls import (
    category_tabs,
    playback_controls,
    algorithm_panel,
    analytics_panel,
    pseudocode_viewer,
    explanation_panel,
)

__all__ = [
    "render_array",
    "CanvasConfig",
    "category_tabs",
    "playback_controls",
    "algorithm_panel",
    "analytics_panel",
    "pseudocode_viewer",
    "explanation_panel",
]
