"""
canvas.py — SVG Bar Renderer
=============================
Pure rendering function: values + current Operation → SVG string.

The renderer consumes:
  • values     – the array as it should look at this step
  • operation  – the controller's current Operation (or None)
  • config     – visual config (canvas size, colours, fonts, …)

And produces an SVG string ready to inject into the DOM.

Design decisions:
  - NO mutation.  The caller passes in everything it needs and gets back
    a string.
  - Colour is a dict lookup on the ColorTag the engine hands out for each
    index; precedence lives in engine.highlight, not here.
  - Pointer labels (left / right / mid / i) are drawn under the bars that
    a MOVE_POINTER operation names, so the reader can follow the search.
"""

from typing import Dict, List, Optional, Sequence

from algorithms.operation import Operation, OperationKind
from engine.highlight import ColorTag, highlight_for


# ---------------------------------------------------------------------------
# Visual Config — colour palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = 900
    height: int = 320
    bg:     str = "#1e293b"

    # ColorTag value → fill
    bar_colors: Dict[str, str] = {
        ColorTag.FOUND.value:    "#2ecc71",   # green
        ColorTag.COMPARE.value:  "#f39c12",   # amber
        ColorTag.SWAP.value:     "#e74c3c",   # red
        ColorTag.TRAVERSE.value: "#9b59b6",   # purple
        ColorTag.POINTER.value:  "#1abc9c",   # teal
        ColorTag.DEFAULT.value:  "#4a90e2",   # blue
    }

    # bars
    bar_width:       int = 50
    bar_gap:         int = 10
    bar_max_height:  int = 200
    bar_min_height:  int = 30
    bar_radius:      int = 8
    value_color:     str = "#ffffff"
    value_size:      int = 14
    index_color:     str = "#64748b"
    index_size:      int = 12
    pointer_color:   str = "#1abc9c"
    pointer_size:    int = 11
    baseline:        int = 250   # y of the bars' bottom edge


CONFIG = CanvasConfig()

POINTER_NAMES = {
    1: ("i",),
    2: ("L", "R"),
    3: ("L", "R", "M"),
}


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_array(
    values: Sequence[float],
    operation: Optional[Operation] = None,
    config: CanvasConfig = CONFIG,
) -> str:
    """
    Returns an SVG string.

    Args:
        values    : Array to draw, one bar per value.
        operation : Current operation (None → every bar in the default colour).
        config    : Visual config.
    """
    svg_parts = [
        f'<svg width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">'
    ]

    if not values:
        svg_parts.append(
            f'<text x="{config.width / 2}" y="{config.height / 2}" text-anchor="middle" '
            f'fill="{config.index_color}" font-size="16">Array is empty</text>'
        )
        svg_parts.append("</svg>")
        return "\n".join(svg_parts)

    max_val = max(max(values), 1)
    span = len(values) * (config.bar_width + config.bar_gap) - config.bar_gap
    x0 = max(0, (config.width - span) / 2)

    for idx, val in enumerate(values):
        x = x0 + idx * (config.bar_width + config.bar_gap)
        svg_parts.append(_render_bar(idx, val, x, max_val, operation, config))

    if operation is not None and operation.kind == OperationKind.MOVE_POINTER:
        svg_parts.append(_render_pointers(operation, x0, config))

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


# ---------------------------------------------------------------------------
# Bar Rendering
# ---------------------------------------------------------------------------
def _render_bar(
    idx: int,
    val: float,
    x: float,
    max_val: float,
    operation: Optional[Operation],
    config: CanvasConfig,
) -> str:
    tag = highlight_for(operation, idx)
    fill = config.bar_colors.get(tag.value, config.bar_colors[ColorTag.DEFAULT.value])

    h = max(config.bar_min_height, (max(val, 0) / max_val) * config.bar_max_height)
    y = config.baseline - h
    cx = x + config.bar_width / 2

    parts = [
        f'<g class="bar" data-index="{idx}" data-tag="{tag.value}">',
        f'  <rect x="{x}" y="{y}" width="{config.bar_width}" height="{h}" '
        f'rx="{config.bar_radius}" fill="{fill}"/>',
        f'  <text x="{cx}" y="{config.baseline - 8}" text-anchor="middle" '
        f'font-size="{config.value_size}" font-weight="bold" fill="{config.value_color}">{_fmt(val)}</text>',
        f'  <text x="{cx}" y="{config.baseline + 18}" text-anchor="middle" '
        f'font-size="{config.index_size}" fill="{config.index_color}">{idx}</text>',
        '</g>',
    ]
    return "\n".join(parts)


def _render_pointers(operation: Operation, x0: float, config: CanvasConfig) -> str:
    names = POINTER_NAMES.get(len(operation.indices), ())
    # several pointers can share one bar (e.g. left == mid); stack their labels
    labels: Dict[int, List[str]] = {}
    for name, idx in zip(names, operation.indices):
        labels.setdefault(idx, []).append(name)

    parts = ['<g class="pointers">']
    for idx, tags in labels.items():
        cx = x0 + idx * (config.bar_width + config.bar_gap) + config.bar_width / 2
        parts.append(
            f'  <text x="{cx}" y="{config.baseline + 40}" text-anchor="middle" '
            f'font-size="{config.pointer_size}" font-weight="bold" '
            f'fill="{config.pointer_color}">▲ {"/".join(tags)}</text>'
        )
    parts.append('</g>')
    return "\n".join(parts)


def _fmt(v: float) -> str:
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return str(v)
