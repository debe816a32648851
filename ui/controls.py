"""
controls.py — UI Control Panels
=================================
Sidebar and bottom panels for the lab page, each rendered from plain state.

Panels:
  • category_tabs        – Arrays / Searching / Sorting / Two Pointers
  • playback_controls    – play/pause/step/reset/speed + progress
  • algorithm_panel      – run buttons (and target input) for one tab
  • analytics_panel      – comparisons, swaps, pointer moves, outcome
  • pseudocode_viewer    – with live line highlighting
  • explanation_panel    – "what just happened" text and host messages

Panels hold no state of their own.  They return HTML fragments that
main.build_view() ships to the browser, which swaps them into place.
User-supplied text goes through html.escape.
"""

from html import escape
from typing import List, Optional

from algorithms import AlgoInfo, CATEGORIES
from engine import PlaybackSnapshot, PlaybackPhase, RunMetrics, SPEED_PRESETS


TAB_LABELS = {
    "arrays":      "Arrays",
    "searching":   "Searching",
    "sorting":     "Sorting",
    "twopointers": "Two Pointers",
}


# ---------------------------------------------------------------------------
# Category Tabs
# ---------------------------------------------------------------------------
def category_tabs(active: str = "arrays") -> str:
    buttons = []
    for cat in CATEGORIES:
        cls = "tab-btn active" if cat == active else "tab-btn"
        buttons.append(f'<button class="{cls}" data-tab="{cat}">{TAB_LABELS.get(cat, cat).upper()}</button>')
    return f'<div class="tabs">{"".join(buttons)}</div>'


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(snapshot: Optional[PlaybackSnapshot] = None) -> str:
    playing = snapshot is not None and snapshot.phase == PlaybackPhase.PLAYING
    current = snapshot.step_index + 1 if snapshot else 0
    total = snapshot.total if snapshot else 0
    speed = snapshot.speed_ms if snapshot else SPEED_PRESETS["normal"]
    finished = snapshot is not None and snapshot.phase == PlaybackPhase.FINISHED

    play_icon = "⏸️ Pause" if playing else "▶️ Play"
    options = []
    for name, ms in SPEED_PRESETS.items():
        sel = "selected" if ms == speed else ""
        options.append(f'<option value="{ms}" {sel}>{name.capitalize()}</option>')

    return f"""
    <div class="panel playback-controls">
      <h3>Controls</h3>
      <div class="button-row">
        <button id="btn-prev" title="Previous step">◀</button>
        <button id="btn-play" class="btn-play" {'disabled' if total == 0 else ''}>{play_icon}</button>
        <button id="btn-next" title="Next step">▶</button>
        <button id="btn-reset">🔄 Reset</button>
      </div>
      <div class="step-info">
        Step <span id="current-step">{current}</span> / <span id="total-steps">{total}</span>
        {' <span class="finished-badge">FINISHED</span>' if finished else ''}
      </div>
      <div class="speed-control">
        <label>Speed:</label>
        <select id="speed-selector">{''.join(options)}</select>
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Panel (one per tab)
# ---------------------------------------------------------------------------
def algorithm_panel(
    category: str,
    algorithms: List[AlgoInfo],
    target: Optional[float] = None,
    playing: bool = False,
) -> str:
    disabled = "disabled" if playing else ""
    needs_target = any(a.needs_target for a in algorithms)
    target_label = "Target Sum" if category == "twopointers" else "Target"

    target_block = ""
    if needs_target:
        value = "" if target is None else escape(str(target))
        target_block = f"""
        <div class="input-group">
          <label>{target_label}:</label>
          <input type="number" id="target-input" value="{value}">
        </div>
        """

    array_block = ""
    if category == "arrays":
        array_block = """
        <button id="btn-insert" class="btn-secondary">➕ Insert Random</button>
        <p class="hint">Click on bars to delete</p>
        """

    buttons = []
    complexities = []
    for algo in algorithms:
        buttons.append(
            f'<button class="btn-run btn-primary" data-algo="{algo.key}" {disabled} '
            f'title="{escape(algo.description)}">{escape(algo.label)}</button>'
        )
        complexities.append(f"{algo.label}: {algo.complexity_time}")

    return f"""
    <div class="panel algorithm-panel" data-category="{category}">
      <h3>{TAB_LABELS.get(category, category)}</h3>
      {target_block}
      {array_block}
      {''.join(buttons)}
      <p class="complexity">{escape(' | '.join(complexities))}</p>
    </div>
    """


# ---------------------------------------------------------------------------
# Analytics Panel
# ---------------------------------------------------------------------------
def analytics_panel(metrics: Optional[RunMetrics] = None) -> str:
    if not metrics:
        return """
        <div class="panel analytics-panel">
          <h3>📊 Analytics</h3>
          <p class="placeholder">Run an algorithm to see metrics.</p>
        </div>
        """

    if metrics.outcome == "found":
        status = f"✅ Found at {', '.join(str(i) for i in metrics.found_indices)}"
    elif metrics.outcome == "not_found":
        status = "❌ Not Found"
    else:
        status = "✅ Complete"

    return f"""
    <div class="panel analytics-panel">
      <h3>📊 Analytics — {escape(metrics.algo_label)}</h3>
      <table>
        <tr><td>Array Size:</td><td><strong>{metrics.array_size}</strong></td></tr>
        <tr><td>Comparisons:</td><td><strong>{metrics.comparisons}</strong></td></tr>
        <tr><td>Swaps:</td><td><strong>{metrics.swaps}</strong></td></tr>
        <tr><td>Pointer Moves:</td><td><strong>{metrics.pointer_moves}</strong></td></tr>
        <tr><td>Total Steps:</td><td><strong>{metrics.total_steps}</strong></td></tr>
        <tr><td>Complexity:</td><td><strong>{escape(metrics.complexity)}</strong></td></tr>
        <tr><td>Result:</td><td><strong>{status}</strong></td></tr>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(
    pseudocode_lines: List[str],
    current_line: int = -1,
) -> str:
    if not pseudocode_lines:
        return """
        <div class="code-block">
          <div class="placeholder">Run an algorithm to view pseudocode</div>
        </div>
        """

    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        highlight = 'highlight' if i == current_line else ''
        lines_html.append(f'<div class="code-line {highlight}" data-line="{i}">{escape(line)}</div>')

    return f"""
    <div class="code-block">
      {''.join(lines_html)}
    </div>
    """


# ---------------------------------------------------------------------------
# Explanation Panel
# ---------------------------------------------------------------------------
def explanation_panel(explanation: str = "", message: str = "") -> str:
    if not explanation and not message:
        explanation = "▶ Pick a tab and run an algorithm to watch it step by step."

    parts = []
    if explanation:
        parts.append(f'<div class="explanation-text">{escape(explanation)}</div>')
    if message:
        parts.append(f'<div class="message">{escape(message)}</div>')
    return "".join(parts)
