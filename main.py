"""
main.py — DSA Visual Lab Flask App
===================================
The web server that hosts the trace engine.

Routes:
  GET  /                     – main UI
  GET  /api/state            – current view (polled while playing)
  POST /api/tab              – switch category tab (resets playback)
  POST /api/run              – generate a trace and start playing it
  POST /api/play             – play
  POST /api/pause            – pause
  POST /api/toggle           – play/pause toggle
  POST /api/reset            – back to idle
  POST /api/step/next        – manual step forward
  POST /api/step/prev        – manual step back
  POST /api/speed            – set ms per step (number or preset name)
  POST /api/array/random     – fresh random array
  POST /api/array/insert     – append a random value
  POST /api/array/delete     – delete the value at an index
  POST /api/array/load       – replace the array (accepts the exported "array")
  GET  /api/export           – array plus last trace and metrics as JSON

State management:
  Every browser session gets a Lab (array store, scheduler, playback
  controller, recorder) kept in memory and looked up by an id stored in
  the Flask session cookie.  Each request takes the Lab's lock, lets the
  scheduler fire any due ticks, then applies the command.  Auto-advance
  therefore happens on the server; the browser only polls /api/state.
  At most Config.max_labs labs are kept; the least recently used one is
  dropped when a new session would exceed that.
"""

import logging
import math
import secrets
import threading
from collections import OrderedDict
from typing import Any, Callable, Dict, Optional

from flask import Flask, jsonify, render_template_string, request, session

from algorithms import CATEGORIES, algorithms_by_category, describe, get_algorithm
from arrays import ArrayStore
from config import Config
from engine import PlaybackController, Recorder, Scheduler, SPEED_PRESETS
from ui import (
    algorithm_panel,
    analytics_panel,
    category_tabs,
    explanation_panel,
    playback_controls,
    pseudocode_viewer,
    render_array,
)


CONFIG = Config.from_env()

logging.basicConfig(
    level=getattr(logging, CONFIG.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = secrets.token_hex(32)

# clock for every Lab scheduler (None = monotonic); tests swap in a fake
CLOCK: Optional[Callable[[], float]] = None


# ---------------------------------------------------------------------------
# Per-session lab
# ---------------------------------------------------------------------------
class Lab:
    """Everything one browser session plays with."""

    def __init__(self, config: Config, clock: Optional[Callable[[], float]] = None):
        self.config     = config
        self.store      = ArrayStore(config.default_array, max_value=config.max_value)
        self.scheduler  = Scheduler(clock=clock)
        self.controller = PlaybackController(self.scheduler, speed_ms=config.default_speed_ms)
        self.recorder   = Recorder()
        self.tab:    str             = CATEGORIES[0]
        self.target: Optional[float] = config.default_target
        self.lock = threading.Lock()

    def pump(self) -> int:
        return self.scheduler.run_due()


LABS: "OrderedDict[str, Lab]" = OrderedDict()
_labs_lock = threading.Lock()


def get_lab() -> Lab:
    sid = session.get("sid")
    with _labs_lock:
        lab = LABS.get(sid) if sid is not None else None
        if lab is not None:
            LABS.move_to_end(sid)
            return lab
        sid = secrets.token_hex(8)
        session["sid"] = sid
        lab = LABS[sid] = Lab(CONFIG, CLOCK)
        logger.info("new lab session %s", sid)
        _evict_labs()
        return lab


def _evict_labs() -> None:
    """Drop least recently used labs beyond CONFIG.max_labs.  Caller holds _labs_lock."""
    while len(LABS) > max(1, CONFIG.max_labs):
        old_sid, old = LABS.popitem(last=False)
        with old.lock:
            old.scheduler.clear()
        logger.info("dropped idle lab session %s", old_sid)


# ---------------------------------------------------------------------------
# View assembly
# ---------------------------------------------------------------------------
def build_view(lab: Lab) -> Dict[str, Any]:
    ctrl  = lab.controller
    trace = ctrl.trace
    snap  = ctrl.state_snapshot()

    in_sync = _in_sync(lab)
    op = ctrl.current_operation() if in_sync else None
    values = ctrl.displayed_array() if in_sync and ctrl.step_index >= 0 else list(lab.store.values)

    info = get_algorithm(trace.algo_key) if trace is not None else None
    metrics = lab.recorder.metrics if trace is not None else None

    due = lab.scheduler.next_due_ms()
    next_tick = max(0, int(due - lab.scheduler.now_ms())) if due is not None else None

    return {
        **snap.to_dict(),
        "next_tick_ms": next_tick,
        "values":      values,
        "tab":         lab.tab,
        "target":      lab.target,
        "svg":         render_array(values, op),
        "operation":   op.to_dict() if op else None,
        "explanation": explanation_panel(describe(op, values), ctrl.message),
        "pseudocode":  pseudocode_viewer(info.pseudocode if info else [], info.line_for(op) if info else -1),
        "analytics":   analytics_panel(metrics),
        "playback":    playback_controls(snap),
        "panel":       algorithm_panel(lab.tab, algorithms_by_category(lab.tab), lab.target, snap.running),
    }


def _in_sync(lab: Lab) -> bool:
    """True when the loaded trace was generated from the array the store holds now."""
    trace = lab.controller.trace
    return trace is not None and trace.snapshot == lab.store.snapshot()


def error(message: str, status: int = 400):
    return jsonify({"error": message}), status


def _json() -> Dict[str, Any]:
    return request.get_json(silent=True) or {}


def _parse_number(raw: Any) -> Optional[float]:
    if raw is None or raw == "":
        return None
    num = float(raw)
    return int(num) if num.is_integer() else num


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    lab = get_lab()
    with lab.lock:
        lab.pump()
        view = build_view(lab)
    return render_template_string(
        INDEX_TEMPLATE,
        view=view,
        tabs=category_tabs(lab.tab),
        poll_ms=CONFIG.poll_interval_ms,
    )


@app.route("/api/state")
def api_state():
    lab = get_lab()
    with lab.lock:
        lab.pump()
        return jsonify(build_view(lab))


@app.route("/api/tab", methods=["POST"])
def api_tab():
    tab = _json().get("tab")
    if tab not in CATEGORIES:
        return error(f"Unknown tab: {tab}")
    lab = get_lab()
    with lab.lock:
        lab.pump()
        lab.tab = tab
        lab.controller.reset()
        return jsonify(build_view(lab))


# ---------------------------------------------------------------------------
# API: Run Algorithm
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    data = _json()
    algo_key = data.get("algo_key", "")
    info = get_algorithm(algo_key)
    if info is None:
        return error(f"Unknown algorithm: {algo_key}")

    lab = get_lab()
    with lab.lock:
        lab.pump()
        if info.needs_target:
            try:
                target = _parse_number(data.get("target", lab.target))
            except (TypeError, ValueError):
                return error("Target must be a number")
            lab.target = target
        else:
            target = None

        # sort is committed to the store before the snapshot is taken
        if info.requires_sorted and not lab.store.is_sorted():
            lab.store.sort()
            logger.debug("array sorted before %s", algo_key)

        trace = lab.recorder.record(algo_key, lab.store.snapshot(), target)
        lab.controller.load_trace(trace)
        return jsonify(build_view(lab))


# ---------------------------------------------------------------------------
# API: Playback
# ---------------------------------------------------------------------------
def _command(fn: Callable[[PlaybackController], Any], needs_sync: bool = False):
    """Apply `fn` to the session controller.  With `needs_sync`, a trace
    generated from an array that has since been edited is not played."""
    lab = get_lab()
    with lab.lock:
        lab.pump()
        ctrl = lab.controller
        if needs_sync and ctrl.trace is not None and not _in_sync(lab):
            logger.debug("command rejected: trace %s is stale", ctrl.trace.algo_key)
            ctrl.annotate("Array changed since this run. Run the algorithm again.")
            accepted = False
        else:
            accepted = fn(ctrl)
        view = build_view(lab)
    view["accepted"] = accepted is not False
    return jsonify(view)


@app.route("/api/play", methods=["POST"])
def api_play():
    return _command(lambda c: c.play(), needs_sync=True)


@app.route("/api/pause", methods=["POST"])
def api_pause():
    return _command(lambda c: c.pause())


@app.route("/api/toggle", methods=["POST"])
def api_toggle():
    return _command(lambda c: c.toggle_play(), needs_sync=True)


@app.route("/api/reset", methods=["POST"])
def api_reset():
    return _command(lambda c: c.reset())


@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    return _command(lambda c: c.step_forward(), needs_sync=True)


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    return _command(lambda c: c.step_back(), needs_sync=True)


@app.route("/api/speed", methods=["POST"])
def api_speed():
    speed = _json().get("speed")
    if isinstance(speed, str) and speed in SPEED_PRESETS:
        return _command(lambda c: c.set_speed_preset(speed))
    try:
        ms = int(speed)
    except (TypeError, ValueError, OverflowError):
        return error("Speed must be milliseconds or one of: " + ", ".join(SPEED_PRESETS))
    return _command(lambda c: c.set_speed(ms))


# ---------------------------------------------------------------------------
# API: Array Operations
# ---------------------------------------------------------------------------
@app.route("/api/array/random", methods=["POST"])
def api_array_random():
    seed = _json().get("seed")
    if seed is not None and (not isinstance(seed, int) or isinstance(seed, bool)):
        return error("Seed must be an integer")
    lab = get_lab()
    with lab.lock:
        lab.pump()
        lab.store = ArrayStore.generate_random(
            length=lab.config.random_length,
            max_value=lab.config.max_value,
            seed=seed,
        )
        lab.controller.reset()
        return jsonify(build_view(lab))


@app.route("/api/array/insert", methods=["POST"])
def api_array_insert():
    lab = get_lab()
    with lab.lock:
        lab.pump()
        value = lab.store.insert_random()
        lab.controller.invalidate()
        lab.controller.annotate(f"Inserted {value}")
        return jsonify(build_view(lab))


@app.route("/api/array/delete", methods=["POST"])
def api_array_delete():
    index = _json().get("index")
    if not isinstance(index, int) or isinstance(index, bool):
        return error("Index must be an integer")
    lab = get_lab()
    with lab.lock:
        lab.pump()
        try:
            lab.store.delete(index)
        except IndexError as e:
            return error(str(e))
        lab.controller.invalidate()
        lab.controller.annotate(f"Deleted element at index {index}")
        return jsonify(build_view(lab))


@app.route("/api/array/load", methods=["POST"])
def api_array_load():
    data = _json()
    values = data.get("values")
    if not isinstance(values, list) or not all(
        isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v) for v in values
    ):
        return error("Values must be a list of finite numbers")
    lab = get_lab()
    max_value = data.get("max_value", lab.config.max_value)
    if not isinstance(max_value, int) or isinstance(max_value, bool) or max_value < 1:
        return error("max_value must be a positive integer")
    with lab.lock:
        lab.pump()
        lab.store = ArrayStore.from_dict({"values": values, "max_value": max_value})
        lab.controller.reset()
        lab.controller.annotate(f"Loaded {len(values)} values")
        return jsonify(build_view(lab))


# ---------------------------------------------------------------------------
# API: Export
# ---------------------------------------------------------------------------
@app.route("/api/export")
def api_export():
    """The array and the last run (trace plus metrics), loadable via /api/array/load."""
    lab = get_lab()
    with lab.lock:
        lab.pump()
        return jsonify({"array": lab.store.to_dict(), "run": lab.recorder.export()})


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>DSA Visual Lab</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body {
      min-height: 100vh;
      background: linear-gradient(135deg, #1e293b 0%, #0f172a 100%);
      color: #fff;
      font-family: system-ui, -apple-system, sans-serif;
      padding: 20px;
    }
    header { text-align: center; margin-bottom: 30px; }
    header h1 { font-size: 2.5rem; color: #60a5fa; margin-bottom: 10px; }
    header p { color: #94a3b8; }
    .tabs { display: flex; justify-content: center; gap: 10px; margin-bottom: 30px; flex-wrap: wrap; }
    .tab-btn {
      padding: 12px 24px; border: none; background: #334155; color: #cbd5e1;
      cursor: pointer; border-radius: 8px; font-size: 14px; font-weight: 600;
    }
    .tab-btn.active { background: linear-gradient(135deg, #3b82f6, #8b5cf6); color: #fff; }
    #main { display: grid; grid-template-columns: 2fr 1fr; gap: 20px; max-width: 1400px; margin: 0 auto; }
    #visual { background: #1e293b; border-radius: 12px; padding: 30px; }
    #canvas-svg { display: flex; justify-content: center; }
    #canvas-svg .bar { cursor: pointer; }
    #sidebar { background: #1e293b; border-radius: 12px; padding: 20px; display: flex; flex-direction: column; gap: 20px; }
    .panel { border-bottom: 1px solid #334155; padding-bottom: 15px; }
    .panel h3 { margin-bottom: 15px; font-size: 1.1rem; color: #94a3b8; }
    button {
      padding: 10px; margin-bottom: 8px; border: none; border-radius: 8px;
      background: #3b82f6; color: #fff; font-weight: 600; cursor: pointer;
    }
    button:disabled { opacity: 0.5; cursor: not-allowed; }
    .btn-primary, .btn-secondary { width: 100%; }
    .btn-play { background: #10b981; }
    .button-row { display: flex; gap: 8px; }
    select, input { padding: 8px; border-radius: 6px; border: 1px solid #475569; background: #0f172a; color: #fff; margin-left: 10px; }
    input { width: 80px; }
    .input-group, .speed-control { display: flex; align-items: center; margin: 10px 0; }
    .complexity { font-size: 12px; color: #64748b; font-family: monospace; margin-top: 10px; }
    .hint { font-size: 11px; color: #64748b; font-style: italic; margin-bottom: 8px; }
    .finished-badge { color: #2ecc71; font-weight: 700; margin-left: 8px; }
    .analytics-panel td { padding: 2px 8px 2px 0; color: #cbd5e1; font-size: 13px; }
    .placeholder { color: #64748b; font-size: 13px; }
    #bottom { display: grid; grid-template-columns: 1fr 1fr; gap: 20px; margin-top: 20px; }
    .code-block { font-family: monospace; font-size: 13px; background: #0f172a; border-radius: 8px; padding: 12px; }
    .code-line { padding: 2px 6px; white-space: pre; color: #94a3b8; }
    .code-line.highlight { background: rgba(243, 156, 18, 0.2); color: #f39c12; border-left: 3px solid #f39c12; }
    .explanation-text { padding: 10px 0; color: #e2e8f0; }
    .message { margin-top: 10px; padding: 10px 20px; background: #10b981; border-radius: 6px; font-weight: 600; }
    footer { text-align: center; margin-top: 40px; color: #64748b; font-size: 14px; }
  </style>
</head>
<body>
  <header>
    <h1>🧠 DSA Master Visual Lab</h1>
    <p>Operation-Driven Algorithm Visualization</p>
  </header>

  <div id="tabs">{{ tabs|safe }}</div>

  <div id="main">
    <div id="visual">
      <div id="canvas-svg">{{ view.svg|safe }}</div>
      <div id="bottom">
        <div id="pseudocode">{{ view.pseudocode|safe }}</div>
        <div id="explanation">{{ view.explanation|safe }}</div>
      </div>
    </div>

    <div id="sidebar">
      <div class="panel">
        <button id="btn-random" class="btn-secondary">🎲 Random Array</button>
      </div>
      <div id="algo-panel">{{ view.panel|safe }}</div>
      <div id="playback">{{ view.playback|safe }}</div>
      <div id="analytics">{{ view.analytics|safe }}</div>
    </div>
  </div>

  <footer>Arrays → Searching → Sorting → Two Pointers</footer>

  <script>
    const POLL_MS = {{ poll_ms }};
    let pollTimer = null;

    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data || {}),
      });
      return await res.json();
    }

    function apply(view) {
      if (!view || view.error) return;
      document.getElementById('canvas-svg').innerHTML = view.svg;
      document.getElementById('pseudocode').innerHTML = view.pseudocode;
      document.getElementById('explanation').innerHTML = view.explanation;
      document.getElementById('analytics').innerHTML = view.analytics;
      document.getElementById('playback').innerHTML = view.playback;
      document.getElementById('algo-panel').innerHTML = view.panel;
      document.querySelectorAll('.tab-btn').forEach(function (b) {
        b.classList.toggle('active', b.dataset.tab === view.tab);
      });
      schedulePoll(view.running, view.next_tick_ms);
    }

    function schedulePoll(running, nextTick) {
      clearTimeout(pollTimer);
      pollTimer = null;
      if (running) {
        const delay = nextTick == null ? POLL_MS : Math.max(POLL_MS, nextTick);
        pollTimer = setTimeout(async function () {
          const res = await fetch('/api/state');
          apply(await res.json());
        }, delay);
      }
    }

    document.addEventListener('click', async function (e) {
      const el = e.target.closest('button, .bar');
      if (!el) return;
      if (el.classList.contains('tab-btn')) {
        apply(await post('/api/tab', {tab: el.dataset.tab}));
      } else if (el.classList.contains('btn-run')) {
        const input = document.getElementById('target-input');
        apply(await post('/api/run', {algo_key: el.dataset.algo, target: input ? input.value : null}));
      } else if (el.classList.contains('bar')) {
        apply(await post('/api/array/delete', {index: parseInt(el.dataset.index, 10)}));
      } else if (el.id === 'btn-play') {
        apply(await post('/api/toggle'));
      } else if (el.id === 'btn-reset') {
        apply(await post('/api/reset'));
      } else if (el.id === 'btn-next') {
        apply(await post('/api/step/next'));
      } else if (el.id === 'btn-prev') {
        apply(await post('/api/step/prev'));
      } else if (el.id === 'btn-random') {
        apply(await post('/api/array/random'));
      } else if (el.id === 'btn-insert') {
        apply(await post('/api/array/insert'));
      }
    });

    document.addEventListener('change', async function (e) {
      if (e.target.id === 'speed-selector') {
        apply(await post('/api/speed', {speed: parseInt(e.target.value, 10)}));
      }
    });

    schedulePoll({{ 'true' if view.running else 'false' }}, {{ view.next_tick_ms if view.next_tick_ms is not none else 'null' }});
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logger.info("DSA Visual Lab listening on http://%s:%d", CONFIG.host, CONFIG.port)
    app.run(debug=CONFIG.debug, host=CONFIG.host, port=CONFIG.port)
