"""
main.py — DataStruct Explorer Flask App
========================================
The web server that powers the explorer.

Routes:
  GET  /                         – main UI
  GET  /api/health               – liveness check
  GET  /api/state                – active structure + visualizer state
  POST /api/select               – switch the active structure
  POST /api/visualizer/push      – push / enqueue / add node
  POST /api/visualizer/pop       – pop / dequeue / remove node
  POST /api/visualizer/reset     – back to the default values
  GET  /api/structures           – persisted structure records
  POST /api/quiz-results         – record one quiz result
  GET  /api/quiz/<id>            – generate a quiz for a structure
  POST /api/quiz/<id>/submit     – grade answers and record the score

State management:
  Each browser session owns one Shell, serialised into the Flask session
  between requests:
    • shell   – active id + linear values
    • quiz    – structure id + shuffle seed of the last generated quiz
  The database is only touched by the two persistence routes.
"""

import logging
import numbers
import os
import random
import sys

from flask import Flask, render_template_string, request, jsonify, session

# add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import Settings, configure_logging
from structures import (
    NotFound,
    REGISTRY,
    categories,
    get_structure,
    learning_tip,
)
from structures.quiz import build_quiz, grade
from engine import Shell, NotInteractive
from persistence import PersistenceFacade
from ui import (
    render_visualizer,
    sidebar,
    learning_tip as learning_tip_panel,
    header,
    visualizer_card,
    definition_card,
    complexity_card,
    properties_card,
    quiz_card,
    quiz_panel,
)

logger = logging.getLogger(__name__)

settings = Settings.from_env()

app = Flask(__name__)
app.secret_key = settings.secret_key

facade = PersistenceFacade.from_settings(settings)

# demo push values and quiz shuffles; tests swap these for seeded sources
value_source = random.Random()
quiz_rng = random.Random()


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_shell() -> Shell:
    """Deserialise the shell from session, or create the default one."""
    return Shell.from_dict(session.get("shell"), rng=value_source)


def save_shell(shell: Shell):
    session["shell"] = shell.to_dict()


def error(message: str, status: int):
    return jsonify({"error": message}), status


def json_body():
    """Request JSON as a dict.  An absent body reads as {}, a non-object body as None."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    return data if isinstance(data, dict) else None


def render_panels(shell: Shell) -> dict:
    """Every region of the page that depends on the active structure."""
    d = shell.descriptor
    svg = render_visualizer(shell.controller)
    return {
        "active_id":  shell.active_id,
        "sidebar":    sidebar(categories(), shell.active_id),
        "tip":        learning_tip_panel(learning_tip(d.category)),
        "header":     header(d),
        "visualizer": visualizer_card(svg, shell.controller),
        "definition": definition_card(d),
        "complexity": complexity_card(d),
        "properties": properties_card(d),
        "quiz":       quiz_card(d),
    }


def state_payload(shell: Shell) -> dict:
    return {
        "active_id":   shell.active_id,
        "structure":   shell.descriptor.to_dict(),
        "interactive": shell.interactive,
        "state":       shell.controller.to_dict(),
    }


@app.errorhandler(NotFound)
def handle_not_found(exc: NotFound):
    logger.warning("unknown structure requested: %s", exc.structure_id)
    return error(str(exc), 404)


@app.errorhandler(NotInteractive)
def handle_not_interactive(exc: NotInteractive):
    return error(str(exc), 400)


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    shell = get_shell()
    save_shell(shell)
    return render_template_string(INDEX_TEMPLATE, **render_panels(shell))


@app.route("/api/health")
def api_health():
    return jsonify({"status": "ok", "message": "Server is running"})


@app.route("/api/state")
def api_state():
    return jsonify(state_payload(get_shell()))


# ---------------------------------------------------------------------------
# API: Selection
# ---------------------------------------------------------------------------
@app.route("/api/select", methods=["POST"])
def api_select():
    data = json_body()
    if data is None:
        return error("Request body must be a JSON object", 400)
    structure_id = data.get("id")
    if not isinstance(structure_id, str):
        return error("Missing structure id", 400)

    shell = get_shell()
    shell.select(structure_id)
    save_shell(shell)
    return jsonify({**render_panels(shell), **state_payload(shell)})


# ---------------------------------------------------------------------------
# API: Visualizer Operations
# ---------------------------------------------------------------------------
@app.route("/api/visualizer/push", methods=["POST"])
def api_push():
    data = json_body()
    if data is None:
        return error("Request body must be a JSON object", 400)
    value = data.get("value")
    if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
        return error("value must be an integer", 400)

    shell = get_shell()
    shell.push(value)
    save_shell(shell)
    return jsonify({"svg": render_visualizer(shell.controller), **state_payload(shell)})


@app.route("/api/visualizer/pop", methods=["POST"])
def api_pop():
    shell = get_shell()
    shell.pop()
    save_shell(shell)
    return jsonify({"svg": render_visualizer(shell.controller), **state_payload(shell)})


@app.route("/api/visualizer/reset", methods=["POST"])
def api_reset():
    shell = get_shell()
    shell.reset()
    save_shell(shell)
    return jsonify({"svg": render_visualizer(shell.controller), **state_payload(shell)})


# ---------------------------------------------------------------------------
# API: Persistence
# ---------------------------------------------------------------------------
@app.route("/api/structures")
def api_structures():
    result = facade.fetch_all_structures()
    if not result.ok:
        return error("Database connection failed. Ensure the database is running and configured.", 500)
    return jsonify(result.records)


def _valid_submission_key(key) -> bool:
    return key is None or isinstance(key, str)


def _validate_quiz_result(data: dict):
    structure_id = data.get("structure_id")
    score = data.get("score")
    user_email = data.get("user_email")
    if structure_id not in REGISTRY:
        return "structure_id must name a known data structure"
    if isinstance(score, bool) or not isinstance(score, numbers.Real):
        return "score must be a number"
    if not isinstance(user_email, str) or not user_email.strip():
        return "user_email is required"
    if not _valid_submission_key(data.get("submission_key")):
        return "submission_key must be a string"
    return None


@app.route("/api/quiz-results", methods=["POST"])
def api_quiz_results():
    data = json_body()
    if data is None:
        return error("Request body must be a JSON object", 400)
    problem = _validate_quiz_result(data)
    if problem:
        return error(problem, 400)

    result = facade.record_quiz_result(
        data["structure_id"], data["score"], data["user_email"].strip(),
        submission_key=data.get("submission_key"),
    )
    if not result.success:
        return error("Failed to save result", 500)
    return jsonify({"success": True})


# ---------------------------------------------------------------------------
# API: Quiz
# ---------------------------------------------------------------------------
@app.route("/api/quiz/<structure_id>")
def api_quiz(structure_id):
    descriptor = get_structure(structure_id)
    # only the seed goes into the cookie; submit rebuilds the same quiz from it
    seed = quiz_rng.randrange(2 ** 32)
    quiz = build_quiz(descriptor, random.Random(seed))
    session["quiz"] = {"structure_id": descriptor.id, "seed": seed}
    return jsonify({**quiz.to_dict(), "html": quiz_panel(quiz)})


@app.route("/api/quiz/<structure_id>/submit", methods=["POST"])
def api_quiz_submit(structure_id):
    descriptor = get_structure(structure_id)
    stored = session.get("quiz")
    if not stored or stored.get("structure_id") != structure_id or "seed" not in stored:
        return error("Start the quiz first", 400)

    data = json_body()
    if data is None:
        return error("Request body must be a JSON object", 400)
    answers = data.get("answers") or {}
    user_email = data.get("user_email")
    if not isinstance(answers, dict):
        return error("answers must be an object", 400)
    if not isinstance(user_email, str) or not user_email.strip():
        return error("user_email is required", 400)
    if not _valid_submission_key(data.get("submission_key")):
        return error("submission_key must be a string", 400)

    quiz = build_quiz(descriptor, random.Random(stored["seed"]))
    score = grade(quiz, answers)
    result = facade.record_quiz_result(
        structure_id, score, user_email.strip(),
        submission_key=data.get("submission_key"),
    )
    payload = {
        "score":     score,
        "max_score": quiz.max_score,
        "success":   result.success,
        "html":      quiz_panel(quiz, score=score),
    }
    if not result.success:
        payload["error"] = "Failed to save result"
    return jsonify(payload)


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>DataStruct Explorer</title>
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
  <link href="https://fonts.googleapis.com/css2?family=Inter:wght@300;400;600;700&family=JetBrains+Mono:wght@400;600&display=swap" rel="stylesheet">
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    :root {
      --bg: #f8f9fa;
      --panel: #ffffff;
      --ink: #000000;
      --muted: #9ca3af;
      --border: rgba(0, 0, 0, 0.05);
      --blue: #2563eb;
      --purple: #7c3aed;
    }
    body {
      font-family: 'Inter', -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg);
      color: #111827;
      display: flex;
      min-height: 100vh;
    }

    /* Sidebar */
    #sidebar {
      width: 288px;
      background: var(--panel);
      border-right: 1px solid var(--border);
      padding: 24px;
      display: flex;
      flex-direction: column;
      gap: 32px;
    }
    .brand h1 { font-size: 18px; font-weight: 700; }
    .brand p { font-size: 10px; color: var(--muted); letter-spacing: 0.1em; text-transform: uppercase; font-weight: 700; }
    .sidebar-section { margin-bottom: 24px; }
    .sidebar-section h2, .card h3, .learning-tip h3 {
      font-size: 10px; font-weight: 700; color: var(--muted);
      text-transform: uppercase; letter-spacing: 0.1em; margin-bottom: 12px;
    }
    .sidebar-item {
      width: 100%; display: flex; align-items: center; justify-content: space-between;
      padding: 12px 16px; border: none; border-radius: 12px; background: transparent;
      color: #4b5563; font: 500 14px 'Inter', sans-serif; cursor: pointer; transition: all 0.2s;
    }
    .sidebar-item:hover { background: rgba(0, 0, 0, 0.05); }
    .sidebar-item.active { background: var(--ink); color: #fff; box-shadow: 0 10px 15px rgba(0,0,0,0.1); }
    .learning-tip { margin-top: auto; padding: 16px; background: #f9fafb; border: 1px solid var(--border); border-radius: 16px; }
    .learning-tip p { font-size: 12px; color: #4b5563; line-height: 1.6; }

    /* Main */
    #main { flex: 1; display: flex; flex-direction: column; }
    #header {
      height: 80px; border-bottom: 1px solid var(--border); background: rgba(255,255,255,0.5);
      padding: 0 32px; display: flex; align-items: center; justify-content: space-between;
    }
    .header-title { display: flex; align-items: center; gap: 16px; }
    .header-title h2 { font: italic 600 24px Georgia, serif; }
    .pill { padding: 4px 12px; border-radius: 999px; font-size: 10px; font-weight: 700; text-transform: uppercase; letter-spacing: 0.1em; }
    .pill-linear { background: #eff6ff; color: var(--blue); }
    .pill-non-linear { background: #f5f3ff; color: var(--purple); }
    #btn-reset { border: none; background: none; font-size: 20px; color: var(--muted); cursor: pointer; }

    #content { flex: 1; overflow-y: auto; padding: 32px; }
    .grid { max-width: 1024px; margin: 0 auto; display: grid; grid-template-columns: 2fr 1fr; gap: 32px; }
    .column { display: flex; flex-direction: column; gap: 24px; }
    .card { background: var(--panel); border: 1px solid var(--border); border-radius: 24px; padding: 32px; }
    .card-head { display: flex; justify-content: space-between; }
    .live { font-size: 10px; font-weight: 700; color: var(--muted); text-transform: uppercase; }
    #canvas { display: flex; justify-content: center; overflow-x: auto; margin: 24px 0; }
    .button-row { display: flex; gap: 16px; justify-content: center; }
    .btn-primary, .btn-secondary { padding: 8px 16px; border-radius: 8px; font: 500 14px 'Inter', sans-serif; cursor: pointer; }
    .btn-primary { background: var(--ink); color: #fff; border: none; }
    .btn-secondary { background: #fff; color: var(--ink); border: 1px solid var(--ink); }
    .caption { text-align: center; font-size: 12px; color: var(--muted); font-style: italic; }
    .definition-card p { font-size: 18px; font-weight: 300; line-height: 1.6; color: #374151; }
    .complexity-card { background: var(--ink); color: #fff; }
    .badge-grid { display: grid; grid-template-columns: 1fr 1fr; gap: 24px 16px; }
    .badge { display: flex; flex-direction: column; gap: 4px; }
    .badge-label { font-size: 10px; text-transform: uppercase; color: var(--muted); font-weight: 700; }
    .badge-value { font: 600 14px 'JetBrains Mono', monospace; }
    .properties-card ul { list-style: none; display: flex; flex-direction: column; gap: 16px; font-size: 14px; color: #4b5563; }
    .properties-card li::before { content: "•"; margin-right: 12px; }
    .quiz-card { background: var(--blue); color: #fff; cursor: pointer; }
    .quiz-card h3 { color: #fff; font-size: 18px; text-transform: none; letter-spacing: 0; }
    .quiz-card p { font-size: 14px; color: #dbeafe; margin-bottom: 16px; }
    .cta { font-size: 14px; font-weight: 700; text-transform: uppercase; }
    .quiz-panel { display: flex; flex-direction: column; gap: 16px; }
    .quiz-panel fieldset { border: 1px solid var(--border); border-radius: 12px; padding: 12px; }
    .quiz-panel label { display: block; font-size: 14px; padding: 2px 0; }
    .quiz-score { font-weight: 700; }
    #toast { position: fixed; bottom: 24px; right: 24px; background: #991b1b; color: #fff; padding: 12px 16px; border-radius: 12px; display: none; }
  </style>
</head>
<body>
  <aside id="sidebar">
    <div class="brand">
      <h1>DataStruct</h1>
      <p>Explorer v1.0</p>
    </div>
    <div id="sidebar-nav">{{ sidebar|safe }}</div>
    <div id="tip">{{ tip|safe }}</div>
  </aside>

  <main id="main">
    <header id="header">{{ header|safe }}</header>
    <div id="content">
      <div class="grid">
        <div class="column">
          <div id="visualizer">{{ visualizer|safe }}</div>
          <div id="definition">{{ definition|safe }}</div>
        </div>
        <div class="column">
          <div id="complexity">{{ complexity|safe }}</div>
          <div id="properties">{{ properties|safe }}</div>
          <div id="quiz">{{ quiz|safe }}</div>
        </div>
      </div>
    </div>
  </main>
  <div id="toast"></div>

  <script>
    async function post(url, body) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(body || {}),
      });
      const data = await res.json();
      if (!res.ok) toast(data.error || 'Request failed');
      return data;
    }

    function toast(msg) {
      const el = document.getElementById('toast');
      el.textContent = msg;
      el.style.display = 'block';
      setTimeout(() => { el.style.display = 'none'; }, 3000);
    }

    const REGIONS = {
      sidebar: 'sidebar-nav', tip: 'tip', header: 'header', visualizer: 'visualizer',
      definition: 'definition', complexity: 'complexity', properties: 'properties', quiz: 'quiz',
    };

    function applyPanels(data) {
      for (const [key, id] of Object.entries(REGIONS)) {
        if (data[key] !== undefined) document.getElementById(id).innerHTML = data[key];
      }
    }

    function applyCanvas(data) {
      if (data.svg) document.getElementById('canvas').innerHTML = data.svg;
    }

    document.addEventListener('click', async (e) => {
      const item = e.target.closest('.sidebar-item');
      if (item) {
        applyPanels(await post('/api/select', {id: item.dataset.id}));
        return;
      }
      if (e.target.closest('#btn-push')) { applyCanvas(await post('/api/visualizer/push')); return; }
      if (e.target.closest('#btn-pop'))  { applyCanvas(await post('/api/visualizer/pop')); return; }
      if (e.target.closest('#btn-reset')) { applyCanvas(await post('/api/visualizer/reset')); return; }

      const quizCard = e.target.closest('#btn-quiz');
      if (quizCard) {
        const res = await fetch('/api/quiz/' + quizCard.dataset.id);
        const data = await res.json();
        document.getElementById('quiz').innerHTML = data.html;
      }
    });

    document.addEventListener('submit', async (e) => {
      if (e.target.id !== 'quiz-form') return;
      e.preventDefault();
      const form = e.target;
      const submit = form.querySelector('button[type=submit]');
      submit.disabled = true;
      const answers = {};
      form.querySelectorAll('fieldset').forEach((fs) => {
        const checked = fs.querySelector('input:checked');
        if (checked) answers[fs.dataset.key] = checked.value;
      });
      const data = await post('/api/quiz/' + form.dataset.id + '/submit', {
        answers,
        user_email: form.querySelector('input[name=user_email]').value,
        submission_key: crypto.randomUUID(),
      });
      if (data.html) document.getElementById('quiz').innerHTML = data.html;
      if (data.error) toast(data.error);
    });
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    configure_logging(settings.log_level)
    print("=" * 60)
    print("  DataStruct Explorer")
    print("  Starting Flask server...")
    print(f"  Open http://localhost:{settings.port}")
    print("=" * 60)
    app.run(debug=True, host=settings.host, port=settings.port)
