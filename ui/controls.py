"""
controls.py — UI Panels
========================
Every panel is a pure function that takes state and returns HTML.

Panels:
  • sidebar               – Linear / Non-Linear sections, active entry marked
  • learning_tip          – sidebar footer text for the active category
  • header                – category pill + structure name + reset button
  • operation_buttons     – Push/Pop, Enqueue/Dequeue, Add/Remove Node
  • visualizer_card       – SVG canvas + operations (or fixture caption)
  • definition_card       – descriptor prose
  • complexity_card       – access / search / insertion / deletion
  • properties_card       – key properties list
  • quiz_card             – "Take a Quiz" call to action
  • quiz_panel            – the generated quiz as a form

Design:
  - All panels are stateless render functions.
  - State is passed in as arguments; nothing reads the shell directly.
  - Output is raw HTML strings; the main app stitches them together.
"""

from html import escape
from typing import List, Optional, Tuple

from structures import Category, StructureDescriptor
from structures.quiz import Quiz


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
def sidebar(
    sections: List[Tuple[Category, List[StructureDescriptor]]],
    active_id: str,
) -> str:
    blocks = []
    for category, items in sections:
        buttons = []
        for item in items:
            active = "active" if item.id == active_id else ""
            chevron = '<span class="chevron">›</span>' if active else ""
            buttons.append(
                f'<button class="sidebar-item {active}" data-id="{item.id}">'
                f'<span>{escape(item.name)}</span>{chevron}</button>'
            )
        blocks.append(f"""
        <div class="sidebar-section" data-category="{category.value}">
          <h2>{category.heading}</h2>
          {''.join(buttons)}
        </div>
        """)
    return f"""<nav id="structure-nav">{''.join(blocks)}</nav>"""


def learning_tip(text: str) -> str:
    return f"""
    <div class="panel learning-tip">
      <h3>Learning Tip</h3>
      <p>{escape(text)}</p>
    </div>
    """


# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------
def header(descriptor: StructureDescriptor) -> str:
    return f"""
    <div class="header-title">
      <span class="pill pill-{descriptor.category.value}">{descriptor.category.value}</span>
      <h2>{escape(descriptor.name)}</h2>
    </div>
    <button id="btn-reset" title="Reset to default values">⟲</button>
    """


# ---------------------------------------------------------------------------
# Visualizer
# ---------------------------------------------------------------------------
def operation_buttons(push_label: str, pop_label: str) -> str:
    return f"""
    <div class="button-row">
      <button id="btn-push" class="btn-primary">+ {escape(push_label)}</button>
      <button id="btn-pop" class="btn-secondary">− {escape(pop_label)}</button>
    </div>
    """


def visualizer_card(svg: str, controller) -> str:
    if controller.interactive:
        footer = operation_buttons(controller.push_label, controller.pop_label)
    else:
        footer = f'<p class="caption">{escape(controller.caption)}</p>'
    return f"""
    <div class="card visualizer-card">
      <div class="card-head">
        <h3>Interactive Visualizer</h3>
        <span class="live">Live Preview</span>
      </div>
      <div id="canvas">{svg}</div>
      <div id="operations">{footer}</div>
    </div>
    """


# ---------------------------------------------------------------------------
# Descriptor cards
# ---------------------------------------------------------------------------
def definition_card(descriptor: StructureDescriptor) -> str:
    return f"""
    <div class="card definition-card">
      <h3>Definition</h3>
      <p>{escape(descriptor.description)}</p>
    </div>
    """


def complexity_card(descriptor: StructureDescriptor) -> str:
    badges = "".join(
        f'<div class="badge"><span class="badge-label">{label}</span>'
        f'<span class="badge-value">{escape(value)}</span></div>'
        for label, value in descriptor.complexity.as_rows()
    )
    return f"""
    <div class="card complexity-card">
      <h3>Time Complexity</h3>
      <div class="badge-grid">{badges}</div>
    </div>
    """


def properties_card(descriptor: StructureDescriptor) -> str:
    items = "".join(f"<li>{escape(p)}</li>" for p in descriptor.properties)
    return f"""
    <div class="card properties-card">
      <h3>Key Properties</h3>
      <ul>{items}</ul>
    </div>
    """


def quiz_card(descriptor: StructureDescriptor) -> str:
    return f"""
    <div class="card quiz-card" id="btn-quiz" data-id="{descriptor.id}">
      <h3>Take a Quiz</h3>
      <p>Test your knowledge on {escape(descriptor.name)}s.</p>
      <span class="cta">Start Now ›</span>
    </div>
    """


# ---------------------------------------------------------------------------
# Quiz form
# ---------------------------------------------------------------------------
def quiz_panel(quiz: Quiz, score: Optional[int] = None) -> str:
    questions = []
    for q in quiz.questions:
        options = "".join(
            f'<label><input type="radio" name="{q.key}" value="{escape(opt)}"> {escape(opt)}</label>'
            for opt in q.options
        )
        questions.append(f"""
        <fieldset data-key="{q.key}">
          <legend>{escape(q.prompt)}</legend>
          {options}
        </fieldset>
        """)
    result = ""
    if score is not None:
        result = f'<p class="quiz-score">Score: {score} / {quiz.max_score}</p>'
    return f"""
    <form class="panel quiz-panel" id="quiz-form" data-id="{quiz.structure_id}">
      {''.join(questions)}
      <label>Email: <input type="email" name="user_email" required></label>
      <button type="submit" class="btn-primary">Submit</button>
      {result}
    </form>
    """
