"""
quiz.py — "Take a Quiz" card
=============================
Builds a short multiple-choice quiz for one structure straight from its
descriptor, and grades a set of answers into the integer score that the
persistence layer records.

One question per complexity operation.  Options are the correct value
plus distractors drawn from the other complexity strings in the
registry, shuffled by an injected rng so tests can pin the order.
"""

import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from structures import StructureDescriptor, list_structures

OPTIONS_PER_QUESTION = 4


@dataclass(frozen=True)
class Question:
    key:      str          # "access", "search", …
    prompt:   str
    options:  List[str]
    answer:   str

    def to_dict(self) -> dict:
        """Public form; the answer stays on the server."""
        return {"key": self.key, "prompt": self.prompt, "options": list(self.options)}


@dataclass(frozen=True)
class Quiz:
    structure_id: str
    questions:    List[Question] = field(default_factory=list)

    @property
    def max_score(self) -> int:
        return len(self.questions)

    def to_dict(self) -> dict:
        return {
            "structure_id": self.structure_id,
            "max_score":    self.max_score,
            "questions":    [q.to_dict() for q in self.questions],
        }


def _option_pool() -> List[str]:
    pool: List[str] = []
    for d in list_structures():
        for _, value in d.complexity.as_rows():
            if value not in pool:
                pool.append(value)
    return pool


def build_quiz(descriptor: StructureDescriptor, rng: Optional[random.Random] = None) -> Quiz:
    rng = rng or random.Random()
    pool = _option_pool()
    questions = []
    for label, answer in descriptor.complexity.as_rows():
        distractors = [v for v in pool if v != answer]
        picked = rng.sample(distractors, min(OPTIONS_PER_QUESTION - 1, len(distractors)))
        options = picked + [answer]
        rng.shuffle(options)
        questions.append(Question(
            key=label.lower(),
            prompt=f"What is the {label.lower()} complexity of a {descriptor.name}?",
            options=options,
            answer=answer,
        ))
    return Quiz(structure_id=descriptor.id, questions=questions)


def grade(quiz: Quiz, answers: Dict[str, str]) -> int:
    """Number of questions answered correctly.  Missing answers score 0."""
    return sum(1 for q in quiz.questions if answers.get(q.key) == q.answer)
