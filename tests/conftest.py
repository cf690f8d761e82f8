from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from phishshield.models import Question  # noqa: E402


def make_question(level: int, answer: str, options: tuple[str, ...] = ("A", "B", "C", "D")) -> Question:
    """Build a small question whose text names its answer."""
    return Question(
        level=level,
        question=f"L{level} question with answer {answer}",
        options=options,
        answer=answer,
        explanation=f"The answer is {answer}.",
    )


@pytest.fixture
def questions() -> list[Question]:
    """Three level-1 questions (answers A, B, C), two at level 2, none at level 3."""
    return [
        make_question(1, "A"),
        make_question(2, "D"),
        make_question(1, "B"),
        make_question(1, "C"),
        make_question(2, "A"),
    ]
