"""Load and validate the question bank from bundled or user-supplied JSON."""

from __future__ import annotations

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any

from .models import LEVELS, Question

CONTENT_PACKAGE = "phishshield.content"
BUNDLED_FILE = "questions.json"

logger = logging.getLogger(__name__)


def _question_from_dict(position: int, raw: Any) -> Question:
    """Build one question from raw JSON content."""
    if not isinstance(raw, dict):
        raise ValueError(f"Question #{position} must be a JSON object.")

    level = raw.get("level")
    if not isinstance(level, int) or isinstance(level, bool):
        raise ValueError(f"Question #{position} has an invalid level: {level!r}.")
    if level not in LEVELS:
        raise ValueError(f"Question #{position} has level {level}; expected one of {list(LEVELS)}.")

    text = raw.get("question", "")
    if not isinstance(text, str) or not text.strip():
        raise ValueError(f"Question #{position} has no question text.")

    raw_options = raw.get("options", [])
    if not isinstance(raw_options, list):
        raise ValueError(f"Question #{position} options must be a list.")
    if not all(isinstance(option, str) for option in raw_options):
        raise ValueError(f"Question #{position} options must all be strings.")
    options = tuple(raw_options)
    if len(options) < 2:
        raise ValueError(f"Question #{position} needs at least two options.")
    if len(set(options)) != len(options):
        raise ValueError(f"Question #{position} has duplicate options.")

    answer = raw.get("answer")
    if not isinstance(answer, str):
        raise ValueError(f"Question #{position} answer must be a string.")
    if answer not in options:
        raise ValueError(f"Question #{position} answer {answer!r} is not one of its options.")

    explanation = raw.get("explanation", "")
    if not isinstance(explanation, str):
        raise ValueError(f"Question #{position} explanation must be a string.")

    return Question(
        level=level,
        question=text.strip(),
        options=options,
        answer=answer,
        explanation=explanation.strip(),
    )


def parse_questions(raw: Any) -> list[Question]:
    """Validate decoded JSON and return questions in dataset order."""
    if isinstance(raw, dict):
        raw = raw.get("questions")
    if not isinstance(raw, list):
        raise ValueError("Question bank must be a list or an object with a 'questions' list.")
    return [_question_from_dict(position, item) for position, item in enumerate(raw, start=1)]


def load_questions() -> list[Question]:
    """Load the bundled question bank."""
    entry = resources.files(CONTENT_PACKAGE).joinpath(BUNDLED_FILE)
    questions = parse_questions(json.loads(entry.read_text(encoding="utf-8-sig")))
    logger.debug("Loaded %d bundled questions", len(questions))
    return questions


def load_questions_from_file(path: Path | str) -> list[Question]:
    """Load a question bank from a JSON file on disk."""
    file_path = Path(path)
    try:
        raw = json.loads(file_path.read_text(encoding="utf-8-sig"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{file_path} is not valid JSON: {exc}") from exc
    questions = parse_questions(raw)
    logger.debug("Loaded %d questions from %s", len(questions), file_path)
    return questions
