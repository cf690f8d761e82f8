"""Quiz session state machine.

A `Session` is an immutable snapshot of one quiz attempt. The transition
functions in this module take a snapshot and return the next one, raising
`InvalidStateError` when a transition is not allowed so a caller can never
observe a half-applied change.

Phases::

    ANSWERING --submit_answer--> AWAITING_ADVANCE
    AWAITING_ADVANCE / REVIEWING --advance--> ANSWERING | REVIEWING | COMPLETE
    ANSWERING / AWAITING_ADVANCE / REVIEWING --retreat--> REVIEWING

Score is never taken back. Stepping back lands on a question that was already
answered, so it is shown read-only (`REVIEWING`) instead of being answerable
again.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import Enum
from fractions import Fraction

from .models import Question

logger = logging.getLogger(__name__)


class QuizError(Exception):
    """Base class for recoverable quiz errors."""


class EmptyLevelError(QuizError):
    """The selected level has no questions."""

    def __init__(self, level: int) -> None:
        super().__init__(f"Level {level} has no questions.")
        self.level = level


class InvalidStateError(QuizError):
    """A transition was requested that the current phase does not allow."""

    def __init__(self, operation: str, phase: Phase | None) -> None:
        state = "no quiz is in progress" if phase is None else phase.value
        super().__init__(f"Cannot {operation}: {state}.")
        self.operation = operation
        self.phase = phase


class Phase(Enum):
    """Where a session stands in the quiz."""

    ANSWERING = "answering"
    AWAITING_ADVANCE = "awaiting advance"
    REVIEWING = "reviewing"
    COMPLETE = "complete"


@dataclass(frozen=True)
class Session:
    """Read-only snapshot of one quiz attempt."""

    level: int
    questions: tuple[Question, ...]
    current_index: int = 0
    score: int = 0
    phase: Phase = Phase.ANSWERING
    last_answer_correct: bool | None = None
    results: tuple[bool | None, ...] = ()

    @property
    def length(self) -> int:
        return len(self.questions)

    @property
    def awaiting_advance(self) -> bool:
        return self.phase is Phase.AWAITING_ADVANCE

    @property
    def complete(self) -> bool:
        return self.phase is Phase.COMPLETE

    @property
    def answered_count(self) -> int:
        return sum(1 for result in self.results if result is not None)


def select_level(
    level: int,
    questions: Iterable[Question],
    rng: random.Random | None = None,
    *,
    allow_empty: bool = False,
) -> Session:
    """Start a session over the level's questions in random order.

    Raises `EmptyLevelError` when the level has no questions, unless
    `allow_empty` is set, in which case the returned zero-length session is
    already complete.
    """
    pool = [question for question in questions if question.level == level]
    if not pool:
        if not allow_empty:
            raise EmptyLevelError(level)
        logger.debug("Level %d is empty; starting a completed session", level)
        return Session(level=level, questions=(), phase=Phase.COMPLETE)

    # random.Random.shuffle is Fisher-Yates: every permutation equally likely.
    (rng if rng is not None else random.Random()).shuffle(pool)
    logger.debug("Started level %d with %d questions", level, len(pool))
    return Session(level=level, questions=tuple(pool), results=(None,) * len(pool))


def current_question(session: Session) -> Question | None:
    """Return the question on screen, or None once the quiz is complete."""
    if session.complete:
        return None
    return session.questions[session.current_index]


def submit_answer(session: Session, chosen_option: str) -> Session:
    """Grade `chosen_option` against the current question."""
    if session.phase is not Phase.ANSWERING:
        raise InvalidStateError("submit an answer", session.phase)

    question = session.questions[session.current_index]
    correct = chosen_option == question.answer
    results = list(session.results)
    results[session.current_index] = correct
    logger.debug("Question %d answered %s", session.current_index + 1, "correctly" if correct else "incorrectly")
    return replace(
        session,
        score=session.score + (1 if correct else 0),
        phase=Phase.AWAITING_ADVANCE,
        last_answer_correct=correct,
        results=tuple(results),
    )


def advance(session: Session) -> Session:
    """Move to the next question, or complete the quiz from the last one."""
    if session.phase not in (Phase.AWAITING_ADVANCE, Phase.REVIEWING):
        raise InvalidStateError("advance", session.phase)

    next_index = session.current_index + 1
    if next_index >= session.length:
        logger.debug("Level %d complete with score %d/%d", session.level, session.score, session.length)
        return replace(session, phase=Phase.COMPLETE, last_answer_correct=None)

    phase = Phase.ANSWERING if session.results[next_index] is None else Phase.REVIEWING
    return replace(session, current_index=next_index, phase=phase, last_answer_correct=None)


def retreat(session: Session) -> Session:
    """Step back one question; a no-op on the first question."""
    if session.complete:
        raise InvalidStateError("go back", session.phase)
    if session.current_index == 0:
        return session
    return replace(
        session,
        current_index=session.current_index - 1,
        phase=Phase.REVIEWING,
        last_answer_correct=None,
    )


def progress_fraction(session: Session) -> Fraction:
    """Share of the quiz done, for display: 0 for an empty session."""
    if session.length == 0:
        return Fraction(0)
    if session.complete:
        return Fraction(1)
    done = session.current_index + (1 if session.awaiting_advance else 0)
    return Fraction(done, session.length)


def final_percent(session: Session) -> int:
    """Score as a whole percentage, rounding halves up."""
    if not session.complete or session.length == 0:
        raise InvalidStateError("report a final score", session.phase)
    # Fraction keeps 2/3 -> 66.666... exact before rounding.
    return int(Fraction(session.score * 100, session.length) + Fraction(1, 2))
