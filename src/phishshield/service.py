"""Application service owning the active quiz session and theme flag."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence
from fractions import Fraction

from . import session as quiz
from .models import LEVEL_INFO, LEVELS, LevelInfo, Question
from .session import InvalidStateError, QuizError, Session

logger = logging.getLogger(__name__)


class QuizService:
    """Coordinates the question bank, one active session, and display theme."""

    def __init__(
        self,
        questions: Sequence[Question],
        rng: random.Random | None = None,
        *,
        dark_mode: bool = False,
    ) -> None:
        """Initialize service over a validated question bank."""
        self.questions: tuple[Question, ...] = tuple(questions)
        self.rng = rng if rng is not None else random.Random()
        self.dark_mode = dark_mode
        self._session: Session | None = None

    def levels(self) -> list[LevelInfo]:
        """Return selectable levels in order."""
        return [LEVEL_INFO[level] for level in LEVELS]

    def question_count(self, level: int) -> int:
        """Return how many questions the bank holds for one level."""
        return sum(1 for question in self.questions if question.level == level)

    def snapshot(self) -> Session | None:
        """Return the active session, or None on the home screen."""
        return self._session

    def select_level(self, level: int, *, allow_empty: bool = False) -> Session:
        """Start a new session at `level`, replacing any active one."""
        if level not in LEVELS:
            raise ValueError(f"Unknown level {level}; expected one of {list(LEVELS)}.")
        started = quiz.select_level(level, self.questions, self.rng, allow_empty=allow_empty)
        self._session = started
        logger.info("Started level %d with %d questions", level, started.length)
        return started

    def submit_answer(self, option: str) -> Session:
        """Grade an answer for the current question."""
        return self._apply("submit an answer", lambda current: quiz.submit_answer(current, option))

    def advance(self) -> Session:
        """Move on from an answered question."""
        updated = self._apply("advance", quiz.advance)
        if updated.complete:
            logger.info("Completed level %d: %d/%d", updated.level, updated.score, updated.length)
        return updated

    def retreat(self) -> Session:
        """Step back to the previous question."""
        return self._apply("go back", quiz.retreat)

    def reset(self) -> None:
        """Drop the active session from any state."""
        if self._session is not None:
            logger.debug("Session at level %d discarded", self._session.level)
        self._session = None

    def go_home(self) -> None:
        """Return to level selection."""
        self.reset()

    def restart(self) -> None:
        """Leave the completed quiz and return to level selection."""
        self.reset()

    def toggle_theme(self) -> bool:
        """Flip dark mode and return the new value."""
        self.dark_mode = not self.dark_mode
        return self.dark_mode

    def progress_fraction(self) -> Fraction:
        """Return display progress of the active session."""
        return quiz.progress_fraction(self._require_session("show progress"))

    def final_percent(self) -> int:
        """Return the final score percentage of a completed session."""
        return quiz.final_percent(self._require_session("report a final score"))

    def _require_session(self, operation: str) -> Session:
        if self._session is None:
            logger.warning("Rejected '%s': no active session", operation)
            raise InvalidStateError(operation, None)
        return self._session

    def _apply(self, operation: str, transition: Callable[[Session], Session]) -> Session:
        current = self._require_session(operation)
        try:
            updated = transition(current)
        except QuizError as exc:
            logger.warning("Rejected '%s' at question %d: %s", operation, current.current_index + 1, exc)
            raise
        self._session = updated
        return updated

