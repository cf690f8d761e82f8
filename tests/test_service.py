import logging
import random
from fractions import Fraction

import pytest

from phishshield.models import Question
from phishshield.service import QuizService
from phishshield.session import EmptyLevelError, InvalidStateError, Phase


def _service(questions: list[Question], seed: int = 0) -> QuizService:
    return QuizService(questions, random.Random(seed))


def _answer_current(service: QuizService, correct: bool = True) -> None:
    session = service.snapshot()
    assert session is not None
    question = session.questions[session.current_index]
    option = question.answer if correct else next(o for o in question.options if o != question.answer)
    service.submit_answer(option)


def test_starts_without_session(questions: list[Question]) -> None:
    service = _service(questions)
    assert service.snapshot() is None
    assert service.dark_mode is False


def test_levels_and_counts(questions: list[Question]) -> None:
    service = _service(questions)
    assert [info.level for info in service.levels()] == [1, 2, 3]
    assert service.levels()[0].description == "Basic phishing awareness for all employees"
    assert service.question_count(1) == 3
    assert service.question_count(2) == 2
    assert service.question_count(3) == 0


def test_full_round_through_service(questions: list[Question]) -> None:
    service = _service(questions, seed=4)
    started = service.select_level(1)
    assert service.snapshot() is started

    for correct in (True, True, False):
        _answer_current(service, correct)
        service.advance()

    session = service.snapshot()
    assert session is not None
    assert session.complete is True
    assert session.score == 2
    assert service.final_percent() == 67
    assert service.progress_fraction() == Fraction(1)


def test_transitions_without_session_raise(questions: list[Question]) -> None:
    service = _service(questions)
    with pytest.raises(InvalidStateError) as excinfo:
        service.submit_answer("A")
    assert excinfo.value.phase is None
    assert "no quiz is in progress" in str(excinfo.value)
    with pytest.raises(InvalidStateError):
        service.advance()
    with pytest.raises(InvalidStateError):
        service.retreat()
    with pytest.raises(InvalidStateError):
        service.progress_fraction()


def test_rejected_transition_keeps_session(questions: list[Question], caplog: pytest.LogCaptureFixture) -> None:
    service = _service(questions)
    service.select_level(1)
    _answer_current(service)
    before = service.snapshot()

    with caplog.at_level(logging.WARNING, logger="phishshield.service"):
        with pytest.raises(InvalidStateError):
            service.submit_answer("A")
    assert service.snapshot() is before
    assert any("Rejected 'submit an answer'" in record.getMessage() for record in caplog.records)


def test_unknown_level_raises_value_error(questions: list[Question]) -> None:
    service = _service(questions)
    with pytest.raises(ValueError):
        service.select_level(4)
    assert service.snapshot() is None


def test_empty_level(questions: list[Question]) -> None:
    service = _service(questions)
    with pytest.raises(EmptyLevelError):
        service.select_level(3)
    assert service.snapshot() is None

    session = service.select_level(3, allow_empty=True)
    assert session.complete is True
    assert service.progress_fraction() == 0


def test_retreat_and_score(questions: list[Question]) -> None:
    service = _service(questions)
    service.select_level(1)
    _answer_current(service)
    service.advance()
    session = service.retreat()
    assert session.phase is Phase.REVIEWING
    assert session.score == 1
    assert service.retreat() is session


def test_go_home_and_restart_reset_from_any_state(questions: list[Question]) -> None:
    service = _service(questions)
    service.go_home()
    assert service.snapshot() is None

    service.select_level(2)
    _answer_current(service)
    service.go_home()
    assert service.snapshot() is None

    service.select_level(2)
    for _ in range(2):
        _answer_current(service)
        service.advance()
    assert service.snapshot().complete is True
    service.restart()
    assert service.snapshot() is None


def test_select_level_replaces_active_session(questions: list[Question]) -> None:
    service = _service(questions)
    service.select_level(1)
    _answer_current(service)
    fresh = service.select_level(2)
    assert fresh.level == 2
    assert fresh.score == 0
    assert service.snapshot() is fresh


def test_toggle_theme_is_independent_of_session(questions: list[Question]) -> None:
    service = _service(questions)
    service.select_level(1)
    before = service.snapshot()
    assert service.toggle_theme() is True
    assert service.dark_mode is True
    assert service.snapshot() is before
    assert service.toggle_theme() is False


def test_seeded_services_shuffle_identically(questions: list[Question]) -> None:
    first = _service(questions, seed=21).select_level(1)
    second = _service(questions, seed=21).select_level(1)
    assert first.questions == second.questions
