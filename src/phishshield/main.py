"""CLI entrypoint for the phishing-awareness quiz."""

from __future__ import annotations

import argparse
import logging
import random
from collections.abc import Callable
from fractions import Fraction
from pathlib import Path

from . import __version__
from .config import LOG_LEVELS, Settings, configure_logging, load_settings
from .content_loader import load_questions, load_questions_from_file
from .models import Question
from .service import QuizService
from .session import Phase, QuizError, Session, current_question
from .themes import Theme, theme_for

InputFn = Callable[[str], str]
PrintFn = Callable[[str], None]
QUIT_COMMANDS = {"q", ":q", ":quit", ":exit"}
HOME_COMMANDS = {"h", "home"}
NEXT_COMMANDS = {"n", "next", ""}
PREVIOUS_COMMANDS = {"p", "prev", "previous"}
THEME_COMMANDS = {"t", "theme"}
RESTART_COMMANDS = {"r", "restart"}
PROGRESS_BAR_WIDTH = 20

APP_NAME = "BawahTech PhishShield"
APP_DESCRIPTION = (
    "An interactive quiz that helps employees across all industries recognize and stop phishing attacks."
)

logger = logging.getLogger(__name__)


class QuitApp(Exception):
    """Signal immediate app exit from nested screens."""


def _service(settings: Settings) -> QuizService:
    """Create the app service from resolved settings."""
    if settings.questions_path is not None:
        questions = load_questions_from_file(settings.questions_path)
    else:
        questions = load_questions()
    rng = random.Random(settings.seed)
    return QuizService(questions, rng, dark_mode=settings.dark_mode)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="phishshield", description="Phishing-awareness quiz")
    parser.add_argument("command", nargs="?", default="play", choices=["play"])
    parser.add_argument("--questions", type=Path, help="JSON question bank to use instead of the bundled one")
    parser.add_argument("--seed", type=int, help="seed for question order")
    parser.add_argument("--dark", action=argparse.BooleanOptionalAction, help="start in dark or light mode")
    parser.add_argument("--log-level", choices=LOG_LEVELS, type=str.upper)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def resolve_settings(args: argparse.Namespace, base: Settings) -> Settings:
    """Overlay CLI flags on environment-derived settings."""
    return Settings(
        questions_path=args.questions if args.questions is not None else base.questions_path,
        seed=args.seed if args.seed is not None else base.seed,
        dark_mode=args.dark if args.dark is not None else base.dark_mode,
        log_level=args.log_level or base.log_level,
    )


def run(argv: list[str] | None = None) -> int:
    """Run the CLI application."""
    args = _parse_args(argv)
    try:
        settings = resolve_settings(args, load_settings())
    except ValueError as exc:
        print(f"Configuration error: {exc}")
        return 2
    configure_logging(settings.log_level)
    try:
        service = _service(settings)
    except (OSError, ValueError) as exc:
        logger.error("Could not load question bank: %s", exc)
        print(f"Could not load question bank: {exc}")
        return 2
    return play_shell(service)


def play_shell(service: QuizService, input_fn: InputFn = input, print_fn: PrintFn = print) -> int:
    """Run the screen loop until the player quits."""
    try:
        while True:
            session = service.snapshot()
            if session is None:
                _home_screen(service, input_fn, print_fn)
            elif session.complete:
                _complete_screen(service, session, input_fn, print_fn)
            else:
                _question_screen(service, session, input_fn, print_fn)
    except (QuitApp, EOFError):
        print_fn("Goodbye.")
        return 0


def _theme(service: QuizService) -> Theme:
    return theme_for(service.dark_mode)


def _home_screen(service: QuizService, input_fn: InputFn, print_fn: PrintFn) -> None:
    """Show level selection and theme toggle."""
    theme = _theme(service)
    print_fn("\n" + theme.paint(f"=== {APP_NAME} ===", "title"))
    print_fn(APP_DESCRIPTION)
    print_fn(theme.paint(f"Dark mode: {'on' if service.dark_mode else 'off'} (t to toggle)", "muted"))
    print_fn("\nSelect Difficulty Level")
    for info in service.levels():
        count = service.question_count(info.level)
        print_fn(f"{info.level}) {info.title} - {info.description} ({count} questions)")
    print_fn("q) Quit")

    choice = input_fn("Choose: ").strip().lower()
    if choice in QUIT_COMMANDS:
        raise QuitApp()
    if choice in THEME_COMMANDS:
        service.toggle_theme()
        return
    if not choice.isdecimal():
        print_fn(theme.paint("Invalid choice.", "error"))
        return
    try:
        service.select_level(int(choice))
    except (QuizError, ValueError) as exc:
        print_fn(theme.paint(str(exc), "error"))


def progress_bar(fraction: Fraction, theme: Theme, width: int = PROGRESS_BAR_WIDTH) -> str:
    """Render a fixed-width text progress bar."""
    filled = int(fraction * width)
    return "[" + theme.bar_fill * filled + theme.bar_empty * (width - filled) + "]"


def _question_header(service: QuizService, session: Session, question: Question, print_fn: PrintFn) -> None:
    theme = _theme(service)
    print_fn("\n" + theme.paint(f"Level {question.level}", "level"))
    print_fn(f"Question {session.current_index + 1} / {session.length}")
    print_fn(progress_bar(service.progress_fraction(), theme))
    print_fn(f"\n{question.question}")


def _question_screen(service: QuizService, session: Session, input_fn: InputFn, print_fn: PrintFn) -> None:
    """Show the current question, its explanation, or a read-only review."""
    question = current_question(session)
    if question is None:
        return
    theme = _theme(service)
    _question_header(service, session, question, print_fn)

    if session.phase is Phase.ANSWERING:
        for idx, option in enumerate(question.options, start=1):
            print_fn(f"{idx}) {option}")
        if session.current_index > 0:
            print_fn("p) Previous")
        print_fn("h) Home")
        print_fn("t) Toggle dark mode")
        choice = input_fn("Your answer: ").strip().lower()
        if _handle_common(service, choice):
            return
        if choice.isdecimal() and 1 <= int(choice) <= len(question.options):
            _attempt(service, lambda: service.submit_answer(question.options[int(choice) - 1]), print_fn)
            return
        print_fn(theme.paint("Invalid choice.", "error"))
        return

    if session.phase is Phase.AWAITING_ADVANCE:
        if session.last_answer_correct:
            print_fn(theme.paint("Correct!", "correct"))
        else:
            print_fn(theme.paint("Incorrect", "incorrect"))
            print_fn(f"Answer: {question.answer}")
    else:
        print_fn(theme.paint(f"Answer: {question.answer}", "muted"))
    if question.explanation:
        print_fn(question.explanation)

    if session.current_index > 0:
        print_fn("p) Previous")
    print_fn("h) Home")
    print_fn("n) Next")
    choice = input_fn("Choose: ").strip().lower()
    if _handle_common(service, choice):
        return
    if choice in NEXT_COMMANDS:
        _attempt(service, service.advance, print_fn)
        return
    print_fn(theme.paint("Invalid choice.", "error"))


def _handle_common(service: QuizService, choice: str) -> bool:
    """Apply navigation shared by question screens; True when handled."""
    if choice in QUIT_COMMANDS:
        raise QuitApp()
    if choice in HOME_COMMANDS:
        service.go_home()
        return True
    if choice in THEME_COMMANDS:
        service.toggle_theme()
        return True
    if choice in PREVIOUS_COMMANDS:
        service.retreat()
        return True
    return False


def _attempt(service: QuizService, action: Callable[[], object], print_fn: PrintFn) -> None:
    """Run one controller action, showing a rejected transition as a message."""
    try:
        action()
    except QuizError as exc:
        print_fn(_theme(service).paint(str(exc), "error"))


def _complete_screen(service: QuizService, session: Session, input_fn: InputFn, print_fn: PrintFn) -> None:
    """Show the final score."""
    theme = _theme(service)
    print_fn("\n" + theme.paint("Quiz Completed!", "title"))
    if session.length == 0:
        print_fn(f"Level {session.level} has no questions.")
    else:
        print_fn(f"Your Score: {session.score} / {session.length}")
        print_fn(f"{service.final_percent()}%")
    print_fn("r) Restart Quiz")
    print_fn("t) Toggle dark mode")
    print_fn("q) Quit")
    choice = input_fn("Choose: ").strip().lower()
    if choice in QUIT_COMMANDS:
        raise QuitApp()
    if choice in RESTART_COMMANDS or choice in HOME_COMMANDS:
        service.restart()
    elif choice in THEME_COMMANDS:
        service.toggle_theme()
    else:
        print_fn(theme.paint("Invalid choice.", "error"))


def main_entry() -> None:
    """Console script entrypoint."""
    raise SystemExit(run())


if __name__ == "__main__":  # pragma: no cover
    main_entry()
