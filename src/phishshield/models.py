"""Core domain records for the phishing-awareness quiz."""

from __future__ import annotations

from dataclasses import dataclass

LEVELS: tuple[int, ...] = (1, 2, 3)


@dataclass(frozen=True)
class Question:
    """One multiple-choice question from the question bank."""

    level: int
    question: str
    options: tuple[str, ...]
    answer: str
    explanation: str


@dataclass(frozen=True)
class LevelInfo:
    """Difficulty level shown on the home screen."""

    level: int
    title: str
    description: str


LEVEL_INFO: dict[int, LevelInfo] = {
    1: LevelInfo(level=1, title="Level 1", description="Basic phishing awareness for all employees"),
    2: LevelInfo(level=2, title="Level 2", description="For regular users and office workers"),
    3: LevelInfo(level=3, title="Level 3", description="Sophisticated attacks, security pros"),
}
