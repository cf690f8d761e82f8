"""Runtime settings resolved from environment variables and CLI flags."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "PHISHSHIELD_"
TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"", "0", "false", "no", "off"}
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    """Settings for one run of the quiz."""

    questions_path: Path | None = None
    seed: int | None = None
    dark_mode: bool = False
    log_level: str = "WARNING"


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (got {value!r}).")


def _parse_log_level(name: str, value: str) -> str:
    level = value.strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"{name} must be one of {', '.join(LOG_LEVELS)} (got {value!r}).")
    return level


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build settings from `PHISHSHIELD_*` environment variables."""
    env = os.environ if environ is None else environ

    questions = env.get(f"{ENV_PREFIX}QUESTIONS", "").strip()
    seed_text = env.get(f"{ENV_PREFIX}SEED", "").strip()
    seed: int | None = None
    if seed_text:
        try:
            seed = int(seed_text)
        except ValueError:
            raise ValueError(f"{ENV_PREFIX}SEED must be an integer (got {seed_text!r}).") from None

    return Settings(
        questions_path=Path(questions) if questions else None,
        seed=seed,
        dark_mode=_parse_bool(f"{ENV_PREFIX}DARK_MODE", env.get(f"{ENV_PREFIX}DARK_MODE", "")),
        log_level=_parse_log_level(f"{ENV_PREFIX}LOG_LEVEL", env.get(f"{ENV_PREFIX}LOG_LEVEL", "WARNING")),
    )


def configure_logging(level: str) -> None:
    """Send log records to stderr at `level`."""
    logging.basicConfig(level=getattr(logging, level), format="%(levelname)s %(name)s: %(message)s")
