"""PhishShield phishing-awareness quiz package."""

from __future__ import annotations

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

__all__ = ["__version__"]


def _source_tree_version() -> str | None:
    """Read `[project].version` when running from a source checkout."""
    for base in Path(__file__).resolve().parents:
        pyproject = base / "pyproject.toml"
        if not pyproject.is_file():
            continue
        try:
            data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError:
            return None
        project = data.get("project", {})
        if project.get("name") != "phishshield":
            continue
        value = project.get("version")
        return str(value) if value else None
    return None


_tree_version = _source_tree_version()
if _tree_version is not None:
    __version__ = _tree_version
else:
    try:
        __version__ = version("phishshield")
    except PackageNotFoundError:
        __version__ = "0+unknown"
