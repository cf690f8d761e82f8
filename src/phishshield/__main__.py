"""Module entrypoint for `python -m phishshield`."""

from __future__ import annotations

from .main import main_entry


def main() -> None:
    """Run the quiz in the terminal."""
    main_entry()


if __name__ == "__main__":  # pragma: no cover
    main()
