"""Light and dark style tables for the terminal view."""

from __future__ import annotations

from dataclasses import dataclass

RESET = "\033[0m"


@dataclass(frozen=True)
class Theme:
    """ANSI styles keyed by screen element."""

    name: str
    styles: tuple[tuple[str, str], ...]
    bar_fill: str
    bar_empty: str

    def style(self, role: str) -> str:
        """Return the escape sequence for `role`, or "" when unstyled."""
        for key, value in self.styles:
            if key == role:
                return value
        return ""

    def paint(self, text: str, role: str) -> str:
        """Wrap `text` in the style for `role`; unknown roles stay plain."""
        style = self.style(role)
        if not style:
            return text
        return f"{style}{text}{RESET}"


LIGHT_THEME = Theme(
    name="light",
    styles=(
        ("title", "\033[1;34m"),
        ("level", "\033[34m"),
        ("correct", "\033[32m"),
        ("incorrect", "\033[31m"),
        ("muted", "\033[90m"),
        ("error", "\033[31m"),
    ),
    bar_fill="#",
    bar_empty="-",
)

DARK_THEME = Theme(
    name="dark",
    styles=(
        ("title", "\033[1;96m"),
        ("level", "\033[96m"),
        ("correct", "\033[92m"),
        ("incorrect", "\033[91m"),
        ("muted", "\033[37m"),
        ("error", "\033[91m"),
    ),
    bar_fill="█",
    bar_empty="░",
)


def theme_for(dark_mode: bool) -> Theme:
    """Return the style table for the current toggle value."""
    return DARK_THEME if dark_mode else LIGHT_THEME
