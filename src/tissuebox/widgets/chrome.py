"""Widget chrome: the paper banner, the mode footer, and the error line."""

from __future__ import annotations

from rich.markup import escape as escape_markup
from textual.widgets import Static

from tissuebox.themes import THEME_COLORS

BANNER = "\n".join(
    [
        " ▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓",
        " ▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓",
        "▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓ ",
        "▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓▓ ",
    ]
)


class Banner(Static):
    """Four rows of paper art above the box."""

    DEFAULT_CSS = """
    Banner {
        height: 4;
        width: 100%;
        content-align: center top;
        text-align: center;
        color: $th-text;
    }
    """

    def __init__(self) -> None:
        super().__init__(BANNER)


class ContextFooter(Static):
    """Mode-sensitive footer showing the prompt and the keys that apply."""

    DEFAULT_CSS = """
    ContextFooter {
        height: 1;
        background: $th-background;
        color: $th-muted;
        padding: 0 1;
    }
    """

    def render_bindings(self, bindings: list[tuple[str, str]], mode_badge: str = "") -> None:
        """Update the footer with a list of (key, label) binding hints."""
        accent = THEME_COLORS["accent"]
        pink = THEME_COLORS["pink"]
        muted = THEME_COLORS["muted"]
        parts = []
        if mode_badge:
            parts.append(f"[bold {accent}]{escape_markup(mode_badge)}[/]")
        for key, label in bindings:
            safe_key = escape_markup(key)
            if key and label:
                parts.append(f"[bold {pink}]{safe_key}[/] [{muted}]{label}[/]")
            else:
                parts.append(f"[italic {muted}]{safe_key or label}[/]")
        self.update("  ".join(parts))


class ErrorLine(Static):
    """Single line showing the last error, blank when there is none."""

    DEFAULT_CSS = """
    ErrorLine {
        height: 1;
        padding: 0 1;
        color: $th-pink;
    }
    """

    def show_error(self, message: str | None) -> None:
        if message:
            self.update(f"[bold]{escape_markup(message)}[/]")
        else:
            self.update("")


__all__ = ["BANNER", "Banner", "ContextFooter", "ErrorLine"]
