"""Help view content shown while the session is in Help mode."""

from __future__ import annotations

from rich.markup import escape as escape_markup

from tissuebox.themes import THEME_COLORS

HELP_TITLE = "Welcome to tissuebox!"

HELP_SECTIONS: list[tuple[str, list[tuple[str, str]]]] = [
    (
        "Tissues",
        [
            ("a", "Add: create a new tissue under the given name"),
            ("d", "Describe: append a description to the selected tissue"),
            ("t", "Tag: assign a tag to the selected tissue"),
            ("e", "Edit: change the title of the selected tissue"),
            ("r", "Remove: delete the tissue, one description, or one tag"),
            ("R", "Restore: bring back a removed tissue"),
            ("*", "Star: mark the selected tissue with a *"),
            ("", "Pressing * on the starred tissue removes the star;"),
            ("", "pressing it anywhere else jumps to the starred tissue."),
        ],
    ),
    (
        "Output commands",
        [
            ("c", "Copy the title, description, or whole list to the clipboard"),
            ("C", "Commit: git add --all && git commit -m <title>"),
            ("P", "Publish the selected tissue as a GitHub issue (requires gh)"),
        ],
    ),
    (
        "Navigation",
        [
            ("j / k", "Move down / up (arrows and h / l work too)"),
            ("Esc", "Cancel the current prompt"),
            ("q", "Quit"),
        ],
    ),
]


def render_help(sections: list[tuple[str, list[tuple[str, str]]]] | None = None) -> str:
    """Render help sections as Rich markup."""
    sections = sections if sections is not None else HELP_SECTIONS
    accent = THEME_COLORS["accent"]
    green = THEME_COLORS["green"]
    lines = [f"[bold {accent}]{HELP_TITLE}[/]"]
    for section_name, entries in sections:
        if not entries:
            continue
        lines.append("")
        lines.append(f"[bold {THEME_COLORS['pink']}]{section_name}[/]")
        width = max(len(key) for key, _ in entries)
        for key, description in entries:
            padded = escape_markup(key.ljust(width))
            lines.append(f"  [{green}]{padded}[/]  {description}")
    return "\n".join(lines)


__all__ = ["HELP_SECTIONS", "HELP_TITLE", "render_help"]
