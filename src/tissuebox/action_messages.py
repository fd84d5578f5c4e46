"""UI-facing copy builders: footer prompts, confirmations, and errors."""

from __future__ import annotations

from pathlib import Path
from typing import assert_never

from tissuebox.models import GIT_EXCLUDE_PATH
from tissuebox.modes import (
    Capture,
    CaptureKind,
    Confirm,
    Failure,
    Gate,
    Help,
    Idle,
    Menu,
    MenuKind,
    Mode,
    Select,
    SelectTarget,
)

IDLE_BINDINGS: list[tuple[str, str]] = [
    ("H", "help"),
    ("a", "add"),
    ("d", "describe"),
    ("t", "tag"),
    ("r", "remove"),
    ("q", "quit"),
]

CAPTURE_PROMPTS: dict[CaptureKind, str] = {
    CaptureKind.ADD: "Add tissue:",
    CaptureKind.DESCRIBE: "Describe tissue:",
    CaptureKind.TAG: "Tag tissue:",
    CaptureKind.EDIT: "Edit tissue title:",
    CaptureKind.REMOVE_TAG: "Remove tag:",
}

MENU_CHOICES: dict[MenuKind, tuple[str, list[tuple[str, str]]]] = {
    MenuKind.REMOVE: ("Remove what?", [("T", "tissue"), ("d", "description"), ("t", "tag")]),
    MenuKind.COPY: ("Copy what?", [("t", "title"), ("d", "description"), ("l", "list")]),
}

GATE_PROMPTS: dict[Gate, str] = {
    Gate.COMMIT: "Really commit?",
    Gate.PUBLISH: "Really publish?",
}

SELECT_PROMPTS: dict[SelectTarget, str] = {
    SelectTarget.DESCRIPTION: "Remove which description?",
    SelectTarget.RESTORE: "Select tissue and restore",
}

YES_NO_BINDINGS: list[tuple[str, str]] = [("y", "yes"), ("N", "no")]
SELECT_BINDINGS: list[tuple[str, str]] = [("j/k", "move"), ("Enter", "choose"), ("Esc", "cancel")]


def _ensure_sentence(text: str) -> str:
    """Return text with terminal sentence punctuation."""
    cleaned = text.strip()
    if not cleaned:
        return ""
    if cleaned.endswith((".", "!", "?")):
        return cleaned
    return f"{cleaned}."


def build_next_step_hint(next_step: str) -> str:
    """Build a canonical next-step guidance line."""
    return f"Next step: {_ensure_sentence(next_step)}"


def build_actionable_error(
    action: str,
    *,
    next_step: str,
    why: str | None = None,
) -> str:
    """Build a 2-3 line actionable error message."""
    lines = [f"Could not {action.strip()}."]
    if why:
        lines.append(f"Why: {_ensure_sentence(why)}")
    lines.append(build_next_step_hint(next_step))
    return "\n".join(lines)


def build_git_exclude_prompt(store_path: Path) -> str:
    """Question shown on first run inside a git repository."""
    return (
        f'Tissuebox will initialize the file "{store_path}".\n\n'
        "Would you like to exclude it from git?\n"
        f"Note: this updates {GIT_EXCLUDE_PATH}, not the public .gitignore."
    )


def footer_for_mode(mode: Mode) -> tuple[str, list[tuple[str, str]]]:
    """Return the ``(badge, bindings)`` footer for a mode.

    Capture modes show the typed buffer in the badge, followed by a cursor.
    """
    match mode:
        case Idle():
            return "", IDLE_BINDINGS
        case Help():
            return "Help!", [("any key", "close")]
        case Failure():
            return "Error", [("any key", "dismiss")]
        case Capture(kind=kind, buffer=buffer):
            return f"{CAPTURE_PROMPTS[kind]} {buffer}_", [("Enter", "save"), ("Esc", "cancel")]
        case Confirm(gate=gate):
            return GATE_PROMPTS[gate], YES_NO_BINDINGS
        case Menu(menu=menu):
            prompt, choices = MENU_CHOICES[menu]
            return prompt, choices
        case Select(target=target):
            return SELECT_PROMPTS[target], SELECT_BINDINGS
        case _:
            assert_never(mode)


__all__ = [
    "build_actionable_error",
    "build_git_exclude_prompt",
    "build_next_step_hint",
    "footer_for_mode",
]
