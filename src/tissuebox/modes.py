"""Interaction modes for the interactive session.

A mode is one of a closed set of frozen dataclasses. The executor matches on
them exhaustively; nothing here carries behaviour.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CaptureKind(Enum):
    """What a finished text buffer turns into."""

    ADD = "add"
    DESCRIBE = "describe"
    TAG = "tag"
    EDIT = "edit"
    REMOVE_TAG = "remove_tag"


class Gate(Enum):
    """External actions guarded by a yes/no confirmation."""

    COMMIT = "commit"
    PUBLISH = "publish"


class MenuKind(Enum):
    """Single-key sub-menus."""

    REMOVE = "remove"
    COPY = "copy"


class SelectTarget(Enum):
    """Sequences walked by an index selector."""

    DESCRIPTION = "description"
    RESTORE = "restore"


@dataclass(frozen=True, slots=True)
class Idle:
    """Browsing the live tissue list."""


@dataclass(frozen=True, slots=True)
class Help:
    """Help text shown in place of the list."""


@dataclass(frozen=True, slots=True)
class Failure:
    """A recoverable error on screen until the next key."""

    reason: str


@dataclass(frozen=True, slots=True)
class Capture:
    """Collecting a line of text."""

    kind: CaptureKind
    buffer: str = ""


@dataclass(frozen=True, slots=True)
class Confirm:
    gate: Gate


@dataclass(frozen=True, slots=True)
class Menu:
    menu: MenuKind


@dataclass(frozen=True, slots=True)
class Select:
    """Walking an index over descriptions or the recycle bin."""

    target: SelectTarget
    index: int = 0


Mode = Idle | Help | Failure | Capture | Confirm | Menu | Select

IDLE = Idle()
HELP = Help()


__all__ = [
    "HELP",
    "IDLE",
    "Capture",
    "CaptureKind",
    "Confirm",
    "Failure",
    "Gate",
    "Help",
    "Idle",
    "Menu",
    "MenuKind",
    "Mode",
    "Select",
    "SelectTarget",
]
