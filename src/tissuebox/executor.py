"""Action executor: one key press in one mode becomes one outcome.

``execute`` is the whole dispatch table of the interactive session. It mutates
the tissue box in place when a key completes an edit and reports that through a
``Persist`` outcome; everything else is a pure mode change. Index bounds are
re-derived from the box on every call, never cached between keys.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import assert_never

from tissuebox.models import TissueBox
from tissuebox.modes import (
    HELP,
    IDLE,
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
from tissuebox.services import HelperError
from tissuebox.services.interfaces import AppServices, build_default_app_services

logger = logging.getLogger(__name__)

# Textual key names for the non-character keys the executor understands.
CANCEL_KEY = "escape"
ENTER_KEY = "enter"
BACKSPACE_KEYS = frozenset({"backspace", "ctrl+h"})
UP_KEYS = frozenset({"up", "left"})
DOWN_KEYS = frozenset({"down", "right"})
UP_CHARS = frozenset({"k", "h"})
DOWN_CHARS = frozenset({"j", "l"})
YES_CHARS = frozenset({"y", "Y"})
NO_CHARS = frozenset({"n", "N"})

# Characters Textual reports alongside named keys when pressed.
_NAMED_KEY_CHARACTERS = {
    "space": " ",
    "enter": "\r",
    "tab": "\t",
    "escape": "\x1b",
    "backspace": "\x08",
}


@dataclass(frozen=True, slots=True)
class KeyPress:
    """A key event reduced to Textual's key name and its character, if any."""

    key: str
    character: str | None = None

    @classmethod
    def of(cls, name: str) -> KeyPress:
        """Build a key press from a single character or a Textual key name."""
        if len(name) == 1:
            return cls(key=name, character=name)
        return cls(key=name, character=_NAMED_KEY_CHARACTERS.get(name))

    @property
    def printable(self) -> str | None:
        """The typed character when it is printable, else None."""
        ch = self.character
        if ch is not None and len(ch) == 1 and ch.isprintable():
            return ch
        return None

    @property
    def is_up(self) -> bool:
        return self.key in UP_KEYS or self.printable in UP_CHARS

    @property
    def is_down(self) -> bool:
        return self.key in DOWN_KEYS or self.printable in DOWN_CHARS


# ============================================================================
# Outcomes
# ============================================================================


@dataclass(frozen=True, slots=True)
class NextMode:
    """Switch mode; optionally move the highlighted tissue."""

    mode: Mode
    highlight: int | None = None


@dataclass(frozen=True, slots=True)
class Persist:
    """The box was mutated and must be saved before the next render."""

    mode: Mode = IDLE
    highlight: int | None = None


@dataclass(frozen=True, slots=True)
class CopyRequested:
    text: str


@dataclass(frozen=True, slots=True)
class Failed:
    reason: str


@dataclass(frozen=True, slots=True)
class Exit:
    pass


Outcome = NextMode | Persist | CopyRequested | Failed | Exit


def clamp_index(index: int, length: int) -> int:
    """Clamp ``index`` into ``[0, length - 1]``; an empty sequence maps to 0."""
    if length <= 0:
        return 0
    return max(0, min(index, length - 1))


# ============================================================================
# Dispatch
# ============================================================================


def execute(
    mode: Mode,
    key: KeyPress,
    index: int,
    box: TissueBox,
    *,
    services: AppServices | None = None,
) -> Outcome:
    """Apply ``key`` in ``mode`` to the tissue highlighted at ``index``."""
    if key.key == CANCEL_KEY and not isinstance(mode, Idle):
        return NextMode(IDLE)
    index = clamp_index(index, len(box.tissues))

    match mode:
        case Idle():
            return _execute_idle(key, index, box)
        case Help() | Failure():
            return NextMode(IDLE) if key.printable is not None else NextMode(mode)
        case Capture(kind=kind, buffer=buffer):
            return _execute_capture(kind, buffer, key, index, box)
        case Confirm(gate=gate):
            return _execute_confirm(gate, key, index, box, services)
        case Menu(menu=menu):
            return _execute_menu(menu, key, index, box)
        case Select(target=target, index=walk):
            return _execute_select(target, walk, key, index, box)
        case _:
            assert_never(mode)


def _execute_idle(key: KeyPress, index: int, box: TissueBox) -> Outcome:
    if key.is_up:
        return NextMode(IDLE, highlight=max(index - 1, 0))
    if key.is_down:
        # Unbounded here; the session clamps before the next render.
        return NextMode(IDLE, highlight=index + 1)

    ch = key.printable
    if ch == "q":
        return Exit()
    if ch == "H":
        return NextMode(HELP)
    if ch == "a":
        return NextMode(Capture(CaptureKind.ADD))
    if ch == "R":
        return NextMode(Select(SelectTarget.RESTORE) if box.recycle_bin else IDLE)

    if not box.tissues:
        return NextMode(IDLE)
    if ch == "d":
        return NextMode(Capture(CaptureKind.DESCRIBE))
    if ch == "t":
        return NextMode(Capture(CaptureKind.TAG))
    if ch == "e":
        return NextMode(Capture(CaptureKind.EDIT))
    if ch == "c":
        return NextMode(Menu(MenuKind.COPY))
    if ch == "C":
        return NextMode(Confirm(Gate.COMMIT))
    if ch == "P":
        return NextMode(Confirm(Gate.PUBLISH))
    if ch == "r":
        return NextMode(Menu(MenuKind.REMOVE))
    if ch == "*":
        jump_to = box.toggle_star(index)
        if jump_to is None:
            return Persist(IDLE)
        return NextMode(IDLE, highlight=jump_to)
    return NextMode(IDLE)


def _execute_capture(
    kind: CaptureKind, buffer: str, key: KeyPress, index: int, box: TissueBox
) -> Outcome:
    if key.key in BACKSPACE_KEYS:
        return NextMode(Capture(kind, buffer[:-1]))
    if key.key == ENTER_KEY:
        return _finish_capture(kind, buffer, index, box)
    ch = key.printable
    if ch is not None:
        return NextMode(Capture(kind, buffer + ch))
    return NextMode(Capture(kind, buffer))


def _finish_capture(kind: CaptureKind, text: str, index: int, box: TissueBox) -> Outcome:
    """Turn a finished buffer into its mutation."""
    if not text.strip():
        return NextMode(IDLE)
    if kind is CaptureKind.ADD:
        box.create(text)
        return Persist(IDLE)

    tissue = box.get(index)
    if tissue is None:
        return NextMode(IDLE)
    match kind:
        case CaptureKind.DESCRIBE:
            tissue.describe(text)
        case CaptureKind.TAG:
            tissue.tag(text)
        case CaptureKind.EDIT:
            tissue.title = text
        case CaptureKind.REMOVE_TAG:
            if text not in tissue.tags:
                return Failed(f"no tag named {text!r} on tissue {index}")
            tissue.tags.discard(text)
        case _:
            assert_never(kind)
    return Persist(IDLE)


def _execute_confirm(
    gate: Gate,
    key: KeyPress,
    index: int,
    box: TissueBox,
    services: AppServices | None,
) -> Outcome:
    ch = key.printable
    if ch in NO_CHARS:
        return NextMode(IDLE)
    if ch not in YES_CHARS:
        return NextMode(Confirm(gate))
    tissue = box.get(index)
    if tissue is None:
        return NextMode(IDLE)

    services = services or build_default_app_services()
    try:
        match gate:
            case Gate.COMMIT:
                services.vcs.commit(tissue)
            case Gate.PUBLISH:
                services.publish.publish(tissue)
            case _:
                assert_never(gate)
    except HelperError as e:
        logger.warning("%s of %r failed: %s", gate.value, tissue.title, e)
        return Failed(f"failed to {gate.value}: {e}")
    box.remove(index)
    return Persist(IDLE)


def _execute_menu(menu: MenuKind, key: KeyPress, index: int, box: TissueBox) -> Outcome:
    tissue = box.get(index)
    if tissue is None:
        return NextMode(IDLE)
    ch = key.printable
    match menu:
        case MenuKind.REMOVE:
            if ch == "T":
                box.remove(index)
                return Persist(IDLE)
            if ch == "d":
                if not tissue.description:
                    return NextMode(IDLE)
                return NextMode(Select(SelectTarget.DESCRIPTION))
            if ch == "t":
                return NextMode(Capture(CaptureKind.REMOVE_TAG))
        case MenuKind.COPY:
            if ch == "t":
                return CopyRequested(tissue.title)
            if ch == "d":
                return CopyRequested("\n".join(tissue.description))
            if ch == "l":
                return CopyRequested(box.to_string())
        case _:
            assert_never(menu)
    return NextMode(Menu(menu))


def _execute_select(
    target: SelectTarget, walk: int, key: KeyPress, index: int, box: TissueBox
) -> Outcome:
    match target:
        case SelectTarget.DESCRIPTION:
            tissue = box.get(index)
            entries = tissue.description if tissue is not None else []
        case SelectTarget.RESTORE:
            entries = box.recycle_bin
        case _:
            assert_never(target)
    if not entries:
        return NextMode(IDLE)

    walk = clamp_index(walk, len(entries))
    if key.is_up:
        return NextMode(Select(target, max(walk - 1, 0)))
    if key.is_down:
        return NextMode(Select(target, min(walk + 1, len(entries) - 1)))
    if key.key == ENTER_KEY:
        if target is SelectTarget.DESCRIPTION:
            del entries[walk]
        else:
            box.restore(walk)
        return Persist(IDLE)
    return NextMode(Select(target, walk))


__all__ = [
    "CopyRequested",
    "Exit",
    "Failed",
    "KeyPress",
    "NextMode",
    "Outcome",
    "Persist",
    "clamp_index",
    "execute",
]
