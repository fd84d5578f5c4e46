"""Session state: the mode, the highlight, and how outcomes are applied."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import assert_never

from tissuebox.clipboard import ClipboardUnavailable
from tissuebox.executor import (
    CopyRequested,
    Exit,
    Failed,
    KeyPress,
    NextMode,
    Outcome,
    Persist,
    clamp_index,
    execute,
)
from tissuebox.models import Tissue, TissueBox
from tissuebox.modes import IDLE, Failure, Help, Mode, Select, SelectTarget
from tissuebox.services.interfaces import AppServices, ClipboardService
from tissuebox.store import StoreError, save_box

logger = logging.getLogger(__name__)

SaveFn = Callable[[TissueBox, Path], None]


def hand_off_copy(request: CopyRequested, clipboard: ClipboardService) -> NextMode | Failed:
    """Give copied text to the clipboard service; never retried."""
    try:
        clipboard.copy(request.text)
    except ClipboardUnavailable as e:
        return Failed(str(e))
    return NextMode(IDLE)


@dataclass(slots=True)
class View:
    """What the body should show for the current mode."""

    tissues: Sequence[Tissue]
    index: int
    starred: int | None
    walked: int | None
    help: bool


class Session:
    """One interactive session over one store file.

    Every key is clamped, executed, and applied to completion before the next
    one is read. A ``Persist`` outcome is saved before control returns.
    """

    def __init__(
        self,
        box: TissueBox,
        store_path: Path,
        services: AppServices,
        *,
        save_fn: SaveFn = save_box,
    ) -> None:
        self.box = box
        self.store_path = store_path
        self.mode: Mode = IDLE
        self.highlight = 0
        self._services = services
        self._save = save_fn

    @property
    def error(self) -> str | None:
        """The message on the error line, if any."""
        return self.mode.reason if isinstance(self.mode, Failure) else None

    def handle_key(self, key: KeyPress) -> bool:
        """Process one key press. Returns False when the session should exit."""
        self.highlight = clamp_index(self.highlight, len(self.box.tissues))
        outcome = execute(self.mode, key, self.highlight, self.box, services=self._services)
        return self.apply(outcome)

    def apply(self, outcome: Outcome) -> bool:
        match outcome:
            case NextMode(mode=mode, highlight=highlight):
                self._enter(mode, highlight)
            case Persist(mode=mode, highlight=highlight):
                self._enter(mode, highlight)
                self.persist()
            case CopyRequested():
                return self.apply(hand_off_copy(outcome, self._services.clipboard))
            case Failed(reason=reason):
                self.fail(reason)
            case Exit():
                return False
            case _:
                assert_never(outcome)
        return True

    def persist(self) -> None:
        """Save the box now; a failure becomes the displayed error."""
        try:
            self._save(self.box, self.store_path)
        except StoreError as e:
            logger.warning("Save failed: %s", e)
            self.fail(str(e))
            return
        logger.debug("Saved %d tissues to %s", len(self.box.tissues), self.store_path)

    def fail(self, reason: str) -> None:
        self.mode = Failure(reason)

    def _enter(self, mode: Mode, highlight: int | None) -> None:
        self.mode = mode
        if highlight is not None:
            self.highlight = highlight
        self.highlight = clamp_index(self.highlight, len(self.box.tissues))

    def view(self) -> View:
        """Describe the body for the current mode."""
        match self.mode:
            case Select(target=SelectTarget.RESTORE, index=walk):
                bin_ = self.box.recycle_bin
                return View(bin_, clamp_index(walk, len(bin_)), None, None, help=False)
            case Select(target=SelectTarget.DESCRIPTION, index=walk):
                return View(self.box.tissues, self.highlight, self.box.starred, walk, help=False)
            case _:
                return View(
                    self.box.tissues,
                    self.highlight,
                    self.box.starred,
                    None,
                    help=isinstance(self.mode, Help),
                )


__all__ = ["SaveFn", "Session", "View", "hand_off_copy"]
