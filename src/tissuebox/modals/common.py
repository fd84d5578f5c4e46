"""General-purpose modal dialogs."""

from __future__ import annotations

from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static

# ============================================================================
# Confirm Modal
# ============================================================================


class ConfirmModal(ModalScreen[bool]):
    """Yes/no question; dismisses with True for yes."""

    BINDINGS = [
        Binding("y", "confirm", "Confirm"),
        Binding("Y", "confirm", "Confirm", show=False),
        Binding("n", "cancel", "Cancel"),
        Binding("N", "cancel", "Cancel", show=False),
        Binding("escape", "cancel", "Cancel"),
    ]

    CSS = """
    ConfirmModal {
        align: center middle;
    }

    #confirm-dialog {
        width: 60%;
        min-width: 40;
        height: auto;
        background: $th-background;
        border: round $th-accent;
        padding: 0 2;
    }

    #confirm-message {
        color: $th-text;
        margin-bottom: 1;
    }

    #confirm-buttons {
        height: auto;
        align: right middle;
    }

    #confirm-buttons Button {
        margin-left: 1;
    }

    #confirm-footer {
        color: $th-muted;
        margin-top: 1;
    }
    """

    def __init__(self, message: str) -> None:
        super().__init__()
        self._message = message

    def compose(self) -> ComposeResult:
        with Vertical(id="confirm-dialog"):
            yield Label(self._message, id="confirm-message", markup=False)
            with Horizontal(id="confirm-buttons"):
                yield Button("Yes (y)", variant="primary", id="confirm-yes")
                yield Button("No (n)", variant="default", id="confirm-no")
            yield Static("Yes: y  No: n / Esc", id="confirm-footer")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)

    @on(Button.Pressed, "#confirm-yes")
    def on_yes(self) -> None:
        self.dismiss(True)

    @on(Button.Pressed, "#confirm-no")
    def on_no(self) -> None:
        self.dismiss(False)
