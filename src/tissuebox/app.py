#!/usr/bin/env python3
"""tissuebox - a personal issue tracker in the terminal.

Usage:
    tissuebox                       # Open .tissuebox in the current directory
    tissuebox -i notes.toml         # Use another store file
    tissuebox add "Fix the build"   # One-shot command, no TUI

Key bindings:
    a       - Add a tissue
    d       - Describe the highlighted tissue
    t       - Tag the highlighted tissue
    e       - Edit the title
    r       - Remove menu (tissue, description, tag)
    R       - Restore a removed tissue
    *       - Star / unstar / jump to the starred tissue
    c       - Copy menu (title, description, list)
    C       - Commit with the title as message
    P       - Publish as a GitHub issue
    j/k     - Navigate down/up (vim-style)
    H       - Help
    Esc     - Cancel the current prompt
    q       - Quit
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.events import Key
from textual.screen import Screen

from tissuebox.action_messages import build_git_exclude_prompt, footer_for_mode
from tissuebox.cli import (
    _configure_color_mode,
    _configure_logging,
    _validate_interactive_tty,
)
from tissuebox.cli import (
    main as _cli_main,
)
from tissuebox.config import load_config
from tissuebox.executor import KeyPress
from tissuebox.help_ui import render_help
from tissuebox.modals import ConfirmModal
from tissuebox.models import TissueBox, UserConfig
from tissuebox.services import HelperError
from tissuebox.services.interfaces import AppServices, build_default_app_services
from tissuebox.session import SaveFn, Session
from tissuebox.store import save_box
from tissuebox.themes import TEXTUAL_THEMES, apply_theme
from tissuebox.widgets import (
    Banner,
    ContextFooter,
    ErrorLine,
    TissueBody,
    centered_scroll_offset,
    render_listing,
)

logger = logging.getLogger(__name__)

APP_CSS = """
Screen {
    background: $th-background;
    color: $th-text;
}
"""

BODY_TITLE = "tissuebox"


class BoxScreen(Screen[None]):
    """Main screen: renders the session and feeds it every key press."""

    def __init__(self, session: Session) -> None:
        super().__init__()
        self._session = session

    def compose(self) -> ComposeResult:
        yield Banner()
        yield TissueBody(id="tissue-body")
        yield ContextFooter()
        yield ErrorLine()

    def on_mount(self) -> None:
        self.query_one(TissueBody).border_title = BODY_TITLE
        self.refresh_view()

    def on_key(self, event: Key) -> None:
        event.prevent_default()
        event.stop()
        if not self._session.handle_key(KeyPress(event.key, event.character)):
            self.app.exit()
            return
        self.refresh_view()

    def refresh_view(self) -> None:
        """Re-render body, footer prompt, and error line from session state."""
        session = self._session
        body = self.query_one(TissueBody)
        view = session.view()
        if view.help:
            body.show(render_help())
        else:
            body.show(
                render_listing(view.tissues, view.index, starred=view.starred, walked=view.walked),
                centered_scroll_offset(view.tissues, view.index, body.viewport_height),
            )
        badge, bindings = footer_for_mode(session.mode)
        self.query_one(ContextFooter).render_bindings(bindings, badge)
        self.query_one(ErrorLine).show_error(session.error)


class TissueboxApp(App[None]):
    """Interactive session over one tissue box."""

    TITLE = "tissuebox"
    CSS = APP_CSS
    ENABLE_COMMAND_PALETTE = False

    # Replace Textual's quit keys; q from the list view is the only way out.
    BINDINGS = [
        Binding("ctrl+q", "ignore_quit", show=False, priority=True),
        Binding("ctrl+c", "ignore_quit", show=False, priority=True),
    ]

    def __init__(
        self,
        box: TissueBox,
        store_path: Path,
        config: UserConfig | None = None,
        services: AppServices | None = None,
        *,
        first_run: bool = False,
        base_dir: Path | None = None,
        save_fn: SaveFn = save_box,
    ) -> None:
        super().__init__()
        # Register all Textual themes so $th-* CSS variables resolve before compose()
        for textual_theme in TEXTUAL_THEMES.values():
            self.register_theme(textual_theme)
        self._config = config or UserConfig()
        self.theme = apply_theme(self._config.theme_name)
        self._services = services or build_default_app_services(self._config)
        self._session = Session(box, store_path, self._services, save_fn=save_fn)
        self._first_run = first_run
        self._base_dir = base_dir or Path.cwd()
        self._box_screen: BoxScreen | None = None

    @property
    def session(self) -> Session:
        return self._session

    def on_mount(self) -> None:
        self._box_screen = BoxScreen(self._session)
        self.push_screen(self._box_screen)

        if self._config.config_defaulted:
            self.notify(
                "Config file was unreadable. Using defaults.",
                severity="warning",
                timeout=8,
            )

        if self._first_run and self._services.vcs.has_repository(self._base_dir):
            self.push_screen(
                ConfirmModal(build_git_exclude_prompt(self._session.store_path)),
                self._on_exclude_answer,
            )

    def action_ignore_quit(self) -> None:
        logger.debug("Ignored quit key in %s", type(self._session.mode).__name__)

    def _on_exclude_answer(self, confirmed: bool | None) -> None:
        if not confirmed:
            return
        try:
            self._services.vcs.exclude(self._session.store_path, self._base_dir)
        except HelperError as e:
            logger.warning("Could not update git exclude: %s", e)
            self._session.fail(str(e))
            if self._box_screen is not None:
                self._box_screen.refresh_view()


def main() -> int:
    """Main entry point wrapper for CLI/bootstrap logic."""
    return _cli_main(
        load_config_fn=load_config,
        configure_logging_fn=_configure_logging,
        configure_color_mode_fn=_configure_color_mode,
        validate_interactive_tty_fn=_validate_interactive_tty,
        app_factory=TissueboxApp,
    )


if __name__ == "__main__":
    sys.exit(main())
