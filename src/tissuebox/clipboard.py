"""Clipboard hand-off through a detached copy of this program.

Some platforms (X11, Wayland) only keep a clipboard selection alive while the
process that set it keeps running. The session therefore never sets the
clipboard itself: it starts ``python -m tissuebox <text>`` with
``TISSUEBOX_CLIPBOARD_OWNER=1`` in the environment and forgets about it. That
child claims the clipboard with :func:`claim_clipboard` and, where needed,
stays alive serving it until another program takes ownership.
"""

from __future__ import annotations

import logging
import os
import platform
import subprocess
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path

from tissuebox.models import CLIPBOARD_OWNER_ENV

logger = logging.getLogger(__name__)

CLIPBOARD_UNAVAILABLE = "clipboard unavailable"


class ClipboardUnavailable(Exception):
    """Raised when the clipboard helper cannot be started."""

    def __init__(self) -> None:
        super().__init__(CLIPBOARD_UNAVAILABLE)


def default_helper_command() -> list[str]:
    """Command that re-invokes this program under the current interpreter."""
    return [sys.executable, "-m", "tissuebox"]


def get_clipboard_command_plan(system: str) -> tuple[list[list[str]], str] | None:
    """Return clipboard command candidates and input encoding for a platform.

    Linux candidates run in the foreground so the owning process lives exactly
    as long as the selection does.
    """
    if system == "Darwin":
        return ([["pbcopy"]], "utf-8")
    if system == "Linux":
        return (
            [
                ["wl-copy", "--foreground"],
                ["xclip", "-selection", "clipboard", "-quiet"],
                ["xsel", "--clipboard", "--input", "--nodetach"],
            ],
            "utf-8",
        )
    if system == "Windows":
        return ([["clip"]], "utf-16")
    return None


def is_clipboard_owner(environ: Mapping[str, str] | None = None) -> bool:
    """Return True when this process was started as a clipboard owner."""
    env = os.environ if environ is None else environ
    return env.get(CLIPBOARD_OWNER_ENV) == "1"


def _filesystem_root() -> str:
    """A directory that always exists (``/`` or the current drive on Windows)."""
    return Path.cwd().anchor or os.sep


def spawn_clipboard_helper(text: str, helper_command: Sequence[str] | None) -> None:
    """Start a detached clipboard owner for ``text`` and return immediately.

    The child is rooted at the filesystem root with null standard streams and
    its own session. No handle is kept and nothing ever waits on it.
    Raises ClipboardUnavailable when no helper is configured or it fails to start.
    """
    if not helper_command:
        raise ClipboardUnavailable()
    env = dict(os.environ)
    env[CLIPBOARD_OWNER_ENV] = "1"
    try:
        subprocess.Popen(  # nosec B603
            [*helper_command, text],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            cwd=_filesystem_root(),
            env=env,
            start_new_session=True,
            shell=False,
        )
    except (OSError, ValueError) as e:
        logger.warning("Clipboard helper failed to start: %s", e)
        raise ClipboardUnavailable() from e
    logger.debug("Spawned clipboard helper (%d chars)", len(text))


def claim_clipboard(text: str, system: str | None = None) -> bool:
    """Set the clipboard to ``text`` from inside the owner process.

    Tries each platform candidate in turn; blocks for as long as the winning
    command serves the selection. Returns True on success.
    """
    system = system or platform.system()
    plan = get_clipboard_command_plan(system)
    if plan is None:
        logger.warning("Clipboard claim failed: unsupported platform %s", system)
        return False
    commands, encoding = plan
    payload = text.encode(encoding)
    for command in commands:
        try:
            subprocess.run(  # nosec B603
                command,
                input=payload,
                check=True,
                shell=False,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except (OSError, subprocess.CalledProcessError) as e:
            logger.debug("Clipboard command %s failed: %s", command, e)
            continue
        return True
    logger.warning("Clipboard claim failed: no working clipboard command")
    return False


def run_clipboard_owner(argv: Sequence[str]) -> int:
    """Entry point for the owner process. Returns a process exit code."""
    if not argv:
        return 1
    return 0 if claim_clipboard(argv[0]) else 1


__all__ = [
    "CLIPBOARD_UNAVAILABLE",
    "ClipboardUnavailable",
    "claim_clipboard",
    "default_helper_command",
    "get_clipboard_command_plan",
    "is_clipboard_owner",
    "run_clipboard_owner",
    "spawn_clipboard_helper",
]
