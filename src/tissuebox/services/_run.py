"""Internal helpers: run external helper programs, HelperError."""

from __future__ import annotations

import logging
import subprocess

logger = logging.getLogger(__name__)


class HelperError(Exception):
    """Raised when an external helper exits non-zero or cannot be started."""


def run_helper(command: list[str]) -> str:
    """Run ``command`` to completion and return its stdout.

    stdin is detached so a helper can never read from the session's terminal.
    There is no timeout: the caller blocks until the helper exits.
    """
    logger.debug("Running helper: %s", command)
    try:
        result = subprocess.run(  # nosec B603
            command,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            check=True,
            shell=False,
        )
    except subprocess.CalledProcessError as e:
        err = (e.stderr or e.stdout or "").strip()
        logger.warning("Helper %s failed: %s", command, err)
        raise HelperError(err or f"{command[0]} exited with status {e.returncode}") from e
    except FileNotFoundError as e:
        raise HelperError(f"{command[0]} not found") from e
    except OSError as e:
        raise HelperError(f"failed to run {command[0]}: {e}") from e
    return result.stdout
