"""Git helpers: commit a tissue and keep the store out of version control."""

from __future__ import annotations

import logging
from pathlib import Path

from tissuebox.models import GIT_DIR, GIT_EXCLUDE_PATH, Tissue
from tissuebox.services._run import HelperError, run_helper

logger = logging.getLogger(__name__)

EXCLUDE_BANNER = "# Created by tissuebox"


def commit_tissue(tissue: Tissue, git_command: str = "git") -> None:
    """Stage everything and commit with the tissue's title as the message.

    Raises HelperError when either git step fails.
    """
    run_helper([git_command, "add", "--all"])
    run_helper([git_command, "commit", "-m", tissue.title])
    logger.debug("Committed %r", tissue.title)


def has_git_repository(base_dir: Path) -> bool:
    return (base_dir / GIT_DIR).exists()


def exclude_from_git(store_path: Path, base_dir: Path) -> None:
    """Append the store path to the repository's local exclude list.

    Raises HelperError when the exclude file cannot be written.
    """
    exclude_file = base_dir / GIT_EXCLUDE_PATH
    try:
        exclude_file.parent.mkdir(parents=True, exist_ok=True)
        with exclude_file.open("a", encoding="utf-8") as f:
            f.write(f"\n{EXCLUDE_BANNER}\n{store_path}\n")
    except OSError as e:
        raise HelperError(f"failed to update {GIT_EXCLUDE_PATH}: {e}") from e
    logger.debug("Added %s to %s", store_path, exclude_file)


__all__ = [
    "EXCLUDE_BANNER",
    "HelperError",
    "commit_tissue",
    "exclude_from_git",
    "has_git_repository",
]
