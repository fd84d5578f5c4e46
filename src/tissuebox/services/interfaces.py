"""Service interfaces + default adapters for session-level dependency injection."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from tissuebox import clipboard as _clipboard
from tissuebox.models import Tissue, UserConfig
from tissuebox.services import publish_service as _publish
from tissuebox.services import vcs_service as _vcs


@runtime_checkable
class VcsService(Protocol):
    """Interface for version-control side effects."""

    def commit(self, tissue: Tissue) -> None:
        """Commit all changes using the tissue title. Raises HelperError."""
        ...

    def has_repository(self, base_dir: Path) -> bool:
        """Return True when ``base_dir`` holds a git repository."""
        ...

    def exclude(self, store_path: Path, base_dir: Path) -> None:
        """Add the store to the local exclude list. Raises HelperError."""
        ...


@runtime_checkable
class PublishService(Protocol):
    """Interface for publishing a tissue as a remote issue."""

    def publish(self, tissue: Tissue) -> None:
        """Create labels and the issue. Raises HelperError."""
        ...


@runtime_checkable
class ClipboardService(Protocol):
    """Interface for the non-blocking clipboard hand-off."""

    def copy(self, text: str) -> None:
        """Hand ``text`` to a clipboard owner. Raises ClipboardUnavailable."""
        ...


class DefaultVcsService:
    """Default adapter that delegates to the git helper functions."""

    def __init__(self, git_command: str = "git") -> None:
        self._git_command = git_command

    def commit(self, tissue: Tissue) -> None:
        _vcs.commit_tissue(tissue, self._git_command)

    def has_repository(self, base_dir: Path) -> bool:
        return _vcs.has_git_repository(base_dir)

    def exclude(self, store_path: Path, base_dir: Path) -> None:
        _vcs.exclude_from_git(store_path, base_dir)


class DefaultPublishService:
    """Default adapter that delegates to the ``gh`` helper functions."""

    def __init__(self, gh_command: str = "gh") -> None:
        self._gh_command = gh_command

    def publish(self, tissue: Tissue) -> None:
        _publish.publish_tissue(tissue, self._gh_command)


class DefaultClipboardService:
    """Default adapter that spawns a detached clipboard owner.

    ``helper_command`` of ``None`` means no clipboard helper is configured.
    """

    def __init__(self, helper_command: Sequence[str] | None) -> None:
        self._helper_command = list(helper_command) if helper_command else None

    def copy(self, text: str) -> None:
        _clipboard.spawn_clipboard_helper(text, self._helper_command)


@dataclass(slots=True)
class AppServices:
    """Container for session-level service dependencies."""

    vcs: VcsService
    publish: PublishService
    clipboard: ClipboardService


def build_default_app_services(config: UserConfig | None = None) -> AppServices:
    """Build production service adapters from the user config."""
    config = config or UserConfig()
    helper = _clipboard.default_helper_command() if config.clipboard_enabled else None
    return AppServices(
        vcs=DefaultVcsService(config.git_command),
        publish=DefaultPublishService(config.gh_command),
        clipboard=DefaultClipboardService(helper),
    )


__all__ = [
    "AppServices",
    "ClipboardService",
    "DefaultClipboardService",
    "DefaultPublishService",
    "DefaultVcsService",
    "PublishService",
    "VcsService",
    "build_default_app_services",
]
