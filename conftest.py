"""Shared test fixtures for tissuebox tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from tissuebox.models import Tissue, TissueBox, UserConfig
from tissuebox.services.interfaces import AppServices
from tissuebox.themes import DEFAULT_THEME, THEME_COLORS

# ── Module-level dict isolation ──────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _reset_theme_colors():
    """Restore THEME_COLORS after each test.

    TissueboxApp.__init__ applies the configured palette in place. Without this
    fixture a test using another theme would leak colors into later tests.
    """
    yield
    THEME_COLORS.clear()
    THEME_COLORS.update(DEFAULT_THEME)


# ── Factories ────────────────────────────────────────────────────────────────


@pytest.fixture
def make_tissue():
    """Factory fixture for creating Tissue instances with sensible defaults."""

    def _make(
        title: str = "Test tissue",
        description: list[str] | None = None,
        tags: set[str] | None = None,
    ) -> Tissue:
        return Tissue(
            title=title,
            description=list(description or []),
            tags=set(tags or set()),
        )

    return _make


@pytest.fixture
def sample_box(make_tissue) -> TissueBox:
    """Two tissues: Foo (one description, tagged bug) and Bar (two descriptions)."""
    return TissueBox(
        tissues=[
            make_tissue("Foo", ["Crashes on empty input"], {"bug"}),
            make_tissue(
                "Bar",
                ["Add a flag", "Document the flag"],
                {"good first issue", "help wanted"},
            ),
        ]
    )


@pytest.fixture
def sample_config():
    """Factory fixture for creating UserConfig with optional overrides."""

    def _make(**kwargs: Any) -> UserConfig:
        return UserConfig(**kwargs)

    return _make


class FakeVcs:
    """Records commits; raises ``error`` when set."""

    def __init__(self, error: Exception | None = None, has_repo: bool = False) -> None:
        self.error = error
        self.has_repo = has_repo
        self.committed: list[str] = []
        self.excluded: list[tuple[Path, Path]] = []

    def commit(self, tissue: Tissue) -> None:
        if self.error is not None:
            raise self.error
        self.committed.append(tissue.title)

    def has_repository(self, base_dir: Path) -> bool:
        return self.has_repo

    def exclude(self, store_path: Path, base_dir: Path) -> None:
        if self.error is not None:
            raise self.error
        self.excluded.append((store_path, base_dir))


class FakePublish:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.published: list[str] = []

    def publish(self, tissue: Tissue) -> None:
        if self.error is not None:
            raise self.error
        self.published.append(tissue.title)


class FakeClipboard:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.copied: list[str] = []

    def copy(self, text: str) -> None:
        if self.error is not None:
            raise self.error
        self.copied.append(text)


@pytest.fixture
def fake_services():
    """Factory fixture for AppServices backed by recording fakes."""

    def _make(
        *,
        vcs_error: Exception | None = None,
        publish_error: Exception | None = None,
        clipboard_error: Exception | None = None,
        has_repo: bool = False,
    ) -> AppServices:
        return AppServices(
            vcs=FakeVcs(vcs_error, has_repo),
            publish=FakePublish(publish_error),
            clipboard=FakeClipboard(clipboard_error),
        )

    return _make
