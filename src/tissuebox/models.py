"""Data models and constants for the tissuebox issue tracker."""

from __future__ import annotations

from dataclasses import dataclass, field

# Application name used for platformdirs config paths
CONFIG_APP_NAME = "tissuebox"

# Store file used when neither -i nor the user config name one
DEFAULT_STORE_FILENAME = ".tissuebox"

# Environment marker that turns a process into a clipboard owner
CLIPBOARD_OWNER_ENV = "TISSUEBOX_CLIPBOARD_OWNER"

# Git exclude file relative to the working directory
GIT_DIR = ".git"
GIT_EXCLUDE_PATH = ".git/info/exclude"


@dataclass(slots=True)
class Tissue:
    """A single tracked issue."""

    title: str
    description: list[str] = field(default_factory=list)
    tags: set[str] = field(default_factory=set)

    def describe(self, line: str) -> None:
        self.description.append(line)

    def tag(self, tag: str) -> None:
        self.tags.add(tag)

    def sorted_tags(self) -> list[str]:
        """Tags in a stable display order."""
        return sorted(self.tags)

    def to_string(self) -> str:
        """Render as ``title (tags)`` followed by indented description lines."""
        lines = [self.title]
        if self.tags:
            lines[0] += f" ({', '.join(self.sorted_tags())})"
        lines.extend(f"  - {line}" for line in self.description)
        return "\n".join(lines) + "\n"


@dataclass(slots=True)
class TissueBox:
    """The whole persisted record: live tissues, recycle bin, and star.

    ``starred`` always points at a live index or is ``None``.
    """

    tissues: list[Tissue] = field(default_factory=list)
    recycle_bin: list[Tissue] = field(default_factory=list)
    starred: int | None = None

    def __post_init__(self) -> None:
        if self.starred is not None and not 0 <= self.starred < len(self.tissues):
            self.starred = None

    def create(self, title: str) -> Tissue:
        tissue = Tissue(title=title)
        self.tissues.append(tissue)
        return tissue

    def get(self, index: int) -> Tissue | None:
        if 0 <= index < len(self.tissues):
            return self.tissues[index]
        return None

    def remove(self, index: int) -> Tissue | None:
        """Move the tissue at ``index`` to the tail of the recycle bin.

        Clears the star when the starred tissue is removed and shifts it down
        when an earlier tissue is removed. Returns ``None`` for a bad index.
        """
        tissue = self.get(index)
        if tissue is None:
            return None
        if self.starred is not None:
            if self.starred == index:
                self.starred = None
            elif self.starred > index:
                self.starred -= 1
        del self.tissues[index]
        self.recycle_bin.append(tissue)
        return tissue

    def restore(self, index: int) -> Tissue | None:
        """Move recycle-bin entry ``index`` back onto the tail of the live list."""
        if not 0 <= index < len(self.recycle_bin):
            return None
        tissue = self.recycle_bin.pop(index)
        self.tissues.append(tissue)
        return tissue

    def toggle_star(self, index: int) -> int | None:
        """Star/unstar ``index`` following the ``*`` key rules.

        With no star, ``index`` becomes starred. Pressing on the starred tissue
        clears the star. Otherwise the star is left alone and its index is
        returned so the caller can jump the cursor there.
        """
        if self.starred is None:
            self.starred = index
            return None
        if self.starred == index:
            self.starred = None
            return None
        return self.starred

    def to_string(self) -> str:
        """Numbered listing of the live tissues."""
        return "".join(f"{i}. {tissue.to_string()}" for i, tissue in enumerate(self.tissues))


@dataclass(slots=True)
class UserConfig:
    """Per-user preferences loaded from the platform config directory."""

    theme_name: str = "monokai"
    default_input: str = DEFAULT_STORE_FILENAME
    clipboard_enabled: bool = True
    git_command: str = "git"
    gh_command: str = "gh"
    version: int = 1
    config_defaulted: bool = False  # Runtime-only: True when corrupt config was replaced


__all__ = [
    "CLIPBOARD_OWNER_ENV",
    "CONFIG_APP_NAME",
    "DEFAULT_STORE_FILENAME",
    "GIT_DIR",
    "GIT_EXCLUDE_PATH",
    "Tissue",
    "TissueBox",
    "UserConfig",
]
