"""List rendering helpers and the scrolling body widget for tissues."""

from __future__ import annotations

from collections.abc import Sequence

from rich.markup import escape as escape_markup
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widgets import Static

from tissuebox.models import Tissue
from tissuebox.themes import THEME_COLORS, get_tag_color

EMPTY_HINT = "No tissues yet. Press a to add one, H for help."
STAR_MARK = "*"


def _render_title_line(tissue: Tissue, starred: bool, highlighted: bool) -> str:
    """Build the title line: star column, title, then colored tags."""
    mark = STAR_MARK if starred else " "
    title = escape_markup(f"{mark}{tissue.title} ")
    if highlighted:
        title = f"[reverse]{title}[/]"
    elif starred:
        title = f"[bold {THEME_COLORS['yellow']}]{title}[/]"
    tags = "".join(
        f" [{get_tag_color(tag)}]({escape_markup(tag)})[/]" for tag in tissue.sorted_tags()
    )
    return title + tags


def render_tissue_lines(
    tissue: Tissue,
    *,
    starred: bool = False,
    highlighted: bool = False,
    walked: int | None = None,
) -> list[str]:
    """Render one tissue as markup lines.

    ``walked`` is the description index highlighted by the description
    selector; while it is set the title itself is not highlighted.
    """
    lines = [_render_title_line(tissue, starred, highlighted and walked is None)]
    text_color = THEME_COLORS["text"]
    for i, description in enumerate(tissue.description):
        text = escape_markup(f" - {description}")
        if highlighted and walked == i:
            lines.append(f"[reverse]{text}[/]")
        else:
            lines.append(f"[{text_color}]{text}[/]")
    return lines


def render_listing(
    tissues: Sequence[Tissue],
    index: int,
    *,
    starred: int | None = None,
    walked: int | None = None,
) -> str:
    """Render a whole tissue sequence with ``index`` highlighted."""
    if not tissues:
        return f"[italic {THEME_COLORS['muted']}]{EMPTY_HINT}[/]"
    lines: list[str] = []
    for i, tissue in enumerate(tissues):
        lines.extend(
            render_tissue_lines(
                tissue,
                starred=starred == i,
                highlighted=index == i,
                walked=walked if index == i else None,
            )
        )
    return "\n".join(lines)


def lines_before(tissues: Sequence[Tissue], index: int) -> int:
    """Rendered line count of every tissue before ``index``."""
    return sum(1 + len(tissue.description) for tissue in tissues[:index])


def centered_scroll_offset(tissues: Sequence[Tissue], index: int, viewport_height: int) -> int:
    """First visible line that keeps the highlighted tissue mid-viewport."""
    return max(0, lines_before(tissues, index) - max(viewport_height // 2 - 1, 0))


class TissueBody(VerticalScroll, can_focus=False, inherit_bindings=False):
    """Scrolling body that shows the listing, a selector, or the help text.

    Never takes focus; every key goes to the screen's key handler.
    """

    DEFAULT_CSS = """
    TissueBody {
        height: 1fr;
        border: round $th-muted;
        border-title-align: center;
        border-title-color: $th-pink;
        border-title-style: bold;
        padding: 0 2;
        scrollbar-background: $th-scrollbar-bg;
        scrollbar-color: $th-scrollbar-thumb;
    }

    TissueBody > #tissue-lines {
        width: 100%;
        color: $th-text;
    }
    """

    def compose(self) -> ComposeResult:
        yield Static("", id="tissue-lines")

    def show(self, markup: str, first_line: int = 0) -> None:
        """Replace the body content and scroll ``first_line`` to the top."""
        self.query_one("#tissue-lines", Static).update(markup)
        self.call_after_refresh(self.scroll_to, y=first_line, animate=False)

    @property
    def viewport_height(self) -> int:
        return self.scrollable_content_region.height


__all__ = [
    "EMPTY_HINT",
    "TissueBody",
    "centered_scroll_offset",
    "lines_before",
    "render_listing",
    "render_tissue_lines",
]
