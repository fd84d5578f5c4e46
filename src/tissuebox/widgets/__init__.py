"""Widget classes for the tissuebox TUI."""

from tissuebox.widgets.chrome import BANNER, Banner, ContextFooter, ErrorLine
from tissuebox.widgets.listing import (
    EMPTY_HINT,
    TissueBody,
    centered_scroll_offset,
    lines_before,
    render_listing,
    render_tissue_lines,
)

__all__ = [
    "BANNER",
    "EMPTY_HINT",
    "Banner",
    "ContextFooter",
    "ErrorLine",
    "TissueBody",
    "centered_scroll_offset",
    "lines_before",
    "render_listing",
    "render_tissue_lines",
]
