"""Theme system: color palettes, tag colors, and Textual theme builders."""

from __future__ import annotations

from textual.theme import Theme as TextualTheme

DEFAULT_THEME = {
    "background": "#272822",
    "panel": "#3e3d32",
    "scrollbar": "#75715e",
    "text": "#f8f8f2",
    "muted": "#75715e",
    "accent": "#66d9ef",
    "accent_alt": "#e6db74",
    "pink": "#f92672",
    "green": "#a6e22e",
    "yellow": "#e6db74",
    "orange": "#fd971f",
    "purple": "#ae81ff",
}

CATPPUCCIN_MOCHA_THEME: dict[str, str] = {
    "background": "#1e1e2e",
    "panel": "#313244",
    "scrollbar": "#6c7086",
    "text": "#cdd6f4",
    "muted": "#6c7086",
    "accent": "#89b4fa",
    "accent_alt": "#f9e2af",
    "pink": "#f38ba8",
    "green": "#a6e3a1",
    "yellow": "#f9e2af",
    "orange": "#fab387",
    "purple": "#cba6f7",
}

SOLARIZED_DARK_THEME: dict[str, str] = {
    "background": "#002b36",
    "panel": "#073642",
    "scrollbar": "#657b83",
    "text": "#839496",
    "muted": "#586e75",
    "accent": "#268bd2",
    "accent_alt": "#b58900",
    "pink": "#d33682",
    "green": "#859900",
    "yellow": "#b58900",
    "orange": "#cb4b16",
    "purple": "#6c71c4",
}

THEMES: dict[str, dict[str, str]] = {
    "monokai": DEFAULT_THEME,
    "catppuccin-mocha": CATPPUCCIN_MOCHA_THEME,
    "solarized-dark": SOLARIZED_DARK_THEME,
}
THEME_NAMES: list[str] = list(THEMES.keys())


def _build_textual_theme(name: str, colors: dict[str, str]) -> TextualTheme:
    """Wrap a palette as a Textual Theme exposing the $th-* variables the TCSS reads."""
    variables = {
        "th-background": colors["background"],
        "th-text": colors["text"],
        "th-muted": colors["muted"],
        "th-accent": colors["accent"],
        "th-pink": colors["pink"],
        "th-scrollbar-bg": colors["panel"],
        "th-scrollbar-thumb": colors["scrollbar"],
    }
    return TextualTheme(
        name=name,
        primary=colors["accent"],
        secondary=colors["accent_alt"],
        foreground=colors["text"],
        background=colors["background"],
        panel=colors["panel"],
        error=colors["pink"],
        dark=True,
        variables=variables,
    )


TEXTUAL_THEMES: dict[str, TextualTheme] = {
    name: _build_textual_theme(name, colors) for name, colors in THEMES.items()
}

# Active palette for Rich markup; updated in place by apply_theme()
THEME_COLORS = DEFAULT_THEME.copy()

# Keys of the active palette that tags cycle through
_TAG_COLOR_KEYS = ("green", "orange", "purple", "pink", "yellow", "accent")


def apply_theme(theme_name: str) -> str:
    """Load a named palette into THEME_COLORS. Returns the name actually used."""
    if theme_name not in THEMES:
        theme_name = "monokai"
    THEME_COLORS.clear()
    THEME_COLORS.update(THEMES[theme_name])
    return theme_name


def get_tag_color(tag: str) -> str:
    """Return a stable display color for a tag from the active palette."""
    key = _TAG_COLOR_KEYS[sum(map(ord, tag)) % len(_TAG_COLOR_KEYS)]
    return THEME_COLORS[key]


__all__ = [
    "CATPPUCCIN_MOCHA_THEME",
    "DEFAULT_THEME",
    "SOLARIZED_DARK_THEME",
    "TEXTUAL_THEMES",
    "THEMES",
    "THEME_COLORS",
    "THEME_NAMES",
    "apply_theme",
    "get_tag_color",
]
