"""tissuebox: a personal issue tracker stored as a TOML file."""

__version__ = "0.1.0"
