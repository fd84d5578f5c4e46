"""CLI/bootstrap helpers for the tissuebox application."""

from __future__ import annotations

import argparse
import logging
import logging.handlers
import os
import sys
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from tissuebox.action_messages import build_actionable_error
from tissuebox.clipboard import is_clipboard_owner, run_clipboard_owner
from tissuebox.commands import CommandError, add_command_parsers, command_from_args, run_command
from tissuebox.config import CONFIG_APP_NAME, get_config_path, load_config, save_config
from tissuebox.models import TissueBox, UserConfig
from tissuebox.services.interfaces import AppServices, build_default_app_services
from tissuebox.store import StoreError, create_empty_store, load_box, save_box

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tissuebox",
        description="Track small issues in a TOML file, interactively or one command at a time",
    )
    parser.add_argument(
        "-i",
        "--input",
        type=Path,
        default=None,
        help="Tissue box file (default: config default_input, else .tissuebox)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to file (~/.config/tissuebox/debug.log)",
    )
    parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Color output mode for terminal UI (default: auto)",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable terminal colors (equivalent to --color never)",
    )
    parser.add_argument(
        "--init-config",
        action="store_true",
        help="Write a default config file if none exists, print its path, and exit",
    )
    add_command_parsers(parser)
    return parser


def _resolve_store_path(args: argparse.Namespace, config: UserConfig) -> Path:
    if args.input is not None:
        return args.input
    return Path(config.default_input)


def _load_existing_box(store_path: Path) -> TissueBox | int:
    """Load the store for a one-shot command. Returns the box or an exit code."""
    if not store_path.exists():
        print(
            build_actionable_error(
                f"open {store_path}",
                why="the tissue box file does not exist",
                next_step="run tissuebox without a command to create it, or pass -i PATH",
            ),
            file=sys.stderr,
        )
        return 1
    try:
        return load_box(store_path)
    except StoreError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _run_one_shot(
    args: argparse.Namespace,
    store_path: Path,
    services: AppServices,
) -> int:
    """Apply a single command to the store, print its output, and save."""
    box = _load_existing_box(store_path)
    if isinstance(box, int):
        return box
    try:
        output = run_command(command_from_args(args), box, services)
    except CommandError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if output is not None:
        print(output, end="")
    try:
        save_box(box, store_path)
    except StoreError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def _open_session_box(store_path: Path) -> tuple[TissueBox, bool] | int:
    """Load the store for the TUI, creating it first when absent.

    Returns ``(box, first_run)`` or an exit code.
    """
    first_run = not store_path.exists()
    try:
        box = create_empty_store(store_path) if first_run else load_box(store_path)
    except StoreError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return box, first_run


def _init_config(config_path: Path) -> int:
    if not config_path.exists() and not save_config(UserConfig(), config_path):
        print(f"Error: Failed to write {config_path}", file=sys.stderr)
        return 1
    print(config_path)
    return 0


def _configure_logging(debug: bool) -> None:
    """Configure logging. When debug=True, logs to file at DEBUG level."""
    if not debug:
        # Default: suppress all logging (TUI captures stderr)
        logging.disable(logging.CRITICAL)
        return

    log_dir = Path(user_config_dir(CONFIG_APP_NAME))
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "debug.log"

    handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=1024 * 1024,
        backupCount=2,
        encoding="utf-8",
    )
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.DEBUG)


def _configure_color_mode(color_mode: str) -> None:
    """Configure environment hints for terminal color behavior."""
    if color_mode == "never":
        os.environ["NO_COLOR"] = "1"
        os.environ.pop("FORCE_COLOR", None)
        return
    if color_mode == "always":
        os.environ["FORCE_COLOR"] = "1"
        os.environ.pop("NO_COLOR", None)
        return
    # auto
    os.environ.pop("FORCE_COLOR", None)


def _validate_interactive_tty() -> bool:
    """Return True when stdin/stdout are interactive terminals."""
    return bool(sys.stdin.isatty() and sys.stdout.isatty())


def main(
    argv: list[str] | None = None,
    *,
    load_config_fn: Callable[[], UserConfig] = load_config,
    configure_logging_fn: Callable[[bool], None] = _configure_logging,
    configure_color_mode_fn: Callable[[str], None] = _configure_color_mode,
    validate_interactive_tty_fn: Callable[[], bool] = _validate_interactive_tty,
    services_factory: Callable[[UserConfig], AppServices] = build_default_app_services,
    app_factory: Callable[..., Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Main entry point. Returns exit code."""
    if argv is None:
        argv = sys.argv[1:]

    # A detached clipboard owner never parses arguments: argv[0] is the payload.
    if is_clipboard_owner(environ):
        return run_clipboard_owner(argv)

    args = _build_parser().parse_args(argv)

    color_mode = "never" if args.no_color else args.color
    configure_color_mode_fn(color_mode)
    configure_logging_fn(args.debug)
    logger.debug("tissuebox starting, cwd=%s", Path.cwd())

    if args.init_config:
        return _init_config(get_config_path())

    config = load_config_fn()
    store_path = _resolve_store_path(args, config)

    if args.command is not None:
        return _run_one_shot(args, store_path, services_factory(config))

    if not validate_interactive_tty_fn():
        print(
            "Error: the tissuebox session requires an interactive TTY.",
            file=sys.stderr,
        )
        print("Next steps:", file=sys.stderr)
        print("  - Run tissuebox directly in a terminal session", file=sys.stderr)
        print("  - Use a one-shot command such as `tissuebox list`", file=sys.stderr)
        print("  - Use --help for command documentation", file=sys.stderr)
        return 2

    opened = _open_session_box(store_path)
    if isinstance(opened, int):
        return opened
    box, first_run = opened
    logger.debug("Loaded %d tissues from %s (first run: %s)", len(box.tissues), store_path, first_run)

    if app_factory is None:
        from tissuebox.app import TissueboxApp as _TissueboxApp

        app_factory = _TissueboxApp

    app = app_factory(
        box,
        store_path,
        config=config,
        services=services_factory(config),
        first_run=first_run,
        base_dir=Path.cwd(),
    )
    app.run()
    return 0


__all__ = [
    "_configure_color_mode",
    "_configure_logging",
    "_open_session_box",
    "_resolve_store_path",
    "_run_one_shot",
    "_validate_interactive_tty",
    "main",
]
