"""One-shot commands: the non-interactive surface over a tissue box.

Each command is a small frozen dataclass; ``run_command`` applies one to a
box and returns the text to print, if any. Failures raise CommandError with a
message fit for stderr.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import assert_never

from tissuebox.models import Tissue, TissueBox
from tissuebox.services import HelperError
from tissuebox.services.interfaces import AppServices

logger = logging.getLogger(__name__)

LIST_FIELDS = ("title", "description", "tags")
REMOVE_FIELDS = ("description", "tag")


class CommandError(Exception):
    """Raised when a one-shot command cannot be applied."""


@dataclass(frozen=True, slots=True)
class ListCommand:
    index: int | None = None
    field: str | None = None
    field_index: int | None = None


@dataclass(frozen=True, slots=True)
class AddCommand:
    title: str


@dataclass(frozen=True, slots=True)
class DescribeCommand:
    text: str
    index: int | None = None


@dataclass(frozen=True, slots=True)
class TagCommand:
    tag: str
    index: int | None = None


@dataclass(frozen=True, slots=True)
class RemoveCommand:
    index: int
    field: str | None = None
    value: str | None = None


@dataclass(frozen=True, slots=True)
class CommitCommand:
    index: int


@dataclass(frozen=True, slots=True)
class PublishCommand:
    index: int


Command = (
    ListCommand
    | AddCommand
    | DescribeCommand
    | TagCommand
    | RemoveCommand
    | CommitCommand
    | PublishCommand
)


# ============================================================================
# Argument parsing
# ============================================================================


def add_command_parsers(parser: argparse.ArgumentParser) -> None:
    """Attach the one-shot subcommands to ``parser``."""
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    list_parser = sub.add_parser("list", help="Display formatted tissuebox")
    list_parser.add_argument(
        "target",
        nargs="*",
        metavar="ARG",
        help="[INDEX] [title | description [J] | tags]",
    )

    add_parser = sub.add_parser("add", help="Create new tissue")
    add_parser.add_argument(
        "title", help="Title of the new issue, worded like a commit or issue title"
    )

    describe_parser = sub.add_parser(
        "describe", help="Append to an existing tissue's description by index"
    )
    describe_parser.add_argument("description")
    describe_parser.add_argument(
        "index", nargs="?", type=int, default=None, help="Index of tissue to describe"
    )

    tag_parser = sub.add_parser("tag", help="Add a tag to an existing tissue by index")
    tag_parser.add_argument("tag")
    tag_parser.add_argument(
        "index", nargs="?", type=int, default=None, help="Index of tissue to tag"
    )

    remove_parser = sub.add_parser("remove", help="Delete an existing tissue by index")
    remove_parser.add_argument("index", type=int, help="Which tissue to delete")
    remove_parser.add_argument(
        "which",
        nargs="*",
        metavar="ARG",
        help="Remove a single field instead: description J | tag NAME",
    )

    commit_parser = sub.add_parser("commit", help="Commit a tissue to git by index")
    commit_parser.add_argument("index", type=int)

    publish_parser = sub.add_parser("publish", help="Publish a tissue to GitHub by index")
    publish_parser.add_argument("index", type=int)


def _parse_int(value: str, what: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise CommandError(f"{what} must be an integer, got {value!r}") from None


def _parse_list_target(target: Sequence[str]) -> ListCommand:
    if not target:
        return ListCommand()
    head, *rest = target
    if head in LIST_FIELDS:
        raise CommandError("list command specified without index")
    index = _parse_int(head, "index")
    if not rest:
        return ListCommand(index)
    field, *extra = rest
    if field not in LIST_FIELDS:
        raise CommandError(f"unknown list field {field!r} (choose from {', '.join(LIST_FIELDS)})")
    if field == "description" and len(extra) == 1:
        return ListCommand(index, field, _parse_int(extra[0], "description index"))
    if extra:
        raise CommandError(f"unexpected arguments: {' '.join(extra)}")
    return ListCommand(index, field)


def _parse_remove_which(index: int, which: Sequence[str]) -> RemoveCommand:
    if not which:
        return RemoveCommand(index)
    if len(which) != 2 or which[0] not in REMOVE_FIELDS:
        raise CommandError("remove expects: INDEX [description J | tag NAME]")
    field, value = which
    if field == "description":
        _parse_int(value, "description index")
    return RemoveCommand(index, field, value)


def command_from_args(args: argparse.Namespace) -> Command:
    """Build a command from parsed arguments. Raises CommandError on bad shapes."""
    match args.command:
        case "list":
            return _parse_list_target(args.target)
        case "add":
            return AddCommand(args.title)
        case "describe":
            return DescribeCommand(args.description, args.index)
        case "tag":
            return TagCommand(args.tag, args.index)
        case "remove":
            return _parse_remove_which(args.index, args.which)
        case "commit":
            return CommitCommand(args.index)
        case "publish":
            return PublishCommand(args.index)
    raise CommandError(f"unknown command {args.command!r}")


# ============================================================================
# Execution
# ============================================================================


def _require_tissue(box: TissueBox, index: int) -> Tissue:
    tissue = box.get(index)
    if tissue is None:
        raise CommandError(f"no tissue with index {index}")
    return tissue


def _default_index(box: TissueBox, index: int | None) -> int:
    """Explicit index, else the most recently added tissue."""
    if index is not None:
        return index
    return max(len(box.tissues) - 1, 0)


def _run_list(command: ListCommand, box: TissueBox) -> str:
    if command.index is None:
        if command.field is not None:
            raise CommandError("list command specified without index")
        return box.to_string()
    tissue = _require_tissue(box, command.index)
    match command.field:
        case None:
            return tissue.to_string()
        case "title":
            return tissue.title + "\n"
        case "description":
            if command.field_index is None:
                return "\n".join(tissue.description)
            if not 0 <= command.field_index < len(tissue.description):
                raise CommandError(
                    f"no description with index {command.field_index} on tissue {command.index}"
                )
            return tissue.description[command.field_index] + "\n"
        case "tags":
            return ", ".join(tissue.sorted_tags()) + "\n"
    raise CommandError(f"unknown list field {command.field!r}")


def _run_remove(command: RemoveCommand, box: TissueBox) -> None:
    tissue = _require_tissue(box, command.index)
    match command.field:
        case None:
            box.remove(command.index)
        case "description":
            position = _parse_int(command.value or "", "description index")
            if not 0 <= position < len(tissue.description):
                raise CommandError(f"no description with index {position} on tissue {command.index}")
            del tissue.description[position]
        case "tag":
            if command.value not in tissue.tags:
                raise CommandError(f"no tag named {command.value} on tissue {command.index}")
            tissue.tags.discard(command.value)
        case _:
            raise CommandError(f"unknown remove field {command.field!r}")


def run_command(command: Command, box: TissueBox, services: AppServices) -> str | None:
    """Apply ``command`` to ``box``. Returns output text for list commands."""
    logger.debug("Running one-shot command %r", command)
    match command:
        case ListCommand():
            return _run_list(command, box)
        case AddCommand(title=title):
            box.create(title)
        case DescribeCommand(text=text, index=index):
            _require_tissue(box, _default_index(box, index)).describe(text)
        case TagCommand(tag=tag, index=index):
            _require_tissue(box, _default_index(box, index)).tag(tag)
        case RemoveCommand():
            _run_remove(command, box)
        case CommitCommand(index=index):
            tissue = _require_tissue(box, index)
            try:
                services.vcs.commit(tissue)
            except HelperError as e:
                raise CommandError(f"failed to commit: {e}") from e
            box.remove(index)
        case PublishCommand(index=index):
            tissue = _require_tissue(box, index)
            try:
                services.publish.publish(tissue)
            except HelperError as e:
                raise CommandError(f"failed to publish: {e}") from e
            box.remove(index)
        case _:
            assert_never(command)
    return None


__all__ = [
    "AddCommand",
    "Command",
    "CommandError",
    "CommitCommand",
    "DescribeCommand",
    "ListCommand",
    "PublishCommand",
    "RemoveCommand",
    "TagCommand",
    "add_command_parsers",
    "command_from_args",
    "run_command",
]
