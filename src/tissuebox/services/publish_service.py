"""GitHub publishing through the ``gh`` command."""

from __future__ import annotations

import logging

from tissuebox.models import Tissue
from tissuebox.services._run import HelperError, run_helper

logger = logging.getLogger(__name__)

LABEL_LIST_LIMIT = 1000


def parse_label_names(output: str) -> set[str]:
    """Extract label names from tab-separated ``gh label list`` output."""
    names: set[str] = set()
    for line in output.splitlines():
        name = line.split("\t", 1)[0].strip()
        if name:
            names.add(name)
    return names


def build_issue_command(tissue: Tissue, gh_command: str = "gh") -> list[str]:
    """Build the ``gh issue create`` argument list for a tissue."""
    command = [
        gh_command,
        "issue",
        "create",
        "--title",
        tissue.title,
        "--body",
        "\n".join(tissue.description),
    ]
    for tag in tissue.sorted_tags():
        command.extend(["--label", tag])
    return command


def ensure_labels(tags: set[str], gh_command: str = "gh") -> list[str]:
    """Create any tag that is not yet a label on the remote. Returns created names."""
    if not tags:
        return []
    existing = parse_label_names(
        run_helper([gh_command, "label", "list", "--limit", str(LABEL_LIST_LIMIT)])
    )
    created: list[str] = []
    for tag in sorted(tags - existing):
        run_helper([gh_command, "label", "create", tag])
        created.append(tag)
    if created:
        logger.debug("Created labels: %s", created)
    return created


def publish_tissue(tissue: Tissue, gh_command: str = "gh") -> None:
    """Open a GitHub issue for ``tissue``. Raises HelperError on failure."""
    ensure_labels(tissue.tags, gh_command)
    run_helper(build_issue_command(tissue, gh_command))
    logger.debug("Published %r", tissue.title)


__all__ = [
    "HelperError",
    "build_issue_command",
    "ensure_labels",
    "parse_label_names",
    "publish_tissue",
]
