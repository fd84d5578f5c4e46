"""Record store persistence: load and save the TOML tissue box."""

from __future__ import annotations

import logging
import os
import tempfile
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from tissuebox.models import Tissue, TissueBox

logger = logging.getLogger(__name__)

# ============================================================================
# Store Persistence
# ============================================================================
#
# File layout (all keys optional, an empty file is an empty box):
#
#   starred = 0
#
#   [[tissues]]
#   title = "Foo"
#   description = ["Depends on Bar"]
#   tags = ["bug"]
#
#   [[recycle_bin]]
#   title = "Old"
#
# Unlike the user config, a malformed store is never replaced with defaults:
# loading fails loudly so the user's issues are not silently discarded.


class StoreError(Exception):
    """Raised when the store file cannot be read, parsed, or written."""


def _require(data: dict[str, Any], key: str, default: Any, expected_type: type) -> Any:
    """Get ``key`` from ``data`` or raise StoreError when it has the wrong type."""
    value = data.get(key, default)
    if not isinstance(value, expected_type):
        raise StoreError(f"{key!r} must be {expected_type.__name__}, got {type(value).__name__}")
    return value


def _parse_strings(data: dict[str, Any], key: str) -> list[str]:
    values = _require(data, key, [], list)
    if not all(isinstance(value, str) for value in values):
        raise StoreError(f"{key!r} must only contain strings")
    return values


def _dict_to_tissue(data: Any) -> Tissue:
    if not isinstance(data, dict):
        raise StoreError("tissue entries must be tables")
    if "title" not in data:
        raise StoreError("tissue entry is missing a title")
    return Tissue(
        title=_require(data, "title", "", str),
        description=_parse_strings(data, "description"),
        tags=set(_parse_strings(data, "tags")),
    )


def _tissue_to_dict(tissue: Tissue) -> dict[str, Any]:
    return {
        "title": tissue.title,
        "description": list(tissue.description),
        "tags": tissue.sorted_tags(),
    }


def _dict_to_box(data: dict[str, Any]) -> TissueBox:
    """Deserialize a parsed TOML document into a TissueBox."""
    tissues = [_dict_to_tissue(entry) for entry in _require(data, "tissues", [], list)]
    recycle_bin = [_dict_to_tissue(entry) for entry in _require(data, "recycle_bin", [], list)]
    starred = data.get("starred")
    if starred is not None and (isinstance(starred, bool) or not isinstance(starred, int)):
        raise StoreError(f"'starred' must be int, got {type(starred).__name__}")
    if starred is not None and not 0 <= starred < len(tissues):
        logger.warning("Dropping out-of-range star %d (%d tissues)", starred, len(tissues))
    return TissueBox(tissues=tissues, recycle_bin=recycle_bin, starred=starred)


def _box_to_dict(box: TissueBox) -> dict[str, Any]:
    """Serialize a TissueBox to a TOML-compatible dictionary."""
    data: dict[str, Any] = {}
    if box.starred is not None:
        data["starred"] = box.starred
    data["tissues"] = [_tissue_to_dict(tissue) for tissue in box.tissues]
    data["recycle_bin"] = [_tissue_to_dict(tissue) for tissue in box.recycle_bin]
    return data


def loads(text: str) -> TissueBox:
    """Parse store text. Raises StoreError on invalid TOML or structure."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise StoreError(f"invalid TOML: {e}") from e
    return _dict_to_box(data)


def dumps(box: TissueBox) -> str:
    return tomli_w.dumps(_box_to_dict(box))


def load_box(path: Path) -> TissueBox:
    """Load the whole store from ``path``."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise StoreError(f"failed to read {path}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise StoreError(f"failed to read {path}: not valid UTF-8") from e
    try:
        box = loads(text)
    except StoreError as e:
        raise StoreError(f"failed to parse {path} as tissue box: {e}") from e
    logger.debug(
        "Loaded %s: %d tissues, %d recycled", path, len(box.tissues), len(box.recycle_bin)
    )
    return box


def save_box(box: TissueBox, path: Path) -> None:
    """Save the whole store to ``path`` atomically.

    Uses write-to-tempfile + os.replace() so a crash mid-write leaves the
    previous version intact.
    """
    content = dumps(box)
    try:
        fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp", prefix=f".{path.name}-")
    except OSError as e:
        raise StoreError(f"failed to write {path}: {e.strerror or e}") from e
    closed = False
    try:
        os.write(fd, content.encode("utf-8"))
        os.close(fd)
        closed = True
        os.replace(tmp_path, path)
    except BaseException as e:
        if not closed:
            os.close(fd)
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        if isinstance(e, OSError):
            raise StoreError(f"failed to write {path}: {e.strerror or e}") from e
        raise
    logger.debug("Saved %s", path)


def create_empty_store(path: Path) -> TissueBox:
    """Write an empty store to ``path`` for first-run bootstrap."""
    box = TissueBox()
    save_box(box, path)
    return box


__all__ = [
    "StoreError",
    "create_empty_store",
    "dumps",
    "load_box",
    "loads",
    "save_box",
]
