# src/objectify/scanner.py
from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import List

from objectify.errors import InaccessiblePathError, ListingError, NoEntriesError
from objectify.fileobj import FileObj
from objectify.links import leads_to_dir
from objectify.sets import Sets

logger = logging.getLogger(__name__)


def _validate_root(root: os.PathLike | str) -> Path:
    if not os.fspath(root):
        raise InaccessiblePathError("StartingPath is inaccessible: (empty path)")
    p = Path(root)
    if not p.is_dir() or not os.access(p, os.R_OK | os.X_OK):
        raise InaccessiblePathError(f"StartingPath is inaccessible: {p}")
    return p


def _list_entries(root: Path) -> List[os.DirEntry]:
    try:
        with os.scandir(root) as it:
            return sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise ListingError(f"cannot list {root}: {e}") from e


def _skip(ent: os.DirEntry) -> bool:
    if ent.is_dir(follow_symlinks=False):
        return True
    if ent.is_symlink() and leads_to_dir(ent.path):
        return True
    return False


def scan_path(root: os.PathLike | str, sets: Sets) -> List[FileObj]:
    """
    Build a FileObj for every entry directly under `root`.
    Directories and links that lead to directories are skipped; nothing
    below the first level is visited.
    """
    root_path = _validate_root(root)

    files: List[FileObj] = []
    for ent in _list_entries(root_path):
        if _skip(ent):
            logger.debug("skipping directory entry %s", ent.path)
            continue
        fo = FileObj.new(ent.path, sets)
        if fo is not None:
            files.append(fo)

    if not files:
        raise NoEntriesError(f"StartingPath has no non-directory entries: {root_path}")
    return files


def scan_file(path: os.PathLike | str, sets: Sets) -> FileObj:
    """Single-file variant of scan_path()."""
    fo = FileObj.new(path, sets) if os.fspath(path) and Path(path).is_file() else None
    if fo is None:
        raise InaccessiblePathError(f"not an accessible file: {os.fspath(path) or '(empty path)'}")
    return fo
