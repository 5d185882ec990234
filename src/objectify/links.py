# src/objectify/links.py
from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Optional

from objectify.entmode import ent_mode_from_stat
from objectify.models import EntMode

logger = logging.getLogger(__name__)

# Same limit Linux applies when following a chain of links (ELOOP).
MAX_LINK_HOPS = 40


def _lstat(path: Path) -> Optional[os.stat_result]:
    try:
        return os.lstat(path)
    except OSError as e:
        logger.debug("lstat failed for %s: %s", path, e)
        return None


def _eval_link(path: Path) -> Optional[Path]:
    """
    Resolve exactly one level of indirection. Relative link contents are
    taken relative to the link's directory.
    None if `path` is not a link, or the chain behind it is broken or loops.
    """
    try:
        raw = os.readlink(path)
        # follows the rest of the chain; raises on dangling links and ELOOP
        os.stat(path)
    except OSError as e:
        logger.debug("cannot evaluate link %s: %s", path, e)
        return None
    return Path(os.path.join(os.path.dirname(path), raw))


def immediate_target(path: os.PathLike | str) -> Optional[Path]:
    return _eval_link(Path(path))


def final_target(
    path: os.PathLike | str,
    info: Optional[os.stat_result] = None,
) -> Optional[Path]:
    """
    Follow a chain of links to the first entry that is not a link.
    Returns that path, or None when the chain is broken, ends at a
    directory, or is longer than MAX_LINK_HOPS.

    `info` may carry an lstat() result already known for `path`.
    """
    current = Path(path)
    for _ in range(MAX_LINK_HOPS + 1):
        if info is None:
            info = _lstat(current)
            if info is None:
                return None

        mode = ent_mode_from_stat(info)
        if mode is EntMode.DIR:
            return None
        if mode is not EntMode.LINK:
            return current

        nxt = _eval_link(current)
        if nxt is None:
            return None
        current, info = nxt, None

    logger.debug("link chain from %s exceeds %d hops", path, MAX_LINK_HOPS)
    return None


def leads_to_dir(path: os.PathLike | str) -> bool:
    """True if `path` is a directory or a chain of links ending at one."""
    current = Path(path)
    for _ in range(MAX_LINK_HOPS + 1):
        info = _lstat(current)
        if info is None:
            return False

        mode = ent_mode_from_stat(info)
        if mode is EntMode.DIR:
            return True
        if mode is not EntMode.LINK:
            return False

        nxt = _eval_link(current)
        if nxt is None:
            return False
        current = nxt

    return False
