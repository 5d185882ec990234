# src/objectify/entmode.py
from __future__ import annotations
import logging
import os
import stat
from typing import Optional, Tuple

from objectify.models import EntMode

logger = logging.getLogger(__name__)

# Windows-only attribute bits; 0 elsewhere so the checks never match.
_ATTR_TEMPORARY = getattr(stat, "FILE_ATTRIBUTE_TEMPORARY", 0)
_ATTR_REPARSE_POINT = getattr(stat, "FILE_ATTRIBUTE_REPARSE_POINT", 0)


def ent_mode_from_mode(mode: int, file_attributes: int = 0) -> EntMode:
    """
    Map st_mode bits (plus st_file_attributes where the platform has them)
    to an EntMode. The order of the checks is significant.
    """
    if stat.S_ISDIR(mode):
        return EntMode.DIR
    if stat.S_IFMT(mode) == 0 or stat.S_ISREG(mode):
        return EntMode.REGULAR
    if stat.S_ISLNK(mode):
        return EntMode.LINK
    if file_attributes & _ATTR_TEMPORARY:
        return EntMode.TEMP
    if stat.S_ISFIFO(mode):
        return EntMode.PIPE
    if stat.S_ISSOCK(mode):
        return EntMode.SOCKET
    if stat.S_ISCHR(mode) or stat.S_ISBLK(mode):
        return EntMode.DEVICE
    if file_attributes & _ATTR_REPARSE_POINT:
        return EntMode.IRREGULAR
    return EntMode.OTHER


def ent_mode_from_stat(info: os.stat_result) -> EntMode:
    return ent_mode_from_mode(info.st_mode, getattr(info, "st_file_attributes", 0))


def get_ent_mode(path: os.PathLike | str) -> Tuple[EntMode, Optional[os.stat_result]]:
    """
    lstat() the path and classify it.
    Returns (EntMode.UNKNOWN, None) if the stat fails.
    """
    try:
        info = os.lstat(path)
    except OSError as e:
        logger.debug("lstat failed for %s: %s", path, e)
        return EntMode.UNKNOWN, None
    return ent_mode_from_stat(info), info
