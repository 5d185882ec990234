# src/objectify/fileobj.py
from __future__ import annotations
import logging
import os
import stat
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from objectify.checksum import file_digest
from objectify.entmode import ent_mode_from_stat, get_ent_mode
from objectify.links import final_target, immediate_target
from objectify.models import Action, Digest, DigestKind, EntMode, FileObjDict
from objectify.sets import Sets
from objectify.utils.size import size_string

logger = logging.getLogger(__name__)


def split_path(path: os.PathLike | str) -> Tuple[Path, str]:
    """Absolute parent directory and base name of `path`."""
    abs_path = Path(os.path.abspath(path))
    return abs_path.parent, abs_path.name


def _attempt_open(path: Path) -> bool:
    # O_NONBLOCK keeps a FIFO without a writer from hanging the open
    flags = os.O_RDONLY | getattr(os, "O_NONBLOCK", 0)
    try:
        fd = os.open(path, flags)
    except OSError as e:
        logger.debug("open failed for %s: %s", path, e)
        return False
    os.close(fd)
    return True


# prefix of the warnings each forced step may produce
_WARNING_KEYS: Dict[Action, str] = {
    Action.CHECKSUM_MD5: DigestKind.MD5.value,
    Action.CHECKSUM_SHA256: DigestKind.SHA256.value,
    Action.MODES: "mode",
    Action.SIZE: "size",
    Action.LINK_TARGET: "link_target",
    Action.LINK_TARGET_FINAL: "link_target_final",
}


@dataclass(eq=False)
class FileObj:
    """
    Metadata for a single directory entry.

    Which of the optional fields get populated is decided by `sets`.
    Population never raises: a field that cannot be computed keeps its
    default and a note is appended to `warnings`.

    Not safe for concurrent mutation; refresh(), force() and change_sets()
    on the same record must be serialised by the caller.
    """
    root: Path
    filename: str
    sets: Sets = field(default_factory=Sets)

    size_bytes: int = 0
    md5: Optional[Digest] = None
    sha256: Optional[Digest] = None
    mode: EntMode = EntMode.UNKNOWN
    target: Optional[Path] = None
    target_final: Optional[Path] = None

    is_link: bool = False
    exists: bool = False
    readable: bool = False

    updated_at: Optional[datetime] = None
    warnings: List[str] = field(default_factory=list)

    _info: Optional[os.stat_result] = field(default=None, repr=False)
    _mtime_ns: Optional[int] = field(default=None, repr=False)

    @classmethod
    def new(cls, path: os.PathLike | str, sets: Sets) -> Optional[FileObj]:
        """
        Build a record for `path` and run one population pass.
        Returns None for an empty path; an unreadable path still gives a
        record, with `exists`/`readable` reflecting the problem.
        """
        if not os.fspath(path):
            return None
        root, filename = split_path(path)
        fo = cls(root=root, filename=filename, sets=sets)
        fo._update()
        return fo

    # ---- derived accessors -------------------------------------------------

    @property
    def full_path(self) -> Path:
        return self.root / self.filename

    @property
    def checksum_md5(self) -> str:
        return self.md5.hex if self.md5 else ""

    @property
    def checksum_sha256(self) -> str:
        return self.sha256.hex if self.sha256 else ""

    def seconds_since_updated(self) -> int:
        if self.updated_at is None:
            return 0
        return int((datetime.now(timezone.utc) - self.updated_at).total_seconds())

    def size_string(self) -> str:
        return size_string(self.size_bytes)

    # ---- population steps --------------------------------------------------

    def _warn(self, key: str, msg: str) -> None:
        logger.debug("%s: %s: %s", self.full_path, key, msg)
        self.warnings.append(f"{key}: {msg}")

    def _has_paths(self) -> bool:
        return bool(self.filename) and bool(str(self.root))

    def _current_info(self) -> Optional[os.stat_result]:
        """lstat() result if the entry exists and opens for reading now, else None."""
        if not self._has_paths():
            return None
        try:
            info = os.lstat(self.full_path)
        except OSError as e:
            logger.debug("%s: stat failed: %s", self.full_path, e)
            return None
        if not _attempt_open(self.full_path):
            return None
        return info

    def _set_prelims(self) -> bool:
        if not self._has_paths():
            self._info = None
            self.exists = self.readable = False
            return False

        path = self.full_path
        try:
            self._info = os.lstat(path)
            self.exists = True
        except OSError as e:
            self._info = None
            self.exists = False
            self._warn("stat", f"stat failed: {e}")

        self.readable = self.exists and _attempt_open(path)
        if self.exists and not self.readable:
            self._warn("open", "not readable")
        return self.exists and self.readable

    def _set_ent_mode(self) -> EntMode:
        if self.sets.modes and self._info is not None:
            self.mode = ent_mode_from_stat(self._info)
            self._mtime_ns = self._info.st_mtime_ns
            self.is_link = self.mode is EntMode.LINK
        return self.mode

    def _set_size(self) -> None:
        if not self.sets.size:
            return

        if self._info is None:
            try:
                self._info = os.lstat(self.full_path)
            except OSError as e:
                self._warn("size", f"size unavailable: {e}")
                self.size_bytes = 0
                return

        self.size_bytes = self._info.st_size

    def _set_targets(self) -> None:
        if not self.sets.wants_targets:
            return

        if self.sets.modes:
            is_link, info = self.is_link, self._info
        else:
            # classify privately; the public mode fields stay untouched
            mode, info = get_ent_mode(self.full_path)
            is_link = mode is EntMode.LINK

        if not is_link:
            if self.sets.link_target:
                self.target = None
            if self.sets.link_target_final:
                self.target_final = None
            return

        if self.sets.link_target:
            self.target = immediate_target(self.full_path)
            if self.target is None:
                self._warn("link_target", "link target could not be resolved")

        if self.sets.link_target_final:
            self.target_final = final_target(self.full_path, info)
            if self.target_final is None:
                self._warn("link_target_final", "final link target is a directory or could not be resolved")

    def _digest(self, kind: DigestKind) -> Optional[Digest]:
        try:
            return file_digest(self.full_path, kind)
        except OSError as e:
            self._warn(kind.value, f"{kind.value} failed: {e}")
            return None

    def _content_is_regular(self) -> bool:
        try:
            return stat.S_ISREG(os.stat(self.full_path).st_mode)
        except OSError:
            return False

    def _set_checksums(self) -> None:
        kinds = []
        if self.sets.checksum_md5:
            kinds.append(DigestKind.MD5)
        if self.sets.checksum_sha256:
            kinds.append(DigestKind.SHA256)
        if not kinds:
            return

        regular = self._content_is_regular()
        for kind in kinds:
            if regular:
                digest = self._digest(kind)
            else:
                self._warn(kind.value, "content is not a regular file, checksum skipped")
                digest = None
            if kind is DigestKind.MD5:
                self.md5 = digest
            else:
                self.sha256 = digest

    def _timestamp(self) -> datetime:
        self.updated_at = datetime.now(timezone.utc)
        return self.updated_at

    def _update(self) -> None:
        self.warnings = []
        if self._set_prelims():
            self._set_ent_mode()
            self._set_size()
            self._set_targets()
            self._set_checksums()
        self._timestamp()

    # ---- public operations -------------------------------------------------

    def change_sets(self, sets: Sets) -> None:
        """Use `sets` for future refreshes. Nothing is recomputed here."""
        self.sets = sets

    def force(self, action: Action) -> None:
        """
        Populate one field now, whatever `sets` says.
        Only that field (and its warnings) change; `exists`, `readable`
        and the record's own selection are left as they were.
        """
        steps: Dict[Action, Callable[[], object]] = {
            Action.CHECKSUM_MD5: self._set_checksums,
            Action.CHECKSUM_SHA256: self._set_checksums,
            Action.MODES: self._set_ent_mode,
            Action.SIZE: self._set_size,
            Action.LINK_TARGET: self._set_targets,
            Action.LINK_TARGET_FINAL: self._set_targets,
        }
        info = self._current_info()
        if info is None:
            return

        key = _WARNING_KEYS[action]
        self.warnings = [w for w in self.warnings if not w.startswith(f"{key}: ")]

        original = self.sets
        self._info = info
        self.sets = Sets.only(action)
        try:
            steps[action]()
        finally:
            self.sets = original

    def has_changed(self) -> bool:
        """
        True if the entry exists and is readable right now and was
        modified after the last mode step. Without the `modes` flag no
        mtime is ever cached, so this is always False.
        """
        if self._mtime_ns is None:
            return False

        info = self._current_info()
        if info is None:
            return False
        return info.st_mtime_ns > self._mtime_ns

    def refresh(self) -> FileObj:
        if self.has_changed():
            self._update()
        return self

    def to_dict(self) -> FileObjDict:
        return {
            "path": str(self.full_path),
            "root": str(self.root),
            "filename": self.filename,
            "size_bytes": self.size_bytes,
            "mode": self.mode.value,
            "md5": self.md5.hex if self.md5 else None,
            "sha256": self.sha256.hex if self.sha256 else None,
            "target": str(self.target) if self.target else None,
            "target_final": str(self.target_final) if self.target_final else None,
            "is_link": self.is_link,
            "exists": self.exists,
            "readable": self.readable,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "warnings": list(self.warnings),
        }
