# src/objectify/models.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, TypedDict


class EntMode(Enum):
    """Simplified classification of a directory entry."""
    DIR = "dir"
    LINK = "link"
    REGULAR = "regular_file"
    TEMP = "temp_file"
    PIPE = "fifo_pipe"
    SOCKET = "unix_socket"
    DEVICE = "device_file"
    IRREGULAR = "irregular_file"
    OTHER = "other"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


class DigestKind(Enum):
    MD5 = "md5"
    SHA256 = "sha256"


class Action(Enum):
    """Fields that can be populated on demand with FileObj.force()."""
    CHECKSUM_MD5 = "checksum_md5"
    CHECKSUM_SHA256 = "checksum_sha256"
    MODES = "modes"
    SIZE = "size"
    LINK_TARGET = "link_target"
    LINK_TARGET_FINAL = "link_target_final"


@dataclass(frozen=True)
class Digest:
    raw: bytes
    hex: str

    @classmethod
    def from_bytes(cls, raw: bytes) -> Digest:
        return cls(raw=raw, hex=raw.hex())


class FileObjDict(TypedDict):
    path: str
    root: str
    filename: str
    size_bytes: int
    mode: str
    md5: Optional[str]
    sha256: Optional[str]
    target: Optional[str]
    target_final: Optional[str]
    is_link: bool
    exists: bool
    readable: bool
    updated_at: Optional[str]
    warnings: List[str]
