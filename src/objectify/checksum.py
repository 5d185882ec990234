# src/objectify/checksum.py
from __future__ import annotations
import hashlib
from pathlib import Path
from typing import BinaryIO, Optional

from objectify.models import Digest, DigestKind

CHUNK_SIZE = 1 << 20


def _new_hash(kind: DigestKind):
    if kind is DigestKind.MD5:
        return hashlib.md5()
    return hashlib.sha256()


def compute_digest(stream: Optional[BinaryIO], kind: DigestKind) -> Optional[Digest]:
    """
    Copy the whole stream through the hash of the given kind.
    A missing stream gives None; read errors propagate to the caller.
    """
    if stream is None:
        return None
    h = _new_hash(kind)
    for chunk in iter(lambda: stream.read(CHUNK_SIZE), b""):
        h.update(chunk)
    return Digest.from_bytes(h.digest())


def file_digest(path: Path, kind: DigestKind) -> Optional[Digest]:
    with open(path, "rb") as f:
        return compute_digest(f, kind)
