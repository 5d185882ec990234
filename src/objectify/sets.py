# src/objectify/sets.py
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Callable, Dict, List

from objectify.models import Action


@dataclass(frozen=True)
class Sets:
    """
    Flags for the FileObj fields that are optionally populated.
    Immutable: use dataclasses.replace() or a preset to get a different one.
    """
    size: bool = False
    modes: bool = False
    checksum_md5: bool = False
    checksum_sha256: bool = False
    link_target: bool = False
    link_target_final: bool = False

    @property
    def wants_targets(self) -> bool:
        return self.link_target or self.link_target_final

    @classmethod
    def only(cls, action: Action) -> Sets:
        """Selection with the single flag matching `action` set."""
        return cls(**{action.value: True})


def sets_all() -> Sets:
    return Sets(
        size=True,
        modes=True,
        checksum_md5=True,
        checksum_sha256=True,
        link_target=True,
        link_target_final=True,
    )


def sets_all_no_checksums() -> Sets:
    return replace(sets_all(), checksum_md5=False, checksum_sha256=False)


def sets_all_md5() -> Sets:
    return replace(sets_all(), checksum_sha256=False)


def sets_all_sha256() -> Sets:
    return replace(sets_all(), checksum_md5=False)


def sets_none() -> Sets:
    return Sets()


PRESETS: Dict[str, Callable[[], Sets]] = {
    "all": sets_all,
    "no-checksums": sets_all_no_checksums,
    "md5": sets_all_md5,
    "sha256": sets_all_sha256,
    "none": sets_none,
}

DEFAULT_PRESET = "all"


def preset_names() -> List[str]:
    return list(PRESETS)


def sets_from_preset(name: str) -> Sets:
    """
    Build a Sets from a preset name (see PRESETS).
    Unknown names raise ValueError.
    """
    try:
        return PRESETS[name.strip().lower()]()
    except KeyError:
        raise ValueError(
            f"unknown sets preset '{name}' (choose from: {', '.join(PRESETS)})"
        ) from None
