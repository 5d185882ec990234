from __future__ import annotations

UNIT = 1024
_PREFIXES = "KMGTPE"


def size_string(size_bytes: int) -> str:
    """
    Human readable size using binary multiples.
    Below 1024 the plain byte count is shown ("1023 B"), otherwise two
    decimals and a KiB..EiB suffix ("1.00 KiB").
    """
    if size_bytes < UNIT:
        return f"{size_bytes} B"

    div, exp = UNIT, 0
    n = size_bytes // UNIT
    while n >= UNIT and exp < len(_PREFIXES) - 1:
        div *= UNIT
        exp += 1
        n //= UNIT

    return f"{size_bytes / div:.2f} {_PREFIXES[exp]}iB"
