"""Tests for human readable sizes."""

import pytest

from objectify.utils.size import size_string


@pytest.mark.parametrize(
    "size, expected",
    [
        (0, "0 B"),
        (1023, "1023 B"),
        (1024, "1.00 KiB"),
        (1536, "1.50 KiB"),
        (1048576, "1.00 MiB"),
        (5 * 1024 ** 3, "5.00 GiB"),
        (1024 ** 4, "1.00 TiB"),
        (1024 ** 5, "1.00 PiB"),
        (1024 ** 6, "1.00 EiB"),
    ],
)
def test_size_string(size, expected):
    assert size_string(size) == expected


def test_size_beyond_exbibytes_stays_in_eib():
    assert size_string(1024 ** 7) == "1024.00 EiB"
