import os
import sys

import pytest


requires_symlinks = pytest.mark.skipif(
    sys.platform.startswith("win"), reason="symlinks need privileges on Windows"
)


def bump_mtime(path, seconds=5):
    """Move the mtime of `path` forward without following links."""
    st = os.lstat(path)
    delta = seconds * 1_000_000_000
    os.utime(path, ns=(st.st_atime_ns, st.st_mtime_ns + delta), follow_symlinks=False)


@pytest.fixture
def sample_file(tmp_path):
    p = tmp_path / "sample.txt"
    p.write_bytes(b"hello")
    return p


@pytest.fixture
def link_chain(tmp_path):
    """a -> b -> c, where c is a regular file."""
    c = tmp_path / "c"
    c.write_bytes(b"chain end")
    (tmp_path / "b").symlink_to("c")
    (tmp_path / "a").symlink_to("b")
    return tmp_path
