"""Tests for entry-type classification."""

import stat

from objectify.entmode import ent_mode_from_mode, get_ent_mode
from objectify.models import EntMode

from conftest import requires_symlinks

# a type field no platform check in the classifier matches
UNMATCHED_TYPE = 0o110000


class TestEntModeFromMode:

    def test_directory(self):
        assert ent_mode_from_mode(stat.S_IFDIR | 0o755) is EntMode.DIR

    def test_regular_file(self):
        assert ent_mode_from_mode(stat.S_IFREG | 0o644) is EntMode.REGULAR

    def test_no_type_bits_is_regular(self):
        assert ent_mode_from_mode(0o644) is EntMode.REGULAR

    def test_symlink(self):
        assert ent_mode_from_mode(stat.S_IFLNK | 0o777) is EntMode.LINK

    def test_fifo(self):
        assert ent_mode_from_mode(stat.S_IFIFO | 0o600) is EntMode.PIPE

    def test_socket(self):
        assert ent_mode_from_mode(stat.S_IFSOCK | 0o600) is EntMode.SOCKET

    def test_char_and_block_devices(self):
        assert ent_mode_from_mode(stat.S_IFCHR | 0o600) is EntMode.DEVICE
        assert ent_mode_from_mode(stat.S_IFBLK | 0o600) is EntMode.DEVICE

    def test_temporary_checked_before_pipe(self):
        mode = ent_mode_from_mode(stat.S_IFIFO, stat.FILE_ATTRIBUTE_TEMPORARY)
        assert mode is EntMode.TEMP

    def test_directory_wins_over_attributes(self):
        mode = ent_mode_from_mode(stat.S_IFDIR, stat.FILE_ATTRIBUTE_TEMPORARY)
        assert mode is EntMode.DIR

    def test_irregular(self):
        mode = ent_mode_from_mode(UNMATCHED_TYPE, stat.FILE_ATTRIBUTE_REPARSE_POINT)
        assert mode is EntMode.IRREGULAR

    def test_other(self):
        assert ent_mode_from_mode(UNMATCHED_TYPE) is EntMode.OTHER

    def test_str_is_tag_value(self):
        assert str(EntMode.REGULAR) == "regular_file"
        assert str(EntMode.UNKNOWN) == "unknown"


class TestGetEntMode:

    def test_missing_path_is_unknown(self, tmp_path):
        mode, info = get_ent_mode(tmp_path / "missing")
        assert mode is EntMode.UNKNOWN
        assert info is None

    def test_regular_file_returns_info(self, sample_file):
        mode, info = get_ent_mode(sample_file)
        assert mode is EntMode.REGULAR
        assert info.st_size == 5

    def test_directory(self, tmp_path):
        mode, _ = get_ent_mode(tmp_path)
        assert mode is EntMode.DIR

    @requires_symlinks
    def test_symlink_is_not_followed(self, tmp_path, sample_file):
        link = tmp_path / "link"
        link.symlink_to(sample_file)
        mode, _ = get_ent_mode(link)
        assert mode is EntMode.LINK
