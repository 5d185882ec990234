"""Tests for profile configuration."""

import pytest

from objectify.config_store import (
    ENV_CONFIG_DIR, ENV_SETS, ConfigStore, default_config_dir,
)
from objectify.sets import sets_all, sets_all_md5, sets_none


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv(ENV_SETS, raising=False)
    monkeypatch.delenv(ENV_CONFIG_DIR, raising=False)


class TestConfigStore:

    def test_empty_store(self, tmp_path):
        store = ConfigStore(tmp_path)
        assert store.list_profiles() == []
        assert store.get_preset("default") is None

    def test_set_and_get(self, tmp_path):
        store = ConfigStore(tmp_path)
        assert store.set_preset("default", "MD5") == "md5"
        assert store.get_preset("default") == "md5"

    def test_persisted(self, tmp_path):
        ConfigStore(tmp_path).set_preset("fast", "none")
        again = ConfigStore(tmp_path)
        assert again.list_profiles() == ["fast"]
        assert again.resolve_sets("fast") == sets_none()

    def test_invalid_preset_not_saved(self, tmp_path):
        store = ConfigStore(tmp_path)
        with pytest.raises(ValueError):
            store.set_preset("default", "crc32")
        assert not store.path.exists()

    def test_default_preset_when_unset(self, tmp_path):
        assert ConfigStore(tmp_path).resolve_sets("default") == sets_all()

    def test_env_overrides_profile(self, tmp_path, monkeypatch):
        store = ConfigStore(tmp_path)
        store.set_preset("default", "none")
        monkeypatch.setenv(ENV_SETS, "md5")
        assert store.resolve_sets("default") == sets_all_md5()

    def test_corrupt_file_is_ignored(self, tmp_path):
        (tmp_path / "profiles.json").write_text("{not json", encoding="utf-8")
        store = ConfigStore(tmp_path)
        assert store.list_profiles() == []


class TestConfigDir:

    def test_env_dir(self, tmp_path, monkeypatch):
        monkeypatch.setenv(ENV_CONFIG_DIR, str(tmp_path / "cfg"))
        assert default_config_dir() == tmp_path / "cfg"
        store = ConfigStore()
        assert store.path == tmp_path / "cfg" / "profiles.json"

    def test_platform_dir(self):
        assert default_config_dir().name == "objectify"
