# src/objectify/config_store.py
from __future__ import annotations
from pathlib import Path
from typing import Dict, Optional, List
import logging
import os
import orjson
from platformdirs import user_config_dir

from objectify.sets import DEFAULT_PRESET, Sets, sets_from_preset

APP_NAME = "objectify"
ENV_CONFIG_DIR = "OBJECTIFY_CONFIG_DIR"
ENV_SETS = "OBJECTIFY_SETS"

logger = logging.getLogger(__name__)


def default_config_dir(app_name: str = APP_NAME) -> Path:
    env = os.getenv(ENV_CONFIG_DIR)
    if env:
        return Path(env).expanduser()
    return Path(user_config_dir(app_name))


class ConfigStore:
    """Named profiles, each remembering which Sets preset to scan with."""

    def __init__(self, config_dir: Optional[Path] = None):
        cfg_dir = config_dir or default_config_dir()
        cfg_dir.mkdir(parents=True, exist_ok=True)
        self._path = cfg_dir / "profiles.json"
        self._data: Dict[str, Dict[str, str]] = {}
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        if self._path.exists():
            try:
                self._data = orjson.loads(self._path.read_bytes())
            except orjson.JSONDecodeError as e:
                # corrupt file: start from an empty config
                logger.warning("ignoring unreadable config %s: %s", self._path, e)
                self._data = {}
        else:
            self._data = {}

    def _save(self) -> None:
        self._path.write_bytes(orjson.dumps(self._data, option=orjson.OPT_INDENT_2))

    def list_profiles(self) -> List[str]:
        return sorted(self._data.keys())

    def get_preset(self, profile: str = "default") -> Optional[str]:
        info = self._data.get(profile)
        if not info:
            return None
        return info.get("sets") or None

    def set_preset(self, profile: str, preset: str) -> str:
        preset = preset.strip().lower()
        sets_from_preset(preset)  # validates the name
        self._data.setdefault(profile, {})["sets"] = preset
        self._save()
        return preset

    def resolve_preset(self, profile: str = "default") -> str:
        """OBJECTIFY_SETS wins over the profile, which wins over the default."""
        env = os.getenv(ENV_SETS)
        if env:
            return env.strip().lower()
        return self.get_preset(profile) or DEFAULT_PRESET

    def resolve_sets(self, profile: str = "default") -> Sets:
        return sets_from_preset(self.resolve_preset(profile))

