import os
from typing import Optional

import yaml

from locmatrix.exceptions import ConfigNotFoundError, InvalidConfigError


class ConfigFileStore:
    """Filesystem/YAML IO for the app parameters file.

    Responsibility: locate, read, and parse YAML files on disk.
    It does NOT validate the parameters themselves.
    """

    def __init__(self, *, configs_dir: str):
        self.configs_dir = configs_dir

    def _resolve_path(self, config_path: str) -> str:
        return config_path if os.path.isabs(config_path) else os.path.join(self.configs_dir, config_path)

    def load_yaml_dict(self, config_path: str) -> dict:
        """Return the parsed YAML dict for `config_path`."""
        full_path = self._resolve_path(config_path)
        if not os.path.isfile(full_path):
            raise ConfigNotFoundError(config_path)
        try:
            with open(full_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidConfigError(config_path, f"Config '{config_path}' is not valid YAML: {e}") from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise InvalidConfigError(config_path, f"Config '{config_path}' does not contain a mapping")
        return data

    def read_raw_yaml(self, config_path: str) -> Optional[str]:
        """Return raw YAML contents for `config_path`, or None if missing/unreadable."""
        full_path = self._resolve_path(config_path)
        if not os.path.isfile(full_path):
            return None
        try:
            with open(full_path, "r", encoding="utf-8") as f:
                return f.read()
        except OSError:
            return None
