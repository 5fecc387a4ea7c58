"""Configuration Management Package"""

import json
import os
import sys
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

from gitset import API_URL, MODE_NAMES
from gitset.git.payload import MAX_FETCH_WORKERS
from gitset.config.credentials import (
    CredentialError,
    CredentialRecord,
    CredentialStore,
    resolve_credentials_path,
)

# Valid configuration values
VALID_MODES = set(MODE_NAMES)


@dataclass
class Config:
    """User settings with sensible defaults."""
    api_url: str = API_URL
    mode: str = "semantic"
    commit_count: int = 20
    max_file_lines: Optional[int] = None  # None disables the size ceiling
    fetch_workers: int = 1
    timeout: int = 60

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults silently after warning.
        """
        warnings = []
        defaults = Config()

        if not isinstance(self.api_url, str) or not self.api_url.startswith(('http://', 'https://')):
            warnings.append(f"Invalid api_url '{self.api_url}', using '{defaults.api_url}'")
            self.api_url = defaults.api_url

        if self.mode not in VALID_MODES:
            warnings.append(f"Invalid mode '{self.mode}', using '{defaults.mode}'")
            self.mode = defaults.mode

        if not isinstance(self.commit_count, int) or self.commit_count <= 0:
            warnings.append(f"Invalid commit_count '{self.commit_count}', using {defaults.commit_count}")
            self.commit_count = defaults.commit_count

        if self.max_file_lines is not None and (not isinstance(self.max_file_lines, int) or self.max_file_lines <= 0):
            warnings.append(f"Invalid max_file_lines '{self.max_file_lines}', size limit disabled")
            self.max_file_lines = defaults.max_file_lines

        if not isinstance(self.fetch_workers, int) or not 1 <= self.fetch_workers <= MAX_FETCH_WORKERS:
            warnings.append(f"Invalid fetch_workers '{self.fetch_workers}', using {defaults.fetch_workers}")
            self.fetch_workers = defaults.fetch_workers

        if not isinstance(self.timeout, int) or self.timeout <= 0:
            warnings.append(f"Invalid timeout '{self.timeout}', using {defaults.timeout}")
            self.timeout = defaults.timeout

        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


class ConfigManager:
    """Loads settings from .gitsetrc and applies environment overrides."""

    CONFIG_FILENAME = ".gitsetrc"

    def __init__(self):
        self._config: Optional[Config] = None

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        self._config = self._load_file()
        self._apply_env(self._config)
        return self._config

    def _load_file(self) -> Config:
        local_path = Path.cwd() / self.CONFIG_FILENAME
        if local_path.exists():
            return self._load_from_file(local_path)

        home_path = Path.home() / self.CONFIG_FILENAME
        if home_path.exists():
            return self._load_from_file(home_path)

        return Config()

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r') as f:
                data = json.load(f)
            return Config.from_dict(data)
        except (json.JSONDecodeError, IOError, TypeError, AttributeError) as e:
            print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()

    def _apply_env(self, config: Config) -> None:
        env_url = os.environ.get('GITSET_API_URL')
        if env_url:
            config.api_url = env_url
        env_mode = os.environ.get('GITSET_MODE')
        if env_mode in VALID_MODES:
            config.mode = env_mode


_manager = ConfigManager()


def load_config() -> Config:
    return _manager.load()


__all__ = [
    "Config",
    "ConfigManager",
    "load_config",
    "VALID_MODES",
    "CredentialError",
    "CredentialRecord",
    "CredentialStore",
    "resolve_credentials_path",
]
