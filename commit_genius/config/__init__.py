"""Configuration Management Package"""

import json
import sys
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

# Valid configuration values
VALID_PROVIDERS = {"simple", "ollama", "claude"}


@dataclass
class Config:
    """User configuration. A None provider means the heuristic generator."""
    provider: Optional[str] = None
    model: Optional[str] = None
    api_key: Optional[str] = None
    ollama_host: Optional[str] = None
    timeout: Optional[int] = None  # seconds per provider request; None defers to CM_TIMEOUT

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        if self.provider is not None and self.provider not in VALID_PROVIDERS:
            warnings.append(f"Invalid provider '{self.provider}', using heuristic generator")
            self.provider = defaults.provider

        if self.timeout is not None and (
                isinstance(self.timeout, bool) or not isinstance(self.timeout, int) or self.timeout <= 0):
            warnings.append(f"Invalid timeout '{self.timeout}', using the client default")
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
    """Loads and saves configuration. Local .cmgrc wins over ~/.cmgrc."""

    CONFIG_FILENAME = ".cmgrc"

    def __init__(self, cwd: Optional[Path] = None, home: Optional[Path] = None):
        self._cwd = cwd
        self._home = home
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    @property
    def local_path(self) -> Path:
        return (self._cwd or Path.cwd()) / self.CONFIG_FILENAME

    @property
    def global_path(self) -> Path:
        return (self._home or Path.home()) / self.CONFIG_FILENAME

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        for path in (self.local_path, self.global_path):
            if path.exists():
                self._config = self._load_from_file(path)
                self._config_path = path
                return self._config

        self._config = Config()
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            return Config.from_dict(data)
        except (ValueError, OSError) as e:
            print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()

    def save(self, config: Config, global_config: bool = True) -> Path:
        path = self.global_path if global_config else self.local_path
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(config.to_dict(), f, indent=2)
        self._config = config
        self._config_path = path
        return path

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


__all__ = [
    "Config",
    "ConfigManager",
    "VALID_PROVIDERS",
]
