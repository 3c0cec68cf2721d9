"""Persisted settings: the last conversion options used."""

from __future__ import annotations

import functools
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from reconv.options import ConverterOptions

_CONFIG_FILE = "config.json"


class ConfigError(Exception):
    """The configuration file could not be read or written."""


def default_config_path() -> Path:
    """Where the configuration file lives for the current user."""
    return Path(user_config_dir("app", "re-converter", roaming=False)) / _CONFIG_FILE


@dataclass
class Config:
    """Settings remembered between runs."""

    last_saved: ConverterOptions | None = None
    saved_path: Path = field(default_factory=Path, compare=False)

    def _to_dict(self) -> dict[str, Any]:
        return {
            "last_saved": None if self.last_saved is None else self.last_saved.to_dict()
        }

    @classmethod
    def load(cls, path: str | Path) -> "Config":
        """Read the file at ``path``, creating it with defaults if it cannot be opened."""
        path = Path(path)
        try:
            handle = open(path, encoding="utf-8")
        except OSError:
            config = cls(saved_path=path)
            try:
                config.save()
            except ConfigError as err:
                raise ConfigError(f"Failed to save default config: {err}") from err
            return config

        with handle:
            try:
                data = json.load(handle)
                if not isinstance(data, dict):
                    raise ValueError("expected a JSON object")
                raw = data.get("last_saved")
                last_saved = None if raw is None else ConverterOptions.from_dict(raw)
            except (ValueError, TypeError) as err:
                raise ConfigError(f"Failed to deserialize JSON: {err}") from err
        return cls(last_saved=last_saved, saved_path=path)

    def save(self) -> None:
        """Write the settings to ``saved_path``."""
        parent = self.saved_path.parent
        if not parent.exists():
            try:
                parent.mkdir(parents=True, exist_ok=True)
            except OSError as err:
                raise ConfigError(f"Failed to create directory: {err}") from err
        try:
            handle = open(self.saved_path, "w", encoding="utf-8")
        except OSError as err:
            raise ConfigError(f"Failed to create file: {err}") from err
        with handle:
            try:
                json.dump(self._to_dict(), handle, indent=2, ensure_ascii=False)
            except (TypeError, ValueError, OSError) as err:
                raise ConfigError(f"Failed to serialize JSON: {err}") from err

    def update_last_saved_and_save(self, options: ConverterOptions) -> None:
        """Remember ``options`` and save, unless they are already the last saved."""
        if self.last_saved is not None and self.last_saved == options:
            return
        self.last_saved = options
        self.save()


@functools.lru_cache(maxsize=None)
def get_config() -> Config:
    """The shared configuration, loaded on first use."""
    return Config.load(default_config_path())