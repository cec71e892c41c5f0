"""
Tracker settings for the host application.

Typed configuration with environment variable and JSON file sources.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from ..errors import ConfigError
from ..release import release_from_version

LOG_FORMATS = ("text", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_flags(value: str) -> dict[str, bool]:
    return {name.strip(): True for name in value.split(",") if name.strip()}


@dataclass
class TrackerConfig:
    """Where the registry lives and what the host knows about itself."""

    # Current release; wins over ``version``
    release: Optional[int] = None
    version: Optional[str] = None

    registry_file: str = "deprecations.yaml"

    # Gate flags enabled by the user
    flags: dict[str, bool] = field(default_factory=dict)

    log_level: str = "WARNING"
    log_format: str = "text"

    @classmethod
    def from_env(cls, prefix: str = "CLI_COMPAT_") -> "TrackerConfig":
        """Create config from environment variables."""
        config_data: dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue
            config_key = key[len(prefix) :].lower()
            if config_key not in cls.__dataclass_fields__:
                continue
            if config_key == "flags":
                config_data["flags"] = _parse_flags(value)
            elif config_key == "release":
                try:
                    config_data["release"] = int(value)
                except ValueError as e:
                    raise ConfigError(f"{key} must be an integer, got {value!r}") from e
            else:
                config_data[config_key] = value

        return cls(**config_data)

    @classmethod
    def from_file(cls, config_path: Path) -> "TrackerConfig":
        """Load configuration from JSON file."""
        if not config_path.exists():
            return cls()

        with open(config_path, encoding="utf-8") as f:
            config_data = json.load(f)

        flags = config_data.get("flags")
        if isinstance(flags, list):
            config_data["flags"] = {name: True for name in flags}
        return cls(**config_data)

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if self.release is None and not self.version:
            errors.append("Either release or version must be set")
        if self.version:
            try:
                release_from_version(self.version)
            except ValueError as e:
                errors.append(str(e))

        if self.log_format not in LOG_FORMATS:
            errors.append(f"Log format {self.log_format!r} must be one of {LOG_FORMATS}")
        if self.log_level.upper() not in LOG_LEVELS:
            errors.append(f"Unknown log level: {self.log_level}")

        return errors

    def resolve_release(self) -> int:
        """Current release number, from ``release`` or ``version``."""
        if self.release is not None:
            return int(self.release)
        if self.version:
            try:
                return release_from_version(self.version)
            except ValueError as e:
                raise ConfigError(str(e)) from e
        raise ConfigError("No release number configured; set release or version")

    def enabled_flags(self) -> list[str]:
        return sorted(name for name, on in self.flags.items() if on)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            field.name: getattr(self, field.name)
            for field in self.__dataclass_fields__.values()
        }
