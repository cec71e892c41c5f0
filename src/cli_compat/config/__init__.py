"""Configuration management for CLI Compat."""

from .loader import load_registry, registry_from_data
from .settings import TrackerConfig

__all__ = ["TrackerConfig", "load_registry", "registry_from_data"]
