"""
CLI Compat: deprecation lifecycle tracking for command-line tool surfaces

Decides, for a deprecated command, argument or third-party dependency path,
whether it still works, warns, is refused, or can be deleted from the
codebase at a given release. The host CLI owns the release number and the
feature-flag state; this package only evaluates them.
"""

from .contracts.models import DependencyRecord, DeprecationRecord, Tier
from .errors import (
    CompatError,
    ConfigError,
    DuplicateFeature,
    FeatureRefused,
    InvalidRecord,
    RegistryFrozen,
    RegistryLoadError,
)
from .evaluator import Evaluation, LifecycleState, evaluate_record
from .policy import effective_removal, grace_period
from .registry import DeprecationRegistry
from .release import ReleaseClock, release_from_version

__version__ = "1.0.0"
__author__ = "CLI Compat Team"
__description__ = "Deprecation lifecycle tracker for CLI surfaces"

__all__ = [
    "CompatError",
    "ConfigError",
    "DependencyRecord",
    "DeprecationRecord",
    "DeprecationRegistry",
    "DuplicateFeature",
    "Evaluation",
    "FeatureRefused",
    "InvalidRecord",
    "LifecycleState",
    "RegistryFrozen",
    "RegistryLoadError",
    "ReleaseClock",
    "Tier",
    "effective_removal",
    "evaluate_record",
    "grace_period",
    "release_from_version",
]
