"""Error taxonomy for the compatibility tracker."""

from __future__ import annotations

from typing import List, Optional


class CompatError(Exception):
    """Base class for all tracker errors."""


class DuplicateFeature(CompatError):
    """A feature id was registered twice."""

    def __init__(self, feature_id: str):
        self.feature_id = feature_id
        super().__init__(f"Feature already registered: {feature_id}")


class InvalidRecord(CompatError):
    """A record violates one of the registry invariants."""

    def __init__(self, feature_id: str, problems: List[str]):
        self.feature_id = feature_id
        self.problems = list(problems)
        super().__init__(
            f"Invalid deprecation record for {feature_id!r}: " + "; ".join(self.problems)
        )


class RegistryFrozen(CompatError):
    """Registration attempted after initialization finished."""

    def __init__(self, feature_id: str):
        self.feature_id = feature_id
        super().__init__(f"Registry is frozen; cannot register {feature_id!r}")


class RegistryLoadError(CompatError):
    """The registry file could not be read or parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load registry from {path}: {reason}")


class FeatureRefused(CompatError):
    """A removed feature was invoked.

    ``str(error)`` is the message to show the user as the sole output of
    the failed invocation.
    """

    def __init__(self, feature_id: str, message: str, gated_behind: Optional[str] = None):
        self.feature_id = feature_id
        self.message = message
        self.gated_behind = gated_behind
        super().__init__(message)


class ConfigError(CompatError):
    """Tracker settings are incomplete or inconsistent."""
