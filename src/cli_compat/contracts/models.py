from __future__ import annotations

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class Tier(str, Enum):
    standard = "standard"
    niche = "niche"


class DeprecationRecord(BaseModel):
    """Deprecation metadata for a command or argument.

    Cross-field invariants are checked by the registry at registration time
    (see ``problems``) so that a bad record fails with ``InvalidRecord``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    tier: Tier
    deprecated_at: StrictInt
    replacement: Optional[str] = None
    removal_at: Optional[StrictInt] = None

    @property
    def kind(self) -> str:
        return "feature"

    @property
    def gate(self) -> Optional[str]:
        return None

    def problems(self, feature_id: str) -> List[str]:
        """Return invariant violations for this record, empty when valid."""
        errors: List[str] = []
        if not feature_id or not feature_id.strip():
            errors.append("feature id must be a non-empty string")
        if self.removal_at is not None and self.removal_at <= self.deprecated_at:
            errors.append(
                f"removal_at ({self.removal_at}) must be greater than "
                f"deprecated_at ({self.deprecated_at})"
            )
        if self.replacement is not None:
            if not self.replacement.strip():
                errors.append("replacement must not be empty when set")
            elif self.replacement == feature_id:
                errors.append("replacement must differ from the feature itself")
        return errors


class DependencyRecord(DeprecationRecord):
    """Deprecation metadata for a third-party runtime dependency path."""

    gated_behind: str = Field(..., min_length=1)

    @property
    def kind(self) -> str:
        return "dependency"

    @property
    def gate(self) -> Optional[str]:
        return self.gated_behind

    def problems(self, feature_id: str) -> List[str]:
        errors = super().problems(feature_id)
        if not self.gated_behind.strip():
            errors.append("gated_behind must be a non-empty flag id")
        elif self.gated_behind == feature_id:
            errors.append("gated_behind must differ from the feature itself")
        return errors


Record = Union[DeprecationRecord, DependencyRecord]


__all__ = ["Tier", "DeprecationRecord", "DependencyRecord", "Record"]
