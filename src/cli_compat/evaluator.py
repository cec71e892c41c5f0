#!/usr/bin/env python3
"""
Lifecycle Evaluator

Maps a deprecation record and the current release to a lifecycle state and
the message the host should print. Evaluation is pure: no logging, no I/O,
no clock other than the release number passed in, so it can be called from
any thread and tested by passing plain integers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .contracts.models import DeprecationRecord
from .policy import effective_removal
from .release import ReleaseNumber


class LifecycleState(str, Enum):
    """Lifecycle states, in the only order they can be traversed."""

    active = "active"
    warn_and_allow = "warn_and_allow"
    refused = "refused"


@dataclass(frozen=True)
class Evaluation:
    """Outcome of evaluating one feature at one release."""

    feature_id: str
    state: LifecycleState
    release: ReleaseNumber
    message: Optional[str] = None
    removal_at: Optional[ReleaseNumber] = None
    replacement: Optional[str] = None
    gated_behind: Optional[str] = None

    @property
    def allows_execution(self) -> bool:
        """Whether the feature's own behavior may run without a gate."""
        return self.state is not LifecycleState.refused

    @property
    def is_gated(self) -> bool:
        return self.state is LifecycleState.refused and self.gated_behind is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "feature_id": self.feature_id,
            "state": self.state.value,
            "release": self.release,
            "message": self.message,
            "removal_at": self.removal_at,
            "replacement": self.replacement,
            "gated_behind": self.gated_behind,
        }


def supported(feature_id: str, release: ReleaseNumber) -> Evaluation:
    """Evaluation for a feature with no deprecation record."""
    return Evaluation(feature_id=feature_id, state=LifecycleState.active, release=release)


def _warning_message(feature_id: str, record: DeprecationRecord, removal: ReleaseNumber) -> str:
    parts = [f"`{feature_id}` is deprecated"]
    if record.replacement:
        parts.append(f"; use `{record.replacement}` instead")
    parts.append(f". It will stop working in release {removal}.")
    return "".join(parts)


def _refusal_message(feature_id: str, record: DeprecationRecord, removal: ReleaseNumber) -> str:
    message = f"`{feature_id}` was removed in release {removal}"
    if record.replacement:
        message += f"; use `{record.replacement}` instead"
    message += "."
    if record.gate:
        message += f" It can still be enabled with the `{record.gate}` flag."
    return message


def evaluate_record(
    feature_id: str, record: DeprecationRecord, release: ReleaseNumber
) -> Evaluation:
    """Evaluate ``record`` for ``feature_id`` at ``release``.

    Total over its inputs: every release number yields a state. Refusal has
    an inclusive lower bound, so the removal release itself is refused.
    """
    removal = effective_removal(record)
    common = dict(
        feature_id=feature_id,
        release=release,
        removal_at=removal,
        replacement=record.replacement,
    )

    if release < record.deprecated_at:
        return Evaluation(state=LifecycleState.active, **common)
    if release < removal:
        return Evaluation(
            state=LifecycleState.warn_and_allow,
            message=_warning_message(feature_id, record, removal),
            **common,
        )
    return Evaluation(
        state=LifecycleState.refused,
        message=_refusal_message(feature_id, record, removal),
        gated_behind=record.gate,
        **common,
    )


__all__ = ["LifecycleState", "Evaluation", "evaluate_record", "supported"]
