#!/usr/bin/env python3
"""
Dependency Transition Tracker

Third-party runtime dependencies are not hard-removed: once refused they
stay reachable behind an opt-in flag. The flag's code path may carry its own
deprecation record (registered under the flag id), which gives a two-stage
removal: default build first, then the opt-in itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Mapping, Optional, Union

from .contracts.models import DependencyRecord
from .evaluator import Evaluation, LifecycleState
from .registry import DeprecationRegistry
from .release import ReleaseNumber

FlagState = Union[bool, Mapping[str, bool], Callable[[str], bool]]


@dataclass(frozen=True)
class TransitionDecision:
    """What the host should do with one invocation."""

    evaluation: Evaluation
    allowed: bool
    via_gate: bool = False
    warnings: List[str] = field(default_factory=list)
    error: Optional[str] = None
    gate_evaluation: Optional[Evaluation] = None

    @property
    def feature_id(self) -> str:
        return self.evaluation.feature_id

    @property
    def state(self) -> LifecycleState:
        return self.evaluation.state


def _flag_enabled(flags: FlagState, gate: str) -> bool:
    if isinstance(flags, bool):
        return flags
    if callable(flags):
        return bool(flags(gate))
    return bool(flags.get(gate, False))


class DependencyTransitionTracker:
    """Resolves invocations against the registry, honoring dependency gates."""

    def __init__(self, registry: DeprecationRegistry):
        self.registry = registry

    def resolve(
        self, feature_id: str, release: ReleaseNumber, flags: FlagState = False
    ) -> TransitionDecision:
        """Decide whether ``feature_id`` may run at ``release``.

        ``flags`` is the host's gate state: a bool for the feature's own
        gate, a mapping of flag id to bool, or a predicate on the flag id.
        """
        evaluation = self.registry.evaluate(feature_id, release)

        if evaluation.state is LifecycleState.active:
            return TransitionDecision(evaluation=evaluation, allowed=True)
        if evaluation.state is LifecycleState.warn_and_allow:
            return TransitionDecision(
                evaluation=evaluation, allowed=True, warnings=[evaluation.message]
            )

        record = self.registry.lookup(feature_id)
        if not isinstance(record, DependencyRecord):
            return TransitionDecision(
                evaluation=evaluation, allowed=False, error=evaluation.message
            )

        gate = record.gated_behind
        if not _flag_enabled(flags, gate):
            return TransitionDecision(
                evaluation=evaluation, allowed=False, error=evaluation.message
            )

        gate_evaluation = self.registry.evaluate(gate, release)
        if gate_evaluation.state is LifecycleState.refused:
            return TransitionDecision(
                evaluation=evaluation,
                allowed=False,
                error=gate_evaluation.message,
                gate_evaluation=gate_evaluation,
            )
        warnings = []
        if gate_evaluation.state is LifecycleState.warn_and_allow:
            warnings.append(gate_evaluation.message)
        return TransitionDecision(
            evaluation=evaluation,
            allowed=True,
            via_gate=True,
            warnings=warnings,
            gate_evaluation=gate_evaluation,
        )


__all__ = ["DependencyTransitionTracker", "TransitionDecision", "FlagState"]
