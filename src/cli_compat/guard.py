#!/usr/bin/env python3
"""
Compatibility Guard

Host-side helper that acts on tracker decisions at invocation time: runs
allowed features, reports deprecation warnings, raises ``FeatureRefused``
for removed ones, and routes gated dependencies to their legacy path.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Callable, Mapping, Optional

from rich.console import Console
from rich.markup import escape

from .dependencies import DependencyTransitionTracker, TransitionDecision
from .errors import FeatureRefused
from .registry import DeprecationRegistry
from .release import ReleaseNumber
from .utils.json_logger import log_with_context

logger = logging.getLogger(__name__)

stderr_console = Console(stderr=True)


def console_reporter(message: str) -> None:
    """Print a deprecation warning to the terminal."""
    stderr_console.print(f"[yellow]Warning:[/yellow] {escape(message)}")


class CompatibilityGuard:
    """Binds a frozen registry to the host's release and flag state."""

    def __init__(
        self,
        registry: DeprecationRegistry,
        release: ReleaseNumber,
        flags: Optional[Mapping[str, bool]] = None,
        reporter: Optional[Callable[[str], None]] = None,
    ):
        self.registry = registry
        self.release = int(release)
        self.flags = dict(flags or {})
        self.reporter = reporter or console_reporter
        self.tracker = DependencyTransitionTracker(registry)

    def check(self, feature_id: str) -> TransitionDecision:
        return self.tracker.resolve(feature_id, self.release, self.flags)

    def run(
        self,
        feature_id: str,
        func: Callable[..., Any],
        *args: Any,
        legacy: Optional[Callable[..., Any]] = None,
        **kwargs: Any,
    ) -> Any:
        """Invoke ``func`` if ``feature_id`` is still allowed.

        When a removed dependency is reached through its gate, ``legacy`` runs
        instead (``func`` if no separate legacy path is given).

        Raises:
            FeatureRefused: the feature is removed and not gated open
        """
        decision = self.check(feature_id)
        context = {
            "feature_id": feature_id,
            "release": self.release,
            "state": decision.state.value,
        }

        if not decision.allowed:
            gate = decision.evaluation.gated_behind
            log_with_context(
                logger, logging.ERROR, decision.error, gate=gate, **context
            )
            raise FeatureRefused(feature_id, decision.error, gated_behind=gate)

        for warning in decision.warnings:
            log_with_context(logger, logging.WARNING, warning, **context)
            self.reporter(warning)

        if decision.via_gate:
            gate = decision.evaluation.gated_behind
            log_with_context(
                logger, logging.INFO, f"Running {feature_id} through gate {gate}",
                gate=gate, **context,
            )
            target = legacy or func
            return target(*args, **kwargs)
        return func(*args, **kwargs)

    def command(
        self, feature_id: str, legacy: Optional[Callable[..., Any]] = None
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator form of ``run`` for host command functions."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            @functools.wraps(func)
            def wrapper(*args: Any, **kwargs: Any) -> Any:
                return self.run(feature_id, func, *args, legacy=legacy, **kwargs)

            return wrapper

        return decorator
