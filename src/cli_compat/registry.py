#!/usr/bin/env python3
"""
Deprecation Registry

Owns every deprecation record of the host CLI, keyed by feature id. The
registry is filled once during startup, then frozen and passed by reference
to the call sites that evaluate features. Reads after ``freeze()`` need no
locking.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional

from .contracts.models import DependencyRecord, DeprecationRecord, Record
from .errors import DuplicateFeature, InvalidRecord, RegistryFrozen
from .evaluator import Evaluation, LifecycleState, evaluate_record, supported
from .release import ReleaseNumber

logger = logging.getLogger(__name__)


class DeprecationRegistry:
    """Append-only mapping from feature id to deprecation record."""

    def __init__(self) -> None:
        self._records: Dict[str, Record] = {}
        self._frozen = False

    def register(self, feature_id: str, record: Record) -> None:
        """Add ``record`` under ``feature_id``.

        Raises:
            RegistryFrozen: initialization already finished
            DuplicateFeature: ``feature_id`` is already registered
            InvalidRecord: the record breaks an invariant
        """
        if self._frozen:
            raise RegistryFrozen(feature_id)
        if not isinstance(record, DeprecationRecord):
            raise InvalidRecord(
                feature_id, [f"expected a deprecation record, got {type(record).__name__}"]
            )
        if feature_id in self._records:
            raise DuplicateFeature(feature_id)
        problems = record.problems(feature_id)
        if problems:
            raise InvalidRecord(feature_id, problems)

        self._records[feature_id] = record
        logger.debug(
            "Registered %s %s (tier=%s, deprecated_at=%s)",
            record.kind,
            feature_id,
            record.tier.value,
            record.deprecated_at,
        )

    def freeze(self) -> "DeprecationRegistry":
        """End the initialization phase; returns self for chaining."""
        self._frozen = True
        logger.debug("Registry frozen with %d records", len(self._records))
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def lookup(self, feature_id: str) -> Optional[Record]:
        """Return the record for ``feature_id``; None means fully supported."""
        return self._records.get(feature_id)

    def evaluate(self, feature_id: str, release: ReleaseNumber) -> Evaluation:
        record = self.lookup(feature_id)
        if record is None:
            return supported(feature_id, release)
        return evaluate_record(feature_id, record, release)

    def ids(self) -> List[str]:
        return sorted(self._records)

    def items(self) -> Iterator[tuple]:
        for feature_id in self.ids():
            yield feature_id, self._records[feature_id]

    def __contains__(self, feature_id: object) -> bool:
        return feature_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    def removable(self, release: ReleaseNumber) -> List[str]:
        """Feature ids whose code can be deleted from the codebase.

        A dependency stays reachable through its gate until the gate itself
        is registered and refused.
        """
        result: List[str] = []
        for feature_id, record in self.items():
            evaluation = evaluate_record(feature_id, record, release)
            if evaluation.state is not LifecycleState.refused:
                continue
            if isinstance(record, DependencyRecord):
                gate_state = self.evaluate(record.gated_behind, release).state
                if record.gated_behind not in self or gate_state is not LifecycleState.refused:
                    continue
            result.append(feature_id)
        return result

    def snapshot(self, release: ReleaseNumber) -> List[Dict[str, Any]]:
        """JSON-ready view of every record and its state at ``release``."""
        rows: List[Dict[str, Any]] = []
        for feature_id, record in self.items():
            evaluation = evaluate_record(feature_id, record, release)
            rows.append(
                {
                    "id": feature_id,
                    "kind": record.kind,
                    "tier": record.tier.value,
                    "deprecated_at": record.deprecated_at,
                    "removal_at": evaluation.removal_at,
                    "replacement": record.replacement,
                    "gated_behind": record.gate,
                    "state": evaluation.state.value,
                    "message": evaluation.message,
                }
            )
        return rows
