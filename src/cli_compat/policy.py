"""Grace-period policy: how long a deprecated feature keeps working."""

from __future__ import annotations

from typing import Dict

from .contracts.models import DeprecationRecord, Tier
from .release import ReleaseNumber

# Releases of warn-and-allow before refusal, per tier (monthly cadence)
GRACE_PERIODS: Dict[Tier, int] = {
    Tier.standard: 6,
    Tier.niche: 2,
}


def grace_period(tier: Tier) -> int:
    return GRACE_PERIODS[Tier(tier)]


def default_removal(tier: Tier, deprecated_at: ReleaseNumber) -> ReleaseNumber:
    """Removal release implied by the tier alone."""
    return deprecated_at + grace_period(tier)


def effective_removal(record: DeprecationRecord) -> ReleaseNumber:
    """Release at which ``record`` stops working.

    An explicit ``removal_at`` wins over the tier default.
    """
    if record.removal_at is not None:
        return record.removal_at
    return default_removal(record.tier, record.deprecated_at)
