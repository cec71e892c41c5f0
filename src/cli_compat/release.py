"""
Release Clock

The current release is an opaque, monotonically increasing integer owned by
the host application. This module only wraps it and derives it from a
version string for hosts on a monthly ``0.N.P`` cadence.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

ReleaseNumber = int

_VERSION_RE = re.compile(r"^v?(\d+)\.(\d+)(?:\.(\d+))?(?:[-+.].*)?$")

# Releases per major version once the 0.x series is over
MAJOR_STRIDE = 100


def release_from_version(version: str) -> ReleaseNumber:
    """Derive the release counter from a host version string.

    ``0.27.1`` maps to release 27. From ``1.0`` onwards the counter is
    ``major * 100 + minor`` so that it keeps increasing across majors.
    Patch releases never advance the counter.
    """
    match = _VERSION_RE.match(version.strip())
    if not match:
        raise ValueError(f"Unrecognized version string: {version!r}")
    major, minor = int(match.group(1)), int(match.group(2))
    if major == 0:
        return minor
    return major * MAJOR_STRIDE + minor


@dataclass(frozen=True, order=True)
class ReleaseClock:
    """Current release as supplied by the host."""

    current: ReleaseNumber

    @classmethod
    def from_version(cls, version: str) -> "ReleaseClock":
        return cls(release_from_version(version))

    def advanced(self, by: int = 1) -> "ReleaseClock":
        if by < 0:
            raise ValueError("Release clock cannot move backwards")
        return ReleaseClock(self.current + by)

    def __int__(self) -> int:
        return self.current
