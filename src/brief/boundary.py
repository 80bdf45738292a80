from __future__ import annotations

from typing import Optional

from .config import BoundaryPolicy
from .errors import ConfigurationError


def wrap(value: int, low: int, high: int) -> int:
    """Fold ``value`` into ``[low, high]``, congruent modulo the range width."""
    return (value - low) % (high - low + 1) + low


def apply_policy(candidate: int, low: int, high: int, policy: BoundaryPolicy) -> Optional[int]:
    """Bring ``candidate`` back into ``[low, high]`` according to ``policy``.

    Returns the in-range value, or None when the candidate is out of range
    and the policy is ERROR; the caller raises the error that fits its path.
    """
    if low <= candidate <= high:
        return candidate
    if policy is BoundaryPolicy.ERROR:
        return None
    if policy is BoundaryPolicy.SATURATE:
        return high if candidate > high else low
    if policy is BoundaryPolicy.WRAP:
        return wrap(candidate, low, high)
    raise ConfigurationError(message=f"invalid overflow behaviour: {policy!r}")
