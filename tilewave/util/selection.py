"""Random selection helpers used by node collapse."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from tilewave.util.rng import RNG

T = TypeVar("T")


def choose_uniform(items: Sequence[T], rng: RNG) -> T | None:
    """Pick one element of ``items`` uniformly at random.

    Returns None for an empty sequence. A single element is returned without
    consuming randomness.
    """
    if not items:
        return None
    if len(items) == 1:
        return items[0]
    return items[rng.randrange(len(items))]


def choose_weighted(items: Sequence[T], weights: Sequence[int], rng: RNG) -> T | None:
    """Pick one element of ``items`` with probability proportional to its weight.

    Elements with a non-positive weight are never picked.

    Args:
        items: Candidates to choose from.
        weights: Integer weight for each candidate, aligned with ``items``.
        rng: Source of randomness.

    Returns:
        The chosen element, or None if the inputs are empty, their lengths
        differ, or no element has a positive weight.
    """
    if not items or len(items) != len(weights):
        return None

    total = sum(w for w in weights if w > 0)
    if total == 0:
        return None

    remaining = rng.randrange(total)
    for item, weight in zip(items, weights, strict=True):
        if weight <= 0:
            continue
        if remaining < weight:
            return item
        remaining -= weight

    # Unreachable: remaining < total is always consumed by the loop
    return None
