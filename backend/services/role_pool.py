"""Random role pools sized to a player count."""

from __future__ import annotations

import random
from collections.abc import Sequence
from typing import TypeVar

from models import DEFAULT_ROLES, MAX_POOL_SIZE

T = TypeVar("T")

_rng = random.SystemRandom()


def shuffle(items: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """Return a uniformly permuted copy of ``items`` (Fisher-Yates)."""
    out = list(items)
    (rng or _rng).shuffle(out)
    return out


def clamp_pool_size(count: object) -> int:
    try:
        n = int(count)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        n = 1
    return max(1, min(n, MAX_POOL_SIZE))


def generate_role_pool(
    count: object,
    source: Sequence[str],
    *,
    rng: random.Random | None = None,
) -> list[str]:
    """
    Build a pool of exactly ``clamp(count, 1, 20)`` role names from ``source``.

    - Large enough source: shuffle and take a prefix (no repeats beyond the
      duplicates already present in ``source``).
    - Short source: concatenate independent shuffles of the whole source until
      long enough, then truncate, so every role appears at least
      ``count // len(source)`` times and the overflow is random.
    """
    size = clamp_pool_size(count)
    roles = list(source) if source else list(DEFAULT_ROLES)

    if len(roles) >= size:
        return shuffle(roles, rng)[:size]

    out: list[str] = []
    while len(out) < size:
        out.extend(shuffle(roles, rng))
    return out[:size]
