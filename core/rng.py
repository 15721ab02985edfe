"""
core.rng
Deterministic random sources that do NOT rely on Python's built-in hash().

A RandomSource is any zero-argument callable returning a float in [0, 1).
Every stochastic rule takes one explicitly, so a run replays exactly under
the same source.
"""

from __future__ import annotations

import hashlib
import json
import random
from typing import Any, Callable, Iterable, List

RandomSource = Callable[[], float]


def stable_int_seed(*parts: Any, salt: str = "startup-sim") -> int:
    """Return a stable 32-bit integer seed derived from arbitrary inputs.

    Uses SHA-256 over a canonical JSON representation of `parts`.
    This avoids Python's randomized hash() and is stable across processes/platforms.
    """
    payload = json.dumps(parts, sort_keys=True, ensure_ascii=False, separators=(",", ":"), default=str)
    h = hashlib.sha256((salt + "|" + payload).encode("utf-8")).digest()
    return int.from_bytes(h[:4], "big", signed=False)


def rng_from(*parts: Any, base_seed: int) -> random.Random:
    """Create a Random instance from (base_seed + parts)."""
    seed = stable_int_seed(base_seed, *parts)
    return random.Random(seed)


def seeded_source(*parts: Any, base_seed: int) -> RandomSource:
    """RandomSource bound to a private Random stream."""
    return rng_from(*parts, base_seed=base_seed).random


def constant_source(value: float) -> RandomSource:
    v = float(value)
    if not 0.0 <= v < 1.0:
        raise ValueError("constant source value must be in [0, 1)")
    return lambda: v


def sequence_source(values: Iterable[float]) -> RandomSource:
    """Replay a fixed list of draws; raises once exhausted."""
    queue: List[float] = [float(v) for v in values]
    idx = {"i": 0}

    def draw() -> float:
        i = idx["i"]
        if i >= len(queue):
            raise RuntimeError(f"sequence source exhausted after {len(queue)} draws")
        idx["i"] = i + 1
        return queue[i]

    return draw
