"""Random sampling helpers used to pick synthetic labels and values.

Every helper accepts an optional ``rng`` implementing the ``random.Random``
interface so that a generator seeded from configuration stays reproducible.
When omitted the module level :mod:`random` functions are used.
"""

from __future__ import annotations

import random
import zlib
from typing import Callable, List, Sequence, TypeVar

T = TypeVar("T")

# Latency baselines derived per URI stay within these bounds (seconds).
REQUEST_TIME_BASELINE_RANGE = (0.01, 1.0)
REQUEST_TIME_SPREAD_RATIO = 0.1


def _clamp(value: int, minimum: int, maximum: int) -> int:
    return max(minimum, min(value, maximum))


def pick_normal(items: Sequence[T], rng=None) -> T:
    """Return one element, favouring the middle of ``items``."""

    if not items:
        raise ValueError("pick_normal requires a non-empty sequence")
    rng = rng or random
    last = len(items) - 1
    if last == 0:
        return items[0]
    index = round(rng.gauss(last / 2, len(items) / 6))
    return items[_clamp(index, 0, last)]


def pick_uniform_index(
    seed: int,
    bound: int,
    rng_factory: Callable[[int], random.Random] = random.Random,
) -> int:
    """Deterministic index in ``[0, bound)`` for ``seed``."""

    if bound <= 0:
        raise ValueError(f"bound must be positive, got {bound}")
    return rng_factory(seed).randrange(bound)


def range_normal(minimum: int, maximum: int, rng=None) -> int:
    """Integer in ``[minimum, maximum]`` drawn around the centre of the range."""

    if maximum < minimum:
        raise ValueError(f"invalid range [{minimum}, {maximum}]")
    if maximum == minimum:
        return minimum
    rng = rng or random
    value = round(rng.gauss((minimum + maximum) / 2, (maximum - minimum) / 6))
    return _clamp(value, minimum, maximum)


def generate_items(prefix: str, count: int) -> List[str]:
    """Label universe ``prefix0 .. prefix{count-1}``.

    A non-positive ``count`` collapses the dimension to the bare ``prefix`` so
    that callers always receive at least one item.
    """

    if count <= 0:
        return [prefix]
    return [f"{prefix}{index}" for index in range(count)]


def stable_hash(value: str) -> int:
    # builtin hash() is salted per process
    return zlib.crc32(value.encode("utf-8"))


def request_time_baseline(uri: str) -> float:
    low, high = REQUEST_TIME_BASELINE_RANGE
    return random.Random(stable_hash(uri)).uniform(low, high)


def sample_request_time(uri: str, rng=None) -> float:
    """Latency in seconds for one call to ``uri``.

    The baseline is fixed per URI so the same resource keeps reporting similar
    latencies across ticks; a small normal jitter is added on every call.
    """

    rng = rng or random
    baseline = request_time_baseline(uri)
    return max(rng.gauss(baseline, baseline * REQUEST_TIME_SPREAD_RATIO), 0.0)


__all__ = [
    "generate_items",
    "pick_normal",
    "pick_uniform_index",
    "range_normal",
    "request_time_baseline",
    "sample_request_time",
    "stable_hash",
]
