from __future__ import annotations

import random
from collections import Counter

import pytest

from tabajara_metrics.sampling import (
    generate_items,
    pick_normal,
    pick_uniform_index,
    range_normal,
    request_time_baseline,
    sample_request_time,
    stable_hash,
)


@pytest.mark.parametrize("prefix", ["/resource/test-", "backend-v", "v", "-"])
def test_generate_items_zero_count_falls_back_to_prefix(prefix: str) -> None:
    assert generate_items(prefix, 0) == [prefix]


def test_generate_items_negative_count_falls_back_to_prefix() -> None:
    assert generate_items("v", -3) == ["v"]


@pytest.mark.parametrize("count", [1, 2, 7, 50])
def test_generate_items_yields_distinct_indexed_labels(count: int) -> None:
    items = generate_items("backend-v", count)
    assert len(items) == count
    assert len(set(items)) == count
    assert items == [f"backend-v{index}" for index in range(count)]


def test_pick_normal_rejects_empty_sequence() -> None:
    with pytest.raises(ValueError):
        pick_normal([])


def test_pick_normal_single_item() -> None:
    assert pick_normal(["only"], random.Random(1)) == "only"


def test_pick_normal_stays_in_range_and_favours_middle() -> None:
    rng = random.Random(42)
    items = list(range(9))
    picks = Counter(pick_normal(items, rng) for _ in range(5000))
    assert set(picks) <= set(items)
    assert picks[4] > picks[0]
    assert picks[4] > picks[8]


def test_pick_uniform_index_is_deterministic() -> None:
    seed = stable_hash("/resource/test-3")
    first = pick_uniform_index(seed, 4)
    assert all(pick_uniform_index(seed, 4) == first for _ in range(20))
    assert 0 <= first < 4


def test_pick_uniform_index_rejects_empty_bound() -> None:
    with pytest.raises(ValueError):
        pick_uniform_index(1, 0)


def test_range_normal_bounds() -> None:
    rng = random.Random(7)
    values = [range_normal(0, 400, rng) for _ in range(2000)]
    assert all(isinstance(value, int) for value in values)
    assert min(values) >= 0
    assert max(values) <= 400


def test_range_normal_degenerate_range() -> None:
    assert range_normal(5, 5) == 5
    with pytest.raises(ValueError):
        range_normal(10, 1)


def test_stable_hash_is_stable() -> None:
    assert stable_hash("/resource/test-0") == stable_hash("/resource/test-0")
    assert stable_hash("/resource/test-0") != stable_hash("/resource/test-1")
    assert stable_hash("") >= 0


def test_request_time_follows_uri_baseline() -> None:
    rng = random.Random(3)
    baseline = request_time_baseline("/resource/test-5")
    assert 0.01 <= baseline <= 1.0
    assert request_time_baseline("/resource/test-5") == baseline
    values = [sample_request_time("/resource/test-5", rng) for _ in range(500)]
    assert all(value >= 0.0 for value in values)
    mean = sum(values) / len(values)
    assert abs(mean - baseline) < baseline * 0.05
