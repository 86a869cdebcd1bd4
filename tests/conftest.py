from __future__ import annotations

import random
from typing import Callable, Dict, List

import pytest
from prometheus_client import CollectorRegistry

from tabajara_metrics.entities import Entropy
from tabajara_metrics.generator import Tabajara
from tabajara_metrics.metrics import MetricSet


@pytest.fixture
def registry() -> CollectorRegistry:
    return CollectorRegistry()


@pytest.fixture
def generator(registry: CollectorRegistry) -> Tabajara:
    return Tabajara(MetricSet(registry), Entropy(), rng=random.Random(1234))


def _samples(registry: CollectorRegistry, name: str, **labels: str) -> List[Dict]:
    """Every sample called ``name`` whose labels include ``labels``."""

    found = []
    for family in registry.collect():
        for sample in family.samples:
            if sample.name != name:
                continue
            if all(sample.labels.get(key) == value for key, value in labels.items()):
                found.append({"labels": sample.labels, "value": sample.value})
    return found


def _total(registry: CollectorRegistry, name: str, **labels: str) -> float:
    return sum(sample["value"] for sample in _samples(registry, name, **labels))


@pytest.fixture
def samples() -> Callable[..., List[Dict]]:
    return _samples


@pytest.fixture
def total() -> Callable[..., float]:
    return _total
