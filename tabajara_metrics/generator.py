"""Core logic responsible for synthesising HTTP request metrics."""

from __future__ import annotations

import logging
import random
import threading
from typing import List, Sequence, Tuple

from prometheus_client import CollectorRegistry

from .accidents import AccidentRegistry
from .config import Config
from .entities import Accident, AccidentType, Entropy
from .metrics import MetricSet
from .sampling import (
    generate_items,
    pick_normal,
    pick_uniform_index,
    range_normal,
    sample_request_time,
    stable_hash,
)

logger = logging.getLogger(__name__)

URI_PREFIX = "/resource/test-"
SERVICE_VERSION_PREFIX = "backend-v"
APP_VERSION_PREFIX = "v"
DEVICE_PREFIX = "-"

HTTP_STATUSES: Sequence[str] = ("4xx", "2xx", "5xx")
HTTP_METHODS: Sequence[str] = ("POST", "GET", "DELETE", "PUT")
CLIENT_OSES: Sequence[str] = ("ios", "android")

DEFAULT_CALLS = 1.0
PENDING_REQUESTS_RANGE = (0, 400)


class Tabajara:
    """Generate synthetic request metrics, honouring operator accidents.

    Entropy, accidents and the tick itself share one lock, so a tick never
    sees a half-applied mutation and mutations wait for the running tick.
    """

    def __init__(
        self,
        metrics: MetricSet,
        entropy: Entropy | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.metrics = metrics
        self.entropy = entropy or Entropy()
        self.accidents = AccidentRegistry()
        self.random = rng or random.Random()
        self.ticks = 0
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Operator mutations
    # ------------------------------------------------------------------
    def create_accident(self, accident: Accident) -> None:
        with self._lock:
            self.accidents.create(accident)
        logger.info(
            "Accident created: %s=%s for %s",
            accident.type.value,
            accident.value,
            accident.resource_name,
        )

    def delete_accident(self, accident_type: AccidentType | str, resource_name: str) -> None:
        with self._lock:
            self.accidents.delete(accident_type, resource_name)
        logger.info("Accident deleted: %s for %s", AccidentType.parse(accident_type).value, resource_name)

    def delete_accidents(self) -> None:
        with self._lock:
            self.accidents.clear()
        logger.info("All accidents deleted")

    def set_entropy(self, entropy: Entropy) -> None:
        with self._lock:
            self.entropy = entropy
        logger.info("Entropy set to %s", entropy)

    def get_entropy(self) -> Entropy:
        with self._lock:
            return self.entropy

    def list_accidents(self) -> List[Accident]:
        with self._lock:
            return self.accidents.list()

    def lookup_accident(
        self, resource_name: str, accident_type: AccidentType | str
    ) -> Tuple[float, bool]:
        with self._lock:
            return self.accidents.lookup(resource_name, accident_type)

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------
    def advance(self) -> None:
        """Advance the simulated workload by one tick."""

        with self._lock:
            uri = pick_normal(self._uris(), self.random)
            service_version = pick_normal(self._service_versions(), self.random)
            calls = int(self.accidents.value_for(AccidentType.CALLS, DEFAULT_CALLS, uri))
            app_versions = self._app_versions()
            devices = self._devices()
            method = HTTP_METHODS[pick_uniform_index(stable_hash(uri), len(HTTP_METHODS))]

            for _ in range(calls):
                app_version = pick_normal(app_versions, self.random)
                device = pick_normal(devices, self.random)
                client_os = pick_normal(CLIENT_OSES, self.random)
                status = pick_normal(HTTP_STATUSES, self.random)

                self._observe_request_time(uri, method, status, service_version)
                self._count_app_version(uri, method, status, app_version)
                self._count_device(uri, method, status, client_os, device)

            self._set_pending_requests(service_version)
            self.ticks += 1
            logger.debug("Tick %s: %s calls to %s on %s", self.ticks, max(calls, 0), uri, service_version)

    def _observe_request_time(self, uri: str, method: str, status: str, service_version: str) -> None:
        latency = self.accidents.value_for(
            AccidentType.LATENCY, sample_request_time(uri, self.random), uri
        )
        self.metrics.http_requests_per_service_version.labels(
            uri, method, status, service_version
        ).observe(latency)

    def _count_app_version(self, uri: str, method: str, status: str, app_version: str) -> None:
        self.metrics.http_requests_per_app_version.labels(uri, method, status, app_version).inc()

    def _count_device(self, uri: str, method: str, status: str, client_os: str, device: str) -> None:
        self.metrics.http_requests_per_device.labels(uri, method, status, client_os + device).inc()

    def _set_pending_requests(self, service_version: str) -> None:
        self.metrics.http_pending_requests.labels(service_version).set(
            range_normal(*PENDING_REQUESTS_RANGE, rng=self.random)
        )

    # ------------------------------------------------------------------
    # Label universes
    # ------------------------------------------------------------------
    def _uris(self) -> List[str]:
        return generate_items(URI_PREFIX, self.entropy.uri_count)

    def _service_versions(self) -> List[str]:
        return generate_items(SERVICE_VERSION_PREFIX, self.entropy.service_version_count)

    def _app_versions(self) -> List[str]:
        return generate_items(APP_VERSION_PREFIX, self.entropy.app_version_count)

    def _devices(self) -> List[str]:
        return generate_items(DEVICE_PREFIX, self.entropy.device_count)


def build_generator(config: Config, registry: CollectorRegistry | None = None) -> Tabajara:
    """Helper to construct a generator with a dedicated CollectorRegistry."""

    registry = registry or CollectorRegistry()
    return Tabajara(
        metrics=MetricSet(registry),
        entropy=config.entropy(),
        rng=random.Random(config.random_seed),
    )


__all__ = ["Tabajara", "build_generator"]
