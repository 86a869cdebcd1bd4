"""Periodic driver for the metrics generator."""

from __future__ import annotations

import itertools
import logging
import threading
from typing import Optional

from .generator import Tabajara

logger = logging.getLogger(__name__)


class Scheduler:
    """Call :meth:`Tabajara.advance` every ``interval`` seconds until stopped.

    Cancellation is cooperative: the stop event is only checked between ticks,
    so a tick that already started always runs to completion.
    """

    def __init__(self, generator: Tabajara, interval: float) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.generator = generator
        self.interval = interval
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run(self, stop_event: threading.Event | None = None, iterations: int | None = None) -> None:
        stop = stop_event or self._stop
        logger.info("Initializing metrics generator (interval %ss)...", self.interval)
        loop = itertools.count() if iterations is None else range(iterations)
        logger.info("Metrics generator initialized!")
        for _ in loop:
            if stop.wait(self.interval):
                break
            try:
                self.generator.advance()
            except Exception:
                logger.exception("Metrics generator tick failed")
        logger.info("Metrics generator stopped after %s ticks", self.generator.ticks)

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self.run, name="tabajara-scheduler", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            if not self._thread.is_alive():
                self._thread = None


__all__ = ["Scheduler"]
