from __future__ import annotations

import logging
import threading
import time

import pytest

from tabajara_metrics.scheduler import Scheduler


class RecordingGenerator:
    """Stand-in generator counting ticks."""

    def __init__(self, on_advance=None) -> None:
        self.ticks = 0
        self.on_advance = on_advance

    def advance(self) -> None:
        if self.on_advance is not None:
            self.on_advance()
        self.ticks += 1


def test_run_fixed_iterations() -> None:
    generator = RecordingGenerator()
    Scheduler(generator, interval=0.001).run(iterations=3)
    assert generator.ticks == 3


def test_run_stops_when_event_already_set() -> None:
    generator = RecordingGenerator()
    stop = threading.Event()
    stop.set()
    Scheduler(generator, interval=0.001).run(stop_event=stop)
    assert generator.ticks == 0


def test_in_flight_tick_completes_after_cancellation() -> None:
    stop = threading.Event()

    def cancel_mid_tick() -> None:
        stop.set()
        time.sleep(0.01)

    generator = RecordingGenerator(on_advance=cancel_mid_tick)
    Scheduler(generator, interval=0.001).run(stop_event=stop)
    assert generator.ticks == 1


def test_start_and_stop_background_thread() -> None:
    generator = RecordingGenerator()
    scheduler = Scheduler(generator, interval=0.001)
    scheduler.start()
    assert scheduler.running
    deadline = time.monotonic() + 5
    while generator.ticks < 5 and time.monotonic() < deadline:
        time.sleep(0.005)
    scheduler.stop(timeout=5)
    assert not scheduler.running
    ticks = generator.ticks
    assert ticks >= 5
    time.sleep(0.02)
    assert generator.ticks == ticks


def test_stop_without_start_is_harmless() -> None:
    Scheduler(RecordingGenerator(), interval=0.1).stop()


@pytest.mark.parametrize("interval", [0, -1.0])
def test_rejects_non_positive_interval(interval: float) -> None:
    with pytest.raises(ValueError):
        Scheduler(RecordingGenerator(), interval=interval)


def test_tick_errors_are_logged_and_loop_continues(caplog) -> None:
    def explode() -> None:
        raise RuntimeError("boom")

    generator = RecordingGenerator(on_advance=explode)
    with caplog.at_level(logging.ERROR, logger="tabajara_metrics.scheduler"):
        Scheduler(generator, interval=0.001).run(iterations=3)
    failures = [record for record in caplog.records if record.getMessage() == "Metrics generator tick failed"]
    assert len(failures) == 3
    assert failures[0].exc_info is not None


def test_stop_timeout_keeps_thread_tracked() -> None:
    entered = threading.Event()
    release = threading.Event()

    def block() -> None:
        entered.set()
        release.wait(5)

    scheduler = Scheduler(RecordingGenerator(on_advance=block), interval=0.001)
    scheduler.start()
    assert entered.wait(5)
    scheduler.stop(timeout=0.01)
    assert scheduler.running
    scheduler.start()
    release.set()
    scheduler.stop(timeout=5)
    assert not scheduler.running
