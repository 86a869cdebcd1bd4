"""Command line entrypoint for the synthetic metrics generator."""

from __future__ import annotations

import argparse
import logging
from typing import Optional

import uvicorn
from prometheus_client import CollectorRegistry, start_http_server

from .api import create_app
from .config import Config
from .generator import build_generator
from .scheduler import Scheduler


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tabajara-metrics",
        description="Start a Prometheus endpoint that emits synthetic HTTP request metrics.",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=None,
        help="Number of ticks to run before exiting (default: run forever). Disables the operator API.",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run exactly one tick and exit. Disables the operator API.",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Override the metrics HTTP port (default from METRICS_PORT env).",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Override the metrics HTTP host (default from METRICS_HOST env).",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Override the tick interval in seconds.",
    )
    parser.add_argument(
        "--api-port",
        type=int,
        default=None,
        help="Override the operator API port (default from API_PORT env).",
    )
    parser.add_argument(
        "--no-api",
        action="store_true",
        help="Do not serve the operator API.",
    )
    parser.add_argument("--uris", type=int, default=None, help="Number of distinct URIs.")
    parser.add_argument(
        "--service-versions", type=int, default=None, help="Number of distinct service versions."
    )
    parser.add_argument(
        "--app-versions", type=int, default=None, help="Number of distinct app versions."
    )
    parser.add_argument("--devices", type=int, default=None, help="Number of distinct devices.")
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Set an explicit log level (default from LOG_LEVEL env).",
    )
    return parser


def _configure_logging(level: str) -> None:
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    if args.port is not None:
        config.metrics_port = args.port
    if args.host is not None:
        config.metrics_host = args.host
    if args.interval is not None:
        config.update_interval_seconds = args.interval
    if args.api_port is not None:
        config.api_port = args.api_port
    if args.no_api:
        config.api_enabled = False
    if args.uris is not None:
        config.uri_count = args.uris
    if args.service_versions is not None:
        config.service_version_count = args.service_versions
    if args.app_versions is not None:
        config.app_version_count = args.app_versions
    if args.devices is not None:
        config.device_count = args.devices
    return config


def run_from_config(config: Config, iterations: int | None = None) -> None:
    """Serve metrics and drive the generator with the provided configuration."""

    logger = logging.getLogger(__name__)
    registry = CollectorRegistry()
    generator = build_generator(config, registry)
    scheduler = Scheduler(generator, config.update_interval_seconds)

    logger.info("Serving metrics on %s:%s", config.metrics_host, config.metrics_port)
    start_http_server(config.metrics_port, addr=config.metrics_host, registry=registry)

    if iterations is not None or not config.api_enabled:
        if config.api_enabled:
            logger.info("Running a fixed number of ticks; operator API not served")
        scheduler.run(iterations=iterations)
        return

    scheduler.start()
    try:
        logger.info("Serving operator API on %s:%s", config.api_host, config.api_port)
        uvicorn.run(create_app(generator), host=config.api_host, port=config.api_port)
    finally:
        scheduler.stop()


def main(argv: Optional[list[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    config = apply_overrides(Config.from_env(), args)

    log_level = args.log_level or config.log_level
    _configure_logging(log_level)

    iterations = args.iterations
    if args.once:
        iterations = 1 if iterations is None else max(1, iterations)

    try:
        run_from_config(config, iterations=iterations)
    except KeyboardInterrupt:
        logging.getLogger(__name__).info("Received interrupt, shutting down.")


if __name__ == "__main__":  # pragma: no cover - module entrypoint
    main()
