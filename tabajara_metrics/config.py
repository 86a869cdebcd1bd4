"""Application configuration helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .entities import Entropy


@dataclass(slots=True)
class Config:
    """Runtime configuration parsed from environment variables."""

    update_interval_seconds: float = 0.001
    metrics_port: int = 8000
    metrics_host: str = "0.0.0.0"
    api_enabled: bool = True
    api_port: int = 8080
    api_host: str = "0.0.0.0"
    uri_count: int = 1
    service_version_count: int = 1
    app_version_count: int = 1
    device_count: int = 1
    random_seed: Optional[int] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables and defaults."""

        load_dotenv()

        def _get_int(name: str, default: int) -> int:
            value = os.getenv(name)
            if value is None:
                return default
            try:
                return int(value)
            except ValueError as exc:
                raise ValueError(f"Invalid integer for {name}: {value}") from exc

        def _get_float(name: str, default: float) -> float:
            value = os.getenv(name)
            if value is None:
                return default
            try:
                return float(value)
            except ValueError as exc:
                raise ValueError(f"Invalid float for {name}: {value}") from exc

        def _get_bool(name: str, default: bool) -> bool:
            value = os.getenv(name)
            if value is None:
                return default
            return value.strip().lower() in {"1", "true", "yes", "on"}

        random_seed: Optional[int]
        random_seed_value = os.getenv("RANDOM_SEED")
        if random_seed_value is not None:
            try:
                random_seed = int(random_seed_value)
            except ValueError as exc:
                raise ValueError(
                    f"Invalid integer for RANDOM_SEED: {random_seed_value}"
                ) from exc
        else:
            random_seed = None

        return cls(
            update_interval_seconds=_get_float("UPDATE_INTERVAL_SECONDS", 0.001),
            metrics_port=_get_int("METRICS_PORT", 8000),
            metrics_host=os.getenv("METRICS_HOST", "0.0.0.0"),
            api_enabled=_get_bool("API_ENABLED", True),
            api_port=_get_int("API_PORT", 8080),
            api_host=os.getenv("API_HOST", "0.0.0.0"),
            uri_count=_get_int("URI_COUNT", 1),
            service_version_count=_get_int("SERVICE_VERSION_COUNT", 1),
            app_version_count=_get_int("APP_VERSION_COUNT", 1),
            device_count=_get_int("DEVICE_COUNT", 1),
            random_seed=random_seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    def entropy(self) -> Entropy:
        """Initial label cardinality described by this configuration."""

        return Entropy(
            uri_count=self.uri_count,
            service_version_count=self.service_version_count,
            app_version_count=self.app_version_count,
            device_count=self.device_count,
        )


__all__ = ["Config"]
