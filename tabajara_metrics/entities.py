import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class AccidentType(str, Enum):
    """Metric kinds an accident can override."""

    CALLS = "calls"
    LATENCY = "latency"

    @classmethod
    def parse(cls, value: "AccidentType | str") -> "AccidentType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unknown accident type: {value!r}") from exc


AccidentKey = Tuple[str, AccidentType]


def accident_key(resource_name: str, accident_type: "AccidentType | str") -> AccidentKey:
    """Composite registry key, shared by inserts and lookups."""

    return (resource_name, AccidentType.parse(accident_type))


@dataclass(frozen=True, slots=True)
class Entropy:
    """Number of distinct synthetic values per label dimension."""

    uri_count: int = 1
    service_version_count: int = 1
    app_version_count: int = 1
    device_count: int = 1

    def __post_init__(self) -> None:
        for name in ("uri_count", "service_version_count", "app_version_count", "device_count"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")


@dataclass(frozen=True, slots=True)
class Accident:
    """Operator override: report ``value`` for ``resource_name`` instead of sampling."""

    type: AccidentType
    resource_name: str
    value: float

    def __post_init__(self) -> None:
        value = float(self.value)
        if not math.isfinite(value):
            raise ValueError(f"Accident value must be finite, got {self.value!r}")
        object.__setattr__(self, "type", AccidentType.parse(self.type))
        object.__setattr__(self, "value", value)

    @property
    def key(self) -> AccidentKey:
        return accident_key(self.resource_name, self.type)
