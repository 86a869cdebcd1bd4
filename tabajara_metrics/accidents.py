"""Keyed store of operator-imposed metric overrides."""

from __future__ import annotations

from typing import Dict, List, Tuple

from .entities import Accident, AccidentKey, AccidentType, accident_key


class AccidentRegistry:
    """Accidents indexed by ``(resource_name, type)``.

    The registry does no locking of its own; :class:`~tabajara_metrics.generator.Tabajara`
    serialises every access under its lock.
    """

    def __init__(self) -> None:
        self._accidents: Dict[AccidentKey, Accident] = {}

    def __len__(self) -> int:
        return len(self._accidents)

    def create(self, accident: Accident) -> None:
        self._accidents[accident.key] = accident

    def delete(self, accident_type: AccidentType | str, resource_name: str) -> None:
        self._accidents.pop(accident_key(resource_name, accident_type), None)

    def clear(self) -> None:
        self._accidents.clear()

    def lookup(self, resource_name: str, accident_type: AccidentType | str) -> Tuple[float, bool]:
        accident = self._accidents.get(accident_key(resource_name, accident_type))
        if accident is None:
            return 0.0, False
        return accident.value, True

    def value_for(
        self, accident_type: AccidentType | str, default: float, resource_name: str
    ) -> float:
        value, found = self.lookup(resource_name, accident_type)
        return value if found else default

    def list(self) -> List[Accident]:
        return list(self._accidents.values())


__all__ = ["AccidentRegistry"]
