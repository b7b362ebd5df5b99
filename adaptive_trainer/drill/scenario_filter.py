"""
Scenario filtering by classification axis.

An empty selection on a dimension means "no restriction". A scenario must
match every dimension that has selections; scenarios without a position
are never excluded by the position dimension.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict, dataclass, field
from enum import Enum

from .scenario_catalog import ScenarioRecord

DIMENSIONS = ("sport", "level", "category", "position")


@dataclass
class ScenarioFilter:
    """User-selected filter criteria for drilling."""

    sports: list[str] = field(default_factory=list)
    levels: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    positions: list[str] = field(default_factory=list)

    @property
    def is_active(self) -> bool:
        """Check if any dimension has selections."""
        return bool(self.sports or self.levels or self.categories or self.positions)

    def matches(self, scenario: ScenarioRecord) -> bool:
        if self.sports and scenario.sport.value not in self.sports:
            return False
        if self.levels and scenario.level.value not in self.levels:
            return False
        if self.categories and scenario.category not in self.categories:
            return False
        if self.positions and scenario.position and scenario.position.value not in self.positions:
            return False
        return True

    def describe(self) -> str:
        """One-line summary for display."""
        if not self.is_active:
            return "all scenarios"
        parts = [
            f"{name}: {', '.join(values)}"
            for name, values in asdict(self).items()
            if values
        ]
        return "; ".join(parts)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> ScenarioFilter:
        """
        Create from dictionary.

        Raises:
            TypeError: a dimension is not a list of strings
        """
        values = {}
        for name in ("sports", "levels", "categories", "positions"):
            selected = data.get(name, [])
            if not isinstance(selected, list) or not all(isinstance(v, str) for v in selected):
                raise TypeError(f"filter '{name}' must be a list of strings")
            values[name] = selected
        return cls(**values)


def filter_scenarios(
    scenarios: Iterable[ScenarioRecord],
    scenario_filter: ScenarioFilter,
) -> list[ScenarioRecord]:
    """Return the scenarios matching all selected criteria, order preserved."""
    return [s for s in scenarios if scenario_filter.matches(s)]


def unique_values(scenarios: Iterable[ScenarioRecord], dimension: str) -> list[str]:
    """
    Sorted distinct values of one dimension (for populating filter choices).

    Raises:
        ValueError: dimension is not sport, level, category or position
    """
    if dimension not in DIMENSIONS:
        raise ValueError(f"Unknown dimension {dimension!r}; expected one of {DIMENSIONS}")

    values = set()
    for scenario in scenarios:
        value = getattr(scenario, dimension)
        if value is None:
            continue
        values.add(value.value if isinstance(value, Enum) else value)
    return sorted(values)
